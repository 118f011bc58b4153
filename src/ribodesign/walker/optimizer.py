"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/optimizer.py

LocalSearchOptimizer: generate / score / accept-or-revert loop minimising a
caller-supplied score.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

import numpy as np

from .alphabet import SequenceState
from .decision import DecisionFn, GreedyDecision, make_decision
from .errors import ConfigurationError, InvalidParameter
from .mutation import MutationGenerator
from .scoring import get_score

if TYPE_CHECKING:
    from .config import WalkConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUCCESSIVE_FAILS = 100


def _snapshot(state: Any) -> Any:
    if hasattr(state, "copy"):
        return state.copy()
    return state


@dataclass(frozen=True)
class WalkResult:
    init_sequence: str
    init_score: float
    final_sequence: str
    final_score: float
    step_count: int
    successful_step_count: int

    @property
    def rejected_step_count(self) -> int:
        return self.step_count - self.successful_step_count

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LocalSearchOptimizer:
    """
    Minimise `score_fn` by single-mutation moves.

    generator:  object with next() -> state and revert() -> bool. next()
                returns the mutated candidate; revert() restores the state
                before the latest next().
    score_fn:   state -> float, lower is better.
    decision_fn:
                (current_score, candidate_score) -> bool. Defaults to greedy
                descent; a stochastic decision gives Metropolis–Hastings
                behaviour.
    init_state: initial state. Defaults to the generator's current sequence,
                so it must match what the generator holds.
    default_max_successive_fails:
                default bound for run().
    """

    def __init__(
        self,
        generator: Any,
        score_fn: Callable[[Any], float],
        decision_fn: Optional[DecisionFn] = None,
        *,
        init_state: Any = None,
        default_max_successive_fails: int = DEFAULT_MAX_SUCCESSIVE_FAILS,
    ):
        if generator is None or not callable(getattr(generator, "next", None)) or not callable(
            getattr(generator, "revert", None)
        ):
            raise ConfigurationError("LocalSearchOptimizer requires a generator exposing next() and revert()")
        if score_fn is None or not callable(score_fn):
            raise ConfigurationError("LocalSearchOptimizer requires a callable score function")
        if decision_fn is not None and not callable(decision_fn):
            raise ConfigurationError("decision function must be callable")
        if default_max_successive_fails < 0:
            raise InvalidParameter(
                f"default_max_successive_fails must be ≥ 0, got {default_max_successive_fails}"
            )

        self.generator = generator
        self.score_fn = score_fn
        self.decision_fn: DecisionFn = decision_fn if decision_fn is not None else GreedyDecision()
        self.default_max_successive_fails = int(default_max_successive_fails)

        if init_state is None:
            if not hasattr(generator, "current"):
                raise ConfigurationError("no init_state given and the generator exposes no current sequence")
            init_state = generator.current
        self._init_state = _snapshot(init_state)
        self._init_state_score = float(self.score_fn(self._init_state))

        self._current_state = _snapshot(self._init_state)
        self._current_state_score = self._init_state_score
        self._step_count = 0
        self._successful_step_count = 0
        logger.debug(
            "LocalSearchOptimizer: init=%s score=%.6g decision=%r",
            self._init_state,
            self._init_state_score,
            self.decision_fn,
        )

    # ───────────────────────── public API ────────────────────────── #

    def step(self) -> bool:
        """Perform one generate/score/decide step. True if the move was accepted."""
        candidate = self.generator.next()
        candidate_score = float(self.score_fn(candidate))
        self._step_count += 1

        if self.decision_fn(self._current_state_score, candidate_score):
            logger.debug(
                "step %d: accept %.6g -> %.6g",
                self._step_count,
                self._current_state_score,
                candidate_score,
            )
            self._current_state = _snapshot(candidate)
            self._current_state_score = candidate_score
            self._successful_step_count += 1
            return True

        logger.debug(
            "step %d: reject %.6g -> %.6g, reverting",
            self._step_count,
            self._current_state_score,
            candidate_score,
        )
        self.generator.revert()
        return False

    def run(self, max_successive_fails: Optional[int] = None) -> Tuple[Any, float]:
        """
        Step until more than `max_successive_fails` consecutive rejections
        (i.e. stops after max_successive_fails + 1 in a row).
        Returns (current_state, current_state_score).
        """
        if max_successive_fails is None:
            max_successive_fails = self.default_max_successive_fails
        if max_successive_fails < 0:
            raise InvalidParameter(f"max_successive_fails must be ≥ 0, got {max_successive_fails}")

        logger.info(
            "Starting walk: score=%.6g, max_successive_fails=%d",
            self._current_state_score,
            max_successive_fails,
        )
        start_steps = self._step_count
        successive_fails = 0
        while successive_fails <= max_successive_fails:
            if self.step():
                successive_fails = 0
            else:
                successive_fails += 1

        logger.info(
            "Walk finished after %d steps: score %.6g -> %.6g (%d accepted in total)",
            self._step_count - start_steps,
            self._init_state_score,
            self._current_state_score,
            self._successful_step_count,
        )
        return self.current_state, self.current_state_score

    def summary(self) -> WalkResult:
        return WalkResult(
            init_sequence=str(self._init_state),
            init_score=self._init_state_score,
            final_sequence=str(self._current_state),
            final_score=self._current_state_score,
            step_count=self._step_count,
            successful_step_count=self._successful_step_count,
        )

    # ───────────────────────── accessors ─────────────────────────── #

    @property
    def init_state(self) -> Any:
        return self._init_state

    @property
    def init_state_score(self) -> float:
        return self._init_state_score

    @property
    def current_state(self) -> Any:
        return self._current_state

    @property
    def current_state_score(self) -> float:
        return self._current_state_score

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def successful_step_count(self) -> int:
        return self._successful_step_count


def build_walk(cfg: "WalkConfig", *, rng: Optional[np.random.Generator] = None) -> LocalSearchOptimizer:
    """
    Wire a validated WalkConfig into a ready-to-run optimizer. One rng (seeded
    from cfg.seed unless given) feeds both the generator and the decision.
    """
    rng = rng if rng is not None else np.random.default_rng(cfg.seed)
    if cfg.init_sequence is not None:
        generator = MutationGenerator(cfg.init_sequence, alphabet=cfg.alphabet, rng=rng)
    else:
        generator = MutationGenerator(length=cfg.length, alphabet=cfg.alphabet, rng=rng)
    try:
        score_fn = get_score(cfg.score)
    except KeyError as exc:
        raise ConfigurationError(str(exc.args[0])) from exc
    decision_fn = make_decision(cfg.decision.kind, scale_factor=cfg.decision.scale_factor, rng=rng)
    return LocalSearchOptimizer(
        generator,
        score_fn,
        decision_fn,
        default_max_successive_fails=cfg.max_successive_fails,
    )
