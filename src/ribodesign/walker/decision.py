"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/decision.py

Acceptance decisions: callables (old_score, new_score) -> bool. Lower scores
are better.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import numpy as np

from .errors import ConfigurationError

DecisionFn = Callable[[float, float], bool]


class GreedyDecision:
    """Accept strict improvements only; ties are rejected."""

    def decide(self, old_score: float, new_score: float) -> bool:
        return new_score < old_score

    __call__ = decide

    def __repr__(self) -> str:
        return "GreedyDecision()"


@dataclass
class MetropolisHastingsDecision:
    """
    Always accept a lower score. Otherwise accept with probability
    exp((old - new) / scale_factor), i.e. by the Boltzmann weight of the
    score difference. Equal scores go through the probabilistic branch.

    Small scale factors punish worse states severely; large ones accept
    almost everything.
    """

    scale_factor: float = 1.0
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False)

    def __post_init__(self) -> None:
        if not (self.scale_factor > 0):
            raise ConfigurationError(f"scale_factor must be > 0, got {self.scale_factor}")

    def acceptance_probability(self, old_score: float, new_score: float) -> float:
        if new_score < old_score:
            return 1.0
        return min(1.0, math.exp((old_score - new_score) / self.scale_factor))

    def decide(self, old_score: float, new_score: float) -> bool:
        if new_score < old_score:
            return True
        return self.acceptance_probability(old_score, new_score) > float(self.rng.random())

    def __call__(self, old_score: float, new_score: float) -> bool:
        return self.decide(old_score, new_score)


GREEDY = "greedy"
METROPOLIS_HASTINGS = "metropolis_hastings"

_ALIASES: Dict[str, str] = {
    "greedy": GREEDY,
    "gradient": GREEDY,
    "metropolis_hastings": METROPOLIS_HASTINGS,
    "metropolis": METROPOLIS_HASTINGS,
    "mh": METROPOLIS_HASTINGS,
}


def resolve_decision_kind(kind: object | None) -> str:
    """
    Return the canonical decision kind. Missing values default to greedy.
    """
    if kind is None:
        return GREEDY
    if not isinstance(kind, str) or not kind.strip():
        raise ConfigurationError("decision kind must be a non-empty string.")
    key = kind.strip().lower().replace("-", "_")
    if key not in _ALIASES:
        raise ConfigurationError(f"Unknown decision kind '{kind}'. Available: {sorted(set(_ALIASES.values()))}")
    return _ALIASES[key]


def make_decision(
    kind: str | None = None,
    *,
    scale_factor: float = 1.0,
    rng: Optional[np.random.Generator] = None,
) -> DecisionFn:
    resolved = resolve_decision_kind(kind)
    if resolved == GREEDY:
        return GreedyDecision()
    return MetropolisHastingsDecision(
        scale_factor=float(scale_factor),
        rng=rng if rng is not None else np.random.default_rng(),
    )
