"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/scoring.py

Example score functions (lower is better) and a name registry so configs and
the CLI can refer to them. Real designs plug in their own callables, e.g. a
wrapper around an RNA folding energy.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable

from .alphabet import SequenceState

ScoreFn = Callable[[SequenceState], float]


@dataclass(frozen=True)
class ScoreSpec:
    name: str
    description: str


_REGISTRY: Dict[str, ScoreFn] = {}
_DESCRIPTIONS: Dict[str, str] = {}


def register_score(name: str, fn: ScoreFn, description: str = "") -> None:
    key = name.strip().lower()
    if not key:
        raise ValueError("score name must be non-empty")
    if key in _REGISTRY:
        raise ValueError(f"score '{key}' is already registered")
    _REGISTRY[key] = fn
    _DESCRIPTIONS[key] = description


def get_score(name: str) -> ScoreFn:
    key = name.strip().lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown score '{name}'. Available: {sorted(_REGISTRY)}")
    return _REGISTRY[key]


def list_scores() -> list[str]:
    return sorted(_REGISTRY)


def list_score_specs() -> list[ScoreSpec]:
    return [ScoreSpec(name=key, description=_DESCRIPTIONS.get(key, "")) for key in sorted(_REGISTRY)]


def symbol_count_score(targets: Iterable[Hashable], *, reward: bool = True) -> ScoreFn:
    """
    Score = -(number of positions holding a symbol in `targets`) when
    `reward` is set, +count otherwise.
    """
    wanted = frozenset(targets)
    sign = -1.0 if reward else 1.0

    def _score(state: SequenceState) -> float:
        idx = [i for i, s in enumerate(state.alphabet.symbols) if s in wanted]
        if not idx:
            return 0.0
        hits = int(sum(int((state.seq == i).sum()) for i in idx))
        return sign * hits

    return _score


gc_content_score = symbol_count_score("GC")
at_content_score = symbol_count_score(("A", "T", "U"))


def gc_fraction_deviation(target: float = 0.5) -> ScoreFn:
    """|GC fraction - target|; zero at the target composition."""
    if not 0.0 <= target <= 1.0:
        raise ValueError(f"GC target must be within [0, 1], got {target}")
    gc = symbol_count_score("GC", reward=False)

    def _score(state: SequenceState) -> float:
        return abs(gc(state) / float(len(state)) - target)

    return _score


# Built-ins
register_score("gc_content", gc_content_score, "Negative G/C count; minimising maximises GC content.")
register_score("at_content", at_content_score, "Negative A/T/U count; minimising maximises AT content.")
register_score("gc_balance", gc_fraction_deviation(0.5), "Absolute deviation of the GC fraction from 0.5.")
