"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/__init__.py

Stochastic single-mutation local search over fixed-length sequences.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from .alphabet import Alphabet, SequenceState
from .decision import GreedyDecision, MetropolisHastingsDecision, make_decision
from .errors import ConfigurationError, InvalidParameter, WalkerError
from .mutation import MutationGenerator, SequenceGenerator
from .optimizer import LocalSearchOptimizer, WalkResult, build_walk
from .sampler import random_sequence, sample

__all__ = [
    "Alphabet",
    "SequenceState",
    "GreedyDecision",
    "MetropolisHastingsDecision",
    "make_decision",
    "ConfigurationError",
    "InvalidParameter",
    "WalkerError",
    "MutationGenerator",
    "SequenceGenerator",
    "LocalSearchOptimizer",
    "WalkResult",
    "build_walk",
    "random_sequence",
    "sample",
]
__version__ = "0.1.0"
