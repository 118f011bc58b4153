"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/mutation.py

MutationGenerator: owns one sequence buffer and mutates it one position at a
time. The most recent substitution can be undone exactly once.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from .alphabet import Alphabet, SequenceState
from .errors import ConfigurationError
from .sampler import sample

logger = logging.getLogger(__name__)


@runtime_checkable
class SequenceGenerator(Protocol):
    """What LocalSearchOptimizer needs from a generator."""

    def next(self) -> SequenceState: ...

    def revert(self) -> bool: ...


class MutationGenerator:
    """
    Single-point mutation generator.

    Construct from either an initial sequence (its length fixes the sequence
    length) or a length (the initial sequence is drawn uniformly at random),
    but not both. `alphabet` defaults to 'rna'; a SequenceState brings its
    own alphabet, and a different explicit one is a ConfigurationError.

      next():   substitute one random position with a *different* symbol and
                return the mutated sequence (a view of the live buffer).
      revert(): undo the most recent substitution; False if there is none.
    """

    def __init__(
        self,
        sequence: Optional[Iterable[Hashable] | SequenceState] = None,
        *,
        length: Optional[int] = None,
        alphabet: Optional[Alphabet | str | Iterable[Hashable]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if (sequence is None) == (length is None):
            raise ConfigurationError("MutationGenerator requires exactly one of `sequence` or `length`")
        self.rng = rng if rng is not None else np.random.default_rng()

        if isinstance(sequence, SequenceState):
            if alphabet is not None and Alphabet.of(alphabet) != sequence.alphabet:
                raise ConfigurationError(
                    f"alphabet {list(Alphabet.of(alphabet).symbols)} conflicts with the sequence's "
                    f"alphabet {list(sequence.alphabet.symbols)}"
                )
            self.alphabet = sequence.alphabet
            self.alphabet.require_substitutable()
            self._buffer = sequence.seq.copy()
        else:
            self.alphabet = Alphabet.of(alphabet if alphabet is not None else "rna")
            self.alphabet.require_substitutable()
            if sequence is not None:
                self._buffer = SequenceState.from_symbols(sequence, self.alphabet).seq
            else:
                self._buffer = sample(self.alphabet, length, self.rng).seq

        # (position, previous symbol index) of the revertible substitution
        self._pending: Optional[Tuple[int, int]] = None
        logger.debug(
            "MutationGenerator: length=%d alphabet=%s initial=%s",
            self._buffer.size,
            list(self.alphabet.symbols),
            self.current.to_string(),
        )

    @property
    def current(self) -> SequenceState:
        return SequenceState(self._buffer, self.alphabet)

    @property
    def length(self) -> int:
        return int(self._buffer.size)

    @property
    def can_revert(self) -> bool:
        return self._pending is not None

    def next(self) -> SequenceState:
        pos = int(self.rng.integers(self._buffer.size))
        old = int(self._buffer[pos])
        n_symbols = len(self.alphabet)
        new = old
        while new == old:
            new = int(self.rng.integers(n_symbols))
        self._buffer[pos] = new
        self._pending = (pos, old)
        logger.debug(
            "mutate pos=%d %r -> %r",
            pos,
            self.alphabet.symbols[old],
            self.alphabet.symbols[new],
        )
        return self.current

    def revert(self) -> bool:
        if self._pending is None:
            return False
        pos, old = self._pending
        self._buffer[pos] = old
        self._pending = None
        logger.debug("revert pos=%d -> %r", pos, self.alphabet.symbols[old])
        return True

    def __iter__(self):
        return self

    def __next__(self) -> SequenceState:
        return self.next()

    def __len__(self) -> int:
        return self.length
