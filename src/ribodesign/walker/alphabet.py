"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/alphabet.py

Alphabet: an ordered, finite set of symbols.
SequenceState: a fixed-length sequence stored as a 1-D numpy array of symbol
indices into its Alphabet.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Tuple

import numpy as np

from .errors import ConfigurationError, InvalidParameter

PRESETS = {
    "rna": ("A", "U", "G", "C"),
    "dna": ("A", "C", "G", "T"),
}


@dataclass(frozen=True, slots=True)
class Alphabet:
    """
    Immutable, ordered symbol set. Symbol order fixes the integer encoding
    used by SequenceState (symbols[i] <-> i).
    """

    symbols: Tuple[Hashable, ...]

    def __post_init__(self) -> None:
        if len(self.symbols) < 1:
            raise InvalidParameter("alphabet must contain at least one symbol")
        if len(set(self.symbols)) != len(self.symbols):
            raise InvalidParameter(f"alphabet symbols must be unique, got {list(self.symbols)}")

    @classmethod
    def of(cls, symbols: "Alphabet | str | Iterable[Hashable]") -> "Alphabet":
        """
        Coerce `symbols` into an Alphabet. A string is either a preset name
        ('rna', 'dna') or a run of single-character symbols ('AUGC').
        """
        if isinstance(symbols, Alphabet):
            return symbols
        if isinstance(symbols, str):
            preset = PRESETS.get(symbols.strip().lower())
            return cls(preset if preset is not None else tuple(symbols))
        return cls(tuple(symbols))

    def require_substitutable(self) -> None:
        """A distinct substitution needs at least two symbols."""
        if len(self.symbols) < 2:
            raise ConfigurationError(
                f"alphabet {list(self.symbols)} has fewer than 2 symbols; no distinct substitution is possible"
            )

    def index(self, symbol: Hashable) -> int:
        try:
            return self.symbols.index(symbol)
        except ValueError as exc:
            raise InvalidParameter(f"symbol {symbol!r} is not in alphabet {list(self.symbols)}") from exc

    @property
    def dtype(self) -> np.dtype:
        """Smallest integer dtype holding every symbol index."""
        return np.min_scalar_type(len(self.symbols) - 1)

    def encode(self, seq: Iterable[Hashable]) -> np.ndarray:
        return np.array([self.index(s) for s in seq], dtype=self.dtype)

    def __len__(self) -> int:
        return len(self.symbols)


@dataclass(frozen=True, slots=True, eq=False)
class SequenceState:
    """
    A sequence over `alphabet`, encoded as integer indices.

    The optimizer keeps independent copies; the MutationGenerator hands out
    states that wrap its live buffer, so call `copy()` before holding on to one.
    """

    seq: np.ndarray  # shape = (L,), dtype = alphabet.dtype
    alphabet: Alphabet

    @staticmethod
    def from_symbols(symbols: Iterable[Hashable], alphabet: Alphabet) -> "SequenceState":
        arr = alphabet.encode(symbols)
        if arr.size < 1:
            raise InvalidParameter("sequence must contain at least one symbol")
        return SequenceState(arr, alphabet)

    def symbols(self) -> list:
        return [self.alphabet.symbols[i] for i in self.seq]

    def to_string(self) -> str:
        """
        Render as a string (symbols are joined with str()).
        """
        return "".join(str(s) for s in self.symbols())

    def copy(self) -> "SequenceState":
        return SequenceState(self.seq.copy(), self.alphabet)

    def __len__(self) -> int:
        return int(self.seq.size)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SequenceState):
            return self.alphabet == other.alphabet and np.array_equal(self.seq, other.seq)
        if isinstance(other, str):
            return self.to_string() == other
        return NotImplemented

    __hash__ = None  # mutable buffer underneath

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"SequenceState({self.to_string()!r})"
