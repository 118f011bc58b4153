"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/sampler.py

Uniform random sequences over a finite alphabet.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Hashable, Iterable, Optional

import numpy as np

from .alphabet import Alphabet, SequenceState
from .errors import InvalidParameter


def sample(
    alphabet: Alphabet | str | Iterable[Hashable],
    length: int,
    rng: Optional[np.random.Generator] = None,
) -> SequenceState:
    """
    Draw a sequence of `length` symbols, each independently and uniformly
    from `alphabet`.

    Args:
      alphabet: Alphabet, preset name or iterable of symbols (≥ 1 symbol).
      length:   number of positions (must be ≥ 1).
      rng:      numpy.random.Generator; a fresh unseeded one if omitted.
    """
    if int(length) != length or length < 1:
        raise InvalidParameter(f"Cannot sample a sequence of non-positive length {length}")
    alph = Alphabet.of(alphabet)
    rng = rng if rng is not None else np.random.default_rng()
    arr = rng.integers(0, len(alph), size=int(length), dtype=alph.dtype)
    return SequenceState(arr, alph)


def random_sequence(
    alphabet: Alphabet | str | Iterable[Hashable],
    length: int,
    rng: Optional[np.random.Generator] = None,
) -> str:
    """String form of `sample(...)`."""
    return sample(alphabet, length, rng).to_string()
