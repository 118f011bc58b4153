"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/bench.py

Generator surveys and throughput timing.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Tuple

import numpy as np

from .alphabet import Alphabet
from .errors import InvalidParameter
from .mutation import MutationGenerator, SequenceGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkResult:
    length: int
    count: int
    repeats: int
    total_seconds: float

    @property
    def seconds_per_run(self) -> float:
        return self.total_seconds / self.repeats

    @property
    def sequences_per_second(self) -> float:
        if self.total_seconds <= 0:
            return float("inf")
        return self.count * self.repeats / self.total_seconds


def survey_generator(generator: SequenceGenerator, count: int) -> List[Tuple[str, int]]:
    """
    Pull `count` successive sequences and tag each with how many times it
    has been seen so far (1 = first encounter).
    """
    if count < 0:
        raise InvalidParameter(f"count must be ≥ 0, got {count}")
    seen: Counter = Counter()
    out: List[Tuple[str, int]] = []
    for _ in range(count):
        seq = str(generator.next())
        seen[seq] += 1
        out.append((seq, seen[seq]))
    return out


def benchmark_generator(
    alphabet: Alphabet | str | Iterable[Hashable],
    length: int,
    count: int,
    repeats: int,
    rng: Optional[np.random.Generator] = None,
) -> BenchmarkResult:
    """
    Time `repeats` runs of: build a MutationGenerator of `length` and pull
    `count` sequences from it.
    """
    if count < 1 or repeats < 1:
        raise InvalidParameter(f"count and repeats must be ≥ 1, got count={count} repeats={repeats}")
    rng = rng if rng is not None else np.random.default_rng()
    alph = Alphabet.of(alphabet)
    logger.info("Benchmarking %d runs of %d sequences (length=%d)", repeats, count, length)
    t0 = time.perf_counter()
    for _ in range(repeats):
        gen = MutationGenerator(length=length, alphabet=alph, rng=rng)
        for _ in range(count):
            gen.next()
    elapsed = time.perf_counter() - t0
    result = BenchmarkResult(length=int(length), count=int(count), repeats=int(repeats), total_seconds=elapsed)
    logger.info("Benchmark done: %.3fs total, %.0f seq/s", elapsed, result.sequences_per_second)
    return result
