"""
--------------------------------------------------------------------------------
<ribodesign project>
src/ribodesign/walker/tests/test_optimizer.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import numpy as np
import pytest

from ribodesign.walker.decision import MetropolisHastingsDecision
from ribodesign.walker.errors import ConfigurationError, InvalidParameter
from ribodesign.walker.mutation import MutationGenerator
from ribodesign.walker.optimizer import LocalSearchOptimizer
from ribodesign.walker.scoring import gc_content_score


class _FixedCandidateGenerator:
    """Always proposes the same candidate; counts calls."""

    def __init__(self, current: str, candidate: str):
        self.current = current
        self.candidate = candidate
        self.next_calls = 0
        self.revert_calls = 0

    def next(self) -> str:
        self.next_calls += 1
        return self.candidate

    def revert(self) -> bool:
        self.revert_calls += 1
        return True


def _length_score(seq: str) -> float:
    return float(len(seq))


def test_gc_walk_scenario() -> None:
    gen = MutationGenerator("A" * 15, alphabet="AUGC", rng=np.random.default_rng(0))
    opt = LocalSearchOptimizer(gen, gc_content_score, default_max_successive_fails=10)
    assert opt.init_state == "A" * 15
    assert opt.init_state_score == 0.0

    state, score = opt.run()
    assert score <= opt.init_state_score
    assert score == opt.current_state_score
    assert state == opt.current_state
    assert gc_content_score(state) == score
    assert opt.step_count > opt.successful_step_count >= 0


def test_run_stops_after_bound_plus_one_failures() -> None:
    gen = _FixedCandidateGenerator("AA", "AAA")
    opt = LocalSearchOptimizer(gen, _length_score)
    state, score = opt.run(max_successive_fails=3)
    assert gen.next_calls == 4
    assert gen.revert_calls == 4
    assert opt.step_count == 4
    assert opt.successful_step_count == 0
    assert (state, score) == ("AA", 2.0)


def test_run_uses_default_bound() -> None:
    gen = _FixedCandidateGenerator("AA", "AAA")
    opt = LocalSearchOptimizer(gen, _length_score, default_max_successive_fails=0)
    opt.run()
    assert opt.step_count == 1


def test_accepted_step_updates_state() -> None:
    gen = _FixedCandidateGenerator("AAA", "AA")
    opt = LocalSearchOptimizer(gen, _length_score)
    assert opt.step() is True
    assert opt.current_state == "AA"
    assert opt.current_state_score == 2.0
    assert opt.successful_step_count == 1
    assert gen.revert_calls == 0


def test_rejected_step_reverts_generator_buffer() -> None:
    gen = MutationGenerator("GGGG", rng=np.random.default_rng(0))
    opt = LocalSearchOptimizer(gen, gc_content_score)
    # every single mutation of GGGG loses or keeps GC; greedy never accepts a loss
    for _ in range(20):
        accepted = opt.step()
        if not accepted:
            assert gen.current == opt.current_state
    assert opt.current_state_score <= opt.init_state_score


def test_counters_invariant_and_greedy_monotone() -> None:
    gen = MutationGenerator(length=30, rng=np.random.default_rng(7))
    opt = LocalSearchOptimizer(gen, gc_content_score)
    assert opt.step_count == 0 and opt.successful_step_count == 0
    rejected = 0
    last = opt.current_state_score
    for _ in range(200):
        if opt.step():
            assert opt.current_state_score < last
            last = opt.current_state_score
        else:
            rejected += 1
        assert opt.step_count == opt.successful_step_count + rejected
        assert gen.current == opt.current_state


def test_current_state_is_decoupled_from_generator_buffer() -> None:
    gen = MutationGenerator("AAAA", rng=np.random.default_rng(1))
    opt = LocalSearchOptimizer(gen, gc_content_score)
    opt.run(max_successive_fails=5)
    before = opt.current_state.to_string()
    gen.next()
    assert opt.current_state.to_string() == before
    assert opt.init_state == "AAAA"


def test_metropolis_walk_reproducible() -> None:
    def _walk() -> tuple:
        rng = np.random.default_rng(2017)
        gen = MutationGenerator("A" * 15, rng=rng)
        opt = LocalSearchOptimizer(
            gen,
            gc_content_score,
            MetropolisHastingsDecision(0.5, rng=rng),
            default_max_successive_fails=10,
        )
        state, score = opt.run()
        return state.to_string(), score, opt.step_count

    assert _walk() == _walk()


def test_explicit_init_state() -> None:
    gen = _FixedCandidateGenerator("ignored", "AAAA")
    opt = LocalSearchOptimizer(gen, _length_score, init_state="AAAAA")
    assert opt.init_state == "AAAAA"
    assert opt.init_state_score == 5.0
    assert opt.step() is True


def test_summary() -> None:
    gen = _FixedCandidateGenerator("AA", "AAA")
    opt = LocalSearchOptimizer(gen, _length_score)
    opt.run(max_successive_fails=1)
    res = opt.summary()
    assert res.step_count == 2
    assert res.rejected_step_count == 2
    assert res.to_dict()["final_sequence"] == "AA"


def test_score_errors_propagate() -> None:
    gen = _FixedCandidateGenerator("AA", "AAA")

    def _score(seq):
        if seq == "AAA":
            raise RuntimeError("oracle failed")
        return 0.0

    opt = LocalSearchOptimizer(gen, _score)
    with pytest.raises(RuntimeError, match="oracle failed"):
        opt.run()


def test_decision_errors_propagate() -> None:
    def _decide(old, new):
        raise ZeroDivisionError

    opt = LocalSearchOptimizer(_FixedCandidateGenerator("AA", "AAA"), _length_score, _decide)
    with pytest.raises(ZeroDivisionError):
        opt.step()


def test_missing_collaborators_rejected() -> None:
    with pytest.raises(ConfigurationError):
        LocalSearchOptimizer(None, _length_score)
    with pytest.raises(ConfigurationError):
        LocalSearchOptimizer(_FixedCandidateGenerator("A", "U"), None)
    with pytest.raises(ConfigurationError):
        LocalSearchOptimizer(object(), _length_score)


def test_generator_without_current_needs_init_state() -> None:
    class _Bare:
        def next(self):
            return "A"

        def revert(self):
            return False

    with pytest.raises(ConfigurationError):
        LocalSearchOptimizer(_Bare(), _length_score)
    assert LocalSearchOptimizer(_Bare(), _length_score, init_state="AA").init_state_score == 2.0


def test_negative_fail_bound_rejected() -> None:
    opt = LocalSearchOptimizer(_FixedCandidateGenerator("A", "AA"), _length_score)
    with pytest.raises(InvalidParameter):
        opt.run(max_successive_fails=-1)
