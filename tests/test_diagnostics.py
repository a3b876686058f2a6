"""Tests for the diagnostic aggregator and recommendation ranking."""

import dataclasses

import pytest

from adaptquiz.engine.diagnostics import (
    FUNDAMENTAL_ORDER,
    DiagnosticAggregator,
    DiagnosticCounters,
    Fundamental,
    InvariantViolation,
)
from adaptquiz.engine.recommender import practice_plan, rank


class TestAggregator:
    def test_starts_at_zero(self):
        counters = DiagnosticAggregator().snapshot()
        assert counters.as_dict() == {"listening": 0, "grasping": 0, "retention": 0, "application": 0}

    @pytest.mark.parametrize("fundamental", FUNDAMENTAL_ORDER)
    def test_record_miss_touches_only_one_counter(self, fundamental):
        agg = DiagnosticAggregator()
        agg.record_miss(Fundamental.APPLICATION)
        before = agg.snapshot()
        agg.record_miss(fundamental)
        after = agg.snapshot()
        for f in FUNDAMENTAL_ORDER:
            expected = before[f] + 1 if f is fundamental else before[f]
            assert after[f] == expected

    def test_accepts_string_values(self):
        agg = DiagnosticAggregator()
        agg.record_miss("retention")
        assert agg.snapshot().retention == 1

    def test_unknown_fundamental_is_invariant_violation(self):
        agg = DiagnosticAggregator()
        with pytest.raises(InvariantViolation, match="memory"):
            agg.record_miss("memory")
        assert agg.snapshot().total == 0

    def test_snapshot_is_immutable_copy(self):
        agg = DiagnosticAggregator()
        snap = agg.snapshot()
        agg.record_miss(Fundamental.LISTENING)
        assert snap.listening == 0
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.listening = 5

    def test_reset(self):
        agg = DiagnosticAggregator()
        agg.record_miss(Fundamental.GRASPING)
        agg.reset()
        assert agg.snapshot() == DiagnosticCounters()

    def test_counter_lookup_by_unknown_key(self):
        with pytest.raises(InvariantViolation):
            DiagnosticCounters()["memory"]


class TestRank:
    def test_sorted_by_count_descending(self):
        counters = DiagnosticCounters(listening=1, grasping=3, retention=0, application=2)
        assert [r.fundamental.value for r in rank(counters)] == [
            "grasping", "application", "listening", "retention",
        ]

    def test_ties_keep_enumeration_order(self):
        assert [r.fundamental for r in rank(DiagnosticCounters())] == list(FUNDAMENTAL_ORDER)
        counters = DiagnosticCounters(listening=1, grasping=2, retention=2, application=1)
        assert [r.fundamental.value for r in rank(counters)] == [
            "grasping", "retention", "listening", "application",
        ]

    def test_is_permutation_and_idempotent(self):
        counters = DiagnosticCounters(retention=2, application=1)
        first = rank(counters)
        assert sorted(r.fundamental.value for r in first) == sorted(f.value for f in FUNDAMENTAL_ORDER)
        assert rank(counters) == first

    def test_counts_carried_through(self):
        counters = DiagnosticCounters(retention=2)
        top = rank(counters)[0]
        assert top.fundamental is Fundamental.RETENTION
        assert top.count == 2


class TestPracticePlan:
    def test_empty_without_mistakes(self):
        assert practice_plan(rank(DiagnosticCounters())) == []

    def test_one_line_per_flagged_fundamental_in_rank_order(self):
        plan = practice_plan(rank(DiagnosticCounters(application=2, retention=1)))
        assert len(plan) == 2
        assert plan[0].startswith("2 sessions on Application")
        assert plan[1].startswith("1 session on Retention")
