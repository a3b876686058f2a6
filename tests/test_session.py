"""Tests for the session tracker."""

import dataclasses

import pytest

from adaptquiz.engine.adaptive import Level
from adaptquiz.engine.diagnostics import Fundamental, InvariantViolation
from adaptquiz.engine.question_bank import Question, QuestionBank
from adaptquiz.engine.session import SessionTracker


@pytest.fixture
def tracker(bank):
    return SessionTracker(bank)


def _answer(tracker, correct):
    q = tracker.active_question()
    return tracker.submit_answer(q, q.answer if correct else "nope")


class TestActiveQuestion:
    def test_first_question_is_first_easy(self, tracker):
        assert tracker.active_question().id == 1

    def test_stable_without_submissions(self, tracker):
        first = tracker.active_question()
        assert tracker.active_question() is first
        assert tracker.cursor == 0

    def test_cursor_wraps_around_pool(self, bank):
        tracker = SessionTracker(bank, session_length=10)
        # alternate outcomes so the level never changes
        ids = []
        for i in range(4):
            ids.append(tracker.active_question().id)
            _answer(tracker, correct=(i % 2 == 0))
        assert ids == [1, 2, 3, 1]

    def test_empty_pool_returns_none(self):
        only_easy = QuestionBank([
            Question(1, Level.EASY, "a", "a", Fundamental.LISTENING, "c"),
            Question(2, Level.EASY, "b", "b", Fundamental.LISTENING, "c"),
        ])
        tracker = SessionTracker(only_easy)
        _answer(tracker, True)
        _answer(tracker, True)
        assert tracker.level is Level.MEDIUM
        assert tracker.active_question() is None


class TestSubmitAnswer:
    def test_cursor_advances_by_one(self, tracker):
        _answer(tracker, True)
        assert tracker.cursor == 1
        _answer(tracker, False)
        assert tracker.cursor == 2

    def test_event_records_outcome(self, tracker):
        q = tracker.active_question()
        event = tracker.submit_answer(q, " 60 ")
        assert event.correct is True
        assert event.question_id == q.id
        assert event.fundamental is q.fundamental
        assert event.level is Level.EASY
        assert event.answer == " 60 "

    def test_event_is_immutable(self, tracker):
        event = _answer(tracker, True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.correct = False

    def test_wrong_answer_counts_against_fundamental(self, tracker):
        q = tracker.active_question()
        tracker.submit_answer(q, "wrong")
        counters = tracker.diagnostics.snapshot()
        assert counters[q.fundamental] == 1
        assert counters.total == 1

    def test_correct_answer_leaves_counters(self, tracker):
        _answer(tracker, True)
        assert tracker.diagnostics.snapshot().total == 0

    def test_level_changes_after_two_correct(self, tracker):
        _answer(tracker, True)
        assert tracker.level is Level.EASY
        _answer(tracker, True)
        assert tracker.level is Level.MEDIUM
        assert tracker.active_question().level is Level.MEDIUM

    def test_bad_fundamental_leaves_state_untouched(self, tracker):
        bogus = Question(99, Level.EASY, "?", "x", "memory", "c")
        with pytest.raises(InvariantViolation):
            tracker.submit_answer(bogus, "y")
        assert tracker.events == ()
        assert tracker.cursor == 0
        assert tracker.diagnostics.snapshot().total == 0

    def test_bad_level_leaves_state_untouched(self, tracker):
        bogus = Question(99, "expert", "?", "x", Fundamental.LISTENING, "c")
        with pytest.raises(InvariantViolation, match="Unknown level"):
            tracker.submit_answer(bogus, "x")
        assert tracker.events == ()
        assert tracker.cursor == 0
        assert tracker.level is Level.EASY


class TestLifecycle:
    def test_should_end_at_quota(self, bank):
        tracker = SessionTracker(bank, session_length=3)
        for _ in range(2):
            _answer(tracker, True)
            assert not tracker.should_end()
        _answer(tracker, False)
        assert tracker.should_end()

    def test_finish_ends_early(self, tracker):
        _answer(tracker, True)
        tracker.finish()
        tracker.finish()
        assert tracker.should_end()
        assert tracker.state.finished

    def test_start_session_resets_everything(self, tracker):
        _answer(tracker, False)
        _answer(tracker, True)
        _answer(tracker, True)
        tracker.finish()
        tracker.start_session()
        state = tracker.state
        assert state.level is Level.EASY
        assert state.events == ()
        assert state.cursor == 0
        assert not state.finished
        assert tracker.diagnostics.snapshot().total == 0

    def test_state_snapshot_is_detached(self, tracker):
        before = tracker.state
        _answer(tracker, True)
        assert before.answered == 0
        assert tracker.state.answered == 1
        assert tracker.state.correct_count == 1

    def test_invalid_session_length(self, bank):
        with pytest.raises(ValueError):
            SessionTracker(bank, session_length=0)
