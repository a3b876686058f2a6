"""Assessment engine: the surface presentation layers talk to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from adaptquiz.engine.diagnostics import DiagnosticCounters
from adaptquiz.engine.question_bank import Question, QuestionBank
from adaptquiz.engine.recommender import Recommendation, practice_plan, rank
from adaptquiz.engine.session import DEFAULT_SESSION_LENGTH, AnswerEvent, SessionState, SessionTracker

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]


@dataclass(frozen=True)
class LogEntry:
    """One row of the response log: the event and the question it answered."""
    event: AnswerEvent
    question: Optional[Question]


class AssessmentEngine:
    """Wires a question bank to one session tracker.

    Observers subscribe to receive a fresh ``SessionState`` after every
    mutation; UI bindings re-render from that snapshot.
    """

    def __init__(self, bank: QuestionBank, session_length: int = DEFAULT_SESSION_LENGTH):
        self.bank = bank
        self.tracker = SessionTracker(bank, session_length=session_length)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self.tracker.state

    @property
    def session_length(self) -> int:
        return self.tracker.session_length

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state observer; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        state = self.tracker.state
        for listener in list(self._listeners):
            listener(state)

    # ── Session lifecycle ──

    def start_session(self) -> None:
        self.tracker.start_session()
        logger.info("assessment session started")
        self._notify()

    def active_question(self) -> Optional[Question]:
        return self.tracker.active_question()

    def submit_answer(self, question: Question, answer: str) -> AnswerEvent:
        event = self.tracker.submit_answer(question, answer)
        self._notify()
        return event

    def finish(self) -> None:
        self.tracker.finish()
        logger.info("assessment session finished with %d answers", len(self.tracker.events))
        self._notify()

    def should_end(self) -> bool:
        return self.tracker.should_end()

    # ── Diagnostics ──

    def diagnostics_snapshot(self) -> DiagnosticCounters:
        return self.tracker.diagnostics.snapshot()

    def recommendations(self) -> list[Recommendation]:
        return rank(self.diagnostics_snapshot())

    def practice_plan(self) -> list[str]:
        return practice_plan(self.recommendations())

    def response_log(self) -> list[LogEntry]:
        return [LogEntry(event=e, question=self.bank.get(e.question_id)) for e in self.tracker.events]

    # ── Question bank views ──

    def questions_by_level(self, level) -> tuple[Question, ...]:
        return self.bank.questions_by_level(level)

    def questions_by_chapter(self, chapter: str) -> tuple[Question, ...]:
        return self.bank.questions_by_chapter(chapter)

    def questions_by_fundamental(self, fundamental) -> tuple[Question, ...]:
        return self.bank.questions_by_fundamental(fundamental)

    def chapters(self) -> list[str]:
        return self.bank.chapters()
