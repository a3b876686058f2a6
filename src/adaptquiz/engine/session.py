"""Session tracker: answer log, question cursor, termination rule."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from adaptquiz.engine.adaptive import Level, LevelStateMachine, as_level
from adaptquiz.engine.diagnostics import DiagnosticAggregator, Fundamental, as_fundamental
from adaptquiz.engine.normalizer import answers_match
from adaptquiz.engine.question_bank import Question, QuestionBank

logger = logging.getLogger(__name__)

DEFAULT_SESSION_LENGTH = 6


@dataclass(frozen=True)
class AnswerEvent:
    question_id: int
    correct: bool
    fundamental: Fundamental
    level: Level
    answer: str = ""


@dataclass(frozen=True)
class SessionState:
    level: Level
    events: tuple[AnswerEvent, ...]
    cursor: int
    finished: bool = False

    @property
    def answered(self) -> int:
        return len(self.events)

    @property
    def correct_count(self) -> int:
        return sum(1 for e in self.events if e.correct)


class SessionTracker:
    """Drives one assessment session over a question bank.

    The tracker owns the event log and cursor, and delegates the level rule
    and the mistake counters to their own components.
    """

    def __init__(
        self,
        bank: QuestionBank,
        session_length: int = DEFAULT_SESSION_LENGTH,
        levels: Optional[LevelStateMachine] = None,
        diagnostics: Optional[DiagnosticAggregator] = None,
    ):
        if session_length < 1:
            raise ValueError(f"session_length must be positive, got {session_length}")
        self.bank = bank
        self.session_length = session_length
        self.levels = levels or LevelStateMachine()
        self.diagnostics = diagnostics or DiagnosticAggregator()
        self._events: list[AnswerEvent] = []
        self._cursor = 0
        self._finished = False
        self.start_session()

    @property
    def state(self) -> SessionState:
        return SessionState(
            level=self.levels.level,
            events=tuple(self._events),
            cursor=self._cursor,
            finished=self._finished,
        )

    @property
    def level(self) -> Level:
        return self.levels.level

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def events(self) -> tuple[AnswerEvent, ...]:
        return tuple(self._events)

    def start_session(self) -> None:
        self._events = []
        self._cursor = 0
        self._finished = False
        self.levels.reset()
        self.diagnostics.reset()
        logger.debug("session started (%d questions)", self.session_length)

    def pool(self) -> tuple[Question, ...]:
        return self.bank.questions_by_level(self.levels.level)

    def active_question(self) -> Optional[Question]:
        """Question under the cursor, or None when the level has no questions."""
        pool = self.pool()
        if not pool:
            return None
        return pool[self._cursor % len(pool)]

    def submit_answer(self, question: Question, raw_answer: str) -> AnswerEvent:
        """Judge an answer and run the full update: log, diagnostics, level, cursor."""
        # Validate before mutating so a bad catalog entry leaves state untouched.
        fundamental = as_fundamental(question.fundamental)
        level = as_level(question.level)
        correct = answers_match(raw_answer, question.answer)

        event = AnswerEvent(
            question_id=question.id,
            correct=correct,
            fundamental=fundamental,
            level=level,
            answer=str(raw_answer),
        )
        self._events.append(event)

        if not correct:
            self.diagnostics.record_miss(fundamental)

        self.levels.observe(self._events)
        self._cursor += 1

        logger.debug(
            "answer %d to question %d: %s (level now %s)",
            len(self._events), question.id,
            "correct" if correct else "incorrect", self.levels.level.value,
        )
        return event

    def finish(self) -> None:
        """Request early termination. Idempotent."""
        if not self._finished:
            logger.debug("session finished after %d answers", len(self._events))
        self._finished = True

    def should_end(self) -> bool:
        return self._finished or len(self._events) >= self.session_length
