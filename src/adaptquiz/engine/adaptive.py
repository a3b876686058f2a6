"""Adaptive difficulty: the level state machine.

The level reacts to the two most recent answers in the session log,
whichever level produced them. Two correct answers in a row move one level
up, two wrong answers in a row move one level down, anything else holds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from adaptquiz.engine.diagnostics import InvariantViolation

if TYPE_CHECKING:
    from adaptquiz.engine.session import AnswerEvent

logger = logging.getLogger(__name__)


class Level(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        return LEVEL_ORDER.index(self)

    def up(self) -> "Level":
        return LEVEL_ORDER[min(self.rank + 1, len(LEVEL_ORDER) - 1)]

    def down(self) -> "Level":
        return LEVEL_ORDER[max(self.rank - 1, 0)]


LEVEL_ORDER: tuple[Level, ...] = (Level.EASY, Level.MEDIUM, Level.HARD)


def as_level(value) -> Level:
    """Validate ``value`` as a level without coercing anything else."""
    try:
        return Level(value)
    except ValueError:
        raise InvariantViolation(f"Unknown level: {value!r}") from None


STREAK_WINDOW = 2


@dataclass
class LevelStateMachine:
    """Holds the current level and applies the streak rule."""
    level: Level = Level.EASY

    def reset(self) -> None:
        self.level = Level.EASY

    def observe(self, events: Sequence["AnswerEvent"]) -> Level:
        """Apply the transition rule to the tail of the event log."""
        recent = events[-STREAK_WINDOW:]
        if len(recent) < STREAK_WINDOW:
            return self.level

        previous = self.level
        if all(e.correct for e in recent):
            self.level = self.level.up()
        elif not any(e.correct for e in recent):
            self.level = self.level.down()

        if self.level is not previous:
            logger.debug("level %s -> %s", previous.value, self.level.value)
        return self.level
