"""YAML catalog parser and the immutable question bank."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from adaptquiz.engine.adaptive import Level
from adaptquiz.engine.diagnostics import Fundamental

logger = logging.getLogger(__name__)

ALL_CHAPTERS = "All"

_QUESTION_FIELDS = ("id", "level", "text", "answer", "fundamental", "chapter")


class CatalogError(ValueError):
    """The catalog on disk is malformed or violates the data model."""


@dataclass(frozen=True)
class Student:
    id: str
    name: str


@dataclass(frozen=True)
class CatalogMeta:
    id: str
    title: str
    description: str
    version: str
    students: tuple[Student, ...] = ()


@dataclass(frozen=True)
class Question:
    id: int
    level: Level
    text: str
    answer: str
    fundamental: Fundamental
    chapter: str


class QuestionBank:
    """Read-only catalog of questions with filtered views.

    Every view preserves catalog order. Unknown filters give an empty tuple.
    """

    def __init__(self, questions):
        self._questions: tuple[Question, ...] = tuple(questions)
        self._by_id = {q.id: q for q in self._questions}

    def __len__(self) -> int:
        return len(self._questions)

    def get(self, question_id: int) -> Optional[Question]:
        return self._by_id.get(question_id)

    def questions_by_level(self, level) -> tuple[Question, ...]:
        return tuple(q for q in self._questions if q.level == level)

    def questions_by_chapter(self, chapter: str) -> tuple[Question, ...]:
        if chapter == ALL_CHAPTERS:
            return self._questions
        return tuple(q for q in self._questions if q.chapter == chapter)

    def questions_by_fundamental(self, fundamental) -> tuple[Question, ...]:
        return tuple(q for q in self._questions if q.fundamental == fundamental)

    def chapters(self) -> list[str]:
        """Distinct chapter labels in first-seen order."""
        return list(dict.fromkeys(q.chapter for q in self._questions))


def _parse_question(raw, position: int) -> Question:
    if not isinstance(raw, dict):
        raise CatalogError(f"Question #{position} is not a mapping")
    missing = [k for k in _QUESTION_FIELDS if raw.get(k) is None]
    if missing:
        raise CatalogError(f"Question #{position} is missing {', '.join(missing)}")

    try:
        level = Level(raw["level"])
    except ValueError:
        raise CatalogError(f"Question {raw['id']}: unknown level {raw['level']!r}") from None
    try:
        fundamental = Fundamental(raw["fundamental"])
    except ValueError:
        raise CatalogError(
            f"Question {raw['id']}: unknown fundamental {raw['fundamental']!r}"
        ) from None
    # bool is an int subclass
    question_id = raw["id"]
    if isinstance(question_id, bool) or not isinstance(question_id, int):
        raise CatalogError(f"Question #{position}: id {question_id!r} is not an integer")

    return Question(
        id=question_id,
        level=level,
        text=str(raw["text"]),
        answer=str(raw["answer"]),
        fundamental=fundamental,
        chapter=str(raw["chapter"]),
    )


def load_catalog(catalog_dir: Path) -> CatalogMeta:
    """Load catalog.yaml from a catalog directory."""
    catalog_file = catalog_dir / "catalog.yaml"
    with open(catalog_file) as f:
        data = yaml.safe_load(f) or {}

    try:
        c = data["catalog"]
        return CatalogMeta(
            id=c["id"],
            title=c["title"],
            description=c.get("description", ""),
            version=str(c.get("version", "")),
            students=tuple(Student(id=s["id"], name=s["name"]) for s in c.get("students", [])),
        )
    except (KeyError, TypeError) as e:
        raise CatalogError(f"{catalog_file}: missing or malformed field {e}") from None


def load_question_bank(catalog_dir: Path) -> QuestionBank:
    """Load questions.yaml from a catalog directory."""
    questions_file = catalog_dir / "questions.yaml"
    try:
        with open(questions_file) as f:
            raw_questions = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"{questions_file}: cannot read questions ({e.strerror})") from None

    if not isinstance(raw_questions, list):
        raise CatalogError(f"{questions_file}: expected a list of questions")

    questions: list[Question] = []
    seen: set[int] = set()
    for position, raw in enumerate(raw_questions, start=1):
        question = _parse_question(raw, position)
        if question.id in seen:
            raise CatalogError(f"Duplicate question id {question.id}")
        seen.add(question.id)
        questions.append(question)

    logger.info("loaded %d questions from %s", len(questions), questions_file)
    return QuestionBank(questions)
