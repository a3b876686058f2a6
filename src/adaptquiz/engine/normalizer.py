"""Answer normalization for comparison."""

from __future__ import annotations


def normalize_answer(text: str) -> str:
    """Normalize a typed answer: strip surrounding whitespace, lowercase."""
    return str(text).strip().lower()


def answers_match(guess: str, correct: str) -> bool:
    """Check if a typed answer matches the canonical answer key."""
    return normalize_answer(guess) == normalize_answer(correct)
