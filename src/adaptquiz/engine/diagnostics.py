"""Per-skill mistake counters."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum


class Fundamental(str, Enum):
    LISTENING = "listening"
    GRASPING = "grasping"
    RETENTION = "retention"
    APPLICATION = "application"


# Enumeration order doubles as the tie-break order for recommendations.
FUNDAMENTAL_ORDER: tuple[Fundamental, ...] = tuple(Fundamental)


class InvariantViolation(ValueError):
    """A value fell outside the fixed level/fundamental enumerations."""


def as_fundamental(value) -> Fundamental:
    """Validate ``value`` as a fundamental without coercing anything else."""
    try:
        return Fundamental(value)
    except ValueError:
        raise InvariantViolation(f"Unknown fundamental: {value!r}") from None


@dataclass(frozen=True)
class DiagnosticCounters:
    """Immutable snapshot of mistakes per fundamental."""
    listening: int = 0
    grasping: int = 0
    retention: int = 0
    application: int = 0

    def __getitem__(self, fundamental) -> int:
        return getattr(self, as_fundamental(fundamental).value)

    def items(self) -> list[tuple[Fundamental, int]]:
        return [(f, self[f]) for f in FUNDAMENTAL_ORDER]

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    @property
    def total(self) -> int:
        return sum(count for _, count in self.items())


class DiagnosticAggregator:
    """Counts wrong answers per fundamental for the running session."""

    def __init__(self) -> None:
        self._counters = DiagnosticCounters()

    def reset(self) -> None:
        self._counters = DiagnosticCounters()

    def record_miss(self, fundamental) -> None:
        f = as_fundamental(fundamental)
        self._counters = replace(self._counters, **{f.value: self._counters[f] + 1})

    def snapshot(self) -> DiagnosticCounters:
        return self._counters
