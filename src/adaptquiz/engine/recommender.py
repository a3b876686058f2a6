"""Ranked remediation recommendations derived from diagnostic counters."""

from __future__ import annotations

from dataclasses import dataclass

from adaptquiz.engine.diagnostics import FUNDAMENTAL_ORDER, DiagnosticCounters, Fundamental


# Fundamental → suggested remediation activity for the dashboard plan.
PRACTICE_ACTIVITIES: dict[Fundamental, str] = {
    Fundamental.APPLICATION: "Work through word problems that apply the formula",
    Fundamental.RETENTION: "Quick revision of key formulae with flashcards",
    Fundamental.GRASPING: "Ask the teacher to check concept clarity",
    Fundamental.LISTENING: "Re-listen to the explanation and restate it in your own words",
}


@dataclass(frozen=True)
class Recommendation:
    fundamental: Fundamental
    count: int


def rank(counters: DiagnosticCounters) -> list[Recommendation]:
    """Sort fundamentals by mistake count, highest first.

    ``sorted`` is stable, so equal counts keep enumeration order.
    """
    pairs = [Recommendation(f, counters[f]) for f in FUNDAMENTAL_ORDER]
    return sorted(pairs, key=lambda r: r.count, reverse=True)


def practice_plan(recommendations: list[Recommendation]) -> list[str]:
    """Suggested practice steps for every fundamental with flagged mistakes."""
    plan = []
    for rec in recommendations:
        if rec.count <= 0:
            continue
        sessions = "1 session" if rec.count == 1 else f"{rec.count} sessions"
        plan.append(
            f"{sessions} on {rec.fundamental.value.capitalize()}: "
            f"{PRACTICE_ACTIVITIES[rec.fundamental]}"
        )
    return plan
