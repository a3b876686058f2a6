"""Bar chart of mistakes per fundamental."""

from __future__ import annotations

from textual.widgets import Static

from adaptquiz.engine.diagnostics import DiagnosticCounters


def render_bars(counters: DiagnosticCounters, width: int = 20) -> str:
    """One bar per fundamental, scaled to the largest count."""
    peak = max(max(count for _, count in counters.items()), 1)
    lines = []
    for fundamental, count in counters.items():
        filled = round(count / peak * width)
        lines.append(
            f"{fundamental.value.capitalize():<12} "
            f"[red]{'█' * filled}[/][dim]{'░' * (width - filled)}[/] {count}"
        )
    return "\n".join(lines)


class FundamentalsChart(Static):
    def __init__(self, counters: DiagnosticCounters, **kwargs) -> None:
        super().__init__(render_bars(counters), **kwargs)
        self.border_title = "Fundamentals"
