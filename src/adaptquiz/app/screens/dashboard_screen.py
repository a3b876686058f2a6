"""Diagnostic dashboard — chart, ranked insights, plan and response log."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from adaptquiz.app.widgets.fundamentals_chart import FundamentalsChart
from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.recommender import Recommendation


def format_insights(recommendations: list[Recommendation]) -> str:
    return "\n".join(
        f"{i}. {rec.fundamental.value.upper()}: {rec.count} flagged — recommended targeted practice."
        for i, rec in enumerate(recommendations, start=1)
    )


def format_plan(plan: list[str]) -> str:
    if not plan:
        return "[dim]No mistakes flagged yet — keep going![/]"
    return "\n".join(f"• {line}" for line in plan)


class DashboardScreen(Screen):
    BINDINGS = [
        ("escape", "app.pop_screen", "Home"),
    ]

    CSS = """
    #dashboard-container {
        padding: 1 2;
    }
    #dashboard-top {
        height: auto;
    }
    #dashboard-top > Vertical {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }
    FundamentalsChart {
        border: round $accent;
        padding: 0 1;
    }
    """

    def __init__(self, engine: AssessmentEngine, **kwargs) -> None:
        super().__init__(**kwargs)
        self.engine = engine

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="dashboard-container"):
            yield Label("[bold]Diagnostic Dashboard[/]")
            with Horizontal(id="dashboard-top"):
                with Vertical():
                    yield FundamentalsChart(self.engine.diagnostics_snapshot())
                with Vertical():
                    yield Label("[bold]Key Insights[/]")
                    yield Static(format_insights(self.engine.recommendations()), id="insights")
                    yield Label("\n[bold]Suggested Plan[/]")
                    yield Static(format_plan(self.engine.practice_plan()), id="plan")
            yield Label("\n[bold]Response Log[/]")
            yield DataTable(id="response-log")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#response-log", DataTable)
        table.add_columns("Question", "Level", "Fundamental", "Correct")
        for entry in self.engine.response_log():
            event = entry.event
            table.add_row(
                entry.question.text if entry.question else str(event.question_id),
                event.level.value,
                event.fundamental.value,
                "Yes" if event.correct else "No",
            )
