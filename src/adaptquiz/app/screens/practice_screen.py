"""Practice screen — recommended skills and chapter browsing."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, Select, Static

from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import ALL_CHAPTERS, Question


def format_practice_list(questions: tuple[Question, ...]) -> str:
    if not questions:
        return "[dim]No questions to show.[/]"
    return "\n".join(
        f"{q.text} [i]({q.level.value})[/]\n  [dim]Fundamental: {q.fundamental.value}[/]"
        for q in questions
    )


class PracticeScreen(Screen):
    """Free browsing of the bank, steered by the diagnostic ranking."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Home"),
    ]

    CSS = """
    #practice-container {
        padding: 1 4;
    }
    .recommendation-row {
        height: auto;
        margin-bottom: 1;
    }
    .recommendation-row Static {
        width: 1fr;
    }
    """

    def __init__(self, engine: AssessmentEngine, **kwargs) -> None:
        super().__init__(**kwargs)
        self.engine = engine

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="practice-container"):
            yield Label("[bold]Recommended based on diagnostics[/]")
            with Vertical(id="recommendations"):
                for rec in self.engine.recommendations():
                    with Horizontal(classes="recommendation-row"):
                        yield Static(
                            f"[bold]{rec.fundamental.value.upper()}[/]: {rec.count} flagged mistakes."
                        )
                        yield Button("Practice Now", id=f"practice-{rec.fundamental.value}")

            yield Label("\n[bold]Or choose chapter[/]")
            options = [(ALL_CHAPTERS, ALL_CHAPTERS)] + [(c, c) for c in self.engine.chapters()]
            yield Select(options, value=ALL_CHAPTERS, allow_blank=False, id="chapter-select")
            yield Static("", id="practice-list")
        yield Footer()

    def on_mount(self) -> None:
        self.show_chapter(ALL_CHAPTERS)

    def show_chapter(self, chapter: str) -> None:
        self.query_one("#practice-list", Static).update(
            format_practice_list(self.engine.questions_by_chapter(chapter))
        )

    def show_fundamental(self, fundamental: str) -> None:
        self.query_one("#practice-list", Static).update(
            format_practice_list(self.engine.questions_by_fundamental(fundamental))
        )

    def on_select_changed(self, event: Select.Changed) -> None:
        if isinstance(event.value, str):
            self.show_chapter(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("practice-"):
            self.show_fundamental(button_id.removeprefix("practice-"))
