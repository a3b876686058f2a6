"""Home screen — student picker, session snapshot and main menu."""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, OptionList, Static
from textual.widgets.option_list import Option

from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import CatalogMeta, Student
from adaptquiz.engine.session import SessionState

_MENU_BUTTONS = ("start-btn", "practice-btn", "dashboard-btn")


def format_snapshot(state: SessionState, engine: AssessmentEngine) -> str:
    counters = engine.diagnostics_snapshot()
    return (
        f"[bold]Student Snapshot[/]\n"
        f"Responses: {state.answered}\n"
        f"Diagnostics: Listening {counters.listening}, Grasping {counters.grasping}, "
        f"Retention {counters.retention}, Application {counters.application}"
    )


class HomeScreen(Screen):
    """Mock sign-in followed by the assessment/practice/dashboard menu."""

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    CSS = """
    #home-container {
        align: center middle;
        padding: 2 4;
    }
    #menu-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        catalog: CatalogMeta,
        engine: AssessmentEngine,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.catalog = catalog
        self.engine = engine
        self.selected_student: Student | None = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="home-container"):
            yield Static(
                f"[bold]{self.catalog.title}[/]\n[dim]{self.catalog.description}[/]",
                id="home-subtitle",
            )

            yield Label("\n[bold]Choose student:[/]")
            yield OptionList(
                *[Option(s.name, id=s.id) for s in self.catalog.students],
                id="student-list",
            )

            yield Static(
                "Start the adaptive assessment to begin. Difficulty adapts to your "
                "recent answers and mistakes are mapped to core fundamentals.",
                id="overview",
            )
            yield Static("", id="snapshot")

            with Horizontal(id="menu-buttons"):
                yield Button("Start Adaptive Assessment", id="start-btn", variant="primary", disabled=True)
                yield Button("Practice", id="practice-btn", disabled=True)
                yield Button("Dashboard", id="dashboard-btn", disabled=True)

        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.engine.subscribe(self._refresh_snapshot)
        self._refresh_snapshot(self.engine.state)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    def _refresh_snapshot(self, state: SessionState) -> None:
        self.query_one("#snapshot", Static).update(format_snapshot(state, self.engine))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        for student in self.catalog.students:
            if student.id == event.option.id:
                self.selected_student = student
                self.app.sign_in(student)
                break
        self._update_buttons()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if self.selected_student is None:
            return
        if event.button.id == "start-btn":
            self.app.start_assessment()
        elif event.button.id == "practice-btn":
            self.app.show_practice()
        elif event.button.id == "dashboard-btn":
            self.app.show_dashboard()

    def _update_buttons(self) -> None:
        signed_in = self.selected_student is not None
        for btn_id in _MENU_BUTTONS:
            self.query_one(f"#{btn_id}", Button).disabled = not signed_in
