"""AdaptQuiz main Textual application."""

from __future__ import annotations

from typing import Optional

from textual.app import App

from adaptquiz.app.screens.dashboard_screen import DashboardScreen
from adaptquiz.app.screens.home_screen import HomeScreen
from adaptquiz.app.screens.practice_screen import PracticeScreen
from adaptquiz.app.screens.quiz_screen import QuizScreen
from adaptquiz.catalogs.registry import CatalogRegistry
from adaptquiz.config.settings import Settings
from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import Student


class AdaptQuizApp(App):
    """Adaptive assessment, practice and diagnostic dashboard."""

    TITLE = "AdaptQuiz"
    SUB_TITLE = "Adaptive Assessment & Practice"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog_id: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings or Settings.load()
        self.registry = CatalogRegistry(catalogs_dir=self.settings.catalogs_dir)

        catalog_id = catalog_id or self.settings.catalog
        self.catalog = self.registry.get_catalog(catalog_id)
        if self.catalog is None:
            raise ValueError(f"Unknown catalog: {catalog_id}")
        self.engine = AssessmentEngine(
            self.registry.load_bank(catalog_id),
            session_length=self.settings.session_length,
        )
        self.student: Optional[Student] = None

    def on_mount(self) -> None:
        self.push_screen(HomeScreen(catalog=self.catalog, engine=self.engine))

    def sign_in(self, student: Student) -> None:
        """Called by HomeScreen once a student is picked."""
        self.student = student
        self.sub_title = f"Signed in as {student.name}"

    def start_assessment(self) -> None:
        self.engine.start_session()
        self.push_screen(
            QuizScreen(engine=self.engine, feedback_delay=self.settings.feedback_delay_seconds)
        )

    def show_practice(self) -> None:
        self.push_screen(PracticeScreen(engine=self.engine))

    def show_dashboard(self) -> None:
        self.push_screen(DashboardScreen(engine=self.engine))

    def show_results(self) -> None:
        """Replace the quiz screen with the dashboard when a session ends."""
        self.switch_screen(DashboardScreen(engine=self.engine))
