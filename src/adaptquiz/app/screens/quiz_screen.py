"""Quiz screen — one adaptive assessment session."""

from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Button, Footer, Header, Input, Static

from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import Question


class QuizScreen(Screen):
    """Presents the active question and shows correct/incorrect feedback.

    The engine updates immediately on submit; the pause before the next
    question is only a display timer here.
    """

    BINDINGS = [
        Binding("escape", "finish", "Finish early", show=True),
    ]

    CSS = """
    #quiz-container {
        padding: 1 4;
    }
    #question-text {
        margin: 1 0;
        text-style: bold;
    }
    #answer-feedback {
        height: 1;
        margin: 1 0;
    }
    """

    def __init__(self, engine: AssessmentEngine, feedback_delay: float = 0.7, **kwargs) -> None:
        super().__init__(**kwargs)
        self.engine = engine
        self.feedback_delay = feedback_delay
        self._question: Optional[Question] = None
        self._pending: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="quiz-container"):
            yield Static("", id="quiz-level")
            yield Static("", id="quiz-progress")
            yield Static("", id="question-text")
            yield Input(placeholder="Type answer here", id="answer-input")
            yield Button("Submit", id="submit-btn", variant="primary")
            yield Static("", id="answer-feedback")
            yield Button("Finish assessment early", id="finish-btn", variant="warning")
        yield Footer()

    def on_mount(self) -> None:
        self._present_question()

    def _present_question(self) -> None:
        state = self.engine.state
        self._question = self.engine.active_question()

        self.query_one("#quiz-level", Static).update(
            f"[bold]Adaptive Assessment — Level: {state.level.value.upper()}[/]"
        )
        self.query_one("#quiz-progress", Static).update(
            f"Question {state.cursor + 1} of {self.engine.session_length}"
        )
        self.query_one("#answer-feedback", Static).update("")

        answer_input = self.query_one("#answer-input", Input)
        answer_input.value = ""
        if self._question is None:
            self.query_one("#question-text", Static).update("No questions for this level.")
            answer_input.disabled = True
            self.query_one("#submit-btn", Button).disabled = True
            return

        self.query_one("#question-text", Static).update(self._question.text)
        answer_input.disabled = False
        self.query_one("#submit-btn", Button).disabled = False
        answer_input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-btn":
            self._submit(self.query_one("#answer-input", Input).value)
        elif event.button.id == "finish-btn":
            self.action_finish()

    def _submit(self, answer: str) -> None:
        if self._question is None or self._pending is not None:
            return

        result = self.engine.submit_answer(self._question, answer)
        feedback = self.query_one("#answer-feedback", Static)
        if result.correct:
            feedback.update("[green bold]Correct ✓[/]")
        else:
            feedback.update("[red bold]Incorrect ✗[/]")

        self.query_one("#answer-input", Input).disabled = True
        self.query_one("#submit-btn", Button).disabled = True
        self._pending = self.set_timer(self.feedback_delay, self._after_feedback)

    def _after_feedback(self) -> None:
        self._pending = None
        if self.engine.should_end():
            self.app.show_results()
        else:
            self._present_question()

    def action_finish(self) -> None:
        if self._pending is not None:
            self._pending.stop()
            self._pending = None
        self.engine.finish()
        self.app.show_results()
