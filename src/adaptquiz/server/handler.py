"""Server handler: dispatches JSON-lines requests to the assessment engine."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from adaptquiz.catalogs.registry import CatalogRegistry
from adaptquiz.config.settings import Settings
from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import Question
from adaptquiz.engine.session import SessionState

from .protocol import (
    Notification,
    counters_to_dict,
    event_to_dict,
    log_entry_to_dict,
    question_to_dict,
    recommendation_to_dict,
    state_to_dict,
)

logger = logging.getLogger(__name__)


class ServerHandler:
    """Routes incoming requests to engine methods and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.registry = CatalogRegistry(catalogs_dir=self.settings.catalogs_dir)
        self._engine: Optional[AssessmentEngine] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params", {})

        handler_map = {
            "listCatalogs": self._list_catalogs,
            "loadCatalog": self._load_catalog,
            "startSession": self._start_session,
            "getQuestion": self._get_question,
            "submit": self._submit,
            "finish": self._finish,
            "shouldEnd": self._should_end,
            "getDiagnostics": self._get_diagnostics,
            "getRecommendations": self._get_recommendations,
            "questionsByLevel": self._questions_by_level,
            "questionsByChapter": self._questions_by_chapter,
            "listChapters": self._list_chapters,
            "getResponseLog": self._get_response_log,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return handler(params)

    @property
    def engine(self) -> AssessmentEngine:
        if self._engine is None:
            raise ValueError("No catalog loaded")
        return self._engine

    def _on_state(self, state: SessionState) -> None:
        self._write_notification(
            Notification("sessionState", state_to_dict(state))
        )

    def _lookup_question(self, params: dict) -> Question:
        question_id = params.get("questionId")
        if question_id is None:
            question = self.engine.active_question()
            if question is None:
                raise ValueError("No question available at this level")
            return question
        question = self.engine.bank.get(question_id)
        if question is None:
            raise ValueError(f"Unknown question: {question_id}")
        return question

    def _list_catalogs(self, params: dict) -> dict:
        catalogs = self.registry.list_catalogs()
        return {
            "catalogs": [
                {
                    "id": c.id,
                    "title": c.title,
                    "description": c.description,
                    "version": c.version,
                    "students": [{"id": s.id, "name": s.name} for s in c.students],
                }
                for c in catalogs
            ]
        }

    def _load_catalog(self, params: dict) -> dict:
        catalog_id = params.get("catalogId", self.settings.catalog)
        bank = self.registry.load_bank(catalog_id)

        if self._unsubscribe is not None:
            self._unsubscribe()
        self._engine = AssessmentEngine(bank, session_length=self.settings.session_length)
        self._unsubscribe = self._engine.subscribe(self._on_state)

        return {
            "catalogId": catalog_id,
            "questionCount": len(bank),
            "chapters": bank.chapters(),
            "sessionLength": self.settings.session_length,
        }

    def _start_session(self, params: dict) -> dict:
        self.engine.start_session()
        return {
            "state": state_to_dict(self.engine.state),
            "question": question_to_dict(self.engine.active_question()),
        }

    def _get_question(self, params: dict) -> dict:
        return {
            "state": state_to_dict(self.engine.state),
            "question": question_to_dict(self.engine.active_question()),
        }

    def _submit(self, params: dict) -> dict:
        if "answer" not in params:
            raise ValueError("Missing 'answer'")
        question = self._lookup_question(params)
        event = self.engine.submit_answer(question, params["answer"])
        should_end = self.engine.should_end()
        return {
            "event": event_to_dict(event),
            "state": state_to_dict(self.engine.state),
            "shouldEnd": should_end,
            "nextQuestion": None if should_end else question_to_dict(self.engine.active_question()),
        }

    def _finish(self, params: dict) -> dict:
        self.engine.finish()
        return {"state": state_to_dict(self.engine.state), "shouldEnd": True}

    def _should_end(self, params: dict) -> dict:
        return {"shouldEnd": self.engine.should_end()}

    def _get_diagnostics(self, params: dict) -> dict:
        return {"diagnostics": counters_to_dict(self.engine.diagnostics_snapshot())}

    def _get_recommendations(self, params: dict) -> dict:
        return {
            "recommendations": [recommendation_to_dict(r) for r in self.engine.recommendations()],
            "plan": self.engine.practice_plan(),
        }

    def _questions_by_level(self, params: dict) -> dict:
        level = params.get("level")
        if level is None:
            raise ValueError("Missing 'level'")
        return {"questions": [question_to_dict(q) for q in self.engine.questions_by_level(level)]}

    def _questions_by_chapter(self, params: dict) -> dict:
        chapter = params.get("chapter", "All")
        return {"questions": [question_to_dict(q) for q in self.engine.questions_by_chapter(chapter)]}

    def _list_chapters(self, params: dict) -> dict:
        return {"chapters": self.engine.chapters()}

    def _get_response_log(self, params: dict) -> dict:
        return {"log": [log_entry_to_dict(e) for e in self.engine.response_log()]}
