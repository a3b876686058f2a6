"""JSON-lines protocol messages and engine-type serializers for the UI bridge."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from adaptquiz.engine.assessment import LogEntry
from adaptquiz.engine.diagnostics import DiagnosticCounters
from adaptquiz.engine.question_bank import Question
from adaptquiz.engine.recommender import Recommendation
from adaptquiz.engine.session import AnswerEvent, SessionState


@dataclass
class Request:
    """Incoming request from a UI process."""
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        if not isinstance(data, dict) or "method" not in data:
            raise ValueError("Request must be an object with a 'method'")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError("Request 'params' must be an object")
        return cls(id=data.get("id", 0), method=data["method"], params=params)


@dataclass
class Response:
    """Outgoing response to the UI process."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    def to_json_line(self) -> str:
        d = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d) + "\n"


@dataclass
class Notification:
    """Server-initiated message (no id, no response expected)."""
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}) + "\n"


# ── Engine types → JSON-friendly dicts ──

def question_to_dict(question: Optional[Question]) -> Optional[dict]:
    if question is None:
        return None
    return {
        "id": question.id,
        "level": question.level.value,
        "text": question.text,
        "fundamental": question.fundamental.value,
        "chapter": question.chapter,
    }


def event_to_dict(event: AnswerEvent) -> dict:
    return {
        "questionId": event.question_id,
        "correct": event.correct,
        "fundamental": event.fundamental.value,
        "level": event.level.value,
        "answer": event.answer,
    }


def state_to_dict(state: SessionState) -> dict:
    return {
        "level": state.level.value,
        "cursor": state.cursor,
        "answered": state.answered,
        "correct": state.correct_count,
        "finished": state.finished,
    }


def counters_to_dict(counters: DiagnosticCounters) -> dict:
    return counters.as_dict()


def recommendation_to_dict(rec: Recommendation) -> dict:
    return {"fundamental": rec.fundamental.value, "count": rec.count}


def log_entry_to_dict(entry: LogEntry) -> dict:
    d = event_to_dict(entry.event)
    d["text"] = entry.question.text if entry.question else None
    return d
