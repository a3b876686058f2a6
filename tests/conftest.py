"""Shared fixtures for AdaptQuiz tests."""

from __future__ import annotations

import pytest
import yaml

from adaptquiz.engine.assessment import AssessmentEngine
from adaptquiz.engine.question_bank import load_question_bank

SAMPLE_QUESTIONS = [
    {"id": 1, "level": "easy", "text": "A car travels 60 km in 1 hour. Speed?",
     "answer": "60", "fundamental": "grasping", "chapter": "Time & Distance"},
    {"id": 2, "level": "easy", "text": "5 km in 25 minutes. Average speed (km/h)?",
     "answer": "12", "fundamental": "application", "chapter": "Time & Distance"},
    {"id": 3, "level": "easy", "text": "Recall: speed = ?",
     "answer": "distance/time", "fundamental": "retention", "chapter": "Formulae"},
    {"id": 4, "level": "medium", "text": "180 km in 3 h then 90 km in 1 h. Average speed?",
     "answer": "67.5", "fundamental": "application", "chapter": "Time & Distance"},
    {"id": 5, "level": "medium", "text": "Forgot the formula during revision. Which issue?",
     "answer": "retention", "fundamental": "retention", "chapter": "Meta"},
    {"id": 6, "level": "hard", "text": "Car A 60 km/h, car B 40 km/h. Hours until A is 40 km ahead?",
     "answer": "2", "fundamental": "application", "chapter": "Relative Speed"},
]


def write_catalog(catalog_dir, questions, catalog_id="test_catalog"):
    catalog_dir.mkdir(parents=True)
    catalog_data = {
        "catalog": {
            "id": catalog_id,
            "title": "Test Catalog",
            "description": "A test catalog",
            "version": "1.0.0",
            "students": [
                {"id": "ram", "name": "Ram"},
                {"id": "sanga", "name": "Sanga"},
            ],
        }
    }
    with open(catalog_dir / "catalog.yaml", "w") as f:
        yaml.dump(catalog_data, f)
    with open(catalog_dir / "questions.yaml", "w") as f:
        yaml.dump(questions, f)
    return catalog_dir


@pytest.fixture
def sample_catalog_dir(tmp_path):
    """Create a minimal catalog directory for testing."""
    return write_catalog(tmp_path / "catalogs" / "test_catalog", SAMPLE_QUESTIONS)


@pytest.fixture
def catalogs_dir(sample_catalog_dir):
    return sample_catalog_dir.parent


@pytest.fixture
def bank(sample_catalog_dir):
    return load_question_bank(sample_catalog_dir)


@pytest.fixture
def engine(bank):
    return AssessmentEngine(bank)


def answer_correctly(engine):
    question = engine.active_question()
    return engine.submit_answer(question, question.answer)


def answer_wrongly(engine):
    question = engine.active_question()
    return engine.submit_answer(question, "definitely wrong")
