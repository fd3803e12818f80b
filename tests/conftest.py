"""
Pytest fixtures: une app par test, base SQLite temporaire, faux client de complétion.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from boardgame_qa.core.config import Settings
from boardgame_qa.db.models.questions import Question
from boardgame_qa.features.assistant.completion import CompletionClient
from boardgame_qa.main import create_app


class FakeCompletionClient(CompletionClient):
    """Répond un texte fixe (ou lève l'erreur configurée) et garde la trace des appels."""

    def __init__(self, answer: Optional[str] = "Yes, at fixed ratios.", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.calls = []

    def complete(self, *, system: str, user: str) -> Optional[str]:
        self.calls.append({"system": system, "user": user})
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SEED_SAMPLE_GAMES=False,
        OPENAI_API_KEY="sk-test",
    )


@pytest.fixture
def completion() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def app(settings, completion):
    return create_app(settings=settings, completion_client=completion)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def engine(app, client):
    return app.state.engine


@pytest.fixture
def stored_questions(engine):
    """Retourne une fonction qui lit toutes les lignes de la table questions."""
    def _read():
        with Session(engine) as session:
            return session.exec(select(Question).order_by(Question.id)).all()
    return _read


@pytest.fixture
def make_game(client):
    def _make(**overrides):
        body = {"name": "Catan", "description": "Trading game"}
        body.update(overrides)
        rsp = client.post("/api/games", json=body)
        assert rsp.status_code == 201, rsp.text
        return rsp.json()
    return _make
