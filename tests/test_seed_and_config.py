"""
Tests for settings post-processing and sample data seeding.
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from boardgame_qa.core.config import Settings
from boardgame_qa.db.seed import load_seed_yaml, seed_sample_games
from boardgame_qa.db.session import build_engine, init_db
from boardgame_qa.main import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "DB_HOST", "DB_PASSWORD", "SQLITE_PATH", "FRONTEND_URL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        s = Settings(_env_file=None)

        assert s.DATABASE_URL == "sqlite:///boardgames.db"
        assert s.OPENAI_MAX_TOKENS == 1000
        assert s.OPENAI_TEMPERATURE == 0.3
        assert s.PORT == 3001

    def test_postgres_url_from_db_parts(self):
        s = Settings(_env_file=None, DB_HOST="db", DB_PASSWORD="secret", DB_NAME="games")

        assert s.DATABASE_URL == "postgresql+psycopg2://postgres:secret@db:5432/games"

    def test_explicit_url_wins(self):
        s = Settings(_env_file=None, DATABASE_URL="sqlite:///other.db", DB_HOST="db")

        assert s.DATABASE_URL == "sqlite:///other.db"

    def test_cors_origins_include_frontend_url(self):
        s = Settings(_env_file=None, CORS_ORIGINS="http://a, http://b", FRONTEND_URL="https://front.example")

        assert s.cors_origins == ["http://a", "http://b", "https://front.example"]


class TestSeed:

    def test_seed_file_has_sample_games(self):
        names = [g["name"] for g in load_seed_yaml()["games"]]

        assert names == ["Monopoly", "Scrabble"]

    def test_seed_only_when_empty(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'seed.db'}")
        init_db(engine)

        with Session(engine) as session:
            assert seed_sample_games(session) == 2
            assert seed_sample_games(session) == 0

    def test_startup_seeds_sample_games(self, tmp_path, completion):
        settings = Settings(
            _env_file=None,
            ENV="test",
            DATABASE_URL=f"sqlite:///{tmp_path / 'app.db'}",
            SEED_SAMPLE_GAMES=True,
        )

        app = create_app(settings=settings, completion_client=completion)
        assert app.router.on_startup == []

        with TestClient(app) as client:
            games = client.get("/api/games").json()

        assert {g["name"] for g in games} == {"Monopoly", "Scrabble"}
        assert all(g["official_rules"] and g["custom_rules"] for g in games)
