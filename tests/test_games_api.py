"""
Tests for the games CRUD endpoints.

Tests:
- Trimming and validation of text fields
- Not-found and bad-id handling
- Update / delete lifecycle
- Listing order and question counts
- Cascade delete of questions
- UTC timestamps
- Storage failures rendered as storage_error
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from boardgame_qa.api.dependencies import get_game_repository
from boardgame_qa.db.repositories.games import GameRepository
from boardgame_qa.main import create_app

HUGE_ID = "99999999999999999999"


def parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCreateGame:
    """POST /api/games"""

    def test_create_trims_and_defaults_rules(self, client):
        """All text fields are trimmed; absent rules become empty strings."""
        rsp = client.post("/api/games", json={"name": "  Catan ", "description": "\tTrading game  "})

        assert rsp.status_code == 201
        body = rsp.json()
        assert body["id"] >= 1
        assert body["name"] == "Catan"
        assert body["description"] == "Trading game"
        assert body["official_rules"] == ""
        assert body["custom_rules"] == ""
        assert body["created_at"] and body["updated_at"]

    def test_create_trims_rules(self, client):
        rsp = client.post("/api/games", json={
            "name": "Catan",
            "description": "Trading game",
            "official_rules": "  Build roads and settlements.  ",
            "custom_rules": "   ",
        })

        assert rsp.status_code == 201
        assert rsp.json()["official_rules"] == "Build roads and settlements."
        assert rsp.json()["custom_rules"] == ""

    def test_whitespace_name_is_rejected(self, client):
        rsp = client.post("/api/games", json={"name": "   ", "description": "Trading game"})

        assert rsp.status_code == 400
        assert rsp.json() == {"error": "missing_fields", "message": "Game name is required"}
        assert client.get("/api/games").json() == []

    def test_empty_description_is_rejected(self, client):
        rsp = client.post("/api/games", json={"name": "Catan", "description": ""})

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "missing_fields"

    def test_missing_fields_are_rejected(self, client):
        rsp = client.post("/api/games", json={})

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "missing_fields"

    def test_non_json_body_is_rejected(self, client):
        rsp = client.post("/api/games", content="not json", headers={"Content-Type": "application/json"})

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "invalid_request"


class TestGetGame:
    """GET /api/games/{id}"""

    def test_returns_stored_fields(self, client, make_game):
        created = make_game(official_rules="Build roads and settlements.", custom_rules="No robber.")

        rsp = client.get(f"/api/games/{created['id']}")

        assert rsp.status_code == 200
        assert rsp.json() == created

    def test_unknown_id_is_not_found(self, client):
        rsp = client.get("/api/games/999")

        assert rsp.status_code == 404
        assert rsp.json()["error"] == "game_not_found"
        assert "999" in rsp.json()["message"]

    def test_non_integer_id_is_bad_request(self, client):
        rsp = client.get("/api/games/abc")

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "invalid_id"


class TestUpdateGame:
    """PUT /api/games/{id}"""

    def test_updates_all_text_fields(self, client, make_game):
        created = make_game(official_rules="Old rules", custom_rules="Old variant")

        rsp = client.put(f"/api/games/{created['id']}", json={
            "name": " Catan 5-6 ",
            "description": "Extension",
            "official_rules": " New rules ",
        })

        assert rsp.status_code == 200
        body = rsp.json()
        assert body["name"] == "Catan 5-6"
        assert body["description"] == "Extension"
        assert body["official_rules"] == "New rules"
        assert body["custom_rules"] == ""
        assert body["created_at"] == created["created_at"]
        assert parse_ts(body["updated_at"]) >= parse_ts(created["updated_at"])
        assert client.get(f"/api/games/{created['id']}").json() == body

    def test_update_validates_like_create(self, client, make_game):
        created = make_game()

        rsp = client.put(f"/api/games/{created['id']}", json={"name": "Catan", "description": "  "})

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "missing_fields"
        assert client.get(f"/api/games/{created['id']}").json()["description"] == "Trading game"

    def test_update_unknown_id_is_not_found(self, client):
        rsp = client.put("/api/games/42", json={"name": "Catan", "description": "Trading game"})

        assert rsp.status_code == 404
        assert rsp.json()["error"] == "game_not_found"

    def test_update_bad_id(self, client):
        rsp = client.put("/api/games/x1", json={"name": "Catan", "description": "Trading game"})

        assert rsp.status_code == 400
        assert rsp.json()["error"] == "invalid_id"


class TestDeleteGame:
    """DELETE /api/games/{id}"""

    def test_delete_then_not_found(self, client, make_game):
        created = make_game()

        rsp = client.delete(f"/api/games/{created['id']}")

        assert rsp.status_code == 204
        assert rsp.content == b""
        assert client.get(f"/api/games/{created['id']}").status_code == 404
        assert client.delete(f"/api/games/{created['id']}").status_code == 404

    def test_delete_cascades_to_questions(self, client, make_game, stored_questions):
        created = make_game(official_rules="Build roads and settlements.")
        other = make_game(name="Scrabble", description="Word game")
        for q in ("Can I trade with the bank?", "How many roads?"):
            assert client.post(f"/api/games/{created['id']}/ask", json={"question": q}).status_code == 200
        assert client.post(f"/api/games/{other['id']}/ask", json={"question": "Proper nouns?"}).status_code == 200

        assert client.delete(f"/api/games/{created['id']}").status_code == 204

        assert client.get(f"/api/games/{created['id']}/questions").json() == []
        remaining = stored_questions()
        assert [q.game_id for q in remaining] == [other["id"]]


class TestListGames:
    """GET /api/games"""

    def test_empty(self, client):
        rsp = client.get("/api/games")

        assert rsp.status_code == 200
        assert rsp.json() == []

    def test_most_recent_first_with_question_count(self, client, make_game):
        first = make_game(name="Monopoly", description="Properties")
        second = make_game(name="Scrabble", description="Words")
        client.post(f"/api/games/{first['id']}/ask", json={"question": "Free parking?"})
        client.post(f"/api/games/{first['id']}/ask", json={"question": "Starting money?"})

        games = client.get("/api/games").json()

        assert [g["id"] for g in games] == [second["id"], first["id"]]
        assert [g["question_count"] for g in games] == [0, 2]
        assert set(games[0]) == {
            "id", "name", "description", "official_rules", "custom_rules",
            "created_at", "updated_at", "question_count",
        }


class TestTimestamps:
    """created_at / updated_at"""

    def test_timestamps_are_utc(self, client, make_game):
        before = datetime.now(timezone.utc)
        created = make_game()

        fetched = client.get(f"/api/games/{created['id']}").json()

        for body in (created, fetched):
            created_at = parse_ts(body["created_at"])
            updated_at = parse_ts(body["updated_at"])
            assert created_at.utcoffset() == timedelta(0)
            assert updated_at.utcoffset() == timedelta(0)
            assert abs(created_at - before) < timedelta(minutes=1)
            assert created_at <= updated_at

    def test_update_keeps_utc(self, client, make_game):
        created = make_game()

        body = client.put(f"/api/games/{created['id']}", json={"name": "Catan", "description": "New"}).json()

        assert parse_ts(body["updated_at"]).utcoffset() == timedelta(0)
        assert parse_ts(body["updated_at"]) >= parse_ts(body["created_at"])


class TestOutOfRangeId:
    """Ids too large for a SQL integer are bad ids, not server errors."""

    @pytest.mark.parametrize("method, path, body", [
        ("GET", f"/api/games/{HUGE_ID}", None),
        ("PUT", f"/api/games/{HUGE_ID}", {"name": "Catan", "description": "Trading game"}),
        ("DELETE", f"/api/games/{HUGE_ID}", None),
        ("POST", f"/api/games/{HUGE_ID}/ask", {"question": "Can I trade?"}),
        ("GET", f"/api/games/{HUGE_ID}/questions", None),
        ("GET", f"/api/games/-{HUGE_ID}", None),
    ])
    def test_huge_id_is_bad_request(self, client, completion, method, path, body):
        rsp = client.request(method, path, json=body)

        assert rsp.status_code == 400
        assert rsp.json() == {"error": "invalid_id", "message": "Game id must be an integer"}
        assert completion.calls == []

    def test_largest_sql_integer_is_not_found(self, client):
        rsp = client.get(f"/api/games/{2 ** 63 - 1}")

        assert rsp.status_code == 404
        assert rsp.json()["error"] == "game_not_found"


class FailingGameRepository(GameRepository):
    """Chaque accès à la base échoue comme une base SQLite verrouillée."""

    def __init__(self):
        super().__init__(session=None)

    def get(self, *args, **kwargs):
        raise SQLAlchemyError("database is locked")

    def list_with_question_count(self, *args, **kwargs):
        raise SQLAlchemyError("database is locked")


class TestStorageFailure:
    """SQLAlchemy errors become {"error": "storage_error"} responses."""

    def test_generic_message_outside_dev(self, app, client):
        app.dependency_overrides[get_game_repository] = FailingGameRepository

        for rsp in (client.get("/api/games"), client.get("/api/games/1")):
            assert rsp.status_code == 500
            assert rsp.json() == {"error": "storage_error", "message": "A storage error occurred"}

    def test_detailed_message_in_dev(self, settings, completion):
        app = create_app(settings=settings.model_copy(update={"ENV": "dev"}), completion_client=completion)
        app.dependency_overrides[get_game_repository] = FailingGameRepository

        with TestClient(app) as client:
            rsp = client.get("/api/games")

        assert rsp.status_code == 500
        assert rsp.json()["error"] == "storage_error"
        assert "database is locked" in rsp.json()["message"]
