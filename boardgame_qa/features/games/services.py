import logging
from typing import Dict, List

from boardgame_qa.core.errors import NotFoundError, ValidationError
from boardgame_qa.db.models.base import utcnow
from boardgame_qa.db.models.games import Game
from boardgame_qa.db.repositories.games import GameRepository
from boardgame_qa.features.games.schemas import GameIn, GameWithCountOut

log = logging.getLogger(__name__)


class GameService:
    """
    Logique métier pour Game.
    - Trim de tous les champs texte ; règles absentes -> "" (jamais NULL).
    - name et description obligatoires (non vides après trim), en création comme en mise à jour.
    - Aucune écriture tant que la validation n'est pas passée.
    """

    def __init__(self, repo: GameRepository):
        self.repo = repo

    # -------- Helpers --------

    @staticmethod
    def _clean_fields(payload: GameIn) -> Dict[str, str]:
        fields = {
            "name": (payload.name or "").strip(),
            "description": (payload.description or "").strip(),
            "official_rules": (payload.official_rules or "").strip(),
            "custom_rules": (payload.custom_rules or "").strip(),
        }
        if not fields["name"]:
            raise ValidationError("missing_fields", "Game name is required")
        if not fields["description"]:
            raise ValidationError("missing_fields", "Game description is required")
        return fields

    def _get_game_or_404(self, game_id: int) -> Game:
        game = self.repo.get(game_id)
        if not game:
            raise NotFoundError(f"No game found with id {game_id}")
        return game

    # -------- Reads --------

    def list_games(self) -> List[GameWithCountOut]:
        rows = self.repo.list_with_question_count()
        return [
            GameWithCountOut.model_validate(game).model_copy(update={"question_count": count})
            for game, count in rows
        ]

    def get_game(self, game_id: int) -> Game:
        return self._get_game_or_404(game_id)

    # -------- Writes --------

    def create_game(self, payload: GameIn) -> Game:
        fields = self._clean_fields(payload)
        game = self.repo.create(**fields)
        log.info("Game %s created (%s)", game.id, game.name)
        return game

    def update_game(self, game_id: int, payload: GameIn) -> Game:
        fields = self._clean_fields(payload)
        game = self._get_game_or_404(game_id)
        return self.repo.update(game, updated_at=utcnow(), **fields)

    def delete_game(self, game_id: int) -> None:
        game = self._get_game_or_404(game_id)
        self.repo.delete(game)
        log.info("Game %s deleted", game_id)
