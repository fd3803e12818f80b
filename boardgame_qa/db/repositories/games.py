from typing import List, Tuple

from sqlmodel import select, func

from boardgame_qa.db.repositories.base import BaseRepository

from boardgame_qa.db.models.games import Game
from boardgame_qa.db.models.questions import Question


class GameRepository(BaseRepository[Game]):
    model = Game

    def list_with_question_count(self) -> List[Tuple[Game, int]]:
        """
        Tous les jeux, du plus récent au plus ancien, avec leur nombre de questions.
        """
        stmt = (
            select(Game, func.count(Question.id).label("question_count"))
            .join(Question, Question.game_id == Game.id, isouter=True)
            .group_by(Game.id)
            .order_by(Game.created_at.desc(), Game.id.desc())
        )
        return [(game, int(count or 0)) for game, count in self.session.exec(stmt).all()]

    def count(self) -> int:
        return int(self.session.exec(select(func.count(Game.id))).one())
