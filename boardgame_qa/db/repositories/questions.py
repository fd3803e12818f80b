from typing import Sequence
from sqlmodel import select

from boardgame_qa.db.repositories.base import BaseRepository
from boardgame_qa.db.models.questions import Question


class QuestionRepository(BaseRepository[Question]):
    """Journal des questions : insertion et lecture seulement."""
    model = Question

    def append(self, *, game_id: int, question: str, answer: str, context_used: str) -> Question:
        return self.create(game_id=game_id, question=question, answer=answer, context_used=context_used)

    def list_by_game(self, game_id: int, *, limit: int = 50) -> Sequence[Question]:
        stmt = (
            select(self.model)
            .where(self.model.game_id == game_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
        )
        return self.session.exec(stmt).all()

