from sqlmodel import Field
from sqlalchemy import Column, ForeignKey, Integer

from .base import BaseModelDB


class Question(BaseModelDB, table=True):
    """
    Question posée sur un jeu, avec la réponse de l'IA.
    Append-only : supprimée uniquement par cascade quand le jeu est supprimé.
    """
    __tablename__ = "questions"

    # FK obligatoire vers Game
    game_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("games.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Jeu concerné",
    )

    question: str = Field(description="Question posée (trimée)")
    answer: str = Field(description="Réponse générée")
    # contexte exact envoyé à l'IA (audit)
    context_used: str = Field(default="")
