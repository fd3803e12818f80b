from datetime import datetime

from sqlmodel import Field

from boardgame_qa.db.models.base import BaseModelDB, utcnow


class Game(BaseModelDB, table=True):
    __tablename__ = "games"

    name: str = Field(nullable=False)
    description: str = Field(nullable=False)

    # jamais NULL : chaîne vide si non fourni
    official_rules: str = Field(default="", nullable=False)
    custom_rules: str = Field(default="", nullable=False)

    updated_at: datetime = Field(default_factory=utcnow)
