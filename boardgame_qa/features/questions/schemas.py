from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field as PydField, field_validator

from boardgame_qa.features.games.schemas import as_utc


class AskIn(BaseModel):
    question: Optional[str] = PydField(None, examples=["Can I trade with the bank?"])


class AskOut(BaseModel):
    question: str
    answer: str
    game_name: str
    timestamp: datetime


class QuestionOut(BaseModel):
    id: int
    game_id: int
    question: str
    answer: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
