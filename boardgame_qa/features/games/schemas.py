from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field as PydField, field_validator


# ---------- IN ----------

class GameIn(BaseModel):
    """Corps de POST et PUT : la présence de name/description est vérifiée par le service (après trim)."""
    name: Optional[str] = PydField(None, description="Nom du jeu", examples=["Catan"])
    description: Optional[str] = PydField(None, description="Description courte", examples=["Trading game"])
    official_rules: Optional[str] = PydField(None, description="Règles officielles")
    custom_rules: Optional[str] = PydField(None, description="Règles maison / variantes")


# ---------- OUT ----------

def as_utc(value: datetime) -> datetime:
    """SQLite rend des dates naïves : elles sont stockées en UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class GameOut(BaseModel):
    id: int
    name: str
    description: str
    official_rules: str
    custom_rules: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class GameWithCountOut(GameOut):
    question_count: int = 0
