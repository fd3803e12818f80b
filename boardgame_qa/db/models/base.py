"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel.

Ici on représente les propriétés communes de toutes les tables : identifiant et date de création.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
