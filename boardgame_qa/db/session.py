"""
➡️ But : Configurer la base (SQLite local ou PostgreSQL) et gérer les sessions de base de données.

build_engine() : connexion à la base selon DATABASE_URL (sqlite:///boardgames.db par défaut).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session sur l'engine de l'app, la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB, quel que soit le moteur.

Réutilisable par injection (Depends(get_session)).
"""

from typing import Dict, Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

# Import all models for creating all tables
from boardgame_qa.db.models.games import Game
from boardgame_qa.db.models.questions import Question


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite n'applique ON DELETE CASCADE que si la pragma est active (par connexion)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    engine = create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres ; inutile pour SQLite
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas.
    """
    SQLModel.metadata.create_all(engine)


def database_label(engine: Engine) -> str:
    return "PostgreSQL" if engine.dialect.name == "postgresql" else "SQLite"


def ping(engine: Engine) -> None:
    """Lève une exception SQLAlchemy si la base ne répond pas."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
