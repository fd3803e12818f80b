"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_game_service() : crée un GameService à partir d'une session DB.

get_completion_client() : récupère le client de complétion créé au démarrage (app.state).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Les tests remplacent le client de complétion ou la base sans toucher aux routes.
"""

from fastapi import Depends, Request
from sqlmodel import Session

from boardgame_qa.core.config import Settings
from boardgame_qa.db.session import get_session

from boardgame_qa.db.repositories.games import GameRepository
from boardgame_qa.db.repositories.questions import QuestionRepository

from boardgame_qa.features.assistant.completion import CompletionClient
from boardgame_qa.features.games.services import GameService
from boardgame_qa.features.questions.services import QuestionService


# Bornes d'un entier SQL 64 bits : au-delà le driver lève OverflowError
SQL_INT_MIN = -(2 ** 63)
SQL_INT_MAX = 2 ** 63 - 1


# -----------------------------
# App state
# -----------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


# -----------------------------
# Repositories
# -----------------------------
def get_game_repository(session: Session = Depends(get_session)) -> GameRepository:
    return GameRepository(session)

def get_question_repository(session: Session = Depends(get_session)) -> QuestionRepository:
    return QuestionRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_game_service(
    game_repo: GameRepository = Depends(get_game_repository),
) -> GameService:
    return GameService(repo=game_repo)

def get_question_service(
    question_repo: QuestionRepository = Depends(get_question_repository),
    game_repo: GameRepository = Depends(get_game_repository),
    completion: CompletionClient = Depends(get_completion_client),
) -> QuestionService:
    return QuestionService(
        repo=question_repo,
        game_repo=game_repo,
        completion=completion,
    )
