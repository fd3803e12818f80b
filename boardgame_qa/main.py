"""
➡️ But : assembler toutes les pièces du puzzle.

create_app() crée l'instance FastAPI (app) à partir de dépendances explicites :

settings (pydantic-settings), engine SQLAlchemy, client de complétion (OpenAI).

Configure :

CORS (autorisations de qui peut appeler ces API)

handlers d'erreurs ({"error", "message"})

schéma OpenAPI personnalisé

Inclut les routers (/api/games, /api/health...) et la page de chat statique (/).

Initialise la base (et les jeux d'exemple) au démarrage (lifespan).

🔹 Avantages :

Point unique d'exécution : uvicorn boardgame_qa.main:app --reload.

Les tests construisent leur propre app avec une base temporaire et un faux client.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlmodel import Session

from boardgame_qa.core.config import Settings, settings as default_settings
from boardgame_qa.core.errors import register_exception_handlers
from boardgame_qa.core.logs import configure_logging, log_requests
from boardgame_qa.core.openapi import custom_openapi
from boardgame_qa.db.seed import seed_sample_games
from boardgame_qa.db.session import build_engine, database_label, init_db
from boardgame_qa.features.assistant.completion import (
    CompletionClient,
    CompletionSettings,
    OpenAICompletionClient,
)

from boardgame_qa.api.routers import games, questions, health

log = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).with_name("static")


def create_app(
    settings: Optional[Settings] = None,
    completion_client: Optional[CompletionClient] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    # Démarrage
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.engine)
        if settings.SEED_SAMPLE_GAMES:
            with Session(app.state.engine) as session:
                seed_sample_games(session)
        log.info("API ready on /api (database: %s, env: %s)", database_label(app.state.engine), settings.ENV)
        if not settings.openai_configured:
            log.warning("OPENAI_API_KEY is not set: /ask will fail until it is configured")
        yield

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "games", "description": "CRUD des jeux et de leurs règles"},
            {"name": "questions", "description": "Questions posées à l'IA et historique"},
            {"name": "service", "description": "Santé et diagnostic"},
        ],
    )

    app.state.settings = settings
    # echo seulement en dev pour ne pas polluer les logs en prod
    app.state.engine = engine or build_engine(settings.DATABASE_URL, echo=settings.is_dev)
    app.state.completion_client = completion_client or OpenAICompletionClient(
        api_key=settings.OPENAI_API_KEY,
        config=CompletionSettings.from_settings(settings),
    )
    app.state.started_at = time.monotonic()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )
    if settings.is_dev:
        app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # Routers
    app.include_router(games.router, prefix="/api")
    app.include_router(questions.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)

    # Page de chat (après les routes API pour ne pas les masquer)
    if STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT) # http://localhost:3001
