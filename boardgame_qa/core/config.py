"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, base de données, OpenAI, CORS...).

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from boardgame_qa.core.config import settings
print(settings.OPENAI_MODEL)

🔹 Avantages :

Un seul endroit pour passer de SQLite (fichier local) à PostgreSQL.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Board Game Rules Assistant"
    VERSION: str = "1.0.0"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # -----------------------------
    # CORS
    # -----------------------------
    # liste séparée par des virgules
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000,https://lovable.dev"
    FRONTEND_URL: Optional[str] = None
    CORS_ORIGIN_REGEX: Optional[str] = r"https://.*\.lovable\.dev"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "boardgames.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # Paramètres PostgreSQL "à l'ancienne" (utilisés seulement si DB_HOST est défini)
    DB_USER: str = "postgres"
    DB_PASSWORD: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_NAME: str = "boardgames_db"

    SEED_SAMPLE_GAMES: bool = True

    # -----------------------------
    # OpenAI
    # -----------------------------
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4"
    OPENAI_MAX_TOKENS: int = 1000
    OPENAI_TEMPERATURE: float = 0.3
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        if not self.DATABASE_URL:
            if self.DB_HOST:
                password = f":{self.DB_PASSWORD}" if self.DB_PASSWORD else ""
                url = (
                    f"postgresql+psycopg2://{self.DB_USER}{password}"
                    f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
                )
            else:
                url = f"sqlite:///{self.SQLITE_PATH}"
            object.__setattr__(self, "DATABASE_URL", url)

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"

    @property
    def openai_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)


# Instance globale importable partout
settings = Settings()
