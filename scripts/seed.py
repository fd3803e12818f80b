from sqlmodel import Session

from boardgame_qa.core.config import settings
from boardgame_qa.core.logs import configure_logging
from boardgame_qa.db.session import build_engine, init_db
from boardgame_qa.db.seed import seed_sample_games


def run_seed() -> int:
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    with Session(engine) as session:
        return seed_sample_games(session)


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    inserted = run_seed()
    print(f"{inserted} jeu(x) inséré(s) dans {settings.DATABASE_URL}")
