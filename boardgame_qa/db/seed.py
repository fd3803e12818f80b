import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session

from boardgame_qa.db.repositories.games import GameRepository

log = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).with_name("seed_data.yaml")


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path = DEFAULT_SEED_PATH) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Seed YAML must contain a root mapping.")
    return data


# -----------------------------
# Seed
# -----------------------------
def seed_sample_games(session: Session, seed_path: str | Path = DEFAULT_SEED_PATH) -> int:
    """
    Insère les jeux d'exemple si la table games est vide.
    Retourne le nombre de jeux insérés (0 si la table contenait déjà des jeux).
    """
    repo = GameRepository(session)
    if repo.count() > 0:
        return 0

    games: List[Dict[str, Any]] = load_seed_yaml(seed_path).get("games", [])
    for g in games:
        repo.create(
            name=str(g["name"]).strip(),
            description=str(g["description"]).strip(),
            official_rules=str(g.get("official_rules") or "").strip(),
            custom_rules=str(g.get("custom_rules") or "").strip(),
        )
    log.info("Inserted %d sample games", len(games))
    return len(games)
