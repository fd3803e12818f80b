"""
Construction du contexte et du prompt envoyés au service de complétion.

Fonctions pures : le bloc de contexte sert à la fois dans le prompt
et comme trace d'audit (Question.context_used).
"""

from typing import Optional

from boardgame_qa.db.models.games import Game

SYSTEM_PROMPT = (
    "Tu es un assistant IA spécialisé dans les jeux de société. "
    "Tu réponds précisément aux questions en te basant strictement sur les règles fournies."
)

NO_RULES_SENTINEL = "ATTENTION: Aucune règle spécifique n'a été fournie pour ce jeu."


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def build_game_context(game: Game) -> str:
    official = _clean(game.official_rules)
    custom = _clean(game.custom_rules)

    context = f"JEU: {game.name}\n"
    context += f"DESCRIPTION: {game.description}\n\n"

    if official:
        context += f"RÈGLES OFFICIELLES:\n{official}\n\n"
    if custom:
        context += f"RÈGLES PERSONNALISÉES/VARIANTES:\n{custom}\n\n"
    if not official and not custom:
        context += f"{NO_RULES_SENTINEL}\n"

    return context


def build_question_prompt(game: Game, context: str, question: str) -> str:
    return (
        f'Tu es un expert en jeux de société spécialisé dans "{game.name}". '
        "Réponds précisément à la question suivante en te basant UNIQUEMENT sur les règles fournies.\n"
        "\n"
        "CONTEXTE DU JEU:\n"
        f"{context}\n"
        f"QUESTION: {question}\n"
        "\n"
        "INSTRUCTIONS:\n"
        "- Réponds uniquement en te basant sur les règles fournies ci-dessus\n"
        "- Si l'information n'est pas dans les règles, dis clairement "
        "\"Cette information n'est pas précisée dans les règles fournies\"\n"
        "- Sois précis, concis et pédagogique\n"
        "- Structure ta réponse avec des paragraphes si nécessaire\n"
        "- N'invente aucune règle qui ne serait pas mentionnée"
    )
