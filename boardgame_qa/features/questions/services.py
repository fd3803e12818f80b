import logging
from datetime import datetime, timezone
from typing import Sequence

from boardgame_qa.core.errors import EmptyCompletionError, NotFoundError, ValidationError
from boardgame_qa.db.models.questions import Question
from boardgame_qa.db.repositories.games import GameRepository
from boardgame_qa.db.repositories.questions import QuestionRepository
from boardgame_qa.features.assistant.completion import CompletionClient
from boardgame_qa.features.assistant.context import (
    SYSTEM_PROMPT,
    build_game_context,
    build_question_prompt,
)
from boardgame_qa.features.questions.schemas import AskIn, AskOut

log = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class QuestionService:
    """
    Questions posées à l'IA sur un jeu.

    ask() enchaîne : validation -> lecture du jeu -> contexte -> complétion -> sauvegarde -> réponse.
    Rien n'est écrit si une étape avant la sauvegarde échoue.
    """

    def __init__(
        self,
        repo: QuestionRepository,
        game_repo: GameRepository,
        completion: CompletionClient,
    ):
        self.repo = repo
        self.game_repo = game_repo
        self.completion = completion

    def ask(self, game_id: int, payload: AskIn) -> AskOut:
        question = (payload.question or "").strip()
        if not question:
            raise ValidationError("missing_question", "A question is required")

        game = self.game_repo.get(game_id)
        if not game:
            raise NotFoundError(f"No game found with id {game_id}")

        context = build_game_context(game)
        prompt = build_question_prompt(game, context, question)

        answer = self.completion.complete(system=SYSTEM_PROMPT, user=prompt)
        if not answer or not answer.strip():
            log.error("Completion returned no answer for game %s", game_id)
            raise EmptyCompletionError("No answer generated")

        self.repo.append(game_id=game.id, question=question, answer=answer, context_used=context)

        return AskOut(
            question=question,
            answer=answer,
            game_name=game.name,
            timestamp=datetime.now(timezone.utc),
        )

    def history(self, game_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[Question]:
        return self.repo.list_by_game(game_id, limit=limit)
