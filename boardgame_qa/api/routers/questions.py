import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Request, status

from boardgame_qa.api.dependencies import SQL_INT_MAX, SQL_INT_MIN, get_question_service
from boardgame_qa.core.errors import (
    ApiError,
    EmptyCompletionError,
    NotFoundError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamQuotaError,
    ValidationError,
)
from boardgame_qa.features.questions.schemas import AskIn, AskOut, QuestionOut
from boardgame_qa.features.questions.services import DEFAULT_HISTORY_LIMIT, QuestionService

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/games",
    tags=["questions"],
    responses={404: {"description": "Not Found"}},
)


@router.post(
    "/{game_id}/ask",
    summary="Poser une question sur les règles d'un jeu",
    response_model=AskOut,
    responses={
        401: {"description": "Invalid OpenAI credential"},
        429: {"description": "OpenAI quota exceeded"},
    },
)
def ask_question(
    request: Request,
    payload: AskIn,
    game_id: int = Path(..., ge=SQL_INT_MIN, le=SQL_INT_MAX),
    svc: QuestionService = Depends(get_question_service),
):
    try:
        return svc.ask(game_id, payload)
    except ValidationError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, e.code, e.message)
    except NotFoundError as e:
        raise ApiError(status.HTTP_404_NOT_FOUND, "game_not_found", str(e))
    except UpstreamQuotaError:
        raise ApiError(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "upstream_quota_exceeded",
            "OpenAI API limit reached. Please try again later.",
        )
    except UpstreamAuthError:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "upstream_auth_error",
            "OpenAI API is not configured correctly",
        )
    except EmptyCompletionError:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "empty_answer", "No answer was generated")
    except UpstreamError as e:
        log.error("Question on game %s failed upstream: %s", game_id, e)
        dev = request.app.state.settings.is_dev
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "upstream_error",
            str(e) if dev else "Error while processing the question",
        )


@router.get(
    "/{game_id}/questions",
    summary="Historique des questions d'un jeu",
    description="Du plus récent au plus ancien ; `limit` vaut 50 par défaut.",
    response_model=List[QuestionOut],
)
def list_questions(
    game_id: int = Path(..., ge=SQL_INT_MIN, le=SQL_INT_MAX),
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=SQL_INT_MAX),
    svc: QuestionService = Depends(get_question_service),
):
    return svc.history(game_id, limit=limit)
