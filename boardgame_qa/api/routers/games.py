from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from boardgame_qa.api.dependencies import SQL_INT_MAX, SQL_INT_MIN, get_game_service
from boardgame_qa.core.errors import ApiError, NotFoundError, ValidationError
from boardgame_qa.features.games.schemas import GameIn, GameOut, GameWithCountOut
from boardgame_qa.features.games.services import GameService

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
    },
)


def _not_found(e: NotFoundError) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, "game_not_found", str(e))


def _invalid(e: ValidationError) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, e.code, e.message)


@router.get(
    "",
    summary="Lister les jeux",
    description="Tous les jeux, du plus récent au plus ancien, avec leur nombre de questions.",
    response_model=List[GameWithCountOut],
)
def list_games(svc: GameService = Depends(get_game_service)):
    return svc.list_games()


@router.get(
    "/{game_id}",
    summary="Récupérer un jeu",
    response_model=GameOut,
)
def get_game(
    game_id: int = Path(..., ge=SQL_INT_MIN, le=SQL_INT_MAX),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.get_game(game_id)
    except NotFoundError as e:
        raise _not_found(e)


@router.post(
    "",
    summary="Créer un jeu",
    response_model=GameOut,
    status_code=status.HTTP_201_CREATED,
)
def create_game(
    payload: GameIn,
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.create_game(payload)
    except ValidationError as e:
        raise _invalid(e)


@router.put(
    "/{game_id}",
    summary="Mettre à jour un jeu",
    response_model=GameOut,
)
def update_game(
    payload: GameIn,
    game_id: int = Path(..., ge=SQL_INT_MIN, le=SQL_INT_MAX),
    svc: GameService = Depends(get_game_service),
):
    try:
        return svc.update_game(game_id, payload)
    except ValidationError as e:
        raise _invalid(e)
    except NotFoundError as e:
        raise _not_found(e)


@router.delete(
    "/{game_id}",
    summary="Supprimer un jeu (et ses questions)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_game(
    game_id: int = Path(..., ge=SQL_INT_MIN, le=SQL_INT_MAX),
    svc: GameService = Depends(get_game_service),
):
    try:
        svc.delete_game(game_id)
    except NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
