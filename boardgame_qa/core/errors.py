"""
➡️ But : Définir les erreurs métier et leur traduction HTTP.

Les services lèvent des exceptions "domaine" (ValidationError, NotFoundError, Upstream*...).
Les routes les attrapent et lèvent une ApiError (statut + code court + message).
Les handlers enregistrés sur l'app rendent toujours le même corps JSON :

    {"error": "<code>", "message": "<texte lisible>"}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)


# -----------------------------
# Erreurs domaine
# -----------------------------
class ValidationError(ValueError):
    """Entrée absente ou mal formée : jamais transmise au stockage ni à OpenAI."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class NotFoundError(LookupError):
    pass


class UpstreamError(Exception):
    """Échec inattendu du service de complétion."""


class UpstreamAuthError(UpstreamError):
    pass


class UpstreamQuotaError(UpstreamError):
    pass


class EmptyCompletionError(UpstreamError):
    pass


# -----------------------------
# Erreur HTTP
# -----------------------------
class ApiError(Exception):
    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


def error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


def _is_dev(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_dev)


# -----------------------------
# Handlers
# -----------------------------
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(e.get("loc", ())[:1] == ("path",) for e in errors):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("invalid_id", "Game id must be an integer"),
        )
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    message = f"{where}: {first.get('msg', 'invalid value')}" if where else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body("invalid_request", message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    codes = {404: "not_found", 405: "method_not_allowed"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(codes.get(exc.status_code, "http_error"), str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    message = str(exc) if _is_dev(request) else "A storage error occurred"
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body("storage_error", message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if _is_dev(request) else "An unexpected error occurred"
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body("server_error", message))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
