import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from boardgame_qa.api.dependencies import get_settings
from boardgame_qa.core.config import Settings
from boardgame_qa.db.session import database_label, ping

log = logging.getLogger(__name__)

router = APIRouter(tags=["service"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", summary="Health check")
def health(request: Request, settings: Settings = Depends(get_settings)):
    engine = request.app.state.engine
    try:
        ping(engine)
    except SQLAlchemyError as e:
        log.error("Health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timestamp": _now_iso(),
                "error": "database_unavailable",
                "message": str(e) if settings.is_dev else "Database is not reachable",
            },
        )

    return {
        "status": "healthy",
        "timestamp": _now_iso(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "database": f"connected ({database_label(engine)})",
        "version": settings.VERSION,
    }


@router.get("/test", summary="Diagnostic de configuration")
def test_config(request: Request, settings: Settings = Depends(get_settings)):
    return {
        "message": f"API up ({database_label(request.app.state.engine)})",
        "env": settings.ENV,
        "cors_enabled": True,
        "openai_configured": settings.openai_configured,
        "database": database_label(request.app.state.engine),
    }
