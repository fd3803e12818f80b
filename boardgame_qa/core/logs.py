import logging
import time

from fastapi import Request

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


async def log_requests(request: Request, call_next):
    """Middleware de debug (ENV=dev) : méthode, chemin, statut, durée."""
    log = logging.getLogger("boardgame_qa.requests")
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    log.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response
