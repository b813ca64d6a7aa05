"""Logging setup and request logging middleware."""

import logging
import time

from fastapi import Request

logger = logging.getLogger("api.access")


def setup_logging(level: str = "INFO") -> None:
    if logging.getLogger().handlers:
        logging.getLogger().setLevel(level.upper())
        return

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d - %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        ms,
    )
    return response
