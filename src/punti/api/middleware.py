"""
@file middleware.py
@brief Logging delle richieste e gestori eccezioni.
@ingroup api_module

@details
Tutti gli errori rispondono con {"errorMessage": ..., "code": ...}:
- RequestValidationError -> 400 (payload scontrino invalido)
- PuntiError -> http_status dell'eccezione (404 id mancante, 409 duplicato)
- altro -> 500, con traceback nel log
"""

from __future__ import annotations
import logging
import time

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from punti.errors import InvalidReceiptError, PuntiError

logger = logging.getLogger("punti.api")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """@brief Logga metodo, path, stato e durata di ogni richiesta."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        logger.info(
            "%s %s -> %d (%.4fs)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    err = InvalidReceiptError.from_errors(list(exc.errors()))
    logger.warning("Invalid receipt on %s: %s", request.url.path, err.message)
    return JSONResponse(status_code=err.http_status, content=err.to_dict())


async def punti_exception_handler(request: Request, exc: PuntiError):
    logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"errorMessage": "An unexpected error occurred", "code": "INTERNAL_SERVER_ERROR"},
    )
