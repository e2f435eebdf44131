"""
@file main.py
@brief Entry point FastAPI.
@ingroup api_module

@details
create_app() costruisce repository e service una sola volta e li lega ad
app.state: ogni app (e ogni test) ha il proprio store in memoria.
"""

from __future__ import annotations
from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from punti.config import Settings, configure_logging, get_settings
from punti.errors import PuntiError
from punti.service import ReceiptService
from punti.storage.repository import ReceiptRepository
from .middleware import (
    RequestLoggingMiddleware,
    general_exception_handler,
    punti_exception_handler,
    validation_exception_handler,
)
from .routes import router


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ReceiptRepository] = None,
) -> FastAPI:
    """
    @brief Crea l'applicazione FastAPI.
    @param settings Impostazioni (default: get_settings()).
    @param repository Store da usare (default: nuovo ReceiptRepository).
    @return FastAPI configurata.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.service = ReceiptService(repository if repository is not None else ReceiptRepository())

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PuntiError, punti_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.include_router(router)
    return app


app = create_app()
