"""
@file errors.py
@brief Eccezioni applicative con stato HTTP suggerito.
@ingroup core_module

@details
Le eccezioni portano message, code e http_status: il layer API decide come
esporle (vedi api/middleware.py). Lo store non solleva mai su un id mancante,
restituisce None; è il service a trasformare l'assenza in ReceiptNotFoundError.
"""

from __future__ import annotations
from typing import Any, Optional
from pydantic import ValidationError


class PuntiError(Exception):
    """@brief Base delle eccezioni del servizio."""

    http_status = 500
    default_code = "ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        return {"errorMessage": self.message, "code": self.code}

    def __str__(self) -> str:
        return self.message


class ReceiptNotFoundError(PuntiError):
    """@brief Nessuno scontrino memorizzato per l'id richiesto."""

    http_status = 404
    default_code = "RECEIPT_NOT_FOUND"

    def __init__(self, receipt_id: str):
        super().__init__(f"No receipt found for id {receipt_id}.")
        self.receipt_id = receipt_id


class InvalidReceiptError(PuntiError):
    """@brief Payload scontrino non valido."""

    http_status = 400
    default_code = "INVALID_RECEIPT"

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "InvalidReceiptError":
        """
        @brief Costruisce l'errore dalla lista errori Pydantic.
        @param errors Output di ValidationError.errors() o RequestValidationError.errors().
        @return InvalidReceiptError con il messaggio del primo errore.
        """
        if not errors:
            return cls("The receipt is invalid.")
        return cls(_describe(errors[0]))

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidReceiptError":
        return cls.from_errors(exc.errors())


class DuplicateReceiptError(PuntiError):
    """@brief Id già presente nello store (nessun overwrite ammesso)."""

    http_status = 409
    default_code = "DUPLICATE_RECEIPT"

    def __init__(self, receipt_id: str):
        super().__init__(f"Receipt with id {receipt_id} already exists.")
        self.receipt_id = receipt_id


def _describe(err: dict[str, Any]) -> str:
    # i validatori del modello sollevano ValueError col messaggio finale
    ctx = err.get("ctx") or {}
    if isinstance(ctx.get("error"), ValueError):
        return str(ctx["error"])
    loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))
