"""
@file repository.py
@brief Repository in memoria per gli scontrini.
@ingroup storage_module

@details
Mappa id -> Receipt valida per la vita del processo. Solo insert e lookup:
nessun update, nessuna delete. Un lock serializza scritture e letture, quindi
più thread (threadpool FastAPI) possono usarlo in sicurezza.

L'istanza viene creata all'avvio (api/main.py) e passata ai consumer;
i test ne creano una nuova per ogni caso.
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, Optional
from uuid import uuid4

from punti.domain.models import Receipt
from punti.errors import DuplicateReceiptError

logger = logging.getLogger("punti.storage")


class ReceiptRepository:
    """@brief Store append-only degli scontrini."""

    def __init__(self) -> None:
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def insert(self, receipt: Receipt) -> Receipt:
        """
        @brief Memorizza uno scontrino.
        @param receipt Scontrino validato; se id è None ne viene generato uno (UUID4).
        @return Copia memorizzata con id valorizzato.

        @throws DuplicateReceiptError Se l'id fornito dal chiamante è già presente.
        """
        if receipt.id is None:
            receipt = receipt.model_copy(update={"id": str(uuid4())})

        with self._lock:
            if receipt.id in self._receipts:
                raise DuplicateReceiptError(receipt.id)
            self._receipts[receipt.id] = receipt

        logger.debug("Stored receipt %s", receipt.id)
        return receipt

    def find_by_id(self, receipt_id: str) -> Optional[Receipt]:
        """
        @brief Cerca uno scontrino per id.
        @param receipt_id Identificativo restituito da insert().
        @return Receipt oppure None se assente (non è un errore).
        """
        with self._lock:
            return self._receipts.get(receipt_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
