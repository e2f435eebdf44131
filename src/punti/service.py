"""
@file service.py
@brief Orchestrazione: memorizza scontrini e ne calcola i punti.
@ingroup core_module

@details
Collega la richiesta validata, il repository e il calcolo punti.
Usato sia dall'API sia dalla CLI.
"""

from __future__ import annotations
import logging

from punti.domain.models import PointsBreakdown, ProcessReceiptRequest, Receipt
from punti.domain.points import compute_points, points_breakdown
from punti.errors import ReceiptNotFoundError
from punti.storage.repository import ReceiptRepository

logger = logging.getLogger("punti.service")


class ReceiptService:
    def __init__(self, repository: ReceiptRepository):
        self.repository = repository

    def process_receipt(self, request: ProcessReceiptRequest) -> Receipt:
        """
        @brief Crea e memorizza un Receipt dalla richiesta.
        @param request Payload già validato.
        @return Receipt memorizzato, con id assegnato dallo store.
        """
        receipt = Receipt(**request.model_dump())
        stored = self.repository.insert(receipt)
        logger.info("Processed receipt %s from %s", stored.id, stored.retailer)
        return stored

    def get_receipt(self, receipt_id: str) -> Receipt:
        receipt = self.repository.find_by_id(receipt_id)
        if receipt is None:
            raise ReceiptNotFoundError(receipt_id)
        return receipt

    def get_points(self, receipt_id: str) -> int:
        """
        @brief Punti dello scontrino indicato.
        @param receipt_id Id restituito da process_receipt.
        @return Punteggio intero.

        @throws ReceiptNotFoundError Se l'id non è memorizzato.
        """
        points = compute_points(self.get_receipt(receipt_id))
        logger.debug("Receipt %s scored %d points", receipt_id, points)
        return points

    def get_breakdown(self, receipt_id: str) -> PointsBreakdown:
        return points_breakdown(self.get_receipt(receipt_id))
