"""
@file routes.py
@brief Endpoints HTTP per scontrini, punti e health.
@ingroup api_module

@details
Espone API minimali:
- POST /receipts/process
- GET /receipts/{id}/points
- GET /receipts/{id}/points/breakdown
- GET /health
"""

from __future__ import annotations
from fastapi import APIRouter, Depends, Request

from punti.domain.models import (
    PointsBreakdown,
    ProcessReceiptRequest,
    ProcessReceiptResponse,
    ReceiptPointsResponse,
)
from punti.service import ReceiptService

router = APIRouter()


def get_service(request: Request) -> ReceiptService:
    """@brief Service legato al repository dell'applicazione (app.state)."""
    return request.app.state.service


@router.post("/receipts/process", response_model=ProcessReceiptResponse)
def process_receipt(req: ProcessReceiptRequest, service: ReceiptService = Depends(get_service)):
    """
    @brief Valida e memorizza uno scontrino.
    @param req Payload JSON (retailer, purchaseDate, purchaseTime, items, total).
    @return JSON con l'id assegnato.

    @note Payload invalidi rispondono 400 con errorMessage (vedi middleware).
    """
    receipt = service.process_receipt(req)
    return ProcessReceiptResponse(id=receipt.id)


@router.get("/receipts/{receipt_id}/points", response_model=ReceiptPointsResponse)
def get_points(receipt_id: str, service: ReceiptService = Depends(get_service)):
    """
    @brief Punti dello scontrino.
    @return {"points": n}; 404 se l'id non esiste.
    """
    return ReceiptPointsResponse(points=service.get_points(receipt_id))


@router.get("/receipts/{receipt_id}/points/breakdown", response_model=PointsBreakdown)
def get_points_breakdown(receipt_id: str, service: ReceiptService = Depends(get_service)):
    return service.get_breakdown(receipt_id)


@router.get("/health")
def health():
    """
    @brief Healthcheck semplice.
    @return {"ok": True}
    """
    return {"ok": True}
