import pytest

from punti.domain.models import ProcessReceiptRequest
from punti.errors import ReceiptNotFoundError
from punti.service import ReceiptService
from punti.storage.repository import ReceiptRepository


def test_process_then_points(target_payload):
    service = ReceiptService(ReceiptRepository())
    receipt = service.process_receipt(ProcessReceiptRequest.model_validate(target_payload))
    assert service.get_points(receipt.id) == 28
    assert service.get_breakdown(receipt.id).total == 28


def test_each_process_gets_a_new_id(target_payload):
    service = ReceiptService(ReceiptRepository())
    req = ProcessReceiptRequest.model_validate(target_payload)
    assert service.process_receipt(req).id != service.process_receipt(req).id
    assert len(service.repository) == 2


def test_unknown_id_raises_not_found():
    service = ReceiptService(ReceiptRepository())
    with pytest.raises(ReceiptNotFoundError) as excinfo:
        service.get_points("missing-id")
    assert excinfo.value.receipt_id == "missing-id"
    assert "missing-id" in str(excinfo.value)
    assert excinfo.value.http_status == 404
