from __future__ import annotations

import pytest

from src.hr_operations.hr_operations.core.enums import PaymentStatus, WorkStatus
from src.hr_operations.hr_operations.core.exceptions import NotFoundError, ValidationError
from src.hr_operations.hr_operations.payments.service import PaymentService, expected_signature

from conftest import GATEWAY_SECRET, InMemoryPayments, new_id

LEAD_ID = new_id()
MANAGER_ID = new_id()


def _create(service, **overrides):
    payload = {
        "lead_id": LEAD_ID,
        "manager_id": MANAGER_ID,
        "title": "Website build",
        "description": "Landing page and CMS",
        "amount": "25000",
        "reason": "Advance",
        "requirements": ["Wireframes", {"description": "Content"}],
        "gateway_order_id": "order_1",
    }
    payload.update(overrides)
    return service.create(**payload)


def test_create_defaults(container):
    payment = _create(container.payment_service)

    assert payment.amount == 25000.0
    assert payment.payment_status == PaymentStatus.PENDING
    assert payment.work_status == WorkStatus.NOT_STARTED
    assert [r.description for r in payment.requirements] == ["Wireframes", "Content"]
    assert not payment.is_step1_completed and not payment.is_step2_completed


@pytest.mark.parametrize("missing", ["lead_id", "title", "amount", "reason"])
def test_create_requires_fields(container, missing):
    with pytest.raises(ValidationError, match="Missing required fields"):
        _create(container.payment_service, **{missing: None})


def test_negative_amount_rejected(container):
    with pytest.raises(ValidationError, match="cannot be negative"):
        _create(container.payment_service, amount=-1)


def test_verify_checks_signature(container):
    service = container.payment_service
    payment = _create(service)

    with pytest.raises(ValidationError, match="signature verification failed"):
        service.verify(order_id="order_1", payment_id="pay_9", signature="bogus")

    verified = service.verify(
        order_id="order_1",
        payment_id="pay_9",
        signature=expected_signature(GATEWAY_SECRET, "order_1", "pay_9"),
    )
    assert verified.id == payment.id
    assert verified.payment_status == PaymentStatus.COMPLETED
    assert verified.gateway_payment_id == "pay_9"
    assert verified.is_step2_completed is True


def test_verify_without_secret_skips_signature():
    service = PaymentService(InMemoryPayments())
    _create(service)
    assert service.verify(order_id="order_1", payment_id="pay_1").is_step2_completed


def test_verify_unknown_order(container):
    with pytest.raises(NotFoundError):
        container.payment_service.verify(order_id="missing", payment_id="pay_1", signature="x")


def test_statuses_move_independently(container):
    service = container.payment_service
    payment = _create(service)

    updated = service.update_status(payment.id, work_status="In Progress")
    assert updated.work_status == WorkStatus.IN_PROGRESS
    assert updated.payment_status == PaymentStatus.PENDING

    with pytest.raises(ValidationError):
        service.update_status(payment.id)
    with pytest.raises(ValidationError, match="Invalid payment status"):
        service.update_status(payment.id, payment_status="Paid")


def test_step1_completes_when_all_requirements_done(container):
    service = container.payment_service
    payment = _create(service)

    partial = service.complete_requirement(payment.id, 0)
    assert partial.requirements[0].is_completed
    assert partial.is_step1_completed is False

    done = service.complete_requirement(payment.id, 1)
    assert done.is_step1_completed is True

    with pytest.raises(ValidationError, match="out of range"):
        service.complete_requirement(payment.id, 5)


def test_list_for_lead_newest_first(container):
    service = container.payment_service
    first = _create(service, gateway_order_id="order_a")
    second = _create(service, gateway_order_id="order_b")
    _create(service, lead_id=new_id())

    assert [p.id for p in service.list_for_lead(LEAD_ID)] == [second.id, first.id]


def test_non_ascii_signature_is_a_mismatch(container):
    service = container.payment_service
    _create(service)

    with pytest.raises(ValidationError, match="signature verification failed"):
        service.verify(order_id="order_1", payment_id="pay_9", signature="é")


@pytest.mark.parametrize("field", ["title", "description", "reason"])
def test_blank_text_fields_count_as_missing(container, field):
    with pytest.raises(ValidationError, match="Missing required fields"):
        _create(container.payment_service, **{field: "   "})
