from __future__ import annotations

import dataclasses
import hashlib
import hmac
import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import utcnow
from ..common.validators import (
    optional_text,
    require_choice,
    require_max_length,
    require_non_empty,
    require_non_negative_number,
    require_object_id,
)
from ..core.enums import PaymentStatus, WorkStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Payment, Requirement
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("lead_id", "manager_id", "title", "description", "amount", "reason")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _requirements(raw: Any) -> tuple[Requirement, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValidationError("Requirements must be a list")
    items = []
    for entry in raw:
        text = entry.get("description") if isinstance(entry, dict) else entry
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Each requirement needs a description")
        items.append(Requirement(description=text.strip()))
    return tuple(items)


def expected_signature(secret: str, order_id: str, payment_id: str) -> str:
    """HMAC-SHA256 hex digest of ``order_id|payment_id`` as sent by the payment gateway."""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class PaymentService:
    def __init__(self, payments: PaymentRepository, *, gateway_secret: Optional[str] = None):
        self._payments = payments
        self._gateway_secret = gateway_secret or None

    def create(
        self,
        *,
        lead_id: Any,
        manager_id: Any,
        title: Any,
        description: Any,
        amount: Any,
        reason: Any,
        requirements: Any = None,
        gateway_order_id: Any = None,
    ) -> Payment:
        values = {
            "lead_id": lead_id,
            "manager_id": manager_id,
            "title": title,
            "description": description,
            "amount": amount,
            "reason": reason,
        }
        if any(_is_blank(values[k]) for k in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")

        now = utcnow()
        payment = Payment(
            id="",
            lead_id=require_object_id(lead_id, "lead"),
            manager_id=require_object_id(manager_id, "manager"),
            title=require_max_length(require_non_empty(title, "Payment title"), "Payment title", 200),
            description=require_max_length(require_non_empty(description, "Description"), "Description", 2000),
            reason=require_max_length(require_non_empty(reason, "Reason for payment"), "Reason for payment", 1000),
            amount=require_non_negative_number(amount, "Amount"),
            requirements=_requirements(requirements),
            gateway_order_id=optional_text(gateway_order_id, "Order ID", max_len=100) or None,
            created_at=now,
            updated_at=now,
        )
        created = self._payments.insert(payment)
        logger.info("Payment created: %s for lead %s amount=%.2f", created.id, created.lead_id, created.amount)
        return created

    def get(self, payment_id: str) -> Payment:
        require_object_id(payment_id, "payment")
        payment = self._payments.get(payment_id)
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def list_for_lead(self, lead_id: str) -> Sequence[Payment]:
        return self._payments.list_for_lead(require_object_id(lead_id, "lead"))

    def verify(self, *, order_id: Any, payment_id: Any, signature: Any = None) -> Payment:
        if not order_id or not payment_id:
            raise ValidationError("Order ID and payment ID are required")
        payment = self._payments.find_by_order_id(str(order_id))
        if not payment:
            raise NotFoundError("Payment not found")

        if self._gateway_secret:
            expected = expected_signature(self._gateway_secret, str(order_id), str(payment_id))
            # bytes, since compare_digest rejects non-ASCII str
            if not isinstance(signature, str) or not hmac.compare_digest(
                expected.encode("utf-8"), signature.encode("utf-8")
            ):
                logger.warning("Payment signature mismatch for order %s", order_id)
                raise ValidationError("Payment signature verification failed")

        verified = dataclasses.replace(
            payment,
            gateway_payment_id=str(payment_id),
            payment_status=PaymentStatus.COMPLETED,
            is_step2_completed=True,
            updated_at=utcnow(),
        )
        saved = self._payments.save(verified)
        logger.info("Payment verified: %s (order %s)", saved.id, order_id)
        return saved

    def update_status(self, payment_id: str, *, payment_status: Any = None, work_status: Any = None) -> Payment:
        payment = self.get(payment_id)
        if not payment_status and not work_status:
            raise ValidationError("Provide payment_status or work_status")

        updates: dict[str, Any] = {}
        if payment_status:
            updates["payment_status"] = require_choice(payment_status, PaymentStatus, "payment status")
        if work_status:
            updates["work_status"] = require_choice(work_status, WorkStatus, "work status")
        return self._payments.save(dataclasses.replace(payment, updated_at=utcnow(), **updates))

    def complete_requirement(self, payment_id: str, index: Any) -> Payment:
        payment = self.get(payment_id)
        try:
            position = int(index)
        except (TypeError, ValueError):
            raise ValidationError("Requirement index must be a number")
        if not 0 <= position < len(payment.requirements):
            raise ValidationError("Requirement index out of range")

        now = utcnow()
        requirements = list(payment.requirements)
        if not requirements[position].is_completed:
            requirements[position] = dataclasses.replace(requirements[position], is_completed=True, completed_at=now)
        updated = dataclasses.replace(
            payment,
            requirements=tuple(requirements),
            is_step1_completed=all(r.is_completed for r in requirements),
            updated_at=now,
        )
        return self._payments.save(updated)
