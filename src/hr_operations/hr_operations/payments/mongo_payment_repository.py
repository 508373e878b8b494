from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from bson import ObjectId
from pymongo import DESCENDING

from ..core.constants import COLLECTION_PAYMENTS
from ..core.enums import PaymentStatus, WorkStatus
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, optional_str, to_object_id
from .model import Payment, Requirement
from .repository import PaymentRepository


def _to_entity(doc: Dict[str, Any]) -> Payment:
    return Payment(
        id=id_str(doc),
        lead_id=str(doc["lead_id"]),
        manager_id=str(doc["manager_id"]),
        title=doc.get("title", ""),
        description=doc.get("description", ""),
        reason=doc.get("reason", ""),
        amount=float(doc.get("amount", 0)),
        requirements=tuple(
            Requirement(
                description=r.get("description", ""),
                is_completed=bool(r.get("is_completed", False)),
                completed_at=r.get("completed_at"),
            )
            for r in doc.get("requirements", [])
        ),
        payment_status=PaymentStatus(doc.get("payment_status", PaymentStatus.PENDING.value)),
        work_status=WorkStatus(doc.get("work_status", WorkStatus.NOT_STARTED.value)),
        gateway_order_id=optional_str(doc.get("gateway_order_id")),
        gateway_payment_id=optional_str(doc.get("gateway_payment_id")),
        is_step1_completed=bool(doc.get("is_step1_completed", False)),
        is_step2_completed=bool(doc.get("is_step2_completed", False)),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(payment: Payment) -> Dict[str, Any]:
    return {
        "lead_id": payment.lead_id,
        "manager_id": payment.manager_id,
        "title": payment.title,
        "description": payment.description,
        "reason": payment.reason,
        "amount": payment.amount,
        "requirements": [
            {"description": r.description, "is_completed": r.is_completed, "completed_at": r.completed_at}
            for r in payment.requirements
        ],
        "payment_status": payment.payment_status.value,
        "work_status": payment.work_status.value,
        "gateway_order_id": payment.gateway_order_id,
        "gateway_payment_id": payment.gateway_payment_id,
        "is_step1_completed": payment.is_step1_completed,
        "is_step2_completed": payment.is_step2_completed,
        "created_at": payment.created_at,
        "updated_at": payment.updated_at,
    }


class MongoPaymentRepository(PaymentRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_PAYMENTS)

    def get(self, payment_id: str) -> Optional[Payment]:
        if not ObjectId.is_valid(payment_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(payment_id)})
        return _to_entity(doc) if doc else None

    def find_by_order_id(self, order_id: str) -> Optional[Payment]:
        doc = self._col.find_one({"gateway_order_id": order_id})
        return _to_entity(doc) if doc else None

    def list_for_lead(self, lead_id: str) -> Sequence[Payment]:
        return [_to_entity(d) for d in self._col.find({"lead_id": lead_id}).sort("created_at", DESCENDING)]

    def insert(self, payment: Payment) -> Payment:
        result = self._col.insert_one(_to_document(payment))
        return self.get(str(result.inserted_id))

    def save(self, payment: Payment) -> Payment:
        self._col.replace_one({"_id": to_object_id(payment.id, entity="payment")}, _to_document(payment))
        return payment
