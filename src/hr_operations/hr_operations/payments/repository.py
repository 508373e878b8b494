from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payment


class PaymentRepository(Protocol):
    def get(self, payment_id: str) -> Optional[Payment]:
        raise NotImplementedError

    def find_by_order_id(self, order_id: str) -> Optional[Payment]:
        raise NotImplementedError

    def list_for_lead(self, lead_id: str) -> Sequence[Payment]:
        """Newest first."""

        raise NotImplementedError

    def insert(self, payment: Payment) -> Payment:
        raise NotImplementedError

    def save(self, payment: Payment) -> Payment:
        raise NotImplementedError
