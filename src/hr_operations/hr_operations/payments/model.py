from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import PaymentStatus, WorkStatus


@dataclass(frozen=True)
class Requirement:
    description: str
    is_completed: bool = False
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class Payment:
    """Payment request raised by a project manager against a lead.

    Payment status and work status move independently of each other.
    """

    id: str
    lead_id: str
    manager_id: str
    title: str
    description: str
    reason: str
    amount: float
    requirements: Tuple[Requirement, ...] = ()
    payment_status: PaymentStatus = PaymentStatus.PENDING
    work_status: WorkStatus = WorkStatus.NOT_STARTED
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    is_step1_completed: bool = False
    is_step2_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
