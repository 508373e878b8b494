from __future__ import annotations

from flask import Flask

from ..auth.middleware import current_user, role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import PAYMENT_ROLES
from ..container import Container

PREFIX = "/api/project-manager/payments"


def register(app: Flask, container: Container) -> None:
    service = container.payment_service

    @app.route(f"{PREFIX}/create", methods=["POST"], endpoint="payments_create")
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error creating payment")
    def payments_create():
        data = json_body()
        payment = service.create(
            lead_id=data.get("lead_id"),
            manager_id=data.get("manager_id") or current_user().id,
            title=data.get("title"),
            description=data.get("description"),
            amount=data.get("amount"),
            reason=data.get("reason"),
            requirements=data.get("requirements"),
            gateway_order_id=data.get("gateway_order_id"),
        )
        return ok(payment, message="Payment created successfully", status=201)

    @app.route(f"{PREFIX}/verify", methods=["POST"], endpoint="payments_verify")
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error verifying payment")
    def payments_verify():
        data = json_body()
        payment = service.verify(
            order_id=data.get("gateway_order_id"),
            payment_id=data.get("gateway_payment_id"),
            signature=data.get("signature"),
        )
        return ok(payment, message="Payment verified successfully")

    @app.route(f"{PREFIX}/lead/<lead_id>", methods=["GET"], endpoint="payments_for_lead")
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error fetching payments")
    def payments_for_lead(lead_id: str):
        payments = service.list_for_lead(lead_id)
        return ok(payments, count=len(payments))

    @app.route(f"{PREFIX}/<payment_id>", methods=["GET"], endpoint="payments_get")
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error fetching payment")
    def payments_get(payment_id: str):
        return ok(service.get(payment_id))

    @app.route(f"{PREFIX}/<payment_id>/status", methods=["PATCH"], endpoint="payments_update_status")
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error updating payment status")
    def payments_update_status(payment_id: str):
        data = json_body()
        payment = service.update_status(
            payment_id,
            payment_status=data.get("payment_status"),
            work_status=data.get("work_status"),
        )
        return ok(payment, message="Payment status updated successfully")

    @app.route(
        f"{PREFIX}/<payment_id>/requirements/<int:index>",
        methods=["PATCH"],
        endpoint="payments_complete_requirement",
    )
    @role_required(*PAYMENT_ROLES)
    @api_errors("Error updating requirement")
    def payments_complete_requirement(payment_id: str, index: int):
        return ok(service.complete_requirement(payment_id, index), message="Requirement marked as completed")
