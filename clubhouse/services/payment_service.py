"""
Payment Service
Dues ledger: admins see everything, everyone else only their own rows
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from clubhouse.auth.policy import Action, Actor, ResourceKind, authorize
from clubhouse.database import database
from clubhouse.errors import Forbidden, NotFound
from clubhouse.schemas.payment import CreatePaymentRequest, PaymentStatus, UpdatePaymentRequest

logger = logging.getLogger(__name__)

PAYMENT_QUERY = """
    SELECT p.id, p.member_id, p.amount, p.due_date, p.paid_date, p.status, p.notes,
           p.created_at, m.road_name, m.real_name
    FROM payments p
    JOIN members m ON m.id = p.member_id
"""


def _shape_payment(row) -> dict:
    payment = dict(row)
    payment["member"] = {
        "id": payment["member_id"],
        "road_name": payment.pop("road_name"),
        "real_name": payment.pop("real_name"),
    }
    return payment


def _needs_paid_stamp(new_status: Optional[PaymentStatus], paid_date_supplied: bool, current: Optional[dict] = None) -> bool:
    """A payment entering 'paid' without an explicit paid date gets stamped now"""
    if new_status is not PaymentStatus.paid or paid_date_supplied:
        return False
    if current is None:
        return True
    return current["status"] != PaymentStatus.paid.value or current["paid_date"] is None


class PaymentService:
    """Service for dues and payments"""

    @staticmethod
    async def _fetch_payment(payment_id: str) -> dict:
        payment = await database.fetch_one(
            PAYMENT_QUERY + " WHERE p.id = :id",
            {"id": payment_id}
        )

        if not payment:
            raise NotFound("Payment not found")

        return _shape_payment(payment)

    @staticmethod
    async def payments_for_member(member_id: str) -> List[dict]:
        """All payments of one member, newest due date first (no policy check)"""
        payments = await database.fetch_all(
            PAYMENT_QUERY + " WHERE p.member_id = :member_id ORDER BY p.due_date DESC",
            {"member_id": member_id}
        )
        return [_shape_payment(payment) for payment in payments]

    @staticmethod
    async def list_payments(actor: Actor, status: Optional[PaymentStatus] = None) -> dict:
        """List payments the actor may see"""
        decision = authorize(actor, ResourceKind.payments, Action.read).require()

        conditions = []
        params = {}

        if decision.owner_filter is not None:
            if not decision.owner_filter:
                return {"total": 0, "payments": []}
            conditions.append("p.member_id = :member_id")
            params["member_id"] = decision.owner_filter

        if status is not None:
            conditions.append("p.status = :status")
            params["status"] = status.value

        query = PAYMENT_QUERY
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY p.due_date DESC"

        payments = await database.fetch_all(query, params)

        return {
            "total": len(payments),
            "payments": [_shape_payment(payment) for payment in payments]
        }

    @staticmethod
    async def get_payment(actor: Actor, payment_id: str) -> dict:
        """Get one payment; non-admins only their own"""
        decision = authorize(actor, ResourceKind.payments, Action.read).require()
        if decision.owner_filter == "":
            # No member profile owns any payment
            raise Forbidden("You can only view your own payments")

        payment = await PaymentService._fetch_payment(payment_id)
        authorize(actor, ResourceKind.payments, Action.read, owner_member_id=payment["member_id"]).require()
        return payment

    @staticmethod
    async def create_payment(actor: Actor, data: CreatePaymentRequest) -> dict:
        """Record dues for a member"""
        authorize(actor, ResourceKind.payments, Action.create).require()

        member = await database.fetch_one(
            "SELECT id FROM members WHERE id = :id",
            {"id": data.member_id}
        )
        if not member:
            raise NotFound("Member not found")

        paid_date = data.paid_date
        if _needs_paid_stamp(data.status, paid_date is not None):
            paid_date = datetime.now(timezone.utc)

        payment_id = str(uuid4())
        await database.execute(
            """
            INSERT INTO payments (id, member_id, amount, due_date, paid_date, status, notes, created_at)
            VALUES (:id, :member_id, :amount, :due_date, :paid_date, :status, :notes, :created_at)
            """,
            {
                "id": payment_id,
                "member_id": data.member_id,
                "amount": float(data.amount),
                "due_date": data.due_date,
                "paid_date": paid_date,
                "status": data.status.value,
                "notes": data.notes,
                "created_at": datetime.now(timezone.utc),
            }
        )

        logger.info("Payment %s (%s) created for member %s by %s", payment_id, data.status.value, data.member_id, actor.username)
        return await PaymentService._fetch_payment(payment_id)

    @staticmethod
    async def update_payment(actor: Actor, payment_id: str, data: UpdatePaymentRequest) -> dict:
        """Update a payment; entering 'paid' without a paid_date stamps the current time"""
        authorize(actor, ResourceKind.payments, Action.update).require()

        current = await PaymentService._fetch_payment(payment_id)

        fields = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "notes"
        }

        if _needs_paid_stamp(data.status, "paid_date" in fields, current):
            fields["paid_date"] = datetime.now(timezone.utc)

        if not fields:
            return current

        if "status" in fields:
            fields["status"] = fields["status"].value
        if "amount" in fields:
            fields["amount"] = float(fields["amount"])

        assignments = ", ".join(f"{column} = :{column}" for column in fields)
        await database.execute(
            f"UPDATE payments SET {assignments} WHERE id = :id",
            {**fields, "id": payment_id}
        )

        logger.info("Payment %s updated by %s: %s", payment_id, actor.username, ", ".join(sorted(fields)))
        return await PaymentService._fetch_payment(payment_id)

    @staticmethod
    async def delete_payment(actor: Actor, payment_id: str) -> None:
        """Delete a payment"""
        authorize(actor, ResourceKind.payments, Action.delete).require()

        await PaymentService._fetch_payment(payment_id)
        await database.execute(
            "DELETE FROM payments WHERE id = :id",
            {"id": payment_id}
        )
        logger.info("Payment %s deleted by %s", payment_id, actor.username)

    @staticmethod
    async def summarize_payments(actor: Actor) -> dict:
        """Ledger totals over the rows the actor may see"""
        payments = (await PaymentService.list_payments(actor))["payments"]

        summary = {
            "total_collected": 0.0,
            "total_outstanding": 0.0,
            "total_overdue": 0.0,
            "paid_count": 0,
            "pending_count": 0,
            "overdue_count": 0,
        }
        for payment in payments:
            amount = float(payment["amount"])
            if payment["status"] == PaymentStatus.paid.value:
                summary["total_collected"] += amount
                summary["paid_count"] += 1
            elif payment["status"] == PaymentStatus.overdue.value:
                summary["total_overdue"] += amount
                summary["total_outstanding"] += amount
                summary["overdue_count"] += 1
            else:
                summary["total_outstanding"] += amount
                summary["pending_count"] += 1

        return summary


payment_service = PaymentService()
