"""
Payment Routes
Dues ledger
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from clubhouse.auth import Actor, get_current_actor
from clubhouse.schemas.payment import (
    PaymentStatus,
    CreatePaymentRequest,
    UpdatePaymentRequest,
    PaymentListResponse,
    PaymentResponse,
    PaymentSummaryResponse,
)
from clubhouse.services.payment_service import payment_service

router = APIRouter()


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    status_filter: Optional[PaymentStatus] = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor)
):
    """
    List payments
    
    Admins see every payment; everyone else only their own.
    """
    return await payment_service.list_payments(actor, status=status_filter)


@router.get("/summary", response_model=PaymentSummaryResponse)
async def payment_summary(actor: Actor = Depends(get_current_actor)):
    """Totals over the payments the caller can see"""
    return await payment_service.summarize_payments(actor)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    request: CreatePaymentRequest,
    actor: Actor = Depends(get_current_actor)
):
    """Record dues for a member (admin only)"""
    return await payment_service.create_payment(actor, request)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, actor: Actor = Depends(get_current_actor)):
    """Get a payment (admin, or the member it belongs to)"""
    return await payment_service.get_payment(actor, payment_id)


@router.put("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: str,
    request: UpdatePaymentRequest,
    actor: Actor = Depends(get_current_actor)
):
    """
    Update a payment (admin only)
    
    Setting status to "paid" without a paid_date records the current time.
    """
    return await payment_service.update_payment(actor, payment_id, request)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(payment_id: str, actor: Actor = Depends(get_current_actor)):
    """Delete a payment (admin only)"""
    await payment_service.delete_payment(actor, payment_id)
