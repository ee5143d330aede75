"""
Payment Request/Response Models
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from clubhouse.schemas.common import UtcDatetime


class PaymentStatus(str, Enum):
    paid = "paid"
    pending = "pending"
    overdue = "overdue"


class CreatePaymentRequest(BaseModel):
    """Request to record dues for a member"""
    member_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    due_date: date
    paid_date: Optional[UtcDatetime] = None
    status: PaymentStatus = PaymentStatus.pending
    notes: Optional[str] = Field(default=None, max_length=1000)
    
    class Config:
        example = {
            "member_id": "uuid-here",
            "amount": 50.0,
            "due_date": "2024-12-01",
            "status": "pending",
            "notes": "December dues"
        }


class UpdatePaymentRequest(BaseModel):
    """Request to update a payment (e.g. mark as paid)"""
    amount: Optional[float] = Field(None, gt=0)
    due_date: Optional[date] = None
    paid_date: Optional[UtcDatetime] = None
    status: Optional[PaymentStatus] = None
    notes: Optional[str] = Field(None, max_length=1000)


class PaymentMember(BaseModel):
    """Who the payment belongs to"""
    id: str
    road_name: str
    real_name: str


class PaymentResponse(BaseModel):
    """Payment details"""
    id: str
    member_id: str
    amount: float
    due_date: date
    paid_date: Optional[UtcDatetime] = None
    status: PaymentStatus
    notes: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    member: Optional[PaymentMember] = None
    
    class Config:
        from_attributes = True


class PaymentListResponse(BaseModel):
    """List of payments visible to the caller"""
    total: int
    payments: List[PaymentResponse]


class PaymentSummaryResponse(BaseModel):
    """Ledger totals over the payments visible to the caller"""
    total_collected: float
    total_outstanding: float
    total_overdue: float
    paid_count: int
    pending_count: int
    overdue_count: int
