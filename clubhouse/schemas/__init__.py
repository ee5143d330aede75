"""
Pydantic schemas for request/response validation
"""

from clubhouse.schemas.member import (
    CreateMemberRequest,
    UpdateMemberRequest,
    MemberResponse,
    MemberDetailResponse,
    MemberListResponse,
    MemberCreatedResponse,
)
from clubhouse.schemas.payment import (
    PaymentStatus,
    CreatePaymentRequest,
    UpdatePaymentRequest,
    PaymentResponse,
    PaymentListResponse,
    PaymentSummaryResponse,
)
from clubhouse.schemas.event import (
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
    RsvpResponse,
)
from clubhouse.schemas.rule import (
    CreateRuleRequest,
    UpdateRuleRequest,
    RuleResponse,
    RuleListResponse,
)
from clubhouse.schemas.user import CreateUserRequest, UserResponse, UserListResponse

__all__ = [
    "CreateMemberRequest",
    "UpdateMemberRequest",
    "MemberResponse",
    "MemberDetailResponse",
    "MemberListResponse",
    "MemberCreatedResponse",
    "PaymentStatus",
    "CreatePaymentRequest",
    "UpdatePaymentRequest",
    "PaymentResponse",
    "PaymentListResponse",
    "PaymentSummaryResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "EventListResponse",
    "RsvpResponse",
    "CreateRuleRequest",
    "UpdateRuleRequest",
    "RuleResponse",
    "RuleListResponse",
    "CreateUserRequest",
    "UserResponse",
    "UserListResponse",
]
