"""
Rule Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from clubhouse.schemas.common import UtcDatetime


class CreateRuleRequest(BaseModel):
    """Request to add a bylaw"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str = Field(default="general", min_length=1, max_length=50)
    order: int = Field(default=0, ge=0, description="Display position")
    
    class Config:
        example = {
            "title": "Meeting Attendance",
            "description": "Members are required to attend at least 75% of chapter meetings unless excused.",
            "category": "meetings",
            "order": 2
        }


class UpdateRuleRequest(BaseModel):
    """Request to edit a bylaw"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    order: Optional[int] = Field(None, ge=0)


class RuleResponse(BaseModel):
    """Rule details"""
    id: str
    title: str
    description: str
    category: str
    order: int
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class RuleListResponse(BaseModel):
    """Rules in display order"""
    total: int
    rules: List[RuleResponse]
