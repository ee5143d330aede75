"""
Rule Routes
Club bylaws
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from clubhouse.auth import Actor, get_current_actor
from clubhouse.schemas.rule import CreateRuleRequest, UpdateRuleRequest, RuleListResponse, RuleResponse
from clubhouse.services.rule_service import rule_service

router = APIRouter()


@router.get("", response_model=RuleListResponse)
async def list_rules(
    category: Optional[str] = Query(None, max_length=50),
    actor: Actor = Depends(get_current_actor)
):
    """List rules in display order (any logged-in role)"""
    return await rule_service.list_rules(actor, category=category)


@router.post("", response_model=RuleResponse, status_code=status.HTTP_201_CREATED)
async def create_rule(request: CreateRuleRequest, actor: Actor = Depends(get_current_actor)):
    """Add a rule (admin only)"""
    return await rule_service.create_rule(actor, request)


@router.get("/{rule_id}", response_model=RuleResponse)
async def get_rule(rule_id: str, actor: Actor = Depends(get_current_actor)):
    """Get a rule"""
    return await rule_service.get_rule(actor, rule_id)


@router.put("/{rule_id}", response_model=RuleResponse)
async def update_rule(
    rule_id: str,
    request: UpdateRuleRequest,
    actor: Actor = Depends(get_current_actor)
):
    """Edit a rule (admin only)"""
    return await rule_service.update_rule(actor, rule_id, request)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(rule_id: str, actor: Actor = Depends(get_current_actor)):
    """Delete a rule (admin only)"""
    await rule_service.delete_rule(actor, rule_id)
