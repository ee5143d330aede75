"""
Rule Service
Club bylaws: readable by every role, edited by admins
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from clubhouse.auth.policy import Action, Actor, ResourceKind, authorize
from clubhouse.database import database
from clubhouse.errors import NotFound
from clubhouse.schemas.rule import CreateRuleRequest, UpdateRuleRequest

logger = logging.getLogger(__name__)

RULE_QUERY = """
    SELECT id, title, description, category, position, created_at, updated_at
    FROM rules
"""


def _shape_rule(row) -> dict:
    rule = dict(row)
    rule["order"] = rule.pop("position")
    return rule


class RuleService:
    """Service for bylaws"""

    @staticmethod
    async def _fetch_rule(rule_id: str) -> dict:
        rule = await database.fetch_one(
            RULE_QUERY + " WHERE id = :id",
            {"id": rule_id}
        )

        if not rule:
            raise NotFound("Rule not found")

        return _shape_rule(rule)

    @staticmethod
    async def list_rules(actor: Actor, category: Optional[str] = None) -> dict:
        """List rules in display order"""
        authorize(actor, ResourceKind.rules, Action.read).require()

        query = RULE_QUERY
        params = {}
        if category:
            query += " WHERE category = :category"
            params["category"] = category
        query += " ORDER BY position ASC, title ASC"

        rules = await database.fetch_all(query, params)
        return {
            "total": len(rules),
            "rules": [_shape_rule(rule) for rule in rules]
        }

    @staticmethod
    async def get_rule(actor: Actor, rule_id: str) -> dict:
        authorize(actor, ResourceKind.rules, Action.read).require()
        return await RuleService._fetch_rule(rule_id)

    @staticmethod
    async def create_rule(actor: Actor, data: CreateRuleRequest) -> dict:
        """Add a rule"""
        authorize(actor, ResourceKind.rules, Action.create).require()

        rule_id = str(uuid4())
        now = datetime.now(timezone.utc)
        await database.execute(
            """
            INSERT INTO rules (id, title, description, category, position, created_at, updated_at)
            VALUES (:id, :title, :description, :category, :position, :now, :now)
            """,
            {
                "id": rule_id,
                "title": data.title,
                "description": data.description,
                "category": data.category,
                "position": data.order,
                "now": now,
            }
        )

        logger.info("Rule %s created by %s", rule_id, actor.username)
        return await RuleService._fetch_rule(rule_id)

    @staticmethod
    async def update_rule(actor: Actor, rule_id: str, data: UpdateRuleRequest) -> dict:
        """Edit a rule"""
        authorize(actor, ResourceKind.rules, Action.update).require()

        rule = await RuleService._fetch_rule(rule_id)

        fields = {
            ("position" if key == "order" else key): value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not fields:
            return rule

        fields["updated_at"] = datetime.now(timezone.utc)
        assignments = ", ".join(f"{column} = :{column}" for column in fields)
        await database.execute(
            f"UPDATE rules SET {assignments} WHERE id = :id",
            {**fields, "id": rule_id}
        )

        logger.info("Rule %s updated by %s", rule_id, actor.username)
        return await RuleService._fetch_rule(rule_id)

    @staticmethod
    async def delete_rule(actor: Actor, rule_id: str) -> None:
        """Delete a rule"""
        authorize(actor, ResourceKind.rules, Action.delete).require()

        await RuleService._fetch_rule(rule_id)
        await database.execute(
            "DELETE FROM rules WHERE id = :id",
            {"id": rule_id}
        )
        logger.info("Rule %s deleted by %s", rule_id, actor.username)


rule_service = RuleService()
