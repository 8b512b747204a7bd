# src/dartmodel/adapters/repositories/mapping_rules_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the account mapping rules repository.

Layer:
    adapters/repositories
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dartmodel.adapters.repositories.base_repository import BaseRepository
from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.interfaces.repositories.mapping_rules_repository import (
    MappingRulesRepository as MappingRulesRepositoryPort,
)
from dartmodel.infrastructure.database.models.curation import AccountMappingRule

__all__ = ["SqlAlchemyMappingRulesRepository"]


class SqlAlchemyMappingRulesRepository(
    BaseRepository[AccountMappingRule],
    MappingRulesRepositoryPort,
):
    """SQLAlchemy-backed mapping rules repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async session."""
        super().__init__(session)

    async def list_rules(self) -> Sequence[MappingRule]:
        """Return all rules, priority ascending then confidence descending."""
        stmt = select(AccountMappingRule).order_by(
            AccountMappingRule.priority.asc(),
            AccountMappingRule.confidence.desc(),
            AccountMappingRule.rule_id.asc(),
        )
        rows = await self.fetch_all(stmt)
        return [self._to_domain(row) for row in rows]

    async def add_rule(self, rule: MappingRule) -> None:
        """Insert a new rule."""
        self._session.add(
            AccountMappingRule(
                rule_id=rule.rule_id,
                standard_line_id=rule.standard_line_id,
                account_source_id=rule.account_source_id,
                account_name=rule.account_name,
                account_detail_path=rule.account_detail_path,
                statement_category=rule.statement_category,
                confidence=rule.confidence,
                priority=rule.priority,
                mapping_version=rule.mapping_version,
            )
        )
        await self._session.flush()

    async def list_rule_ids(self) -> set[str]:
        """Return the ids of all stored rules."""
        result = await self._session.execute(select(AccountMappingRule.rule_id))
        return set(result.scalars().all())

    @staticmethod
    def _to_domain(row: Any) -> MappingRule:
        """Map an ORM row (or a MappingRule passed through) to the domain entity."""
        if isinstance(row, MappingRule):
            return row
        return MappingRule(
            rule_id=row.rule_id,
            standard_line_id=row.standard_line_id,
            account_source_id=row.account_source_id,
            account_name=row.account_name,
            account_detail_path=row.account_detail_path,
            statement_category=row.statement_category,
            confidence=Decimal(str(row.confidence)),
            priority=int(row.priority),
            mapping_version=int(row.mapping_version),
        )
