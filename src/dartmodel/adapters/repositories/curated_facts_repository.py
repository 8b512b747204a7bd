# src/dartmodel/adapters/repositories/curated_facts_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the curated facts repository.

Purpose:
    Persist curated facts keyed by their identity key and read back mapped
    facts for model building.

Layer:
    adapters/repositories

Notes:
    - ``upsert_fact`` compares every stored column before writing so a
      re-run over unchanged source data reports UNCHANGED and leaves the
      row untouched.
    - Enums are stored by value.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dartmodel.adapters.repositories.base_repository import BaseRepository
from dartmodel.domain.entities.curated_fact import CuratedFact
from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind, UpsertOutcome
from dartmodel.domain.interfaces.repositories.curated_facts_repository import (
    CuratedFactsRepository as CuratedFactsRepositoryPort,
)
from dartmodel.infrastructure.database.models.curation import CuratedFinFact

__all__ = ["SqlAlchemyCuratedFactsRepository"]

_MUTABLE_COLUMNS: tuple[str, ...] = (
    "entity_id",
    "company_code",
    "stock_code",
    "period_kind",
    "fiscal_year",
    "fiscal_quarter",
    "as_of_date",
    "flow_start_date",
    "flow_end_date",
    "report_code",
    "scope",
    "statement_category",
    "account_source_id",
    "account_name",
    "account_detail",
    "amount",
    "currency",
    "standard_line_id",
    "ordering",
    "source_report_ref",
    "source_priority",
    "is_accumulated",
    "parse_success",
    "parse_error",
)


def _column_values(fact: CuratedFact) -> dict[str, Any]:
    values = {name: getattr(fact, name) for name in _MUTABLE_COLUMNS}
    values["period_kind"] = fact.period_kind.value
    values["scope"] = fact.scope.value
    return values


def _same(stored: Any, incoming: Any) -> bool:
    if isinstance(stored, Decimal) or isinstance(incoming, Decimal):
        if stored is None or incoming is None:
            return stored is incoming
        return Decimal(str(stored)) == Decimal(str(incoming))
    return bool(stored == incoming)


class SqlAlchemyCuratedFactsRepository(
    BaseRepository[CuratedFinFact],
    CuratedFactsRepositoryPort,
):
    """SQLAlchemy-backed curated facts repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async session."""
        super().__init__(session)

    async def upsert_fact(self, fact: CuratedFact) -> UpsertOutcome:
        """Create or update a fact by its identity key.

        Args:
            fact: Fact to write.

        Returns:
            UpsertOutcome: CREATED, UPDATED or UNCHANGED.
        """
        values = _column_values(fact)
        stmt = select(CuratedFinFact).where(CuratedFinFact.fact_key == fact.fact_key)
        existing = await self.fetch_optional(stmt)

        if existing is None:
            self._session.add(CuratedFinFact(fact_key=fact.fact_key, **values))
            await self._session.flush()
            return UpsertOutcome.CREATED

        changed = [
            name for name, value in values.items() if not _same(getattr(existing, name), value)
        ]
        if not changed:
            return UpsertOutcome.UNCHANGED

        for name in changed:
            setattr(existing, name, values[name])
        existing.updated_at = self.utc_now()
        await self._session.flush()
        return UpsertOutcome.UPDATED

    async def list_mapped_facts(
        self,
        *,
        entity_id: str,
        fiscal_years: Iterable[int],
        period_kind: PeriodKind = PeriodKind.ANNUAL,
    ) -> Sequence[CuratedFact]:
        """Return mapped facts for an entity, ordered by fiscal year then ordering."""
        years = sorted(set(fiscal_years))
        if not years:
            return []

        stmt = (
            select(CuratedFinFact)
            .where(
                CuratedFinFact.entity_id == entity_id,
                CuratedFinFact.period_kind == period_kind.value,
                CuratedFinFact.fiscal_year.in_(years),
                CuratedFinFact.standard_line_id.is_not(None),
            )
            .order_by(
                CuratedFinFact.fiscal_year.asc(),
                CuratedFinFact.ordering.asc().nulls_last(),
                CuratedFinFact.fact_key.asc(),
            )
        )
        rows = await self.fetch_all(stmt)
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: Any) -> CuratedFact:
        """Map an ORM row (or a CuratedFact passed through) to the domain entity."""
        if isinstance(row, CuratedFact):
            return row
        return CuratedFact(
            fact_key=row.fact_key,
            entity_id=row.entity_id,
            company_code=row.company_code,
            stock_code=row.stock_code,
            period_kind=PeriodKind(row.period_kind),
            fiscal_year=int(row.fiscal_year),
            fiscal_quarter=row.fiscal_quarter,
            as_of_date=row.as_of_date,
            flow_start_date=row.flow_start_date,
            flow_end_date=row.flow_end_date,
            report_code=row.report_code,
            scope=ConsolidationScope(row.scope),
            statement_category=row.statement_category,
            account_source_id=row.account_source_id,
            account_name=row.account_name,
            account_detail=row.account_detail,
            amount=Decimal(str(row.amount)),
            currency=row.currency,
            standard_line_id=row.standard_line_id,
            ordering=row.ordering,
            source_report_ref=row.source_report_ref,
            source_priority=int(row.source_priority),
            is_accumulated=bool(row.is_accumulated),
            parse_success=bool(row.parse_success),
            parse_error=row.parse_error,
        )
