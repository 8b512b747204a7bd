# src/dartmodel/application/services/historical_loader.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Historical facts loader.

Purpose:
    Read mapped annual curated facts for the historical periods of a model
    timeline and index them as ``line id -> period index -> value``.

Layer:
    application/services

Notes:
    - Only historical ANNUAL periods are requested; facts for fiscal years
      outside the window are dropped.
    - When both scopes report the same line and year, consolidated facts take
      precedence over separate ones. Within one scope, a later ordering
      overwrites an earlier one (facts arrive ordered by year then ordering).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.timeline import Period
from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind
from dartmodel.domain.interfaces.repositories.curated_facts_repository import (
    CuratedFactsRepository,
)

__all__ = ["HistoricalFacts", "HistoricalLoader"]

_SCOPE_RANK = {ConsolidationScope.CONSOLIDATED: 0, ConsolidationScope.SEPARATE: 1}


@dataclass(slots=True)
class HistoricalFacts:
    """Indexed historical values.

    Attributes:
        values: Line id to period index to value.
        source_report_refs: Filing references of the facts used.
    """

    values: dict[str, dict[int, Decimal]] = field(default_factory=dict)
    source_report_refs: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """Return True when no value was loaded."""
        return not any(self.values.values())


class HistoricalLoader:
    """Load historical facts for a model timeline."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        facts_repo_type: type[CuratedFactsRepository] = CuratedFactsRepository,
    ) -> None:
        """Initialize the loader.

        Args:
            uow: Unit of work used to read curated facts.
            facts_repo_type: Repository key for curated facts.
        """
        self._uow = uow
        self._facts_repo_type = facts_repo_type

    async def load_facts(self, entity_id: str, periods: Iterable[Period]) -> HistoricalFacts:
        """Load facts for the historical annual periods in ``periods``.

        Args:
            entity_id: Model entity id.
            periods: Timeline periods; forecast and non-annual periods are ignored.

        Returns:
            HistoricalFacts: Indexed values and the contributing report refs.
        """
        year_to_index = {
            p.fiscal_year: p.index
            for p in periods
            if p.is_historical and p.period_kind is PeriodKind.ANNUAL
        }
        result = HistoricalFacts()
        if not year_to_index:
            return result

        async with self._uow as tx:
            repo: CuratedFactsRepository = tx.get_repository(self._facts_repo_type)
            facts = await repo.list_mapped_facts(
                entity_id=entity_id,
                fiscal_years=sorted(year_to_index),
                period_kind=PeriodKind.ANNUAL,
            )

        chosen_rank: dict[tuple[str, int], int] = {}
        for fact in facts:
            index = year_to_index.get(fact.fiscal_year)
            if index is None or fact.standard_line_id is None:
                continue
            key = (fact.standard_line_id, index)
            rank = _SCOPE_RANK.get(fact.scope, len(_SCOPE_RANK))
            if key in chosen_rank and chosen_rank[key] < rank:
                continue
            chosen_rank[key] = rank
            result.values.setdefault(fact.standard_line_id, {})[index] = fact.amount
            if fact.source_report_ref:
                result.source_report_refs.add(fact.source_report_ref)
        return result
