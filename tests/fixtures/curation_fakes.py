# tests/fixtures/curation_fakes.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""In-memory fakes shared by curation and modeling tests.

The fakes implement the repository protocols structurally and a minimal
UnitOfWork keyed by protocol type, so use cases run without a database.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Any

from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.curated_fact import CuratedFact
from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.entities.model_entity import ModelEntity
from dartmodel.domain.entities.model_snapshot import ModelOutputLine, SnapshotHeader
from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind, UpsertOutcome
from dartmodel.domain.interfaces.repositories.curated_facts_repository import (
    CuratedFactsRepository,
)
from dartmodel.domain.interfaces.repositories.mapping_rules_repository import (
    MappingRulesRepository,
)
from dartmodel.domain.interfaces.repositories.model_entities_repository import (
    ModelEntitiesRepository,
)
from dartmodel.domain.interfaces.repositories.model_snapshots_repository import (
    ModelSnapshotsRepository,
)
from dartmodel.domain.interfaces.repositories.raw_filing_rows_repository import (
    RawFilingRowsRepository,
)

COMPANY_CODE = "00126380"
ENTITY_ID = f"entity-{COMPANY_CODE}"


# --------------------------------------------------------------------------- #
# Builders                                                                    #
# --------------------------------------------------------------------------- #


def make_raw_row(**overrides: Any) -> RawFilingRow:
    """Return an annual consolidated revenue row, with overrides applied."""
    values: dict[str, Any] = {
        "company_code": COMPANY_CODE,
        "fiscal_year": "2024",
        "report_code": "11011",
        "consolidation_flag": "CFS",
        "statement_category": "IS",
        "account_name": "매출액",
        "account_source_id": "ifrs-full_Revenue",
        "current_amount": "1,000,000",
        "currency": "KRW",
        "ordinal": "1",
        "receipt_no": "20250311000001",
        "company_name": "삼성전자",
        "stock_code": "005930",
    }
    values.update(overrides)
    return RawFilingRow(**values)


def make_fact(
    standard_line_id: str | None,
    amount: str,
    *,
    fiscal_year: int = 2024,
    scope: ConsolidationScope = ConsolidationScope.CONSOLIDATED,
    account_name: str = "계정",
    statement_category: str = "IS",
    source_report_ref: str | None = "20250311000001",
) -> CuratedFact:
    """Return an annual curated fact for ``ENTITY_ID``."""
    return CuratedFact(
        fact_key=f"{ENTITY_ID}:ANNUAL:{fiscal_year}:null:11011:{scope.value}:"
        f"{statement_category}:{account_name}",
        entity_id=ENTITY_ID,
        company_code=COMPANY_CODE,
        stock_code="005930",
        period_kind=PeriodKind.ANNUAL,
        fiscal_year=fiscal_year,
        fiscal_quarter=None,
        as_of_date=None,
        flow_start_date=None,
        flow_end_date=None,
        report_code="11011",
        scope=scope,
        statement_category=statement_category,
        account_source_id=None,
        account_name=account_name,
        account_detail=None,
        amount=Decimal(amount),
        currency="KRW",
        standard_line_id=standard_line_id,
        ordering=None,
        source_report_ref=source_report_ref,
        source_priority=10,
        is_accumulated=False,
        parse_success=True,
    )


def static_rule_loader(rules: Sequence[MappingRule]) -> Any:
    """Return a rule loader coroutine function that counts its calls."""

    async def _load() -> Sequence[MappingRule]:
        _load.calls += 1  # type: ignore[attr-defined]
        return list(rules)

    _load.calls = 0  # type: ignore[attr-defined]
    return _load


# --------------------------------------------------------------------------- #
# Repositories                                                                #
# --------------------------------------------------------------------------- #


class InMemoryRawRowsRepository:
    """Raw rows filtered the way the SQL repository filters them."""

    def __init__(self, rows: Iterable[RawFilingRow] = ()) -> None:
        self.rows = list(rows)

    async def list_rows(
        self,
        *,
        company_code: str,
        fiscal_year: str,
        report_code: str | None = None,
        consolidation_flag: str | None = None,
    ) -> Sequence[RawFilingRow]:
        return [
            r
            for r in self.rows
            if r.company_code == company_code
            and r.fiscal_year == fiscal_year
            and (report_code is None or r.report_code == report_code)
            and (consolidation_flag is None or r.consolidation_flag == consolidation_flag)
        ]


class InMemoryMappingRulesRepository:
    def __init__(self, rules: Iterable[MappingRule] = ()) -> None:
        self.rules = list(rules)

    async def list_rules(self) -> Sequence[MappingRule]:
        return sorted(self.rules, key=lambda r: (r.priority, -r.confidence, r.rule_id))

    async def add_rule(self, rule: MappingRule) -> None:
        self.rules.append(rule)

    async def list_rule_ids(self) -> set[str]:
        return {r.rule_id for r in self.rules}


class InMemoryCuratedFactsRepository:
    """Facts keyed by fact_key; equality decides UNCHANGED vs UPDATED."""

    def __init__(self, facts: Iterable[CuratedFact] = ()) -> None:
        self.facts: dict[str, CuratedFact] = {f.fact_key: f for f in facts}
        self.fail_on: set[str] = set()

    async def upsert_fact(self, fact: CuratedFact) -> UpsertOutcome:
        if fact.account_name in self.fail_on:
            raise RuntimeError("write failed")
        existing = self.facts.get(fact.fact_key)
        self.facts[fact.fact_key] = fact
        if existing is None:
            return UpsertOutcome.CREATED
        if existing == fact:
            return UpsertOutcome.UNCHANGED
        return UpsertOutcome.UPDATED

    async def list_mapped_facts(
        self,
        *,
        entity_id: str,
        fiscal_years: Iterable[int],
        period_kind: PeriodKind = PeriodKind.ANNUAL,
    ) -> Sequence[CuratedFact]:
        years = set(fiscal_years)
        return [
            f
            for f in self.facts.values()
            if f.entity_id == entity_id
            and f.fiscal_year in years
            and f.period_kind is period_kind
            and f.standard_line_id is not None
        ]


class InMemoryModelEntitiesRepository:
    def __init__(self, entities: Iterable[ModelEntity] = ()) -> None:
        self.entities: dict[str, ModelEntity] = {e.entity_id: e for e in entities}

    async def get(self, entity_id: str) -> ModelEntity | None:
        return self.entities.get(entity_id)

    async def ensure(self, entity: ModelEntity) -> ModelEntity:
        return self.entities.setdefault(entity.entity_id, entity)


class InMemoryModelSnapshotsRepository:
    def __init__(self) -> None:
        self.snapshots: dict[str, tuple[SnapshotHeader, list[ModelOutputLine]]] = {}
        self.fail = False

    async def save(self, header: SnapshotHeader, lines: Sequence[ModelOutputLine]) -> int:
        if self.fail:
            raise RuntimeError("database unavailable")
        self.snapshots[header.snapshot_id] = (header, list(lines))
        return len(lines)

    async def get(
        self, snapshot_id: str
    ) -> tuple[SnapshotHeader, Sequence[ModelOutputLine]] | None:
        return self.snapshots.get(snapshot_id)


# --------------------------------------------------------------------------- #
# Unit of Work                                                                #
# --------------------------------------------------------------------------- #


class FakeUnitOfWork(UnitOfWork):
    """Minimal in-memory UnitOfWork resolving repositories by protocol type."""

    def __init__(self, repos: Mapping[type[Any], Any]) -> None:
        self._repos = dict(repos)
        self.entered = 0
        self.commits = 0
        self.rollbacks = 0
        self.savepoints = 0
        self.savepoint_rollbacks = 0

    async def __aenter__(self) -> FakeUnitOfWork:  # type: ignore[override]
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool | None:  # type: ignore[override]
        if exc_type is not None:
            await self.rollback()
        return None

    async def commit(self) -> None:  # type: ignore[override]
        self.commits += 1

    async def rollback(self) -> None:  # type: ignore[override]
        self.rollbacks += 1

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:  # type: ignore[override]
        self.savepoints += 1
        try:
            yield
        except Exception:
            self.savepoint_rollbacks += 1
            raise

    def get_repository(self, repo_type: type[Any]) -> Any:  # type: ignore[override]
        return self._repos[repo_type]


def make_uow(
    *,
    raw_rows: InMemoryRawRowsRepository | None = None,
    rules: InMemoryMappingRulesRepository | None = None,
    facts: InMemoryCuratedFactsRepository | None = None,
    entities: InMemoryModelEntitiesRepository | None = None,
    snapshots: InMemoryModelSnapshotsRepository | None = None,
) -> FakeUnitOfWork:
    """Build a FakeUnitOfWork over the given (or empty) repositories."""
    return FakeUnitOfWork(
        {
            RawFilingRowsRepository: raw_rows or InMemoryRawRowsRepository(),
            MappingRulesRepository: rules or InMemoryMappingRulesRepository(),
            CuratedFactsRepository: facts or InMemoryCuratedFactsRepository(),
            ModelEntitiesRepository: entities or InMemoryModelEntitiesRepository(),
            ModelSnapshotsRepository: snapshots or InMemoryModelSnapshotsRepository(),
        }
    )


def with_amount(row: RawFilingRow, amount: str | None) -> RawFilingRow:
    """Return ``row`` with a different current amount."""
    return replace(row, current_amount=amount)
