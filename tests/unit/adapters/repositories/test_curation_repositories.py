# tests/unit/adapters/repositories/test_curation_repositories.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Adapter tests for the curation repositories.

Covers:
    - Raw rows mapped to domain rows and sorted by numeric ordinal.
    - Mapping rules mapped with Decimal confidence; inserts flushed.
    - Curated fact upsert outcomes (CREATED, UNCHANGED, UPDATED).
    - Mapped fact reads skip the query for an empty year set.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

from dartmodel.adapters.repositories.curated_facts_repository import (
    SqlAlchemyCuratedFactsRepository,
)
from dartmodel.adapters.repositories.mapping_rules_repository import (
    SqlAlchemyMappingRulesRepository,
)
from dartmodel.adapters.repositories.raw_filing_rows_repository import (
    SqlAlchemyRawFilingRowsRepository,
)
from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind, UpsertOutcome
from dartmodel.infrastructure.database.models.curation import AccountMappingRule, CuratedFinFact
from tests.fixtures.curation_fakes import make_fact


class _DummyResult:
    """Minimal result wrapper exposing `scalars()`."""

    def __init__(self, rows: Sequence[Any] | None = None) -> None:
        self._rows = list(rows or [])

    def scalars(self) -> _DummyResult:
        return self

    def first(self) -> Any | None:
        return self._rows[0] if self._rows else None

    def all(self) -> list[Any]:
        return list(self._rows)


class _DummySession:
    """Session stand-in recording statements and writes."""

    def __init__(self, *results: _DummyResult) -> None:
        self._results = list(results)
        self.statements: list[Any] = []
        self.added: list[Any] = []
        self.flushes = 0

    async def execute(self, stmt: Any) -> _DummyResult:
        self.statements.append(stmt)
        if self._results:
            return self._results.pop(0)
        return _DummyResult()

    def add(self, obj: Any) -> None:
        self.added.append(obj)

    async def flush(self) -> None:
        self.flushes += 1


def _raw(row_id: int, ordinal: str | None, name: str) -> SimpleNamespace:
    return SimpleNamespace(
        id=row_id,
        corp_code="00126380",
        corp_name="삼성전자",
        stock_code="005930",
        bsns_year="2024",
        reprt_code="11011",
        rcept_no="20250311000001",
        fs_div="CFS",
        sj_div="BS",
        account_id=None,
        account_nm=name,
        account_detail=None,
        thstrm_amount="100",
        thstrm_add_amount=None,
        frmtrm_amount="90",
        bfefrmtrm_amount=None,
        ord=ordinal,
        currency="KRW",
    )


async def test_raw_rows_sorted_by_numeric_ordinal() -> None:
    session = _DummySession(
        _DummyResult(
            [
                _raw(1, "10", "자본총계"),
                _raw(2, None, "기타"),
                _raw(3, "2", "현금"),
                _raw(4, "x", "비고"),
            ]
        )
    )
    repo = SqlAlchemyRawFilingRowsRepository(session=session)  # type: ignore[arg-type]

    rows = await repo.list_rows(company_code="00126380", fiscal_year="2024", report_code="11011")

    assert [r.account_name for r in rows] == ["현금", "자본총계", "기타", "비고"]
    first = rows[0]
    assert first.company_code == "00126380"
    assert first.consolidation_flag == "CFS"
    assert first.statement_category == "BS"
    assert first.current_amount == "100"
    assert first.prior_amount == "90"
    assert first.receipt_no == "20250311000001"
    assert len(session.statements) == 1


async def test_list_rules_maps_rows() -> None:
    row = SimpleNamespace(
        rule_id="r1",
        standard_line_id="IS.REVENUE",
        account_source_id="ifrs-full_Revenue",
        account_name=None,
        account_detail_path=None,
        statement_category="IS",
        confidence=0.95,
        priority=1,
        mapping_version=2,
    )
    session = _DummySession(_DummyResult([row]))
    repo = SqlAlchemyMappingRulesRepository(session=session)  # type: ignore[arg-type]

    (rule,) = await repo.list_rules()

    assert isinstance(rule, MappingRule)
    assert rule.confidence == Decimal("0.95")
    assert rule.priority == 1
    assert rule.mapping_version == 2


async def test_add_rule_flushes_new_row() -> None:
    session = _DummySession()
    repo = SqlAlchemyMappingRulesRepository(session=session)  # type: ignore[arg-type]

    await repo.add_rule(
        MappingRule(rule_id="custom-1", standard_line_id="BS.CASH", account_name="현금")
    )

    (added,) = session.added
    assert isinstance(added, AccountMappingRule)
    assert added.rule_id == "custom-1"
    assert added.standard_line_id == "BS.CASH"
    assert session.flushes == 1


async def test_list_rule_ids_returns_set() -> None:
    session = _DummySession(_DummyResult(["a", "b", "a"]))
    repo = SqlAlchemyMappingRulesRepository(session=session)  # type: ignore[arg-type]

    assert await repo.list_rule_ids() == {"a", "b"}


def _stored(**overrides: Any) -> SimpleNamespace:
    fact = make_fact("BS.CASH", "280000", account_name="현금", statement_category="BS")
    values = asdict(fact)
    values["period_kind"] = fact.period_kind.value
    values["scope"] = fact.scope.value
    values["updated_at"] = None
    values.update(overrides)
    return SimpleNamespace(**values)


async def test_upsert_creates_missing_fact() -> None:
    session = _DummySession(_DummyResult([]))
    repo = SqlAlchemyCuratedFactsRepository(session=session)  # type: ignore[arg-type]
    fact = make_fact("BS.CASH", "280000", account_name="현금", statement_category="BS")

    outcome = await repo.upsert_fact(fact)

    assert outcome is UpsertOutcome.CREATED
    (added,) = session.added
    assert isinstance(added, CuratedFinFact)
    assert added.fact_key == fact.fact_key
    assert added.scope == "CONSOLIDATED"
    assert session.flushes == 1


async def test_upsert_reports_unchanged_for_equal_values() -> None:
    # Numeric columns come back with the column scale.
    stored = _stored(amount=Decimal("280000.0000"))
    session = _DummySession(_DummyResult([stored]))
    repo = SqlAlchemyCuratedFactsRepository(session=session)  # type: ignore[arg-type]

    outcome = await repo.upsert_fact(
        make_fact("BS.CASH", "280000", account_name="현금", statement_category="BS")
    )

    assert outcome is UpsertOutcome.UNCHANGED
    assert stored.updated_at is None
    assert session.flushes == 0


async def test_upsert_updates_changed_columns() -> None:
    stored = _stored(amount=Decimal("250000"), standard_line_id=None)
    session = _DummySession(_DummyResult([stored]))
    repo = SqlAlchemyCuratedFactsRepository(session=session)  # type: ignore[arg-type]

    outcome = await repo.upsert_fact(
        make_fact("BS.CASH", "280000", account_name="현금", statement_category="BS")
    )

    assert outcome is UpsertOutcome.UPDATED
    assert stored.amount == Decimal("280000")
    assert stored.standard_line_id == "BS.CASH"
    assert stored.updated_at is not None
    assert session.added == []
    assert session.flushes == 1


async def test_list_mapped_facts_maps_rows() -> None:
    session = _DummySession(_DummyResult([_stored(amount=Decimal("280000.0000"))]))
    repo = SqlAlchemyCuratedFactsRepository(session=session)  # type: ignore[arg-type]

    (fact,) = await repo.list_mapped_facts(entity_id="entity-00126380", fiscal_years=[2024])

    assert fact.period_kind is PeriodKind.ANNUAL
    assert fact.scope is ConsolidationScope.CONSOLIDATED
    assert fact.amount == Decimal("280000")
    assert fact.standard_line_id == "BS.CASH"


async def test_list_mapped_facts_without_years_skips_query() -> None:
    session = _DummySession()
    repo = SqlAlchemyCuratedFactsRepository(session=session)  # type: ignore[arg-type]

    assert await repo.list_mapped_facts(entity_id="entity-00126380", fiscal_years=[]) == []
    assert session.statements == []
