# tests/unit/application/use_cases/curation/test_run_transform.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for RunTransformUseCase.

Covers:
    - Happy path statistics and entity registration.
    - Idempotent re-run (all rows unchanged).
    - Skipped rows, parse errors and unmapped rows.
    - Per-row failures that do not abort the job.
    - Rows sharing a fact key collapse to the last one.
    - Job-level failures and timeouts.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from decimal import Decimal

from dartmodel.application.services.account_mapper import AccountMapper, MappingRuleCache
from dartmodel.application.services.coverage_service import CoverageService
from dartmodel.application.use_cases.curation.run_transform import (
    RunTransformUseCase,
    TransformJobRequest,
)
from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.services.default_mapping_rules import DEFAULT_MAPPING_RULES
from dartmodel.infrastructure.logging.logger import get_job_id
from tests.fixtures.curation_fakes import (
    COMPANY_CODE,
    ENTITY_ID,
    FakeUnitOfWork,
    InMemoryCuratedFactsRepository,
    InMemoryModelEntitiesRepository,
    InMemoryRawRowsRepository,
    make_raw_row,
    make_uow,
    static_rule_loader,
)

REQ = TransformJobRequest(company_code=COMPANY_CODE, fiscal_year="2024")


def _rows() -> list[RawFilingRow]:
    return [
        make_raw_row(account_name="매출액", current_amount="1,000,000", ordinal="1"),
        make_raw_row(
            account_name="자산총계",
            account_source_id="ifrs-full_Assets",
            statement_category="BS",
            current_amount="2,200,000",
            ordinal="2",
        ),
        make_raw_row(account_name="잡이익", account_source_id=None, current_amount="(300)"),
        make_raw_row(account_name="주석참조", account_source_id=None, current_amount="-"),
        make_raw_row(account_name="오류값", account_source_id=None, current_amount="N/A"),
        # Other scopes and reports are outside the job.
        make_raw_row(account_name="매출액", consolidation_flag="OFS"),
    ]


def _use_case(uow: FakeUnitOfWork, **kwargs: object) -> RunTransformUseCase:
    mapper = AccountMapper(MappingRuleCache(static_rule_loader(DEFAULT_MAPPING_RULES)))
    return RunTransformUseCase(
        uow=uow,
        mapper=mapper,
        coverage_service=CoverageService(uow=uow, mapper=mapper),
        **kwargs,  # type: ignore[arg-type]
    )


async def test_transform_curates_rows_and_reports_statistics() -> None:
    facts = InMemoryCuratedFactsRepository()
    entities = InMemoryModelEntitiesRepository()
    uow = make_uow(raw_rows=InMemoryRawRowsRepository(_rows()), facts=facts, entities=entities)

    result = await _use_case(uow).execute(REQ)

    assert result.success is True
    assert result.rows_processed == 5
    assert result.rows_skipped == 1
    assert result.rows_created == 4
    assert result.rows_unchanged == 0
    assert result.parse_errors == 1
    assert result.unmapped_rows == 2
    assert result.errors == []
    assert uow.commits == 1
    assert len(facts.facts) == 4
    entity = entities.entities[ENTITY_ID]
    assert entity.display_name == "삼성전자"
    # Coverage spans every raw row of the year, both scopes included.
    assert Decimal(result.coverage_percent) == Decimal("50")


async def test_second_run_reports_rows_unchanged() -> None:
    uow = make_uow(raw_rows=InMemoryRawRowsRepository(_rows()))
    use_case = _use_case(uow)

    await use_case.execute(REQ)
    second = await use_case.execute(REQ)

    assert second.success is True
    assert second.rows_created == 0
    assert second.rows_unchanged == 4


async def test_changed_amount_counts_as_created() -> None:
    raw = InMemoryRawRowsRepository([make_raw_row(current_amount="100")])
    uow = make_uow(raw_rows=raw)
    use_case = _use_case(uow)
    await use_case.execute(REQ)

    raw.rows = [make_raw_row(current_amount="200")]
    result = await use_case.execute(REQ)

    assert result.rows_created == 1
    assert result.rows_unchanged == 0


async def test_row_failure_is_recorded_and_job_continues() -> None:
    facts = InMemoryCuratedFactsRepository()
    facts.fail_on = {"자산총계"}
    uow = make_uow(raw_rows=InMemoryRawRowsRepository(_rows()), facts=facts)

    result = await _use_case(uow).execute(REQ)

    assert result.success is True
    assert result.errors == ["자산총계: write failed"]
    assert result.rows_created == 3
    assert uow.commits == 1
    assert uow.savepoints == 4
    assert uow.savepoint_rollbacks == 1
    assert all(f.account_name != "자산총계" for f in facts.facts.values())


async def test_duplicate_fact_key_keeps_last_row_and_reruns_unchanged() -> None:
    rows = [
        make_raw_row(
            account_name="기타",
            account_source_id=None,
            statement_category="CF",
            current_amount="100",
            ordinal="1",
        ),
        make_raw_row(
            account_name="기타",
            account_source_id=None,
            statement_category="CF",
            current_amount="200",
            ordinal="2",
        ),
    ]
    facts = InMemoryCuratedFactsRepository()
    uow = make_uow(raw_rows=InMemoryRawRowsRepository(rows), facts=facts)
    use_case = _use_case(uow)

    first = await use_case.execute(REQ)
    second = await use_case.execute(REQ)

    assert first.rows_created == 1
    assert first.rows_superseded == 1
    assert second.success is True
    assert second.rows_created == 0
    assert second.rows_unchanged == 1
    assert second.rows_superseded == 1
    (stored,) = facts.facts.values()
    assert stored.amount == Decimal("200")


async def test_no_rows_is_a_successful_empty_job() -> None:
    uow = make_uow()

    result = await _use_case(uow).execute(REQ)

    assert result.success is True
    assert result.rows_processed == 0
    assert result.coverage_percent == "0"


async def test_repository_failure_fails_the_job() -> None:
    class _BrokenRows:
        async def list_rows(self, **_: object) -> Sequence[RawFilingRow]:
            raise RuntimeError("connection refused")

    uow = make_uow(raw_rows=_BrokenRows())  # type: ignore[arg-type]

    result = await _use_case(uow).execute(REQ)

    assert result.success is False
    assert result.errors == ["connection refused"]
    assert uow.rollbacks == 1
    assert get_job_id() is None


async def test_timeout_fails_the_job() -> None:
    class _SlowRows:
        async def list_rows(self, **_: object) -> Sequence[RawFilingRow]:
            await asyncio.sleep(5)
            return []

    uow = make_uow(raw_rows=_SlowRows())  # type: ignore[arg-type]

    result = await _use_case(uow, timeout_seconds=0.01).execute(REQ)

    assert result.success is False
    assert result.errors == ["Transform timed out after 0.01s"]


def test_job_id_is_deterministic() -> None:
    assert REQ.job_id == TransformJobRequest(COMPANY_CODE, "2024").job_id
