# tests/unit/application/use_cases/modeling/test_model_snapshot_use_cases.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for building, saving and loading model snapshots.

Covers:
    - Unknown entity and empty history errors.
    - Happy-path build with carry-forward and saving.
    - Save failures reported without raising.
    - Loading a stored snapshot and unknown ids.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dartmodel.application.services.historical_loader import HistoricalLoader
from dartmodel.application.use_cases.modeling.build_model_snapshot import (
    BuildModelSnapshotUseCase,
    BuildSnapshotRequest,
)
from dartmodel.application.use_cases.modeling.get_model_snapshot import GetModelSnapshotUseCase
from dartmodel.application.use_cases.modeling.save_model_snapshot import SaveModelSnapshotUseCase
from dartmodel.domain.entities.model_entity import ModelEntity
from dartmodel.domain.exceptions.modeling import (
    EntityNotFound,
    NoCuratedFactsError,
    SnapshotNotFound,
    TimelineConfigurationError,
)
from dartmodel.domain.services.model_builder import ModelBuilder
from tests.fixtures.curation_fakes import (
    COMPANY_CODE,
    ENTITY_ID,
    FakeUnitOfWork,
    InMemoryCuratedFactsRepository,
    InMemoryModelEntitiesRepository,
    InMemoryModelSnapshotsRepository,
    make_fact,
    make_uow,
)

NOW = datetime(2025, 3, 1, tzinfo=UTC)


def _facts() -> InMemoryCuratedFactsRepository:
    return InMemoryCuratedFactsRepository(
        [
            make_fact("BS.TOTAL_ASSETS", "2200000", account_name="자산총계", statement_category="BS"),
            make_fact("BS.TOTAL_LIABILITIES", "1300000", account_name="부채총계", statement_category="BS"),
            make_fact("BS.TOTAL_EQUITY", "900000", account_name="자본총계", statement_category="BS"),
            make_fact("BS.CASH", "250000", fiscal_year=2023, account_name="현금", statement_category="BS"),
            make_fact("BS.CASH", "280000", account_name="현금", statement_category="BS"),
        ]
    )


def _wiring(
    facts: InMemoryCuratedFactsRepository | None = None,
    with_entity: bool = True,
) -> tuple[FakeUnitOfWork, InMemoryModelSnapshotsRepository, BuildModelSnapshotUseCase]:
    entities = InMemoryModelEntitiesRepository(
        [ModelEntity(entity_id=ENTITY_ID, company_code=COMPANY_CODE, display_name="삼성전자")]
        if with_entity
        else []
    )
    snapshots = InMemoryModelSnapshotsRepository()
    uow = make_uow(facts=facts or _facts(), entities=entities, snapshots=snapshots)
    use_case = BuildModelSnapshotUseCase(
        uow=uow,
        loader=HistoricalLoader(uow=uow),
        builder=ModelBuilder(),
        saver=SaveModelSnapshotUseCase(uow=uow),
        clock=lambda: NOW,
    )
    return uow, snapshots, use_case


async def test_build_and_save_snapshot() -> None:
    uow, snapshots, use_case = _wiring()

    result = await use_case.execute(
        BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024, historical_years=2, forecast_years=3)
    )

    dto = result.snapshot
    assert dto.entity_id == ENTITY_ID
    assert [p.label for p in dto.periods] == ["FY2023", "FY2024", "FY2025E", "FY2026E", "FY2027E"]
    assert dto.balance_check.passed is True
    assert dto.cash_tie_out.passed is True
    bs = next(s for s in dto.statements if s.statement.value == "BS")
    cash = next(line for line in bs.lines if line.line_id == "BS.CASH")
    assert cash.values == {0: "250000", 1: "280000", 2: "280000", 3: "280000", 4: "280000"}
    assert result.saved is not None and result.saved.success is True
    assert result.saved.lines_created == len(snapshots.snapshots[dto.snapshot_id][1])
    assert uow.commits == 1


async def test_build_without_save() -> None:
    _, snapshots, use_case = _wiring()

    result = await use_case.execute(
        BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024, historical_years=1, save=False)
    )

    assert result.saved is None
    assert snapshots.snapshots == {}
    assert result.snapshot.balance_check.passed is True
    assert result.snapshot.balance_check.max_error == "0"


async def test_unknown_entity_raises() -> None:
    _, _, use_case = _wiring(with_entity=False)

    with pytest.raises(EntityNotFound):
        await use_case.execute(BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024))


async def test_no_history_raises() -> None:
    _, _, use_case = _wiring()

    with pytest.raises(NoCuratedFactsError):
        await use_case.execute(
            BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2010, historical_years=2)
        )


async def test_invalid_timeline_raises() -> None:
    _, _, use_case = _wiring()

    with pytest.raises(TimelineConfigurationError):
        await use_case.execute(
            BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024, historical_years=0)
        )


async def test_save_failure_is_reported() -> None:
    uow, snapshots, use_case = _wiring()
    snapshot = await use_case.build_snapshot(
        BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024, historical_years=1)
    )
    snapshots.fail = True

    result = await SaveModelSnapshotUseCase(uow=uow).execute(snapshot)

    assert result.success is False
    assert result.snapshot_id == snapshot.snapshot_id
    assert result.error == "database unavailable"
    assert uow.rollbacks == 1


async def test_get_returns_stored_snapshot() -> None:
    uow, _, use_case = _wiring()
    built = await use_case.execute(
        BuildSnapshotRequest(entity_id=ENTITY_ID, base_year=2024, historical_years=2, forecast_years=1)
    )

    loaded = await GetModelSnapshotUseCase(uow=uow).execute(built.snapshot.snapshot_id)

    assert loaded == built.snapshot


async def test_get_unknown_snapshot_raises() -> None:
    with pytest.raises(SnapshotNotFound):
        await GetModelSnapshotUseCase(uow=make_uow()).load("snapshot-0-deadbeef")
