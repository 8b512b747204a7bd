# src/dartmodel/application/use_cases/modeling/build_model_snapshot.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: build a three-statement model snapshot.

Purpose:
    Orchestrate snapshot construction for a model entity:

        1. Build the timeline (fails fast on invalid configuration).
        2. Check that the entity exists.
        3. Load historical facts; an empty history is an error.
        4. Build the snapshot and record the integrity checks.
        5. Optionally persist it.

Layer:
    application/use_cases/modeling
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from dartmodel.application.schemas.dto.modeling import BuildSnapshotResultDTO, snapshot_to_dto
from dartmodel.application.services.historical_loader import HistoricalLoader
from dartmodel.application.uow import UnitOfWork
from dartmodel.application.use_cases.modeling.save_model_snapshot import (
    SaveModelSnapshotUseCase,
)
from dartmodel.domain.entities.model_snapshot import ModelSnapshot
from dartmodel.domain.exceptions.modeling import EntityNotFound, NoCuratedFactsError
from dartmodel.domain.interfaces.repositories.model_entities_repository import (
    ModelEntitiesRepository,
)
from dartmodel.domain.services.model_builder import ModelBuilder
from dartmodel.domain.services.timeline_builder import build_timeline
from dartmodel.infrastructure.logging.logger import clear_job_context, set_job_context
from dartmodel.infrastructure.observability.metrics_curation import record_model_check

logger = logging.getLogger(__name__)

__all__ = ["BuildSnapshotRequest", "BuildModelSnapshotUseCase"]


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class BuildSnapshotRequest:
    """Request parameters for building a snapshot."""

    entity_id: str
    base_year: int
    historical_years: int = 5
    forecast_years: int = 5
    save: bool = True


class BuildModelSnapshotUseCase:
    """Build (and optionally save) a model snapshot.

    Args:
        uow: Unit of work exposing the model entities repository.
        loader: Historical facts loader.
        builder: Domain model builder.
        saver: Snapshot persistence use case; required when ``save`` is requested.
        clock: Source of the build timestamp.
    """

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        loader: HistoricalLoader,
        builder: ModelBuilder,
        saver: SaveModelSnapshotUseCase | None = None,
        clock: Callable[[], datetime] = _utcnow,
        entities_repo_type: type[ModelEntitiesRepository] = ModelEntitiesRepository,
    ) -> None:
        """Initialize the use case with its dependencies."""
        self._uow = uow
        self._loader = loader
        self._builder = builder
        self._saver = saver
        self._clock = clock
        self._entities_repo_type = entities_repo_type

    async def build_snapshot(self, req: BuildSnapshotRequest) -> ModelSnapshot:
        """Build the snapshot without persisting it.

        Raises:
            TimelineConfigurationError: If the timeline configuration is invalid.
            EntityNotFound: If the entity does not exist.
            NoCuratedFactsError: If no historical facts were found.
        """
        timeline = build_timeline(req.base_year, req.historical_years, req.forecast_years)

        async with self._uow as tx:
            repo: ModelEntitiesRepository = tx.get_repository(self._entities_repo_type)
            entity = await repo.get(req.entity_id)
        if entity is None:
            raise EntityNotFound(
                "Model entity not found.",
                details={"entity_id": req.entity_id},
            )

        facts = await self._loader.load_facts(req.entity_id, timeline.historical_periods())
        if facts.is_empty:
            raise NoCuratedFactsError(
                "No mapped annual facts found for the historical window.",
                details={
                    "entity_id": req.entity_id,
                    "base_year": req.base_year,
                    "historical_years": req.historical_years,
                },
            )

        snapshot = self._builder.build(
            entity_id=req.entity_id,
            timeline=timeline,
            historical_values=facts.values,
            created_at=self._clock(),
            source_report_refs=facts.source_report_refs,
        )

        for check in (snapshot.checks.balance_check, snapshot.checks.cash_tie_out):
            record_model_check(check.name.value, check.passed)
        log = logger.info if snapshot.checks.is_valid else logger.warning
        log(
            "modeling.snapshot.built",
            extra={
                "extra": {
                    "snapshot_id": snapshot.snapshot_id,
                    "entity_id": req.entity_id,
                    "balance_passed": snapshot.checks.balance_check.passed,
                    "balance_max_error": str(snapshot.checks.balance_check.max_error),
                    "cash_tie_out_passed": snapshot.checks.cash_tie_out.passed,
                    "cash_tie_out_max_error": str(snapshot.checks.cash_tie_out.max_error),
                }
            },
        )
        return snapshot

    async def execute(self, req: BuildSnapshotRequest) -> BuildSnapshotResultDTO:
        """Build the snapshot and save it when requested.

        Returns:
            BuildSnapshotResultDTO: The snapshot view and the save outcome.
        """
        set_job_context(job_id=f"model:{req.entity_id}:{req.base_year}")
        try:
            snapshot = await self.build_snapshot(req)
            saved = None
            if req.save:
                if self._saver is None:
                    raise RuntimeError("Snapshot saving requested but no saver is configured.")
                saved = await self._saver.execute(snapshot)
            return BuildSnapshotResultDTO(snapshot=snapshot_to_dto(snapshot), saved=saved)
        finally:
            clear_job_context()
