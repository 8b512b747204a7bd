# src/dartmodel/application/use_cases/modeling/save_model_snapshot.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: persist a model snapshot.

Purpose:
    Write the snapshot header (create-or-replace) and one output line per
    (statement line, period) value.

Layer:
    application/use_cases/modeling

Notes:
    - Values whose period index has no timeline entry are skipped and logged.
    - Persistence failures do not raise: the result carries
      ``success=False``, the error text and the snapshot id.
"""

from __future__ import annotations

import logging

from dartmodel.application.schemas.dto.modeling import SaveSnapshotResultDTO
from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.model_snapshot import ModelSnapshot
from dartmodel.domain.interfaces.repositories.model_snapshots_repository import (
    ModelSnapshotsRepository,
)
from dartmodel.domain.services.model_builder import explode_output_lines, snapshot_header

logger = logging.getLogger(__name__)

__all__ = ["SaveModelSnapshotUseCase"]


class SaveModelSnapshotUseCase:
    """Persist a snapshot header and its output lines."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        snapshots_repo_type: type[ModelSnapshotsRepository] = ModelSnapshotsRepository,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work exposing the snapshots repository.
            snapshots_repo_type: Repository key for snapshots.
        """
        self._uow = uow
        self._snapshots_repo_type = snapshots_repo_type

    async def execute(self, snapshot: ModelSnapshot) -> SaveSnapshotResultDTO:
        """Save ``snapshot``.

        Args:
            snapshot: Snapshot to persist.

        Returns:
            SaveSnapshotResultDTO: Lines written and success flag.
        """
        lines, skipped = explode_output_lines(snapshot)
        for item in skipped:
            logger.warning(
                "modeling.snapshot.period_missing",
                extra={
                    "extra": {
                        "snapshot_id": snapshot.snapshot_id,
                        "line_id": item.line_id,
                        "period_index": item.period_index,
                    }
                },
            )

        try:
            async with self._uow as tx:
                repo: ModelSnapshotsRepository = tx.get_repository(self._snapshots_repo_type)
                written = await repo.save(snapshot_header(snapshot), lines)
                await tx.commit()
        except Exception as exc:
            logger.exception(
                "modeling.snapshot.save_failed",
                extra={"extra": {"snapshot_id": snapshot.snapshot_id}},
            )
            return SaveSnapshotResultDTO(
                snapshot_id=snapshot.snapshot_id,
                success=False,
                lines_skipped=len(skipped),
                error=str(exc) or exc.__class__.__name__,
            )

        logger.info(
            "modeling.snapshot.saved",
            extra={"extra": {"snapshot_id": snapshot.snapshot_id, "lines_created": written}},
        )
        return SaveSnapshotResultDTO(
            snapshot_id=snapshot.snapshot_id,
            success=True,
            lines_created=written,
            lines_skipped=len(skipped),
        )
