# src/dartmodel/application/use_cases/modeling/get_model_snapshot.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: load a stored model snapshot."""

from __future__ import annotations

from dartmodel.application.schemas.dto.modeling import ModelSnapshotDTO, snapshot_to_dto
from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.model_snapshot import ModelSnapshot
from dartmodel.domain.exceptions.modeling import SnapshotNotFound
from dartmodel.domain.interfaces.repositories.model_snapshots_repository import (
    ModelSnapshotsRepository,
)
from dartmodel.domain.services.model_builder import restore_snapshot

__all__ = ["GetModelSnapshotUseCase"]


class GetModelSnapshotUseCase:
    """Rebuild a snapshot from its stored header and output lines."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        snapshots_repo_type: type[ModelSnapshotsRepository] = ModelSnapshotsRepository,
    ) -> None:
        """Initialize the use case."""
        self._uow = uow
        self._snapshots_repo_type = snapshots_repo_type

    async def load(self, snapshot_id: str) -> ModelSnapshot:
        """Return the stored snapshot.

        Raises:
            SnapshotNotFound: If the id is unknown.
        """
        async with self._uow as tx:
            repo: ModelSnapshotsRepository = tx.get_repository(self._snapshots_repo_type)
            stored = await repo.get(snapshot_id)
        if stored is None:
            raise SnapshotNotFound(
                "Model snapshot not found.",
                details={"snapshot_id": snapshot_id},
            )
        header, lines = stored
        return restore_snapshot(header, lines)

    async def execute(self, snapshot_id: str) -> ModelSnapshotDTO:
        """Return the stored snapshot as a DTO."""
        return snapshot_to_dto(await self.load(snapshot_id))
