# src/dartmodel/domain/interfaces/repositories/model_snapshots_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model snapshots repository interface.

Layer:
    domain/interfaces/repositories

Notes:
    - ``save`` is create-or-replace on the snapshot id: an existing header is
      overwritten and its output lines are replaced.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from dartmodel.domain.entities.model_snapshot import ModelOutputLine, SnapshotHeader

__all__ = ["ModelSnapshotsRepository"]


class ModelSnapshotsRepository(Protocol):
    """Repository interface for model snapshots."""

    async def save(self, header: SnapshotHeader, lines: Sequence[ModelOutputLine]) -> int:
        """Persist a snapshot header and its output lines.

        Args:
            header: Snapshot header.
            lines: Exploded output lines.

        Returns:
            int: Number of output lines written.
        """
        ...

    async def get(
        self, snapshot_id: str
    ) -> tuple[SnapshotHeader, Sequence[ModelOutputLine]] | None:
        """Return the stored header and lines, or None when unknown."""
        ...
