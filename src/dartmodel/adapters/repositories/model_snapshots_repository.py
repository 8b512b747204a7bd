# src/dartmodel/adapters/repositories/model_snapshots_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the model snapshots repository.

Purpose:
    Store a snapshot header plus its exploded output lines, and read both
    back for reconstruction.

Layer:
    adapters/repositories

Notes:
    - Saving an existing snapshot id replaces the header and all its lines.
    - Check results are stored as JSON with Decimal values as strings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dartmodel.adapters.repositories.base_repository import BaseRepository
from dartmodel.domain.entities.model_snapshot import CheckResult, ModelOutputLine, SnapshotHeader
from dartmodel.domain.enums.dart import PeriodKind
from dartmodel.domain.enums.modeling import ModelCheckName, ModelStatementType, Provenance
from dartmodel.domain.interfaces.repositories.model_snapshots_repository import (
    ModelSnapshotsRepository as ModelSnapshotsRepositoryPort,
)
from dartmodel.infrastructure.database.models.modeling import ModelOutputLineRow, ModelSnapshotRow

__all__ = ["SqlAlchemyModelSnapshotsRepository"]


def _check_to_json(check: CheckResult) -> dict[str, Any]:
    return {
        "passed": check.passed,
        "max_error": str(check.max_error),
        "tolerance": str(check.tolerance),
    }


def _check_from_json(name: ModelCheckName, payload: Mapping[str, Any] | None) -> CheckResult:
    payload = payload or {}
    return CheckResult(
        name=name,
        passed=bool(payload.get("passed", False)),
        max_error=Decimal(str(payload.get("max_error", "0"))),
        tolerance=Decimal(str(payload.get("tolerance", "0"))),
    )


class SqlAlchemyModelSnapshotsRepository(
    BaseRepository[ModelSnapshotRow],
    ModelSnapshotsRepositoryPort,
):
    """SQLAlchemy-backed snapshot repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async session."""
        super().__init__(session)

    async def save(self, header: SnapshotHeader, lines: Sequence[ModelOutputLine]) -> int:
        """Persist the header and its lines.

        Args:
            header: Snapshot header.
            lines: Exploded output lines.

        Returns:
            int: Number of output lines written.
        """
        await self._session.execute(
            delete(ModelOutputLineRow).where(ModelOutputLineRow.snapshot_id == header.snapshot_id)
        )
        await self._session.merge(
            ModelSnapshotRow(
                snapshot_id=header.snapshot_id,
                entity_id=header.entity_id,
                base_year=header.base_year,
                historical_years=header.historical_years,
                forecast_years=header.forecast_years,
                engine_version=header.engine_version,
                snapshot_hash=header.snapshot_hash,
                source_report_refs=list(header.source_report_refs),
                checks={
                    ModelCheckName.BALANCE.value: _check_to_json(header.balance_check),
                    ModelCheckName.CASH_TIE_OUT.value: _check_to_json(header.cash_tie_out),
                },
                created_at=header.created_at,
            )
        )
        self._session.add_all(
            [
                ModelOutputLineRow(
                    snapshot_id=line.snapshot_id,
                    statement_type=line.statement.value,
                    standard_line_id=line.line_id,
                    period_index=line.period_index,
                    fiscal_year=line.fiscal_year,
                    fiscal_quarter=line.fiscal_quarter,
                    period_type=line.period_kind.value,
                    value=line.value,
                    unit=line.unit,
                    display_order=line.display_order,
                    is_historical=line.is_historical,
                    provenance=line.provenance.value,
                )
                for line in lines
            ]
        )
        await self._session.flush()
        return len(lines)

    async def get(
        self, snapshot_id: str
    ) -> tuple[SnapshotHeader, Sequence[ModelOutputLine]] | None:
        """Return the stored header and lines, or None when unknown."""
        header_row = await self.fetch_optional(
            select(ModelSnapshotRow).where(ModelSnapshotRow.snapshot_id == snapshot_id)
        )
        if header_row is None:
            return None

        result = await self._session.execute(
            select(ModelOutputLineRow)
            .where(ModelOutputLineRow.snapshot_id == snapshot_id)
            .order_by(
                ModelOutputLineRow.statement_type.asc(),
                ModelOutputLineRow.display_order.asc(),
                ModelOutputLineRow.period_index.asc(),
            )
        )
        line_rows = list(result.scalars().all())
        return self._header_to_domain(header_row), [self._line_to_domain(r) for r in line_rows]

    @staticmethod
    def _header_to_domain(row: Any) -> SnapshotHeader:
        checks = row.checks or {}
        return SnapshotHeader(
            snapshot_id=row.snapshot_id,
            entity_id=row.entity_id,
            base_year=int(row.base_year),
            historical_years=int(row.historical_years),
            forecast_years=int(row.forecast_years),
            engine_version=row.engine_version,
            snapshot_hash=row.snapshot_hash,
            created_at=row.created_at,
            balance_check=_check_from_json(
                ModelCheckName.BALANCE, checks.get(ModelCheckName.BALANCE.value)
            ),
            cash_tie_out=_check_from_json(
                ModelCheckName.CASH_TIE_OUT, checks.get(ModelCheckName.CASH_TIE_OUT.value)
            ),
            source_report_refs=tuple(row.source_report_refs or ()),
        )

    @staticmethod
    def _line_to_domain(row: Any) -> ModelOutputLine:
        return ModelOutputLine(
            snapshot_id=row.snapshot_id,
            statement=ModelStatementType(row.statement_type),
            line_id=row.standard_line_id,
            period_index=int(row.period_index),
            fiscal_year=int(row.fiscal_year),
            fiscal_quarter=row.fiscal_quarter,
            period_kind=PeriodKind(row.period_type),
            value=Decimal(str(row.value)),
            unit=row.unit,
            display_order=int(row.display_order),
            is_historical=bool(row.is_historical),
            provenance=Provenance(row.provenance),
        )
