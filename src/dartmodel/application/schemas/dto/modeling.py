# src/dartmodel/application/schemas/dto/modeling.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application DTOs for model snapshots.

Layer:
    application/schemas/dto

Notes:
    - Decimal values are represented as strings to avoid precision loss.
    - Line values are keyed by period index; missing indices mean "no value".
"""

from __future__ import annotations

from datetime import datetime

from dartmodel.application.schemas.dto.base import BaseDTO
from dartmodel.domain.entities.model_snapshot import CheckResult, ModelSnapshot, Statement
from dartmodel.domain.enums.dart import PeriodKind
from dartmodel.domain.enums.modeling import ModelStatementType, Provenance


class PeriodDTO(BaseDTO):
    """One timeline period."""

    index: int
    fiscal_year: int
    fiscal_quarter: int | None
    period_kind: PeriodKind
    is_historical: bool
    label: str


class StatementLineDTO(BaseDTO):
    """One statement line with sparse values."""

    line_id: str
    display_name: str
    unit: str
    display_order: int
    provenance: Provenance
    values: dict[int, str]


class StatementDTO(BaseDTO):
    """Ordered statement lines."""

    statement: ModelStatementType
    lines: list[StatementLineDTO]


class CheckResultDTO(BaseDTO):
    """Integrity check result."""

    name: str
    passed: bool
    max_error: str
    tolerance: str


class ModelSnapshotDTO(BaseDTO):
    """Full snapshot view."""

    snapshot_id: str
    entity_id: str
    base_year: int
    periods: list[PeriodDTO]
    statements: list[StatementDTO]
    balance_check: CheckResultDTO
    cash_tie_out: CheckResultDTO
    is_valid: bool
    created_at: datetime
    engine_version: str
    snapshot_hash: str
    source_report_refs: list[str]


class SaveSnapshotResultDTO(BaseDTO):
    """Outcome of persisting a snapshot."""

    snapshot_id: str
    success: bool
    lines_created: int = 0
    lines_skipped: int = 0
    error: str | None = None


class BuildSnapshotResultDTO(BaseDTO):
    """Outcome of building (and optionally saving) a snapshot."""

    snapshot: ModelSnapshotDTO
    saved: SaveSnapshotResultDTO | None = None


def _check_to_dto(check: CheckResult) -> CheckResultDTO:
    return CheckResultDTO(
        name=check.name.value,
        passed=check.passed,
        max_error=str(check.max_error),
        tolerance=str(check.tolerance),
    )


def _statement_to_dto(statement: Statement) -> StatementDTO:
    return StatementDTO(
        statement=statement.statement,
        lines=[
            StatementLineDTO(
                line_id=line.line_id,
                display_name=line.display_name,
                unit=line.unit,
                display_order=line.display_order,
                provenance=line.provenance,
                values={index: str(value) for index, value in sorted(line.values.items())},
            )
            for line in statement.lines
        ],
    )


def snapshot_to_dto(snapshot: ModelSnapshot) -> ModelSnapshotDTO:
    """Map a domain snapshot to its DTO."""
    return ModelSnapshotDTO(
        snapshot_id=snapshot.snapshot_id,
        entity_id=snapshot.entity_id,
        base_year=snapshot.timeline.base_year,
        periods=[
            PeriodDTO(
                index=p.index,
                fiscal_year=p.fiscal_year,
                fiscal_quarter=p.fiscal_quarter,
                period_kind=p.period_kind,
                is_historical=p.is_historical,
                label=p.label,
            )
            for p in snapshot.timeline.periods
        ],
        statements=[_statement_to_dto(s) for s in snapshot.statements],
        balance_check=_check_to_dto(snapshot.checks.balance_check),
        cash_tie_out=_check_to_dto(snapshot.checks.cash_tie_out),
        is_valid=snapshot.checks.is_valid,
        created_at=snapshot.metadata.created_at,
        engine_version=snapshot.metadata.engine_version,
        snapshot_hash=snapshot.metadata.snapshot_hash,
        source_report_refs=list(snapshot.metadata.source_report_refs),
    )
