# src/dartmodel/domain/entities/model_snapshot.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model snapshot entities.

Purpose:
    Immutable record of a built three-statement model: the statements and
    their lines, the integrity check results and build metadata, plus the
    header/line shapes used to store a snapshot.

Layer:
    domain/entities

Notes:
    - Snapshots are never mutated. Rebuilding a model produces a new
      snapshot with a new id.
    - Line values are sparse: a missing period index means "no value", which
      is distinct from zero.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from dartmodel.domain.entities.timeline import ModelTimeline
from dartmodel.domain.enums.dart import PeriodKind
from dartmodel.domain.enums.modeling import ModelCheckName, ModelStatementType, Provenance

__all__ = [
    "StatementLine",
    "Statement",
    "CheckResult",
    "ModelChecks",
    "SnapshotMetadata",
    "ModelSnapshot",
    "ModelOutputLine",
    "SnapshotHeader",
]


@dataclass(frozen=True, slots=True)
class StatementLine:
    """One line of a model statement.

    Attributes:
        line_id: Standard line id (``IS.REVENUE``).
        display_name: Human-readable name.
        statement: Statement the line belongs to.
        values: Sparse mapping of period index to value.
        unit: Unit code (``KRW``).
        display_order: Zero-based order within the statement.
        provenance: Origin of the values.
    """

    line_id: str
    display_name: str
    statement: ModelStatementType
    values: Mapping[int, Decimal]
    unit: str
    display_order: int
    provenance: Provenance = Provenance.SOURCE


@dataclass(frozen=True, slots=True)
class Statement:
    """Ordered lines of one statement."""

    statement: ModelStatementType
    lines: tuple[StatementLine, ...]

    def line(self, line_id: str) -> StatementLine | None:
        """Return the line with ``line_id``, or None."""
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of one integrity check across all periods.

    Attributes:
        name: Check name.
        passed: True when every period is within tolerance.
        max_error: Largest absolute difference observed across periods.
        tolerance: Absolute tolerance applied.
    """

    name: ModelCheckName
    passed: bool
    max_error: Decimal
    tolerance: Decimal


@dataclass(frozen=True, slots=True)
class ModelChecks:
    """Integrity checks evaluated on a snapshot."""

    balance_check: CheckResult
    cash_tie_out: CheckResult

    @property
    def is_valid(self) -> bool:
        """Return True only when both checks passed."""
        return self.balance_check.passed and self.cash_tie_out.passed


@dataclass(frozen=True, slots=True)
class SnapshotMetadata:
    """Build metadata of a snapshot.

    Attributes:
        created_at: Build timestamp (UTC).
        engine_version: Model engine version string.
        source_report_refs: Filing receipt numbers that fed the snapshot.
        snapshot_hash: Deterministic configuration hash.
    """

    created_at: datetime
    engine_version: str
    snapshot_hash: str
    source_report_refs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ModelSnapshot:
    """Immutable three-statement model snapshot."""

    snapshot_id: str
    entity_id: str
    timeline: ModelTimeline
    income_statement: Statement
    balance_sheet: Statement
    cash_flow: Statement
    checks: ModelChecks
    metadata: SnapshotMetadata

    @property
    def statements(self) -> tuple[Statement, Statement, Statement]:
        """Return the statements in IS, BS, CF order."""
        return (self.income_statement, self.balance_sheet, self.cash_flow)


@dataclass(frozen=True, slots=True)
class ModelOutputLine:
    """One stored value of a snapshot line for one period."""

    snapshot_id: str
    statement: ModelStatementType
    line_id: str
    period_index: int
    fiscal_year: int
    fiscal_quarter: int | None
    period_kind: PeriodKind
    value: Decimal
    unit: str
    display_order: int
    is_historical: bool
    provenance: Provenance


@dataclass(frozen=True, slots=True)
class SnapshotHeader:
    """Stored snapshot header.

    Holds everything needed to rebuild the timeline and report the checks
    without re-running the model.
    """

    snapshot_id: str
    entity_id: str
    base_year: int
    historical_years: int
    forecast_years: int
    engine_version: str
    snapshot_hash: str
    created_at: datetime
    balance_check: CheckResult
    cash_tie_out: CheckResult
    source_report_refs: tuple[str, ...] = field(default_factory=tuple)
