# src/dartmodel/domain/services/model_builder.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Three-statement model builder (domain kernel).

Purpose:
    Assemble an immutable ModelSnapshot from a timeline and historical line
    values: populate the fixed chart of accounts, project forecasts, run the
    integrity checks and stamp a deterministic configuration hash.

Layer:
    domain/services

Notes:
    - Pure domain logic:
        * No logging.
        * No persistence.
    - Per line, periods are walked in index order through two states:
      HISTORICAL (copy the fact, never fabricate a value) then FORECAST
      (carry the last present historical value forward, else leave unset).
    - Storage explosion of a snapshot into output lines also lives here so
      that the skip rule for unknown period indices is testable without I/O.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from dartmodel.domain.entities.model_snapshot import (
    ModelChecks,
    ModelOutputLine,
    ModelSnapshot,
    SnapshotHeader,
    SnapshotMetadata,
    Statement,
    StatementLine,
)
from dartmodel.domain.entities.timeline import ModelTimeline
from dartmodel.domain.enums.modeling import ModelStatementType, Provenance
from dartmodel.domain.services.chart_of_accounts import STATEMENT_LINES, line_id
from dartmodel.domain.services.model_checks import DEFAULT_CHECK_TOLERANCE, run_model_checks
from dartmodel.domain.services.timeline_builder import build_timeline

__all__ = [
    "ModelBuilderConfig",
    "ModelBuilder",
    "SkippedOutputValue",
    "compute_snapshot_hash",
    "make_snapshot_id",
    "explode_output_lines",
    "snapshot_header",
    "restore_snapshot",
]


@dataclass(frozen=True, slots=True)
class ModelBuilderConfig:
    """Configuration for the model builder.

    Attributes:
        engine_version: Version string stamped on every snapshot.
        unit: Unit code of every line.
        check_tolerance: Absolute tolerance of the integrity checks.
    """

    engine_version: str = "0.1.0"
    unit: str = "KRW"
    check_tolerance: Decimal = DEFAULT_CHECK_TOLERANCE


@dataclass(frozen=True, slots=True)
class SkippedOutputValue:
    """A line value that could not be exploded because its period is unknown."""

    line_id: str
    period_index: int


def compute_snapshot_hash(
    entity_id: str,
    base_year: int,
    historical_years: int,
    forecast_years: int,
    historical_line_ids: Iterable[str],
) -> str:
    """Return the sha256 hex digest of the snapshot configuration.

    Only the configuration and the set of line ids that carried historical
    data are hashed, not the values themselves.
    """
    payload = {
        "entity_id": entity_id,
        "base_year": base_year,
        "historical_years": historical_years,
        "forecast_years": forecast_years,
        "data_hash": ",".join(sorted(set(historical_line_ids))),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def make_snapshot_id(created_at: datetime, snapshot_hash: str) -> str:
    """Return ``snapshot-{epoch_ms}-{hash[:8]}``."""
    millis = int(created_at.timestamp() * 1000)
    return f"snapshot-{millis}-{snapshot_hash[:8]}"


class ModelBuilder:
    """Pure builder of three-statement model snapshots."""

    def __init__(self, config: ModelBuilderConfig | None = None) -> None:
        """Initialize the builder.

        Args:
            config: Optional builder configuration. Defaults are used when omitted.
        """
        self._config = config or ModelBuilderConfig()

    @property
    def config(self) -> ModelBuilderConfig:
        """Return the builder configuration."""
        return self._config

    def build(
        self,
        entity_id: str,
        timeline: ModelTimeline,
        historical_values: Mapping[str, Mapping[int, Decimal]],
        created_at: datetime,
        source_report_refs: Iterable[str] = (),
    ) -> ModelSnapshot:
        """Build a snapshot.

        Args:
            entity_id: Model entity id.
            timeline: Model timeline.
            historical_values: Line id to period index to value, historical
                periods only.
            created_at: Build timestamp (UTC).
            source_report_refs: Filing references that fed the values.

        Returns:
            ModelSnapshot: The immutable snapshot.
        """
        statements = {
            statement: self._build_statement(statement, timeline, historical_values)
            for statement in (ModelStatementType.IS, ModelStatementType.BS, ModelStatementType.CF)
        }

        all_values: dict[str, Mapping[int, Decimal]] = {}
        for statement in statements.values():
            for line in statement.lines:
                all_values[line.line_id] = line.values
        checks = run_model_checks(all_values, timeline, self._config.check_tolerance)

        historical_ids = [lid for lid, series in historical_values.items() if series]
        snapshot_hash = compute_snapshot_hash(
            entity_id,
            timeline.base_year,
            timeline.historical_count,
            timeline.forecast_count,
            historical_ids,
        )

        return ModelSnapshot(
            snapshot_id=make_snapshot_id(created_at, snapshot_hash),
            entity_id=entity_id,
            timeline=timeline,
            income_statement=statements[ModelStatementType.IS],
            balance_sheet=statements[ModelStatementType.BS],
            cash_flow=statements[ModelStatementType.CF],
            checks=checks,
            metadata=SnapshotMetadata(
                created_at=created_at,
                engine_version=self._config.engine_version,
                snapshot_hash=snapshot_hash,
                source_report_refs=tuple(sorted(set(source_report_refs))),
            ),
        )

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    def _build_statement(
        self,
        statement: ModelStatementType,
        timeline: ModelTimeline,
        historical_values: Mapping[str, Mapping[int, Decimal]],
    ) -> Statement:
        lines: list[StatementLine] = []
        for order, definition in enumerate(STATEMENT_LINES[statement]):
            lid = line_id(statement, definition.code)
            lines.append(
                StatementLine(
                    line_id=lid,
                    display_name=definition.display_name,
                    statement=statement,
                    values=self._project_line(timeline, historical_values.get(lid, {})),
                    unit=self._config.unit,
                    display_order=order,
                    provenance=Provenance.SOURCE,
                )
            )
        return Statement(statement=statement, lines=tuple(lines))

    @staticmethod
    def _project_line(
        timeline: ModelTimeline,
        history: Mapping[int, Decimal],
    ) -> dict[int, Decimal]:
        values: dict[int, Decimal] = {}
        last_historical: Decimal | None = None
        for period in timeline.periods:
            if period.is_historical:
                value = history.get(period.index)
                if value is not None:
                    values[period.index] = value
                    last_historical = value
            elif last_historical is not None:
                values[period.index] = last_historical
        return values


def explode_output_lines(
    snapshot: ModelSnapshot,
) -> tuple[list[ModelOutputLine], list[SkippedOutputValue]]:
    """Explode a snapshot into one output line per (line, period) value.

    Args:
        snapshot: Snapshot to explode.

    Returns:
        tuple: Output lines, and values skipped because their period index
        has no timeline entry.
    """
    rows: list[ModelOutputLine] = []
    skipped: list[SkippedOutputValue] = []
    for statement in snapshot.statements:
        for line in statement.lines:
            for index in sorted(line.values):
                period = snapshot.timeline.period_by_index(index)
                if period is None:
                    skipped.append(SkippedOutputValue(line_id=line.line_id, period_index=index))
                    continue
                rows.append(
                    ModelOutputLine(
                        snapshot_id=snapshot.snapshot_id,
                        statement=statement.statement,
                        line_id=line.line_id,
                        period_index=index,
                        fiscal_year=period.fiscal_year,
                        fiscal_quarter=period.fiscal_quarter,
                        period_kind=period.period_kind,
                        value=line.values[index],
                        unit=line.unit,
                        display_order=line.display_order,
                        is_historical=period.is_historical,
                        provenance=line.provenance,
                    )
                )
    return rows, skipped


def snapshot_header(snapshot: ModelSnapshot) -> SnapshotHeader:
    """Return the storage header of ``snapshot``."""
    return SnapshotHeader(
        snapshot_id=snapshot.snapshot_id,
        entity_id=snapshot.entity_id,
        base_year=snapshot.timeline.base_year,
        historical_years=snapshot.timeline.historical_count,
        forecast_years=snapshot.timeline.forecast_count,
        engine_version=snapshot.metadata.engine_version,
        snapshot_hash=snapshot.metadata.snapshot_hash,
        created_at=snapshot.metadata.created_at,
        balance_check=snapshot.checks.balance_check,
        cash_tie_out=snapshot.checks.cash_tie_out,
        source_report_refs=snapshot.metadata.source_report_refs,
    )


def restore_snapshot(
    header: SnapshotHeader,
    output_lines: Iterable[ModelOutputLine],
) -> ModelSnapshot:
    """Rebuild a snapshot from its stored header and output lines.

    The timeline is rebuilt from the header configuration and statement
    lines follow the chart of accounts, so lines that never had a value are
    restored with empty series.
    """
    timeline = build_timeline(header.base_year, header.historical_years, header.forecast_years)

    stored: dict[str, dict[int, Decimal]] = {}
    provenance: dict[str, Provenance] = {}
    units: dict[str, str] = {}
    for row in output_lines:
        stored.setdefault(row.line_id, {})[row.period_index] = row.value
        provenance[row.line_id] = row.provenance
        units[row.line_id] = row.unit

    statements: dict[ModelStatementType, Statement] = {}
    for statement, definitions in STATEMENT_LINES.items():
        lines = []
        for order, definition in enumerate(definitions):
            lid = line_id(statement, definition.code)
            lines.append(
                StatementLine(
                    line_id=lid,
                    display_name=definition.display_name,
                    statement=statement,
                    values=stored.get(lid, {}),
                    unit=units.get(lid, "KRW"),
                    display_order=order,
                    provenance=provenance.get(lid, Provenance.SOURCE),
                )
            )
        statements[statement] = Statement(statement=statement, lines=tuple(lines))

    return ModelSnapshot(
        snapshot_id=header.snapshot_id,
        entity_id=header.entity_id,
        timeline=timeline,
        income_statement=statements[ModelStatementType.IS],
        balance_sheet=statements[ModelStatementType.BS],
        cash_flow=statements[ModelStatementType.CF],
        checks=ModelChecks(balance_check=header.balance_check, cash_tie_out=header.cash_tie_out),
        metadata=SnapshotMetadata(
            created_at=header.created_at,
            engine_version=header.engine_version,
            snapshot_hash=header.snapshot_hash,
            source_report_refs=header.source_report_refs,
        ),
    )
