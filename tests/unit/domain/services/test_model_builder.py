# tests/unit/domain/services/test_model_builder.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for the model builder.

Covers:
    - Statement layout follows the chart of accounts.
    - Forecast carry-forward of the last historical value.
    - Snapshot hash and id format.
    - Exploding to output lines and restoring from them.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

from dartmodel.domain.entities.model_snapshot import Statement, StatementLine
from dartmodel.domain.enums.modeling import ModelStatementType
from dartmodel.domain.services.chart_of_accounts import STATEMENT_LINES
from dartmodel.domain.services.model_builder import (
    ModelBuilder,
    ModelBuilderConfig,
    compute_snapshot_hash,
    explode_output_lines,
    make_snapshot_id,
    restore_snapshot,
    snapshot_header,
)
from dartmodel.domain.services.timeline_builder import build_timeline

CREATED_AT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
ENTITY = "entity-00126380"


def _build(values: dict[str, dict[int, Decimal]], h: int = 3, f: int = 2):
    builder = ModelBuilder(ModelBuilderConfig(engine_version="9.9.9"))
    return builder.build(
        ENTITY,
        build_timeline(2024, h, f),
        values,
        CREATED_AT,
        source_report_refs=["r2", "r1", "r2"],
    )


def test_statements_follow_chart_order() -> None:
    snapshot = _build({})

    for statement in snapshot.statements:
        expected = [d.code for d in STATEMENT_LINES[statement.statement]]
        assert [line.line_id.split(".", 1)[1] for line in statement.lines] == expected
        assert [line.display_order for line in statement.lines] == list(range(len(expected)))
    assert snapshot.income_statement.statement is ModelStatementType.IS


def test_forecast_carries_last_historical_value_forward() -> None:
    snapshot = _build({"BS.CASH": {0: Decimal("250000"), 1: Decimal("280000")}})

    cash = snapshot.balance_sheet.line("BS.CASH")
    assert cash is not None
    assert cash.values == {
        0: Decimal("250000"),
        1: Decimal("280000"),
        3: Decimal("280000"),
        4: Decimal("280000"),
    }


def test_lines_without_history_stay_empty() -> None:
    snapshot = _build({"IS.REVENUE": {0: Decimal("1")}})

    cogs = snapshot.income_statement.line("IS.COGS")
    assert cogs is not None and dict(cogs.values) == {}


def test_metadata_and_checks() -> None:
    snapshot = _build(
        {
            "BS.TOTAL_ASSETS": {2: Decimal("2200000")},
            "BS.TOTAL_LIABILITIES": {2: Decimal("1300000")},
            "BS.TOTAL_EQUITY": {2: Decimal("900000")},
        }
    )

    assert snapshot.metadata.engine_version == "9.9.9"
    assert snapshot.metadata.source_report_refs == ("r1", "r2")
    assert snapshot.checks.balance_check.passed is True


def test_snapshot_hash_is_sha256_of_canonical_configuration() -> None:
    digest = compute_snapshot_hash(ENTITY, 2024, 5, 5, ["IS.REVENUE", "BS.CASH", "IS.REVENUE"])

    payload = {
        "base_year": 2024,
        "data_hash": "BS.CASH,IS.REVENUE",
        "entity_id": ENTITY,
        "forecast_years": 5,
        "historical_years": 5,
    }
    expected = hashlib.sha256(
        json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    ).hexdigest()
    assert digest == expected
    assert compute_snapshot_hash(ENTITY, 2024, 5, 5, ["BS.CASH", "IS.REVENUE"]) == digest


def test_snapshot_id_format() -> None:
    snapshot = _build({"IS.REVENUE": {0: Decimal("1")}})

    millis = int(CREATED_AT.timestamp() * 1000)
    assert snapshot.snapshot_id == f"snapshot-{millis}-{snapshot.metadata.snapshot_hash[:8]}"
    assert make_snapshot_id(CREATED_AT, "abcdef0123") == f"snapshot-{millis}-abcdef01"


def test_explode_emits_one_row_per_value() -> None:
    snapshot = _build({"BS.CASH": {0: Decimal("10")}}, h=1, f=2)

    rows, skipped = explode_output_lines(snapshot)

    assert skipped == []
    assert [(r.line_id, r.period_index, r.is_historical) for r in rows] == [
        ("BS.CASH", 0, True),
        ("BS.CASH", 1, False),
        ("BS.CASH", 2, False),
    ]
    assert rows[1].fiscal_year == 2025
    assert all(r.snapshot_id == snapshot.snapshot_id for r in rows)


def test_explode_skips_values_outside_timeline() -> None:
    snapshot = _build({}, h=1, f=0)
    stray = StatementLine(
        line_id="IS.REVENUE",
        display_name="Revenue",
        statement=ModelStatementType.IS,
        values={0: Decimal("1"), 7: Decimal("2")},
        unit="KRW",
        display_order=0,
    )
    patched = replace(
        snapshot,
        income_statement=Statement(statement=ModelStatementType.IS, lines=(stray,)),
    )

    rows, skipped = explode_output_lines(patched)

    assert len(rows) == 1
    assert [(s.line_id, s.period_index) for s in skipped] == [("IS.REVENUE", 7)]


def test_restore_round_trips_header_and_values() -> None:
    snapshot = _build({"IS.REVENUE": {0: Decimal("5"), 2: Decimal("7")}})
    rows, _ = explode_output_lines(snapshot)

    restored = restore_snapshot(snapshot_header(snapshot), rows)

    assert restored.snapshot_id == snapshot.snapshot_id
    assert restored.timeline == snapshot.timeline
    assert restored.checks == snapshot.checks
    assert restored.metadata == snapshot.metadata
    revenue = restored.income_statement.line("IS.REVENUE")
    assert revenue is not None
    assert revenue.values == {0: Decimal("5"), 2: Decimal("7"), 3: Decimal("7"), 4: Decimal("7")}
