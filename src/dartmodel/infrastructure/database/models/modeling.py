# src/dartmodel/infrastructure/database/models/modeling.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Modeling models: entities, snapshot headers and output lines."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from dartmodel.infrastructure.database.models.base import Base, JSONType, TimestampMixin


class ModelEntityRow(TimestampMixin, Base):
    """Company registered for modeling."""

    __tablename__ = "model_entities"

    entity_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    company_code: Mapped[str] = mapped_column(String(8), nullable=False, unique=True)
    stock_code: Mapped[str | None] = mapped_column(String(12), nullable=True)
    display_name: Mapped[str] = mapped_column(String(256), nullable=False)
    default_scope: Mapped[str] = mapped_column(String(16), nullable=False)


class ModelSnapshotRow(Base):
    """Snapshot header.

    ``checks`` stores both check results as
    ``{"BALANCE": {"passed", "max_error", "tolerance"}, "CASH_TIE_OUT": {...}}``
    with Decimal values as strings.
    """

    __tablename__ = "model_snapshots"

    snapshot_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("model_entities.entity_id"), nullable=False, index=True
    )
    base_year: Mapped[int] = mapped_column(Integer, nullable=False)
    historical_years: Mapped[int] = mapped_column(Integer, nullable=False)
    forecast_years: Mapped[int] = mapped_column(Integer, nullable=False)
    engine_version: Mapped[str] = mapped_column(String(32), nullable=False)
    snapshot_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    source_report_refs: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    checks: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ModelOutputLineRow(Base):
    """One stored value of a snapshot line for one period."""

    __tablename__ = "model_output_lines"
    __table_args__ = (Index("ix_model_output_lines_snapshot", "snapshot_id", "statement_type"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    snapshot_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("model_snapshots.snapshot_id", ondelete="CASCADE"),
        nullable=False,
    )
    statement_type: Mapped[str] = mapped_column(String(2), nullable=False)
    standard_line_id: Mapped[str] = mapped_column(String(64), nullable=False)
    period_index: Mapped[int] = mapped_column(Integer, nullable=False)
    fiscal_year: Mapped[int] = mapped_column(Integer, nullable=False)
    fiscal_quarter: Mapped[int | None] = mapped_column(Integer, nullable=True)
    period_type: Mapped[str] = mapped_column(String(16), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(28, 4), nullable=False)
    unit: Mapped[str] = mapped_column(String(8), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_historical: Mapped[bool] = mapped_column(Boolean, nullable=False)
    provenance: Mapped[str] = mapped_column(String(16), nullable=False)
