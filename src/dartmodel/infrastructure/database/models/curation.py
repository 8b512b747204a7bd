# src/dartmodel/infrastructure/database/models/curation.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curation models: raw OpenDART rows, mapping rules and curated facts.

Notes:
    - ``raw_dart_fnltt_rows`` keeps the OpenDART field names as column names
      so the ingestion collector can bulk-insert API payloads unchanged.
    - ``curated_fin_facts`` is keyed by the deterministic fact key.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dartmodel.infrastructure.database.models.base import Base, TimestampMixin


class RawDartFnlttRow(TimestampMixin, Base):
    """Raw row of the OpenDART ``fnlttSinglAcntAll`` endpoint."""

    __tablename__ = "raw_dart_fnltt_rows"
    __table_args__ = (
        Index("ix_raw_dart_fnltt_rows_slice", "corp_code", "bsns_year", "reprt_code", "fs_div"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    corp_code: Mapped[str] = mapped_column(String(8), nullable=False)
    corp_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    stock_code: Mapped[str | None] = mapped_column(String(12), nullable=True)
    bsns_year: Mapped[str] = mapped_column(String(4), nullable=False)
    reprt_code: Mapped[str] = mapped_column(String(5), nullable=False)
    rcept_no: Mapped[str | None] = mapped_column(String(20), nullable=True)
    fs_div: Mapped[str] = mapped_column(String(3), nullable=False)
    sj_div: Mapped[str] = mapped_column(String(4), nullable=False)
    account_id: Mapped[str | None] = mapped_column(String(256), nullable=True)
    account_nm: Mapped[str] = mapped_column(String(512), nullable=False)
    account_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    thstrm_amount: Mapped[str | None] = mapped_column(String(64), nullable=True)
    thstrm_add_amount: Mapped[str | None] = mapped_column(String(64), nullable=True)
    frmtrm_amount: Mapped[str | None] = mapped_column(String(64), nullable=True)
    bfefrmtrm_amount: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ord: Mapped[str | None] = mapped_column(String(16), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(16), nullable=True)


class AccountMappingRule(TimestampMixin, Base):
    """Account mapping rule."""

    __tablename__ = "account_mapping_rules"

    rule_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    standard_line_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    account_source_id: Mapped[str | None] = mapped_column(String(256), nullable=True)
    account_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    account_detail_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    statement_category: Mapped[str | None] = mapped_column(String(4), nullable=True)
    confidence: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False, default=Decimal("1"))
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    mapping_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class CuratedFinFact(TimestampMixin, Base):
    """Curated financial fact."""

    __tablename__ = "curated_fin_facts"
    __table_args__ = (
        Index("ix_curated_fin_facts_model", "entity_id", "period_kind", "fiscal_year"),
    )

    fact_key: Mapped[str] = mapped_column(String(768), primary_key=True)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    company_code: Mapped[str] = mapped_column(String(8), nullable=False)
    stock_code: Mapped[str | None] = mapped_column(String(12), nullable=True)
    period_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    fiscal_year: Mapped[int] = mapped_column(Integer, nullable=False)
    fiscal_quarter: Mapped[int | None] = mapped_column(Integer, nullable=True)
    as_of_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    flow_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    flow_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    report_code: Mapped[str] = mapped_column(String(5), nullable=False)
    scope: Mapped[str] = mapped_column(String(16), nullable=False)
    statement_category: Mapped[str] = mapped_column(String(4), nullable=False)
    account_source_id: Mapped[str | None] = mapped_column(String(256), nullable=True)
    account_name: Mapped[str] = mapped_column(String(512), nullable=False)
    account_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(28, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False)
    standard_line_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    ordering: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_report_ref: Mapped[str | None] = mapped_column(String(20), nullable=True)
    source_priority: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    is_accumulated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parse_success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    parse_error: Mapped[str | None] = mapped_column(Text, nullable=True)
