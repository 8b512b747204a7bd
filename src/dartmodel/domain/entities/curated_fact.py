# src/dartmodel/domain/entities/curated_fact.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curated financial fact entity.

Purpose:
    Represent the atomic, modeling-ready fact persisted by the transform job.
    A curated fact is a normalized row plus its standard chart-of-accounts
    mapping and a deterministic identity key.

Layer:
    domain/entities

Notes:
    - ``fact_key`` is the idempotency key: rerunning a transform over the same
      raw rows converges to the same set of facts.
    - ``standard_line_id`` is None for unmapped accounts; those facts are kept
      for audit but never feed the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind

__all__ = ["CuratedFact"]


@dataclass(frozen=True, slots=True)
class CuratedFact:
    """Persisted curated fact.

    Attributes:
        fact_key: Deterministic identity key.
        entity_id: Model entity id.
        company_code: OpenDART corporation code.
        stock_code: Listed stock code, if any.
        period_kind: Normalized period kind.
        fiscal_year: Fiscal year.
        fiscal_quarter: Quarter number, if any.
        as_of_date: Balance date for point-in-time facts.
        flow_start_date: Flow period start.
        flow_end_date: Flow period end.
        report_code: Original report code.
        scope: Consolidation scope.
        statement_category: Statement category code.
        account_source_id: Taxonomy account id, if any.
        account_name: Raw account name.
        account_detail: Account detail path, if any.
        amount: Signed amount.
        currency: Currency code.
        standard_line_id: Mapped standard line id, or None when unmapped.
        ordering: Display ordinal, if any.
        source_report_ref: Filing receipt number, if any.
        source_priority: Source priority (lower wins).
        is_accumulated: True when a cumulative figure was used.
        parse_success: False when the amount could not be parsed.
        parse_error: Parse failure description.
    """

    fact_key: str
    entity_id: str
    company_code: str
    stock_code: str | None
    period_kind: PeriodKind
    fiscal_year: int
    fiscal_quarter: int | None
    as_of_date: date | None
    flow_start_date: date | None
    flow_end_date: date | None
    report_code: str
    scope: ConsolidationScope
    statement_category: str
    account_source_id: str | None
    account_name: str
    account_detail: str | None
    amount: Decimal
    currency: str
    standard_line_id: str | None
    ordering: int | None
    source_report_ref: str | None
    source_priority: int
    is_accumulated: bool
    parse_success: bool
    parse_error: str | None = None

    @property
    def is_mapped(self) -> bool:
        """Return True when the fact maps to a standard line."""
        return self.standard_line_id is not None
