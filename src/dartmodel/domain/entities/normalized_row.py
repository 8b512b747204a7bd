# src/dartmodel/domain/entities/normalized_row.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Normalized row entities.

Purpose:
    Typed, validated intermediate records produced by curation before account
    mapping: the parsed amount, the resolved reporting period and the
    normalized row that combines them.

Layer:
    domain/entities

Notes:
    - Numeric values are represented as Decimal to avoid precision loss.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dartmodel.domain.enums.dart import ConsolidationScope, PeriodKind

__all__ = ["ParsedAmount", "NormalizedPeriod", "NormalizedRow"]


@dataclass(frozen=True, slots=True)
class ParsedAmount:
    """Outcome of parsing a raw amount string.

    Attributes:
        value:
            Parsed signed value, or None for empty/placeholder input or failure.
        original:
            Original input string (empty string when the input was None).
        is_negative:
            True when the input used accounting parentheses.
        parse_success:
            False only when non-empty input could not be read as a number.
        parse_error:
            Description of the failure when ``parse_success`` is False.
    """

    value: Decimal | None
    original: str
    is_negative: bool = False
    parse_success: bool = True
    parse_error: str | None = None


@dataclass(frozen=True, slots=True)
class NormalizedPeriod:
    """Reporting period resolved from a fiscal year and report code.

    A period is either point-in-time (``as_of_date`` only) or a flow
    (``flow_start_date`` and ``flow_end_date``), never both.

    Attributes:
        period_kind: Normalized period kind.
        fiscal_year: Fiscal year as an integer.
        fiscal_quarter: Quarter 1-4 for sub-annual reports, else None.
        as_of_date: Balance date for point-in-time statements.
        flow_start_date: Inclusive start of a flow period.
        flow_end_date: Inclusive end of a flow period.
        report_code_recognized:
            False when the report code was unknown and the annual fallback
            was applied.
    """

    period_kind: PeriodKind
    fiscal_year: int
    fiscal_quarter: int | None = None
    as_of_date: date | None = None
    flow_start_date: date | None = None
    flow_end_date: date | None = None
    report_code_recognized: bool = True

    def __post_init__(self) -> None:
        """Enforce the point-in-time XOR flow shape."""
        has_instant = self.as_of_date is not None
        has_start = self.flow_start_date is not None
        has_end = self.flow_end_date is not None
        if has_start != has_end:
            raise ValueError("flow_start_date and flow_end_date must be set together")
        if has_instant == has_start:
            raise ValueError("period must be either point-in-time or a flow, not both or neither")
        if self.fiscal_quarter is not None and not 1 <= self.fiscal_quarter <= 4:
            raise ValueError("fiscal_quarter must be between 1 and 4")

    @property
    def is_point_in_time(self) -> bool:
        """Return True for balance-sheet style periods."""
        return self.as_of_date is not None


@dataclass(frozen=True, slots=True)
class NormalizedRow:
    """Raw row after amount selection, parsing and period resolution.

    Attributes:
        company_code: OpenDART corporation code.
        stock_code: Listed stock code, if any.
        entity_id: Model entity id (``entity-{company_code}``).
        period: Resolved reporting period.
        report_code: Original report code.
        scope: Consolidation scope.
        statement_category: Statement category code.
        account_source_id: Taxonomy account id, if any.
        account_name: Raw account name.
        account_detail: Account detail path, if any.
        amount: Signed amount. Zero when parsing failed.
        currency: Normalized ISO-like currency code.
        ordering: Integer display ordinal, if parseable.
        source_report_ref: Filing receipt number, if any.
        source_priority: Priority of the source (lower wins).
        is_accumulated: True when a cumulative (YTD) figure was used.
        parse_success: False when the amount could not be parsed.
        parse_error: Parse failure description.
    """

    company_code: str
    stock_code: str | None
    entity_id: str
    period: NormalizedPeriod
    report_code: str
    scope: ConsolidationScope
    statement_category: str
    account_source_id: str | None
    account_name: str
    account_detail: str | None
    amount: Decimal
    currency: str
    ordering: int | None
    source_report_ref: str | None
    source_priority: int
    is_accumulated: bool
    parse_success: bool
    parse_error: str | None = None
