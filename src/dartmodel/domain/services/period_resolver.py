# src/dartmodel/domain/services/period_resolver.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Period resolver.

Purpose:
    Map a (fiscal year, report code, statement category) triple to a
    normalized reporting period.

Layer:
    domain/services

Notes:
    - Balance sheets are point-in-time and get ``as_of_date`` only. Every
      other statement is a flow from January 1 to the period end.
    - Unknown report codes fall back to annual treatment
      (``UNKNOWN_REPORT_CODE_POLICY``) and are flagged with
      ``report_code_recognized=False`` so callers can surface them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dartmodel.domain.entities.normalized_row import NormalizedPeriod
from dartmodel.domain.enums.dart import PeriodKind, ReportCode, StatementCategory
from dartmodel.domain.exceptions.curation import RawRowValidationError

__all__ = [
    "ReportPeriodSpec",
    "REPORT_PERIODS",
    "UNKNOWN_REPORT_CODE_POLICY",
    "is_point_in_time",
    "resolve_period",
]


@dataclass(frozen=True, slots=True)
class ReportPeriodSpec:
    """Period shape implied by a report code."""

    period_kind: PeriodKind
    fiscal_quarter: int | None
    end_month: int
    end_day: int


REPORT_PERIODS: dict[str, ReportPeriodSpec] = {
    ReportCode.ANNUAL.value: ReportPeriodSpec(PeriodKind.ANNUAL, None, 12, 31),
    ReportCode.Q1.value: ReportPeriodSpec(PeriodKind.QUARTER, 1, 3, 31),
    ReportCode.HALF_YEAR.value: ReportPeriodSpec(PeriodKind.HALF_YEAR, 2, 6, 30),
    ReportCode.Q3.value: ReportPeriodSpec(PeriodKind.QUARTER, 3, 9, 30),
}

UNKNOWN_REPORT_CODE_POLICY = REPORT_PERIODS[ReportCode.ANNUAL.value]


def is_point_in_time(statement_category: str) -> bool:
    """Return True for point-in-time (balance sheet) statements."""
    return statement_category == StatementCategory.BS.value


def resolve_period(
    fiscal_year: str,
    report_code: str,
    statement_category: str,
) -> NormalizedPeriod:
    """Resolve the reporting period of a raw row.

    Args:
        fiscal_year: Business year string (``YYYY``).
        report_code: Regulator report code.
        statement_category: Statement category code.

    Returns:
        NormalizedPeriod: Point-in-time for ``BS``; flow otherwise.

    Raises:
        RawRowValidationError: If ``fiscal_year`` is not an integer.
    """
    try:
        year = int(str(fiscal_year).strip())
    except ValueError as exc:
        raise RawRowValidationError(
            "Fiscal year is not numeric.",
            details={"fiscal_year": fiscal_year},
        ) from exc

    spec = REPORT_PERIODS.get(report_code)
    recognized = spec is not None
    if spec is None:
        spec = UNKNOWN_REPORT_CODE_POLICY

    period_end = date(year, spec.end_month, spec.end_day)
    if is_point_in_time(statement_category):
        return NormalizedPeriod(
            period_kind=spec.period_kind,
            fiscal_year=year,
            fiscal_quarter=spec.fiscal_quarter,
            as_of_date=period_end,
            report_code_recognized=recognized,
        )
    return NormalizedPeriod(
        period_kind=spec.period_kind,
        fiscal_year=year,
        fiscal_quarter=spec.fiscal_quarter,
        flow_start_date=date(year, 1, 1),
        flow_end_date=period_end,
        report_code_recognized=recognized,
    )
