# src/dartmodel/domain/services/amount_selector.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Quarterly-amount selector.

Purpose:
    Choose which amount field of a raw row represents the row's value and
    whether that value is cumulative (year-to-date).

Layer:
    domain/services

Notes:
    - Sub-annual flow statements carry both a period amount and a cumulative
      amount. By default the period flow is preferred and the cumulative
      figure is only a fallback.
    - Empty strings are treated as absent.
"""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.enums.dart import ReportCode
from dartmodel.domain.services.period_resolver import is_point_in_time

__all__ = ["AmountSelection", "select_amount", "SUB_ANNUAL_REPORT_CODES"]

SUB_ANNUAL_REPORT_CODES = frozenset(
    {ReportCode.HALF_YEAR.value, ReportCode.Q1.value, ReportCode.Q3.value}
)


@dataclass(frozen=True, slots=True)
class AmountSelection:
    """Selected raw amount string and its accumulation flag."""

    amount: str | None
    is_accumulated: bool


def _present(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def select_amount(row: RawFilingRow, prefer_period_flow: bool = True) -> AmountSelection:
    """Select the amount to use for ``row``.

    Args:
        row: Raw filing row.
        prefer_period_flow: Prefer the period amount over the cumulative one
            for sub-annual flow statements.

    Returns:
        AmountSelection: The chosen amount (possibly None) and whether it is
        a cumulative figure.
    """
    current = _present(row.current_amount)

    if is_point_in_time(row.statement_category):
        return AmountSelection(amount=current, is_accumulated=False)

    if row.report_code not in SUB_ANNUAL_REPORT_CODES:
        return AmountSelection(amount=current, is_accumulated=False)

    cumulative = _present(row.current_cumulative_amount)
    if prefer_period_flow:
        if current is not None:
            return AmountSelection(amount=current, is_accumulated=False)
        return AmountSelection(amount=cumulative, is_accumulated=cumulative is not None)

    if cumulative is not None:
        return AmountSelection(amount=cumulative, is_accumulated=True)
    return AmountSelection(amount=current, is_accumulated=False)
