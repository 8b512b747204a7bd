# src/dartmodel/domain/services/coverage_reporter.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Mapping coverage reporter.

Purpose:
    Accumulate mapped/unmapped classifications and produce a CoverageReport
    with per-statement breakdowns and the most frequent unmapped accounts.

Layer:
    domain/services

Notes:
    - ``mapped_rows + unmapped_rows == total_rows`` always holds.
    - Unmapped accounts are ranked by count descending; ties keep the order
      in which the accounts were first seen.
"""

from __future__ import annotations

from decimal import Decimal

from dartmodel.domain.entities.coverage_report import (
    CoverageReport,
    StatementCoverage,
    UnmappedAccount,
)

__all__ = ["CoverageAccumulator", "coverage_percent"]

_HUNDRED = Decimal("100")


def coverage_percent(mapped: int, total: int) -> Decimal:
    """Return ``mapped / total * 100``, or 0 when ``total`` is 0."""
    if total == 0:
        return Decimal("0")
    return Decimal(mapped) / Decimal(total) * _HUNDRED


class CoverageAccumulator:
    """Mutable accumulator for coverage statistics."""

    def __init__(self) -> None:
        """Initialize an empty accumulator."""
        self._total = 0
        self._mapped = 0
        self._by_statement: dict[str, list[int]] = {}
        # dict preserves first-seen order, which the stable sort relies on.
        self._unmapped: dict[tuple[str, str], int] = {}

    @property
    def total(self) -> int:
        """Number of recorded classifications."""
        return self._total

    def record(self, statement_category: str, account_name: str, mapped: bool) -> None:
        """Record one classification.

        Args:
            statement_category: Statement category of the row.
            account_name: Raw account name.
            mapped: Whether the row mapped to a standard line.
        """
        self._total += 1
        counts = self._by_statement.setdefault(statement_category, [0, 0])
        counts[0] += 1
        if mapped:
            self._mapped += 1
            counts[1] += 1
            return
        key = (statement_category, account_name)
        self._unmapped[key] = self._unmapped.get(key, 0) + 1

    def build(self, top_n: int = 10) -> CoverageReport:
        """Build the coverage report.

        Args:
            top_n: Maximum number of unmapped accounts to include.

        Returns:
            CoverageReport: Snapshot of the accumulated statistics.
        """
        ranked = sorted(self._unmapped.items(), key=lambda item: item[1], reverse=True)
        top = tuple(
            UnmappedAccount(account_name=name, statement_category=statement, count=count)
            for (statement, name), count in ranked[: max(top_n, 0)]
        )
        by_statement = {
            statement: StatementCoverage(
                total=total,
                mapped=mapped,
                coverage_percent=coverage_percent(mapped, total),
            )
            for statement, (total, mapped) in self._by_statement.items()
        }
        return CoverageReport(
            total_rows=self._total,
            mapped_rows=self._mapped,
            unmapped_rows=self._total - self._mapped,
            coverage_percent=coverage_percent(self._mapped, self._total),
            by_statement=by_statement,
            top_unmapped_accounts=top,
        )
