# tests/unit/domain/services/test_coverage_reporter.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for coverage accumulation.

Covers:
    - Percentage with zero rows.
    - Per-statement sums.
    - Ranking of unmapped accounts (count desc, first-seen on ties).
"""

from __future__ import annotations

from decimal import Decimal

from dartmodel.domain.services.coverage_reporter import CoverageAccumulator, coverage_percent


def test_coverage_percent_handles_zero_total() -> None:
    assert coverage_percent(0, 0) == Decimal("0")
    assert coverage_percent(1, 4) == Decimal("25")


def test_empty_accumulator_builds_empty_report() -> None:
    report = CoverageAccumulator().build()

    assert report.total_rows == 0
    assert report.coverage_percent == Decimal("0")
    assert report.by_statement == {}
    assert report.top_unmapped_accounts == ()


def test_per_statement_counts_sum_to_totals() -> None:
    acc = CoverageAccumulator()
    acc.record("BS", "자산총계", True)
    acc.record("BS", "기타자산", False)
    acc.record("IS", "매출액", True)
    acc.record("IS", "매출원가", True)

    report = acc.build()

    assert acc.total == 4
    assert report.total_rows == 4
    assert report.mapped_rows == 3
    assert report.unmapped_rows == 1
    assert report.coverage_percent == Decimal("75")
    assert report.by_statement["BS"].total == 2
    assert report.by_statement["BS"].coverage_percent == Decimal("50")
    assert report.by_statement["IS"].mapped == 2
    assert sum(s.total for s in report.by_statement.values()) == report.total_rows


def test_unmapped_accounts_ranked_with_stable_ties() -> None:
    acc = CoverageAccumulator()
    for name in ["A", "B", "B", "C", "C", "D"]:
        acc.record("IS", name, False)
    acc.record("BS", "A", False)

    report = acc.build(top_n=3)

    ranked = [(u.statement_category, u.account_name, u.count) for u in report.top_unmapped_accounts]
    assert ranked == [("IS", "B", 2), ("IS", "C", 2), ("IS", "A", 1)]


def test_top_n_zero_lists_nothing() -> None:
    acc = CoverageAccumulator()
    acc.record("IS", "A", False)

    assert acc.build(top_n=0).top_unmapped_accounts == ()
