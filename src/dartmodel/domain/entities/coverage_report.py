# src/dartmodel/domain/entities/coverage_report.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Mapping coverage report entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

__all__ = ["StatementCoverage", "UnmappedAccount", "CoverageReport"]


@dataclass(frozen=True, slots=True)
class StatementCoverage:
    """Coverage for a single statement category."""

    total: int
    mapped: int
    coverage_percent: Decimal


@dataclass(frozen=True, slots=True)
class UnmappedAccount:
    """Frequency of one unmapped (statement, account name) pair."""

    account_name: str
    statement_category: str
    count: int


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Mapping coverage over a set of raw rows.

    Attributes:
        total_rows: Rows classified.
        mapped_rows: Rows with a standard line.
        unmapped_rows: Rows without a standard line.
        coverage_percent: ``mapped_rows / total_rows * 100``; 0 when empty.
        by_statement: Per statement category breakdown.
        top_unmapped_accounts: Most frequent unmapped accounts, count desc.
    """

    total_rows: int
    mapped_rows: int
    unmapped_rows: int
    coverage_percent: Decimal
    by_statement: Mapping[str, StatementCoverage]
    top_unmapped_accounts: tuple[UnmappedAccount, ...]
