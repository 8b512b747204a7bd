# src/dartmodel/domain/interfaces/repositories/raw_filing_rows_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Raw filing rows repository interface.

Purpose:
    Read access to raw OpenDART rows stored by the ingestion collector.

Layer:
    domain/interfaces/repositories

Notes:
    - Storage-agnostic. Implementations live in the adapters layer and are
      wired in via the UnitOfWork.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from dartmodel.domain.entities.raw_filing_row import RawFilingRow

__all__ = ["RawFilingRowsRepository"]


class RawFilingRowsRepository(Protocol):
    """Repository interface for raw filing rows."""

    async def list_rows(
        self,
        *,
        company_code: str,
        fiscal_year: str,
        report_code: str | None = None,
        consolidation_flag: str | None = None,
    ) -> Sequence[RawFilingRow]:
        """Return raw rows for a company and fiscal year in source order.

        Args:
            company_code: OpenDART corporation code.
            fiscal_year: Business year (``YYYY``).
            report_code: Optional report code filter. None returns all codes.
            consolidation_flag: Optional ``CFS``/``OFS`` filter. None returns both.

        Returns:
            Sequence[RawFilingRow]: Rows ordered by published ordinal.
        """
        ...
