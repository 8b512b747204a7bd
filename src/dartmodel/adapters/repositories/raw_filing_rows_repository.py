# src/dartmodel/adapters/repositories/raw_filing_rows_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the raw filing rows repository.

Layer:
    adapters/repositories

Notes:
    - Rows are returned in published order: numeric ordinal first (rows
      without an ordinal last), then insertion id.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dartmodel.adapters.repositories.base_repository import BaseRepository
from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.interfaces.repositories.raw_filing_rows_repository import (
    RawFilingRowsRepository as RawFilingRowsRepositoryPort,
)
from dartmodel.infrastructure.database.models.curation import RawDartFnlttRow

__all__ = ["SqlAlchemyRawFilingRowsRepository"]


def _ordinal_key(row: RawDartFnlttRow) -> tuple[int, int, int]:
    try:
        return (0, int((row.ord or "").strip()), row.id)
    except ValueError:
        return (1, 0, row.id)


class SqlAlchemyRawFilingRowsRepository(
    BaseRepository[RawDartFnlttRow],
    RawFilingRowsRepositoryPort,
):
    """SQLAlchemy-backed raw filing rows repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async session."""
        super().__init__(session)

    async def list_rows(
        self,
        *,
        company_code: str,
        fiscal_year: str,
        report_code: str | None = None,
        consolidation_flag: str | None = None,
    ) -> Sequence[RawFilingRow]:
        """Return raw rows for a company and fiscal year in source order."""
        stmt = select(RawDartFnlttRow).where(
            RawDartFnlttRow.corp_code == company_code,
            RawDartFnlttRow.bsns_year == fiscal_year,
        )
        if report_code is not None:
            stmt = stmt.where(RawDartFnlttRow.reprt_code == report_code)
        if consolidation_flag is not None:
            stmt = stmt.where(RawDartFnlttRow.fs_div == consolidation_flag)
        stmt = stmt.order_by(RawDartFnlttRow.id.asc())

        rows = await self.fetch_all(stmt)
        # ``ord`` is stored as text; sort numerically in Python.
        return [self._to_domain(row) for row in sorted(rows, key=_ordinal_key)]

    @staticmethod
    def _to_domain(row: Any) -> RawFilingRow:
        """Map an ORM row (or a RawFilingRow passed through) to the domain entity."""
        if isinstance(row, RawFilingRow):
            return row
        return RawFilingRow(
            company_code=row.corp_code,
            fiscal_year=row.bsns_year,
            report_code=row.reprt_code,
            consolidation_flag=row.fs_div,
            statement_category=row.sj_div,
            account_name=row.account_nm,
            account_source_id=row.account_id,
            account_detail=row.account_detail,
            current_amount=row.thstrm_amount,
            current_cumulative_amount=row.thstrm_add_amount,
            prior_amount=row.frmtrm_amount,
            prior_prior_amount=row.bfefrmtrm_amount,
            currency=row.currency,
            ordinal=row.ord,
            receipt_no=row.rcept_no,
            stock_code=row.stock_code,
            company_name=row.corp_name,
        )
