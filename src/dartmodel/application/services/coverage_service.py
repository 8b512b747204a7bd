# src/dartmodel/application/services/coverage_service.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Mapping coverage service.

Purpose:
    Classify every raw row stored for a company and fiscal year (all report
    codes and both scopes) and summarize mapping coverage.

Layer:
    application/services
"""

from __future__ import annotations

from dartmodel.application.services.account_mapper import AccountMapper
from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.coverage_report import CoverageReport
from dartmodel.domain.interfaces.repositories.raw_filing_rows_repository import (
    RawFilingRowsRepository,
)
from dartmodel.domain.services.coverage_reporter import CoverageAccumulator

__all__ = ["CoverageService"]


class CoverageService:
    """Compute coverage reports over raw filing rows."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        mapper: AccountMapper,
        raw_rows_repo_type: type[RawFilingRowsRepository] = RawFilingRowsRepository,
    ) -> None:
        """Initialize the service.

        Args:
            uow: Unit of work used to read raw rows.
            mapper: Account mapper.
            raw_rows_repo_type: Repository key for raw rows.
        """
        self._uow = uow
        self._mapper = mapper
        self._raw_rows_repo_type = raw_rows_repo_type

    async def generate(
        self, company_code: str, fiscal_year: str, top_n: int = 10
    ) -> CoverageReport:
        """Build a coverage report for a company and fiscal year.

        Args:
            company_code: OpenDART corporation code.
            fiscal_year: Business year.
            top_n: Number of unmapped accounts to list.

        Returns:
            CoverageReport: Coverage statistics.
        """
        async with self._uow as tx:
            repo: RawFilingRowsRepository = tx.get_repository(self._raw_rows_repo_type)
            rows = await repo.list_rows(company_code=company_code, fiscal_year=fiscal_year)

        accumulator = CoverageAccumulator()
        for row in rows:
            result = await self._mapper.classify(
                row.account_source_id,
                row.account_name,
                row.account_detail,
                row.statement_category,
            )
            accumulator.record(row.statement_category, row.account_name, result.is_mapped)
        return accumulator.build(top_n=top_n)
