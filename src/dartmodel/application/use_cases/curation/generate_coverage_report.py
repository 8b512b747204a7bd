# src/dartmodel/application/use_cases/curation/generate_coverage_report.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: mapping coverage report for a company and fiscal year."""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.application.schemas.dto.curation import CoverageReportDTO
from dartmodel.application.services.coverage_service import CoverageService

__all__ = ["CoverageReportRequest", "GenerateCoverageReportUseCase"]


@dataclass(slots=True)
class CoverageReportRequest:
    """Request parameters for a coverage report."""

    company_code: str
    fiscal_year: str
    top_n: int = 10


class GenerateCoverageReportUseCase:
    """Return the mapping coverage of all raw rows of a company and year."""

    def __init__(self, *, coverage_service: CoverageService) -> None:
        """Initialize the use case."""
        self._coverage = coverage_service

    async def execute(self, req: CoverageReportRequest) -> CoverageReportDTO:
        """Build the coverage report."""
        report = await self._coverage.generate(req.company_code, req.fiscal_year, top_n=req.top_n)
        return CoverageReportDTO.from_report(req.company_code, req.fiscal_year, report)
