# src/dartmodel/application/use_cases/curation/batch_transform.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: run transform jobs over years x report codes x scopes.

Layer:
    application/use_cases/curation
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from dartmodel.application.schemas.dto.curation import (
    BatchTransformResultDTO,
    TransformJobResultDTO,
)
from dartmodel.application.use_cases.curation.run_transform import (
    RunTransformUseCase,
    TransformJobRequest,
)
from dartmodel.domain.enums.dart import ConsolidationFlag, ReportCode

logger = logging.getLogger(__name__)

__all__ = ["BatchTransformRequest", "BatchTransformUseCase"]


@dataclass(slots=True)
class BatchTransformRequest:
    """Request parameters for a batch of transform jobs."""

    company_code: str
    fiscal_years: Sequence[str]
    report_codes: Sequence[str] = (ReportCode.ANNUAL.value,)
    consolidation_flags: Sequence[str] = (
        ConsolidationFlag.CFS.value,
        ConsolidationFlag.OFS.value,
    )


class BatchTransformUseCase:
    """Run one transform job per (year, report code, flag) combination.

    Jobs run sequentially. A job that raises is recorded as a failed result
    and the batch continues.
    """

    def __init__(self, *, transform: RunTransformUseCase) -> None:
        """Initialize the use case.

        Args:
            transform: Single-job transform use case.
        """
        self._transform = transform

    async def execute(self, req: BatchTransformRequest) -> BatchTransformResultDTO:
        """Run the batch and aggregate job results."""
        results: list[TransformJobResultDTO] = []
        for fiscal_year in req.fiscal_years:
            for report_code in req.report_codes:
                for flag in req.consolidation_flags:
                    job = TransformJobRequest(
                        company_code=req.company_code,
                        fiscal_year=fiscal_year,
                        report_code=report_code,
                        consolidation_flag=flag,
                    )
                    try:
                        result = await self._transform.execute(job)
                    except Exception as exc:
                        logger.exception(
                            "curation.batch.job_failed",
                            extra={"extra": {"job_id": job.job_id}},
                        )
                        result = TransformJobResultDTO(
                            success=False,
                            company_code=job.company_code,
                            fiscal_year=job.fiscal_year,
                            report_code=job.report_code,
                            consolidation_flag=job.consolidation_flag,
                            errors=[str(exc) or exc.__class__.__name__],
                        )
                    results.append(result)

        success_jobs = sum(1 for r in results if r.success)
        logger.info(
            "curation.batch.finished",
            extra={
                "extra": {
                    "company_code": req.company_code,
                    "total_jobs": len(results),
                    "success_jobs": success_jobs,
                }
            },
        )
        return BatchTransformResultDTO(
            total_jobs=len(results),
            success_jobs=success_jobs,
            failed_jobs=len(results) - success_jobs,
            results=results,
        )
