# src/dartmodel/application/use_cases/curation/run_transform.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use case: transform raw filing rows into curated facts.

Purpose:
    Run one curation job for a (company, fiscal year, report code,
    consolidation flag) tuple:

        1. Load raw rows in source order.
        2. Register the model entity for the company.
        3. Normalize and classify every row, keep the last row per fact key,
           then upsert each fact inside its own savepoint. Per-row failures
           are collected and never abort the job.
        4. Commit, then compute mapping coverage over all raw rows of the
           company and year.

Layer:
    application/use_cases/curation

Notes:
    - A job-level failure (including the optional timeout) yields a result
      with ``success=False`` and whatever statistics were gathered so far.
    - Rerunning a job over unchanged raw rows writes nothing: every upsert
      reports UNCHANGED. Rows sharing a fact key collapse to the last one
      before any write, so duplicates cannot overwrite each other.
    - A failed upsert rolls back only its own savepoint; the other facts of
      the job are still committed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from time import perf_counter

from dartmodel.application.schemas.dto.curation import TransformJobResultDTO
from dartmodel.application.services.account_mapper import AccountMapper
from dartmodel.application.services.coverage_service import CoverageService
from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.entities.curated_fact import CuratedFact
from dartmodel.domain.entities.model_entity import ModelEntity, entity_id_for_company
from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.enums.dart import ReportCode, UpsertOutcome
from dartmodel.domain.interfaces.repositories.curated_facts_repository import (
    CuratedFactsRepository,
)
from dartmodel.domain.interfaces.repositories.model_entities_repository import (
    ModelEntitiesRepository,
)
from dartmodel.domain.interfaces.repositories.raw_filing_rows_repository import (
    RawFilingRowsRepository,
)
from dartmodel.domain.services.row_normalizer import (
    NormalizerOptions,
    build_curated_fact,
    normalize_row,
)
from dartmodel.infrastructure.logging.logger import clear_job_context, set_job_context
from dartmodel.infrastructure.observability.metrics_curation import (
    observe_transform_job,
    record_coverage,
    record_row_outcomes,
)

logger = logging.getLogger(__name__)

__all__ = ["TransformJobRequest", "RunTransformUseCase"]


@dataclass(slots=True)
class TransformJobRequest:
    """Request parameters for one transform job."""

    company_code: str
    fiscal_year: str
    report_code: str = ReportCode.ANNUAL.value
    consolidation_flag: str = "CFS"

    @property
    def job_id(self) -> str:
        """Correlation id used in logs."""
        return (
            f"transform:{self.company_code}:{self.fiscal_year}:"
            f"{self.report_code}:{self.consolidation_flag}"
        )


@dataclass(slots=True)
class _JobStats:
    rows_processed: int = 0
    rows_created: int = 0
    rows_unchanged: int = 0
    rows_superseded: int = 0
    rows_skipped: int = 0
    parse_errors: int = 0
    unmapped_rows: int = 0
    row_failures: int = 0
    coverage_percent: Decimal = Decimal("0")
    errors: list[str] = field(default_factory=list)


class RunTransformUseCase:
    """Transform raw rows into curated facts for one filing slice.

    Args:
        uow: Unit of work exposing raw rows, curated facts and entities.
        mapper: Account mapper used to classify rows.
        coverage_service: Service computing coverage after the commit.
        options: Normalizer options.
        coverage_top_n: Number of unmapped accounts in the coverage report.
        timeout_seconds: Optional wall-clock limit for the job.
    """

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        mapper: AccountMapper,
        coverage_service: CoverageService,
        options: NormalizerOptions | None = None,
        coverage_top_n: int = 10,
        timeout_seconds: float | None = None,
        raw_rows_repo_type: type[RawFilingRowsRepository] = RawFilingRowsRepository,
        facts_repo_type: type[CuratedFactsRepository] = CuratedFactsRepository,
        entities_repo_type: type[ModelEntitiesRepository] = ModelEntitiesRepository,
    ) -> None:
        """Initialize the use case with its dependencies."""
        self._uow = uow
        self._mapper = mapper
        self._coverage = coverage_service
        self._options = options or NormalizerOptions()
        self._coverage_top_n = coverage_top_n
        self._timeout = timeout_seconds
        self._raw_rows_repo_type = raw_rows_repo_type
        self._facts_repo_type = facts_repo_type
        self._entities_repo_type = entities_repo_type

    async def execute(self, req: TransformJobRequest) -> TransformJobResultDTO:
        """Run the transform job.

        Args:
            req: Job parameters.

        Returns:
            TransformJobResultDTO: Job statistics. ``success`` is False only
            for job-level failures; per-row failures are listed in ``errors``.
        """
        set_job_context(job_id=req.job_id)
        stats = _JobStats()
        success = True
        start = perf_counter()
        logger.info(
            "curation.transform.start",
            extra={
                "extra": {
                    "company_code": req.company_code,
                    "fiscal_year": req.fiscal_year,
                    "report_code": req.report_code,
                    "consolidation_flag": req.consolidation_flag,
                }
            },
        )

        try:
            with observe_transform_job() as obs:
                try:
                    if self._timeout is not None:
                        await asyncio.wait_for(self._run(req, stats), timeout=self._timeout)
                    else:
                        await self._run(req, stats)
                except TimeoutError:
                    success = False
                    obs.mark_failed()
                    stats.errors.append(f"Transform timed out after {self._timeout}s")
                    logger.error(
                        "curation.transform.timeout",
                        extra={"extra": {"timeout_seconds": self._timeout}},
                    )
                except Exception as exc:
                    success = False
                    obs.mark_failed()
                    stats.errors.append(str(exc) or exc.__class__.__name__)
                    logger.exception("curation.transform.failed")

            record_row_outcomes(
                {
                    "created": stats.rows_created,
                    "unchanged": stats.rows_unchanged,
                    "superseded": stats.rows_superseded,
                    "skipped": stats.rows_skipped,
                    "parse_error": stats.parse_errors,
                    "unmapped": stats.unmapped_rows,
                    "failed": stats.row_failures,
                }
            )
            result = TransformJobResultDTO(
                success=success,
                company_code=req.company_code,
                fiscal_year=req.fiscal_year,
                report_code=req.report_code,
                consolidation_flag=req.consolidation_flag,
                rows_processed=stats.rows_processed,
                rows_created=stats.rows_created,
                rows_unchanged=stats.rows_unchanged,
                rows_superseded=stats.rows_superseded,
                rows_skipped=stats.rows_skipped,
                parse_errors=stats.parse_errors,
                unmapped_rows=stats.unmapped_rows,
                coverage_percent=str(stats.coverage_percent),
                duration_ms=int((perf_counter() - start) * 1000),
                errors=list(stats.errors),
            )
            summary = result.model_dump(exclude={"errors"})
            summary["error_count"] = len(result.errors)
            logger.info("curation.transform.finished", extra={"extra": summary})
            return result
        finally:
            clear_job_context()

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    async def _run(self, req: TransformJobRequest, stats: _JobStats) -> None:
        async with self._uow as tx:
            raw_repo: RawFilingRowsRepository = tx.get_repository(self._raw_rows_repo_type)
            facts_repo: CuratedFactsRepository = tx.get_repository(self._facts_repo_type)
            entities_repo: ModelEntitiesRepository = tx.get_repository(self._entities_repo_type)

            rows = await raw_repo.list_rows(
                company_code=req.company_code,
                fiscal_year=req.fiscal_year,
                report_code=req.report_code,
                consolidation_flag=req.consolidation_flag,
            )
            if not rows:
                logger.info("curation.transform.no_rows")
                return

            await entities_repo.ensure(self._entity_for(req.company_code, rows[0]))

            # Last row wins per fact key; insertion order keeps the first position.
            pending: dict[str, CuratedFact] = {}
            unknown_code_logged = False
            for raw in rows:
                stats.rows_processed += 1
                try:
                    normalized = normalize_row(raw, self._options)
                    if normalized is None:
                        stats.rows_skipped += 1
                        continue
                    if not normalized.period.report_code_recognized and not unknown_code_logged:
                        unknown_code_logged = True
                        logger.warning(
                            "curation.transform.unknown_report_code",
                            extra={"extra": {"report_code": raw.report_code}},
                        )
                    if not normalized.parse_success:
                        stats.parse_errors += 1

                    mapping = await self._mapper.classify(
                        normalized.account_source_id,
                        normalized.account_name,
                        normalized.account_detail,
                        normalized.statement_category,
                    )
                    if not mapping.is_mapped:
                        stats.unmapped_rows += 1
                    fact = build_curated_fact(normalized, mapping)
                except Exception as exc:
                    self._row_failed(stats, raw.account_name, exc)
                    continue

                if fact.fact_key in pending:
                    stats.rows_superseded += 1
                    logger.info(
                        "curation.transform.row_superseded",
                        extra={"extra": {"fact_key": fact.fact_key}},
                    )
                pending[fact.fact_key] = fact

            for fact in pending.values():
                try:
                    async with tx.savepoint():
                        outcome = await facts_repo.upsert_fact(fact)
                except Exception as exc:
                    self._row_failed(stats, fact.account_name, exc)
                    continue
                if outcome is UpsertOutcome.UNCHANGED:
                    stats.rows_unchanged += 1
                else:
                    stats.rows_created += 1

            await tx.commit()

        try:
            report = await self._coverage.generate(
                req.company_code, req.fiscal_year, top_n=self._coverage_top_n
            )
        except Exception:
            logger.exception("curation.transform.coverage_failed")
            return
        stats.coverage_percent = report.coverage_percent
        record_coverage(req.company_code, float(report.coverage_percent))

    @staticmethod
    def _row_failed(stats: _JobStats, account_name: str, exc: Exception) -> None:
        stats.row_failures += 1
        stats.errors.append(f"{account_name}: {exc}")
        logger.warning(
            "curation.transform.row_failed",
            extra={"extra": {"account_name": account_name, "error": str(exc)}},
        )

    @staticmethod
    def _entity_for(company_code: str, sample: RawFilingRow) -> ModelEntity:
        return ModelEntity(
            entity_id=entity_id_for_company(company_code),
            company_code=company_code,
            display_name=sample.company_name or company_code,
            stock_code=sample.stock_code,
        )
