# src/dartmodel/application/schemas/dto/curation.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application DTOs for curation jobs, mapping rules and coverage.

Layer:
    application/schemas/dto

Notes:
    - Decimal values are represented as strings to avoid precision loss.
"""

from __future__ import annotations

from pydantic import Field

from dartmodel.application.schemas.dto.base import BaseDTO
from dartmodel.domain.entities.coverage_report import CoverageReport
from dartmodel.domain.entities.mapping_rule import MappingRule


class TransformJobResultDTO(BaseDTO):
    """Statistics of one transform job.

    ``rows_created`` counts facts written (new or changed); ``rows_unchanged``
    counts facts that were already stored identically. ``rows_superseded``
    counts rows dropped because a later row of the same job has the same
    fact key (last row wins).
    """

    success: bool
    company_code: str
    fiscal_year: str
    report_code: str
    consolidation_flag: str
    rows_processed: int = 0
    rows_created: int = 0
    rows_unchanged: int = 0
    rows_superseded: int = 0
    rows_skipped: int = 0
    parse_errors: int = 0
    unmapped_rows: int = 0
    coverage_percent: str = "0"
    duration_ms: int = 0
    errors: list[str] = Field(default_factory=list)


class BatchTransformResultDTO(BaseDTO):
    """Aggregate of a batch of transform jobs."""

    total_jobs: int
    success_jobs: int
    failed_jobs: int
    results: list[TransformJobResultDTO]


class StatementCoverageDTO(BaseDTO):
    """Coverage of one statement category."""

    total: int
    mapped: int
    coverage_percent: str


class UnmappedAccountDTO(BaseDTO):
    """Frequency of one unmapped account."""

    account_name: str
    statement_category: str
    count: int


class CoverageReportDTO(BaseDTO):
    """Mapping coverage report."""

    company_code: str
    fiscal_year: str
    total_rows: int
    mapped_rows: int
    unmapped_rows: int
    coverage_percent: str
    by_statement: dict[str, StatementCoverageDTO]
    top_unmapped_accounts: list[UnmappedAccountDTO]

    @classmethod
    def from_report(
        cls, company_code: str, fiscal_year: str, report: CoverageReport
    ) -> CoverageReportDTO:
        """Build the DTO from a domain coverage report."""
        return cls(
            company_code=company_code,
            fiscal_year=fiscal_year,
            total_rows=report.total_rows,
            mapped_rows=report.mapped_rows,
            unmapped_rows=report.unmapped_rows,
            coverage_percent=str(report.coverage_percent),
            by_statement={
                statement: StatementCoverageDTO(
                    total=cov.total,
                    mapped=cov.mapped,
                    coverage_percent=str(cov.coverage_percent),
                )
                for statement, cov in report.by_statement.items()
            },
            top_unmapped_accounts=[
                UnmappedAccountDTO(
                    account_name=u.account_name,
                    statement_category=u.statement_category,
                    count=u.count,
                )
                for u in report.top_unmapped_accounts
            ],
        )


class MappingRuleDTO(BaseDTO):
    """Stored account mapping rule."""

    rule_id: str
    standard_line_id: str
    account_source_id: str | None = None
    account_name: str | None = None
    statement_category: str | None = None
    confidence: str
    priority: int
    mapping_version: int

    @classmethod
    def from_rule(cls, rule: MappingRule) -> MappingRuleDTO:
        """Build the DTO from a domain rule."""
        return cls(
            rule_id=rule.rule_id,
            standard_line_id=rule.standard_line_id,
            account_source_id=rule.account_source_id,
            account_name=rule.account_name,
            statement_category=rule.statement_category,
            confidence=str(rule.confidence),
            priority=rule.priority,
            mapping_version=rule.mapping_version,
        )


class SeedMappingRulesResultDTO(BaseDTO):
    """Outcome of seeding the default rule set."""

    inserted: int
    skipped: int
