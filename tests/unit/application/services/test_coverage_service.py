# tests/unit/application/services/test_coverage_service.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for CoverageService."""

from __future__ import annotations

from decimal import Decimal

from dartmodel.application.services.account_mapper import AccountMapper, MappingRuleCache
from dartmodel.application.services.coverage_service import CoverageService
from dartmodel.domain.services.default_mapping_rules import DEFAULT_MAPPING_RULES
from tests.fixtures.curation_fakes import (
    InMemoryRawRowsRepository,
    make_raw_row,
    make_uow,
    static_rule_loader,
)


async def test_coverage_spans_all_reports_and_scopes_of_the_year() -> None:
    rows = [
        make_raw_row(account_name="매출액"),
        make_raw_row(account_name="매출액", consolidation_flag="OFS", account_source_id=None),
        make_raw_row(
            account_name="자산총계", statement_category="BS", report_code="11012",
            account_source_id=None,
        ),
        make_raw_row(account_name="잡이익", account_source_id=None),
        make_raw_row(account_name="잡이익", fiscal_year="2023", account_source_id=None),
    ]
    uow = make_uow(raw_rows=InMemoryRawRowsRepository(rows))
    mapper = AccountMapper(MappingRuleCache(static_rule_loader(DEFAULT_MAPPING_RULES)))
    service = CoverageService(uow=uow, mapper=mapper)

    report = await service.generate("00126380", "2024", top_n=5)

    assert report.total_rows == 4
    assert report.mapped_rows == 3
    assert report.coverage_percent == Decimal("75")
    assert [(u.account_name, u.count) for u in report.top_unmapped_accounts] == [("잡이익", 1)]
    assert uow.commits == 0
