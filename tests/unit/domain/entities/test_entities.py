# tests/unit/domain/entities/test_entities.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for entity-level invariants.

Covers:
    - RawFilingRow required identifiers.
    - NormalizedPeriod shape (point-in-time XOR flow) and quarter range.
    - Mapping rule statement scoping.
"""

from __future__ import annotations

from datetime import date

import pytest

from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.entities.model_entity import entity_id_for_company
from dartmodel.domain.entities.normalized_row import NormalizedPeriod
from dartmodel.domain.enums.dart import PeriodKind
from dartmodel.domain.exceptions.curation import RawRowValidationError
from tests.fixtures.curation_fakes import make_raw_row


@pytest.mark.parametrize("field", ["company_code", "fiscal_year", "account_name"])
def test_raw_row_requires_identifiers(field: str) -> None:
    with pytest.raises(RawRowValidationError) as excinfo:
        make_raw_row(**{field: "  "})

    assert field in excinfo.value.details["missing"]
    assert excinfo.value.code == "CURATION_RAW_ROW_INVALID"


def test_period_must_be_point_in_time_or_flow() -> None:
    with pytest.raises(ValueError):
        NormalizedPeriod(period_kind=PeriodKind.ANNUAL, fiscal_year=2024, fiscal_quarter=None)
    with pytest.raises(ValueError):
        NormalizedPeriod(
            period_kind=PeriodKind.ANNUAL,
            fiscal_year=2024,
            fiscal_quarter=None,
            as_of_date=date(2024, 12, 31),
            flow_start_date=date(2024, 1, 1),
            flow_end_date=date(2024, 12, 31),
        )


def test_period_quarter_range() -> None:
    with pytest.raises(ValueError):
        NormalizedPeriod(
            period_kind=PeriodKind.QUARTER,
            fiscal_year=2024,
            fiscal_quarter=5,
            as_of_date=date(2024, 12, 31),
        )


def test_rule_scope() -> None:
    scoped = MappingRule(rule_id="r", standard_line_id="BS.CASH", statement_category="BS")
    unscoped = MappingRule(rule_id="u", standard_line_id="IS.REVENUE")

    assert scoped.applies_to("BS") is True
    assert scoped.applies_to("IS") is False
    assert unscoped.applies_to("CIS") is True


def test_entity_id_format() -> None:
    assert entity_id_for_company("00126380") == "entity-00126380"
