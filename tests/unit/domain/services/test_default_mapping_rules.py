# tests/unit/domain/services/test_default_mapping_rules.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Sanity tests for the seeded OpenDART mapping rules."""

from __future__ import annotations

from dartmodel.domain.services.account_matching import compile_rule_set
from dartmodel.domain.services.chart_of_accounts import STATEMENT_LINES, line_id
from dartmodel.domain.services.default_mapping_rules import DEFAULT_MAPPING_RULES

_KNOWN = {line_id(s, d.code) for s, defs in STATEMENT_LINES.items() for d in defs}


def test_rule_ids_are_unique_and_targets_known() -> None:
    ids = [r.rule_id for r in DEFAULT_MAPPING_RULES]

    assert len(ids) == len(set(ids))
    assert all(r.standard_line_id in _KNOWN for r in DEFAULT_MAPPING_RULES)


def test_source_id_rules_are_statement_scoped() -> None:
    assert all(
        r.statement_category is not None
        for r in DEFAULT_MAPPING_RULES
        if r.account_source_id is not None
    )


def test_all_patterns_compile() -> None:
    assert compile_rule_set(DEFAULT_MAPPING_RULES).invalid_rules == ()


def test_common_korean_accounts_map() -> None:
    rules = compile_rule_set(DEFAULT_MAPPING_RULES)

    assert rules.match(None, "매출액", None, "CIS").standard_line_id == "IS.REVENUE"
    assert rules.match(None, "자산총계", None, "BS").standard_line_id == "BS.TOTAL_ASSETS"
    assert rules.match(None, "기말현금및현금성자산", None, "CF").standard_line_id == "CF.END_CASH"
    assert rules.match("ifrs-full_Equity", "x", None, "BS").standard_line_id == "BS.TOTAL_EQUITY"
