# tests/unit/domain/services/test_account_matching.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for the account matching rule engine.

Covers:
    - Stage precedence: source id, exact name, regex, unmapped.
    - Statement scoping of each stage.
    - Regex confidence discount and invalid patterns.
"""

from __future__ import annotations

from decimal import Decimal

from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.enums.dart import MatchMethod
from dartmodel.domain.services.account_matching import (
    REGEX_CONFIDENCE_FACTOR,
    compile_rule_set,
    rule_sort_key,
)


def _rule(rule_id: str, line: str, **kwargs: object) -> MappingRule:
    return MappingRule(rule_id=rule_id, standard_line_id=line, **kwargs)  # type: ignore[arg-type]


def test_source_id_wins_over_name_rules() -> None:
    rules = compile_rule_set(
        [
            _rule("name", "IS.COGS", account_name="매출액"),
            _rule(
                "sid",
                "IS.REVENUE",
                account_source_id="ifrs-full_Revenue",
                statement_category="IS",
            ),
        ]
    )

    result = rules.match("ifrs-full_Revenue", "매출액", None, "IS")

    assert result.standard_line_id == "IS.REVENUE"
    assert result.match_method is MatchMethod.ACCOUNT_ID
    assert result.rule is not None and result.rule.rule_id == "sid"


def test_source_id_requires_same_statement() -> None:
    rules = compile_rule_set(
        [
            _rule("unscoped", "IS.REVENUE", account_source_id="ifrs-full_Revenue"),
            _rule(
                "bs", "BS.CASH", account_source_id="ifrs-full_Revenue", statement_category="BS"
            ),
        ]
    )

    result = rules.match("ifrs-full_Revenue", "기타", None, "IS")

    assert result.is_mapped is False
    assert result.match_method is MatchMethod.UNMAPPED
    assert result.confidence == Decimal("0")


def test_exact_name_beats_regex_and_respects_scope() -> None:
    rules = compile_rule_set(
        [
            _rule("regex", "IS.GROSS_PROFIT", account_name="^매출"),
            _rule("exact-bs", "BS.AR", account_name="매출액", statement_category="BS"),
            _rule("exact", "IS.REVENUE", account_name="매출액", confidence=Decimal("0.8")),
        ]
    )

    result = rules.match(None, "매출액", None, "IS")

    assert result.match_method is MatchMethod.NAME_EXACT
    assert result.standard_line_id == "IS.REVENUE"
    assert result.confidence == Decimal("0.8")


def test_regex_match_discounts_confidence() -> None:
    rules = compile_rule_set([_rule("regex", "BS.AR", account_name="^매출채권")])

    result = rules.match(None, "매출채권및기타채권", None, "BS")

    assert result.match_method is MatchMethod.NAME_REGEX
    assert result.standard_line_id == "BS.AR"
    assert result.confidence == Decimal("1.0") * REGEX_CONFIDENCE_FACTOR


def test_regex_uses_first_rule_in_stored_order() -> None:
    rules = compile_rule_set(
        [
            _rule("first", "IS.EBIT", account_name="이익"),
            _rule("second", "IS.NET_INCOME", account_name="순이익"),
        ]
    )

    assert rules.match(None, "당기순이익", None, "IS").standard_line_id == "IS.EBIT"


def test_invalid_pattern_is_reported_and_skipped() -> None:
    rules = compile_rule_set(
        [
            _rule("broken", "IS.REVENUE", account_name="매출("),
            _rule("ok", "IS.COGS", account_name="원가"),
        ]
    )

    assert [p.rule_id for p in rules.invalid_rules] == ["broken"]
    assert len(rules) == 2
    assert rules.match(None, "매출원가", None, "IS").standard_line_id == "IS.COGS"
    # Exact-name matching still applies to the broken pattern.
    assert rules.match(None, "매출(", None, "IS").standard_line_id == "IS.REVENUE"


def test_empty_rule_set_maps_nothing() -> None:
    result = compile_rule_set([]).match("x", "y", None, "IS")

    assert result.standard_line_id is None
    assert result.rule is None


def test_rule_sort_key_orders_priority_then_confidence() -> None:
    low = _rule("a", "IS.REVENUE", priority=10, confidence=Decimal("0.5"))
    high = _rule("b", "IS.REVENUE", priority=10, confidence=Decimal("0.9"))
    first = _rule("c", "IS.REVENUE", priority=1, confidence=Decimal("0.1"))

    ordered = sorted([low, high, first], key=rule_sort_key)

    assert [r.rule_id for r in ordered] == ["c", "b", "a"]
