# src/dartmodel/domain/services/account_matching.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Account matching rule engine.

Purpose:
    Deterministically map a raw filing account to a standard line id using an
    ordered set of mapping rules.

Layer:
    domain/services

Match order:
    1. Account source id: rule source id equals the row's source id AND the
       rule's statement category equals the row's (strict; an unscoped rule
       never matches on source id).
    2. Exact name: rule name equals the raw name and the rule is unscoped or
       scoped to the row's statement.
    3. Regex name: the first rule (in stored order) whose compiled name
       pattern is found anywhere in the raw name, unscoped or scoped to the
       row's statement. Confidence is discounted by 10%.
    4. Otherwise UNMAPPED with zero confidence.

Notes:
    - Pure domain logic; no logging. Rules whose name does not compile as a
      regular expression are reported in ``CompiledRuleSet.invalid_rules``
      and take no part in stage 3. They can still match in stages 1 and 2.
    - The stored order (priority ascending, then confidence descending) is
      the caller's responsibility; this module never re-sorts.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from dartmodel.domain.entities.mapping_rule import MappingResult, MappingRule
from dartmodel.domain.enums.dart import MatchMethod

__all__ = [
    "REGEX_CONFIDENCE_FACTOR",
    "InvalidRulePattern",
    "CompiledRuleSet",
    "compile_rule_set",
    "rule_sort_key",
]

REGEX_CONFIDENCE_FACTOR = Decimal("0.9")


@dataclass(frozen=True, slots=True)
class InvalidRulePattern:
    """A rule whose name pattern failed to compile."""

    rule_id: str
    pattern: str
    error: str


@dataclass(frozen=True, slots=True)
class _CompiledRule:
    rule: MappingRule
    pattern: re.Pattern[str]


def rule_sort_key(rule: MappingRule) -> tuple[int, Decimal]:
    """Return the canonical rule order key (priority asc, confidence desc)."""
    return (rule.priority, -rule.confidence)


class CompiledRuleSet:
    """Immutable, pre-compiled view over an ordered list of rules."""

    __slots__ = ("_rules", "_compiled", "_invalid")

    def __init__(
        self,
        rules: tuple[MappingRule, ...],
        compiled: tuple[_CompiledRule, ...],
        invalid: tuple[InvalidRulePattern, ...],
    ) -> None:
        """Initialize the rule set. Use :func:`compile_rule_set` instead."""
        self._rules = rules
        self._compiled = compiled
        self._invalid = invalid

    @property
    def rules(self) -> tuple[MappingRule, ...]:
        """Rules in evaluation order."""
        return self._rules

    @property
    def invalid_rules(self) -> tuple[InvalidRulePattern, ...]:
        """Rules excluded from regex matching because their pattern is invalid."""
        return self._invalid

    def __len__(self) -> int:
        return len(self._rules)

    def match(
        self,
        account_source_id: str | None,
        account_name: str,
        account_detail: str | None,
        statement_category: str,
    ) -> MappingResult:
        """Map one raw account.

        Args:
            account_source_id: Taxonomy account id of the row, if any.
            account_name: Raw account name.
            account_detail: Detail path of the row. Accepted for interface
                stability; rules do not match on it.
            statement_category: Statement category of the row.

        Returns:
            MappingResult: The first decision in match order.
        """
        if account_source_id:
            for rule in self._rules:
                if (
                    rule.account_source_id == account_source_id
                    and rule.statement_category == statement_category
                ):
                    return MappingResult(
                        standard_line_id=rule.standard_line_id,
                        rule=rule,
                        confidence=rule.confidence,
                        match_method=MatchMethod.ACCOUNT_ID,
                    )

        for rule in self._rules:
            if rule.account_name == account_name and rule.applies_to(statement_category):
                return MappingResult(
                    standard_line_id=rule.standard_line_id,
                    rule=rule,
                    confidence=rule.confidence,
                    match_method=MatchMethod.NAME_EXACT,
                )

        for compiled in self._compiled:
            if not compiled.rule.applies_to(statement_category):
                continue
            if compiled.pattern.search(account_name):
                return MappingResult(
                    standard_line_id=compiled.rule.standard_line_id,
                    rule=compiled.rule,
                    confidence=compiled.rule.confidence * REGEX_CONFIDENCE_FACTOR,
                    match_method=MatchMethod.NAME_REGEX,
                )

        return MappingResult.unmapped()


def compile_rule_set(rules: Iterable[MappingRule]) -> CompiledRuleSet:
    """Compile rules once, preserving their order.

    Args:
        rules: Rules in evaluation order.

    Returns:
        CompiledRuleSet: Rule set ready for repeated matching.
    """
    ordered = tuple(rules)
    compiled: list[_CompiledRule] = []
    invalid: list[InvalidRulePattern] = []
    for rule in ordered:
        if not rule.account_name:
            continue
        try:
            pattern = re.compile(rule.account_name)
        except re.error as exc:
            invalid.append(
                InvalidRulePattern(rule_id=rule.rule_id, pattern=rule.account_name, error=str(exc))
            )
            continue
        compiled.append(_CompiledRule(rule=rule, pattern=pattern))
    return CompiledRuleSet(ordered, tuple(compiled), tuple(invalid))
