# src/dartmodel/domain/entities/mapping_rule.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Account mapping rule entities.

Purpose:
    Describe how raw filing accounts are mapped to standard line ids and the
    outcome of applying those rules to a single account.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dartmodel.domain.enums.dart import MatchMethod

__all__ = ["MappingRule", "MappingResult"]


@dataclass(frozen=True, slots=True)
class MappingRule:
    """Persisted account mapping rule.

    Attributes:
        rule_id:
            Stable identifier of the rule.
        standard_line_id:
            Target standard line id (e.g. ``BS.TOTAL_ASSETS``).
        account_source_id:
            Taxonomy account id to match exactly, if any.
        account_name:
            Exact account name or regular expression, if any.
        account_detail_path:
            Detail path stored with the rule. Informational only; it is not
            part of the match order.
        statement_category:
            Statement category the rule applies to, or None for any.
        confidence:
            Rule confidence in [0, 1].
        priority:
            Evaluation priority, lower first.
        mapping_version:
            Version of the rule set this rule belongs to.
    """

    rule_id: str
    standard_line_id: str
    account_source_id: str | None = None
    account_name: str | None = None
    account_detail_path: str | None = None
    statement_category: str | None = None
    confidence: Decimal = Decimal("1.0")
    priority: int = 10
    mapping_version: int = 1

    def applies_to(self, statement_category: str) -> bool:
        """Return True if the rule is unscoped or scoped to ``statement_category``."""
        return self.statement_category is None or self.statement_category == statement_category


@dataclass(frozen=True, slots=True)
class MappingResult:
    """Outcome of mapping a single raw account.

    Attributes:
        standard_line_id: Mapped line id, or None when unmapped.
        rule: Matching rule, if any.
        confidence: Effective confidence of the decision.
        match_method: Which stage of the matcher produced the result.
    """

    standard_line_id: str | None
    rule: MappingRule | None
    confidence: Decimal
    match_method: MatchMethod

    @property
    def is_mapped(self) -> bool:
        """Return True when a standard line was assigned."""
        return self.standard_line_id is not None

    @classmethod
    def unmapped(cls) -> MappingResult:
        """Return the canonical UNMAPPED result."""
        return cls(
            standard_line_id=None,
            rule=None,
            confidence=Decimal("0"),
            match_method=MatchMethod.UNMAPPED,
        )
