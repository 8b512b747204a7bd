# src/dartmodel/domain/services/default_mapping_rules.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Default OpenDART account mapping rules.

Purpose:
    Baseline rule set used to bootstrap an empty rule store. Name rules are
    anchored regular expressions over the Korean account names printed in
    OpenDART filings; source-id rules match K-IFRS taxonomy element ids.

Layer:
    domain/services

Notes:
    - Rule ids are stable so seeding is idempotent.
    - Flow rules that appear on both IS and CIS are left unscoped.
"""

from __future__ import annotations

from decimal import Decimal

from dartmodel.domain.entities.mapping_rule import MappingRule

__all__ = ["DEFAULT_MAPPING_RULES"]


def _name_rule(index: int, pattern: str, line: str, statement: str | None) -> MappingRule:
    return MappingRule(
        rule_id=f"seed-opendart-{index:03d}",
        standard_line_id=line,
        account_name=pattern,
        statement_category=statement,
        confidence=Decimal("1.0"),
        priority=10,
    )


def _source_id_rule(index: int, source_id: str, line: str, statement: str) -> MappingRule:
    return MappingRule(
        rule_id=f"seed-opendart-{index:03d}",
        standard_line_id=line,
        account_source_id=source_id,
        statement_category=statement,
        confidence=Decimal("1.0"),
        priority=5,
    )


_NAME_RULES: tuple[tuple[str, str, str | None], ...] = (
    # Balance sheet
    (r"^자산총계$", "BS.TOTAL_ASSETS", "BS"),
    (r"^유동자산$", "BS.TOTAL_CA", "BS"),
    (r"^현금및현금성자산$", "BS.CASH", "BS"),
    (r"^매출채권", "BS.AR", "BS"),
    (r"^재고자산$", "BS.INVENTORY", "BS"),
    (r"^유형자산$", "BS.PPE_NET", "BS"),
    (r"^무형자산$", "BS.INTANGIBLES", "BS"),
    (r"^매입채무", "BS.AP", "BS"),
    (r"^유동부채$", "BS.TOTAL_CL", "BS"),
    (r"^부채총계$", "BS.TOTAL_LIABILITIES", "BS"),
    (r"^자본금$", "BS.COMMON_STOCK", "BS"),
    (r"^이익잉여금", "BS.RETAINED_EARNINGS", "BS"),
    (r"^자본총계$", "BS.TOTAL_EQUITY", "BS"),
    # Income statement
    (r"^매출액$", "IS.REVENUE", None),
    (r"^수익\(매출액\)$", "IS.REVENUE", None),
    (r"^매출원가$", "IS.COGS", None),
    (r"^매출총이익", "IS.GROSS_PROFIT", None),
    (r"^판매비와\s?관리비$", "IS.SGA", None),
    (r"^영업이익$", "IS.EBIT", None),
    (r"^영업이익\(손실\)$", "IS.EBIT", None),
    (r"^법인세비용차감전순이익", "IS.EBT", None),
    (r"^법인세비용$", "IS.TAXES", None),
    (r"^당기순이익$", "IS.NET_INCOME", None),
    (r"^당기순이익\(손실\)$", "IS.NET_INCOME", None),
    # Cash flow
    (r"^영업활동\s?현금흐름$", "CF.CFO", "CF"),
    (r"^투자활동\s?현금흐름$", "CF.CFI", "CF"),
    (r"^재무활동\s?현금흐름$", "CF.CFF", "CF"),
    (r"^현금및현금성자산의\s?순증가", "CF.NET_CHANGE", "CF"),
    (r"^기초\s?현금및현금성자산$", "CF.BEGIN_CASH", "CF"),
    (r"^기말\s?현금및현금성자산$", "CF.END_CASH", "CF"),
)

_SOURCE_ID_RULES: tuple[tuple[str, str, str], ...] = (
    ("ifrs-full_Assets", "BS.TOTAL_ASSETS", "BS"),
    ("ifrs-full_CurrentAssets", "BS.TOTAL_CA", "BS"),
    ("ifrs-full_CashAndCashEquivalents", "BS.CASH", "BS"),
    ("ifrs-full_Liabilities", "BS.TOTAL_LIABILITIES", "BS"),
    ("ifrs-full_CurrentLiabilities", "BS.TOTAL_CL", "BS"),
    ("ifrs-full_Equity", "BS.TOTAL_EQUITY", "BS"),
    ("ifrs-full_Revenue", "IS.REVENUE", "IS"),
    ("ifrs-full_CostOfSales", "IS.COGS", "IS"),
    ("ifrs-full_GrossProfit", "IS.GROSS_PROFIT", "IS"),
    ("ifrs-full_ProfitLoss", "IS.NET_INCOME", "IS"),
    ("ifrs-full_CashFlowsFromUsedInOperatingActivities", "CF.CFO", "CF"),
    ("ifrs-full_CashFlowsFromUsedInInvestingActivities", "CF.CFI", "CF"),
    ("ifrs-full_CashFlowsFromUsedInFinancingActivities", "CF.CFF", "CF"),
)

DEFAULT_MAPPING_RULES: tuple[MappingRule, ...] = tuple(
    [
        _source_id_rule(i, source_id, line, statement)
        for i, (source_id, line, statement) in enumerate(_SOURCE_ID_RULES, start=1)
    ]
    + [
        _name_rule(i, pattern, line, statement)
        for i, (pattern, line, statement) in enumerate(
            _NAME_RULES, start=len(_SOURCE_ID_RULES) + 1
        )
    ]
)
