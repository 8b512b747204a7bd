# src/dartmodel/domain/services/chart_of_accounts.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Standard chart of accounts for the three-statement model.

Purpose:
    Fixed, ordered line definitions per statement. Line ids are
    ``{statement}.{code}``; list order is the display order.

Layer:
    domain/services
"""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.domain.enums.modeling import ModelStatementType

__all__ = [
    "LineDefinition",
    "INCOME_STATEMENT_LINES",
    "BALANCE_SHEET_LINES",
    "CASH_FLOW_LINES",
    "STATEMENT_LINES",
    "line_id",
]


@dataclass(frozen=True, slots=True)
class LineDefinition:
    """Definition of one standard line."""

    code: str
    display_name: str


def line_id(statement: ModelStatementType, code: str) -> str:
    """Return the standard line id for ``code`` on ``statement``."""
    return f"{statement.value}.{code}"


INCOME_STATEMENT_LINES: tuple[LineDefinition, ...] = (
    LineDefinition("REVENUE", "Revenue"),
    LineDefinition("COGS", "Cost of Goods Sold"),
    LineDefinition("GROSS_PROFIT", "Gross Profit"),
    LineDefinition("SGA", "SG&A"),
    LineDefinition("DA", "Depreciation & Amortization"),
    LineDefinition("EBIT", "EBIT"),
    LineDefinition("INTEREST_EXPENSE", "Interest Expense"),
    LineDefinition("EBT", "EBT"),
    LineDefinition("TAXES", "Income Tax Expense"),
    LineDefinition("NET_INCOME", "Net Income"),
)

BALANCE_SHEET_LINES: tuple[LineDefinition, ...] = (
    LineDefinition("CASH", "Cash & Cash Equivalents"),
    LineDefinition("AR", "Accounts Receivable"),
    LineDefinition("INVENTORY", "Inventory"),
    LineDefinition("OTHER_CA", "Other Current Assets"),
    LineDefinition("TOTAL_CA", "Total Current Assets"),
    LineDefinition("PPE_NET", "PP&E (Net)"),
    LineDefinition("INTANGIBLES", "Intangible Assets"),
    LineDefinition("OTHER_NCA", "Other Non-Current Assets"),
    LineDefinition("TOTAL_ASSETS", "Total Assets"),
    LineDefinition("AP", "Accounts Payable"),
    LineDefinition("OTHER_CL", "Other Current Liabilities"),
    LineDefinition("SHORT_DEBT", "Short-term Debt"),
    LineDefinition("TOTAL_CL", "Total Current Liabilities"),
    LineDefinition("LONG_DEBT", "Long-term Debt"),
    LineDefinition("OTHER_NCL", "Other Non-Current Liabilities"),
    LineDefinition("TOTAL_LIABILITIES", "Total Liabilities"),
    LineDefinition("COMMON_STOCK", "Common Stock"),
    LineDefinition("RETAINED_EARNINGS", "Retained Earnings"),
    LineDefinition("TOTAL_EQUITY", "Total Equity"),
)

CASH_FLOW_LINES: tuple[LineDefinition, ...] = (
    LineDefinition("CFO", "Cash Flow from Operations"),
    LineDefinition("CFI", "Cash Flow from Investing"),
    LineDefinition("CFF", "Cash Flow from Financing"),
    LineDefinition("NET_CHANGE", "Net Change in Cash"),
    LineDefinition("BEGIN_CASH", "Beginning Cash"),
    LineDefinition("END_CASH", "Ending Cash"),
)

STATEMENT_LINES: dict[ModelStatementType, tuple[LineDefinition, ...]] = {
    ModelStatementType.IS: INCOME_STATEMENT_LINES,
    ModelStatementType.BS: BALANCE_SHEET_LINES,
    ModelStatementType.CF: CASH_FLOW_LINES,
}
