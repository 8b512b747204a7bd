# src/dartmodel/domain/services/row_normalizer.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Row normalizer.

Purpose:
    Turn a raw filing row into a typed NormalizedRow and, once mapped, into a
    CuratedFact with a deterministic identity key.

Layer:
    domain/services

Notes:
    - Pure domain logic; no logging or I/O.
    - A row is dropped (None) when no amount was reported or the amount is a
      placeholder such as ``"-"``.
    - A row whose amount cannot be parsed is NOT dropped: it is emitted with
      a zero amount, ``parse_success=False`` and the parse error so the
      failure stays visible downstream.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from dartmodel.domain.entities.curated_fact import CuratedFact
from dartmodel.domain.entities.mapping_rule import MappingResult
from dartmodel.domain.entities.model_entity import entity_id_for_company
from dartmodel.domain.entities.normalized_row import NormalizedRow
from dartmodel.domain.entities.raw_filing_row import RawFilingRow
from dartmodel.domain.enums.dart import ConsolidationFlag, ConsolidationScope
from dartmodel.domain.services.amount_parser import parse_amount
from dartmodel.domain.services.amount_selector import select_amount
from dartmodel.domain.services.period_resolver import resolve_period

__all__ = [
    "NormalizerOptions",
    "normalize_currency",
    "normalize_scope",
    "parse_ordering",
    "normalize_row",
    "build_fact_key",
    "build_curated_fact",
]

_CURRENCY_ALIASES: dict[str, str] = {
    "원": "KRW",
    "KRW": "KRW",
    "한국원": "KRW",
    "USD": "USD",
    "달러": "USD",
    "미국달러": "USD",
}

_FACT_KEY_UNSAFE = re.compile(r"[^a-zA-Z0-9가-힣]")


@dataclass(frozen=True, slots=True)
class NormalizerOptions:
    """Options for :func:`normalize_row`.

    Attributes:
        prefer_period_flow: Prefer period amounts over cumulative amounts.
        source_priority: Priority stamped on every row (lower wins).
        default_currency: Currency used when the row has none.
    """

    prefer_period_flow: bool = True
    source_priority: int = 10
    default_currency: str = "KRW"


def normalize_currency(raw: str | None, default: str = "KRW") -> str:
    """Normalize a currency label to an ISO-like code."""
    if raw is None or not raw.strip():
        return default
    cleaned = raw.strip()
    return _CURRENCY_ALIASES.get(cleaned, _CURRENCY_ALIASES.get(cleaned.upper(), cleaned.upper()))


def normalize_scope(consolidation_flag: str) -> ConsolidationScope:
    """Map the raw consolidation flag to a scope (``CFS`` -> CONSOLIDATED)."""
    if consolidation_flag.strip().upper() == ConsolidationFlag.CFS.value:
        return ConsolidationScope.CONSOLIDATED
    return ConsolidationScope.SEPARATE


def parse_ordering(raw: str | None) -> int | None:
    """Parse the published ordinal, returning None when absent or non-numeric."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_row(raw: RawFilingRow, options: NormalizerOptions | None = None) -> NormalizedRow | None:
    """Normalize a raw filing row.

    Args:
        raw: Raw filing row.
        options: Normalizer options; defaults apply when omitted.

    Returns:
        NormalizedRow | None: The normalized row, or None when the row
        carries no amount.

    Raises:
        RawRowValidationError: If the fiscal year is malformed.
    """
    opts = options or NormalizerOptions()

    selection = select_amount(raw, prefer_period_flow=opts.prefer_period_flow)
    if selection.amount is None:
        return None

    parsed = parse_amount(selection.amount)
    if parsed.parse_success and parsed.value is None:
        return None

    period = resolve_period(raw.fiscal_year, raw.report_code, raw.statement_category)

    return NormalizedRow(
        company_code=raw.company_code,
        stock_code=raw.stock_code,
        entity_id=entity_id_for_company(raw.company_code),
        period=period,
        report_code=raw.report_code,
        scope=normalize_scope(raw.consolidation_flag),
        statement_category=raw.statement_category,
        account_source_id=raw.account_source_id,
        account_name=raw.account_name,
        account_detail=raw.account_detail,
        amount=parsed.value if parsed.value is not None else Decimal("0"),
        currency=normalize_currency(raw.currency, opts.default_currency),
        ordering=parse_ordering(raw.ordinal),
        source_report_ref=raw.receipt_no,
        source_priority=opts.source_priority,
        is_accumulated=selection.is_accumulated,
        parse_success=parsed.parse_success,
        parse_error=parsed.parse_error,
    )


def build_fact_key(row: NormalizedRow) -> str:
    """Build the deterministic identity key of a curated fact.

    Format: ``entity:kind:year:quarter|null:report:scope:statement:account``
    where characters outside ``[A-Za-z0-9가-힣]`` in the account name are
    replaced by ``_``. Distinct names that sanitize identically collide.
    """
    quarter = str(row.period.fiscal_quarter) if row.period.fiscal_quarter is not None else "null"
    account = _FACT_KEY_UNSAFE.sub("_", row.account_name)
    return ":".join(
        (
            row.entity_id,
            row.period.period_kind.value,
            str(row.period.fiscal_year),
            quarter,
            row.report_code,
            row.scope.value,
            row.statement_category,
            account,
        )
    )


def build_curated_fact(row: NormalizedRow, mapping: MappingResult) -> CuratedFact:
    """Combine a normalized row and its mapping into a CuratedFact."""
    period = row.period
    return CuratedFact(
        fact_key=build_fact_key(row),
        entity_id=row.entity_id,
        company_code=row.company_code,
        stock_code=row.stock_code,
        period_kind=period.period_kind,
        fiscal_year=period.fiscal_year,
        fiscal_quarter=period.fiscal_quarter,
        as_of_date=period.as_of_date,
        flow_start_date=period.flow_start_date,
        flow_end_date=period.flow_end_date,
        report_code=row.report_code,
        scope=row.scope,
        statement_category=row.statement_category,
        account_source_id=row.account_source_id,
        account_name=row.account_name,
        account_detail=row.account_detail,
        amount=row.amount,
        currency=row.currency,
        standard_line_id=mapping.standard_line_id,
        ordering=row.ordering,
        source_report_ref=row.source_report_ref,
        source_priority=row.source_priority,
        is_accumulated=row.is_accumulated,
        parse_success=row.parse_success,
        parse_error=row.parse_error,
    )
