# src/dartmodel/domain/services/amount_parser.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Amount parser for regulator display strings.

Purpose:
    Convert the human-formatted amount strings published in filings
    (``"1,234,567"``, ``"(1,234)"``, ``"9,999천원"``) into exact signed
    Decimal values.

Layer:
    domain/services

Notes:
    - Pure domain logic. Never raises: malformed input is reported through
      ``ParsedAmount.parse_success`` / ``parse_error``.
    - Unit suffixes are stripped but NOT scaled. ``"9,999천원"`` parses to
      9999, matching how the regulator reports the figure in the row's unit.
    - Parsing is strict: the cleaned text must be a finite decimal literal.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from dartmodel.domain.entities.normalized_row import ParsedAmount

__all__ = ["parse_amount", "EMPTY_PLACEHOLDERS"]

# Values that mean "no amount reported" rather than zero.
EMPTY_PLACEHOLDERS = frozenset({"", "-"})

_PARENTHESIZED = re.compile(r"^\((.*)\)$", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_UNIT_SUFFIX = re.compile(r"(원|천원|백만원|억원|KRW|USD|만|천|백만|억)$", re.IGNORECASE)


def parse_amount(raw: str | None) -> ParsedAmount:
    """Parse a raw amount string.

    Args:
        raw: Display string from the filing, or None.

    Returns:
        ParsedAmount: ``value`` is None (with success) for absent or
        placeholder input; otherwise the signed Decimal, or a failure with a
        descriptive error.
    """
    original = raw if raw is not None else ""
    text = original.strip()
    if text in EMPTY_PLACEHOLDERS:
        return ParsedAmount(value=None, original=original)

    negative = False
    match = _PARENTHESIZED.match(text)
    if match is not None:
        negative = True
        text = match.group(1)

    cleaned = _WHITESPACE.sub("", text.replace(",", ""))
    cleaned = _UNIT_SUFFIX.sub("", cleaned, count=1)

    try:
        magnitude = Decimal(cleaned)
    except InvalidOperation:
        return _failure(cleaned, original, negative)
    if not magnitude.is_finite():
        return _failure(cleaned, original, negative)

    value = -magnitude if negative else magnitude
    return ParsedAmount(value=value, original=original, is_negative=value < 0)


def _failure(cleaned: str, original: str, negative: bool) -> ParsedAmount:
    return ParsedAmount(
        value=None,
        original=original,
        is_negative=negative,
        parse_success=False,
        parse_error=f'Cannot parse: "{cleaned}" from "{original}"',
    )
