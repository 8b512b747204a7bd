# src/dartmodel/domain/services/model_checks.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model integrity checks.

Purpose:
    Evaluate the balance check (assets = liabilities + equity) and the cash
    tie-out (ending cash = beginning cash + net change) over every period of
    a timeline.

Layer:
    domain/services

Notes:
    - Missing values are treated as zero for check purposes only.
    - Each check reports the maximum absolute error across all periods; the
      check passes when that error is within tolerance.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from dartmodel.domain.entities.model_snapshot import CheckResult, ModelChecks
from dartmodel.domain.entities.timeline import ModelTimeline
from dartmodel.domain.enums.modeling import ModelCheckName

__all__ = [
    "DEFAULT_CHECK_TOLERANCE",
    "LineValues",
    "evaluate_identity",
    "run_model_checks",
]

DEFAULT_CHECK_TOLERANCE = Decimal("1")

LineValues = Mapping[str, Mapping[int, Decimal]]

_ZERO = Decimal("0")

# ---------------------------------------------------------------------------
# Identity definitions: left line vs sum of right lines.
# ---------------------------------------------------------------------------

BALANCE_IDENTITY = ("BS.TOTAL_ASSETS", ("BS.TOTAL_LIABILITIES", "BS.TOTAL_EQUITY"))
CASH_TIE_OUT_IDENTITY = ("CF.END_CASH", ("CF.BEGIN_CASH", "CF.NET_CHANGE"))


def _value(values: LineValues, line: str, index: int) -> Decimal:
    series = values.get(line)
    if series is None:
        return _ZERO
    return series.get(index, _ZERO)


def evaluate_identity(
    name: ModelCheckName,
    values: LineValues,
    period_indices: Iterable[int],
    left: str,
    right: tuple[str, ...],
    tolerance: Decimal = DEFAULT_CHECK_TOLERANCE,
) -> CheckResult:
    """Evaluate ``left == sum(right)`` for every period index.

    Args:
        name: Check name.
        values: Line id to sparse period values.
        period_indices: Period indices to evaluate.
        left: Line id of the left-hand side.
        right: Line ids summed on the right-hand side.
        tolerance: Absolute tolerance.

    Returns:
        CheckResult: Pass/fail and maximum absolute error.
    """
    max_error = _ZERO
    for index in period_indices:
        expected = sum((_value(values, line, index) for line in right), _ZERO)
        error = abs(_value(values, left, index) - expected)
        if error > max_error:
            max_error = error
    return CheckResult(
        name=name,
        passed=max_error <= tolerance,
        max_error=max_error,
        tolerance=tolerance,
    )


def run_model_checks(
    values: LineValues,
    timeline: ModelTimeline,
    tolerance: Decimal = DEFAULT_CHECK_TOLERANCE,
) -> ModelChecks:
    """Run the balance check and the cash tie-out over ``timeline``."""
    indices = [p.index for p in timeline.periods]
    balance_left, balance_right = BALANCE_IDENTITY
    cash_left, cash_right = CASH_TIE_OUT_IDENTITY
    return ModelChecks(
        balance_check=evaluate_identity(
            ModelCheckName.BALANCE, values, indices, balance_left, balance_right, tolerance
        ),
        cash_tie_out=evaluate_identity(
            ModelCheckName.CASH_TIE_OUT, values, indices, cash_left, cash_right, tolerance
        ),
    )
