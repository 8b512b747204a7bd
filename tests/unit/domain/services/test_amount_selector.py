# tests/unit/domain/services/test_amount_selector.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Unit tests for raw amount selection.

Covers:
    - Balance sheet and annual rows always use the current amount.
    - Sub-annual flow rows prefer the period amount, falling back to the
      cumulative one, or the reverse when configured.
"""

from __future__ import annotations

from dartmodel.domain.services.amount_selector import select_amount
from tests.fixtures.curation_fakes import make_raw_row


def test_balance_sheet_ignores_cumulative_amount() -> None:
    row = make_raw_row(
        statement_category="BS",
        report_code="11012",
        current_amount="100",
        current_cumulative_amount="999",
    )

    selection = select_amount(row)

    assert selection.amount == "100"
    assert selection.is_accumulated is False


def test_annual_flow_uses_current_amount() -> None:
    row = make_raw_row(current_amount="100", current_cumulative_amount="999")

    selection = select_amount(row, prefer_period_flow=False)

    assert selection.amount == "100"
    assert selection.is_accumulated is False


def test_sub_annual_prefers_period_flow() -> None:
    row = make_raw_row(report_code="11014", current_amount="30", current_cumulative_amount="90")

    selection = select_amount(row)

    assert selection.amount == "30"
    assert selection.is_accumulated is False


def test_sub_annual_falls_back_to_cumulative_when_period_is_blank() -> None:
    row = make_raw_row(report_code="11013", current_amount="  ", current_cumulative_amount="90")

    selection = select_amount(row)

    assert selection.amount == "90"
    assert selection.is_accumulated is True


def test_sub_annual_prefers_cumulative_when_configured() -> None:
    row = make_raw_row(report_code="11012", current_amount="30", current_cumulative_amount="90")

    selection = select_amount(row, prefer_period_flow=False)

    assert selection.amount == "90"
    assert selection.is_accumulated is True


def test_no_amount_at_all() -> None:
    row = make_raw_row(report_code="11012", current_amount=None, current_cumulative_amount="")

    selection = select_amount(row)

    assert selection.amount is None
    assert selection.is_accumulated is False
