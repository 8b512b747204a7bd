# src/dartmodel/domain/services/timeline_builder.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Timeline builder.

Purpose:
    Build the ordered annual timeline of a model: ``historical_years``
    periods ending at ``base_year`` followed by ``forecast_years`` periods.

Layer:
    domain/services

Example:
    ``build_timeline(2024, 5, 5)`` yields FY2020..FY2024 (indices 0..4) and
    FY2025E..FY2029E (indices 5..9).
"""

from __future__ import annotations

from dartmodel.domain.entities.timeline import ModelTimeline, Period
from dartmodel.domain.enums.dart import PeriodKind
from dartmodel.domain.exceptions.modeling import TimelineConfigurationError

__all__ = ["build_timeline", "historical_label", "forecast_label"]


def historical_label(fiscal_year: int) -> str:
    """Return the display label of a historical annual period."""
    return f"FY{fiscal_year}"


def forecast_label(fiscal_year: int) -> str:
    """Return the display label of a forecast annual period."""
    return f"FY{fiscal_year}E"


def build_timeline(
    base_year: int,
    historical_years: int,
    forecast_years: int,
    period_kind: PeriodKind = PeriodKind.ANNUAL,
) -> ModelTimeline:
    """Build an annual model timeline.

    Args:
        base_year: Last historical fiscal year.
        historical_years: Number of historical periods (>= 1).
        forecast_years: Number of forecast periods (>= 0).
        period_kind: Only ``PeriodKind.ANNUAL`` is supported.

    Returns:
        ModelTimeline: Periods with contiguous indices ``0..h+f-1``.

    Raises:
        TimelineConfigurationError: For non-annual timelines or invalid counts.
    """
    if period_kind is not PeriodKind.ANNUAL:
        raise TimelineConfigurationError(
            "Only annual timelines are supported.",
            details={"period_kind": period_kind.value},
        )
    if historical_years < 1 or forecast_years < 0:
        raise TimelineConfigurationError(
            "Timeline requires at least one historical year and a non-negative forecast.",
            details={"historical_years": historical_years, "forecast_years": forecast_years},
        )

    periods: list[Period] = []
    first_year = base_year - (historical_years - 1)
    for offset in range(historical_years):
        year = first_year + offset
        periods.append(
            Period(
                index=offset,
                fiscal_year=year,
                fiscal_quarter=None,
                period_kind=PeriodKind.ANNUAL,
                is_historical=True,
                label=historical_label(year),
            )
        )
    for offset in range(forecast_years):
        year = base_year + 1 + offset
        periods.append(
            Period(
                index=historical_years + offset,
                fiscal_year=year,
                fiscal_quarter=None,
                period_kind=PeriodKind.ANNUAL,
                is_historical=False,
                label=forecast_label(year),
            )
        )

    return ModelTimeline(
        periods=tuple(periods),
        historical_count=historical_years,
        forecast_count=forecast_years,
        base_year=base_year,
    )
