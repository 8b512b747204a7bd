# src/dartmodel/domain/entities/timeline.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model timeline entities.

Purpose:
    Ordered sequence of model periods: historical periods first, then forecast
    periods, with contiguous zero-based indices.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.domain.enums.dart import PeriodKind

__all__ = ["Period", "ModelTimeline"]


@dataclass(frozen=True, slots=True)
class Period:
    """Single model period.

    Attributes:
        index: Zero-based position in the timeline.
        fiscal_year: Fiscal year of the period.
        fiscal_quarter: Quarter number, None for annual periods.
        period_kind: Period kind (ANNUAL for every timeline built today).
        is_historical: True for periods backed by reported facts.
        label: Display label (``FY2024`` or ``FY2025E``).
    """

    index: int
    fiscal_year: int
    fiscal_quarter: int | None
    period_kind: PeriodKind
    is_historical: bool
    label: str


@dataclass(frozen=True, slots=True)
class ModelTimeline:
    """Ordered model periods.

    Attributes:
        periods: Periods ordered by index.
        historical_count: Number of historical periods.
        forecast_count: Number of forecast periods.
        base_year: Last historical fiscal year.
    """

    periods: tuple[Period, ...]
    historical_count: int
    forecast_count: int
    base_year: int

    @property
    def boundary_index(self) -> int:
        """Index of the first forecast period (equals ``historical_count``)."""
        return self.historical_count

    def period_by_index(self, index: int) -> Period | None:
        """Return the period at ``index``, or None when out of range."""
        if 0 <= index < len(self.periods):
            return self.periods[index]
        return None

    def period_by_year(self, fiscal_year: int) -> Period | None:
        """Return the annual period for ``fiscal_year``, or None."""
        for period in self.periods:
            if period.fiscal_year == fiscal_year and period.fiscal_quarter is None:
                return period
        return None

    def historical_periods(self) -> tuple[Period, ...]:
        """Return the historical periods in index order."""
        return tuple(p for p in self.periods if p.is_historical)

    def forecast_periods(self) -> tuple[Period, ...]:
        """Return the forecast periods in index order."""
        return tuple(p for p in self.periods if not p.is_historical)

    def index_range(self, start: int, end: int) -> tuple[Period, ...]:
        """Return periods whose index lies in ``[start, end]`` (inclusive)."""
        return tuple(p for p in self.periods if start <= p.index <= end)
