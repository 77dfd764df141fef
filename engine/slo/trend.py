"""
Trend classification between two back-to-back windows of equal length.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from config import SECONDS_PER_DAY, settings
from engine.enums import Direction, Trend
from engine.models import DataPoint, Indicator
from engine.slo.reduce import reduce_value
from engine.slo.window import as_utc, slice_window


@dataclass(frozen=True)
class TrendComparison:
    trend: Trend
    recent_value: Optional[float]
    prior_value: Optional[float]
    relative_change: Optional[float]
    recent_count: int
    prior_count: int


def _classify(recent: float, prior: float, direction: Direction, min_change: float) -> tuple[Trend, float]:
    change = (recent - prior) / (abs(prior) or 1.0)
    if abs(change) < min_change:
        return Trend.none, change
    better = change > 0 if direction is Direction.gte else change < 0
    return (Trend.improving if better else Trend.worsening), change


def compare_windows(
    series: Sequence[DataPoint],
    indicator: Indicator,
    objective_direction: Optional[Direction] = None,
    recent_window_seconds: Optional[float] = None,
    prior_window_seconds: Optional[float] = None,
    reference_end: Optional[datetime] = None,
    min_relative_change: Optional[float] = None,
) -> TrendComparison:
    """Compare ``[end - recent, end]`` against the prior window just before it.

    The prior window excludes its end instant so no sample lands in both.
    Relative changes under ``trend_min_relative_change`` report no trend.
    An empty window on either side, recent or prior, also reports no trend,
    with the missing side's value left as ``None``.
    """
    if objective_direction is None:
        objective_direction = indicator.objective_direction
    if recent_window_seconds is None:
        recent_window_seconds = settings.trend_window_days * SECONDS_PER_DAY
    if prior_window_seconds is None:
        prior_window_seconds = recent_window_seconds
    if min_relative_change is None:
        min_relative_change = settings.trend_min_relative_change

    end = as_utc(reference_end)
    recent_start = end - timedelta(seconds=recent_window_seconds)

    recent = slice_window(series, recent_window_seconds, end)
    prior = [p for p in slice_window(series, prior_window_seconds, recent_start) if p.t < recent_start]

    recent_value = reduce_value(indicator, recent) if recent else None
    prior_value = reduce_value(indicator, prior) if prior else None

    if recent_value is None or prior_value is None:
        return TrendComparison(
            trend=Trend.none,
            recent_value=recent_value,
            prior_value=prior_value,
            relative_change=None,
            recent_count=len(recent),
            prior_count=len(prior),
        )

    trend, change = _classify(recent_value, prior_value, objective_direction, min_relative_change)
    return TrendComparison(
        trend=trend,
        recent_value=recent_value,
        prior_value=prior_value,
        relative_change=change,
        recent_count=len(recent),
        prior_count=len(prior),
    )
