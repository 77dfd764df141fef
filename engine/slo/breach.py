"""
Breach period segmentation and per-point incident markers for an indicator series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from config import settings
from engine.enums import LatencyRepresentation, Percentile
from engine.models import DataPoint, Indicator
from engine.slo.reduce import (
    meets_objective,
    point_latency,
    point_ratio,
    resolve_latency_representation,
)


@dataclass(frozen=True)
class BreachPeriod:
    start: datetime
    end: datetime
    sample_count: int
    percentile: Optional[Percentile] = None

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True)
class Incident:
    timestamp: datetime
    value: float
    reason: str


def _worse(a: Optional[Percentile], b: Optional[Percentile]) -> Optional[Percentile]:
    if a is None:
        return b
    if b is None:
        return a
    return a if a.rank() >= b.rank() else b


def _latency_breach(
    point: DataPoint,
    indicator: Indicator,
    representation: LatencyRepresentation,
) -> Tuple[bool, Optional[Percentile]]:
    if representation is LatencyRepresentation.percentiles and point.has_percentiles:
        for pct in Percentile.by_severity():
            v = point.percentile(pct)
            if v is not None and not meets_objective(indicator, v):
                return True, pct
        return False, None
    if point.value is None:
        return False, None
    return not meets_objective(indicator, point.value), None


def detect_breach_periods(series: Sequence[DataPoint], indicator: Indicator) -> List[BreachPeriod]:
    """Merge consecutive failing samples into ``[start, end]`` periods.

    Latency samples with percentiles are checked p99 first, and a period is
    tagged with the most severe percentile seen breaching inside it. A period
    ends at its last failing sample, including one left open at the end of
    the series.
    """
    if not series:
        return []

    ordered = sorted(series, key=lambda p: p.t)
    rep = resolve_latency_representation(ordered) if indicator.is_latency else None

    periods: List[BreachPeriod] = []
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    tag: Optional[Percentile] = None
    count = 0

    for point in ordered:
        if rep is not None:
            breaching, pct = _latency_breach(point, indicator, rep)
        else:
            breaching, pct = not meets_objective(indicator, point_ratio(point)), None

        if breaching:
            if start is None:
                start, tag, count = point.t, pct, 0
            end = point.t
            tag = _worse(tag, pct)
            count += 1
        elif start is not None:
            periods.append(BreachPeriod(start=start, end=end, sample_count=count, percentile=tag))
            start, end, tag, count = None, None, None, 0

    if start is not None:
        periods.append(BreachPeriod(start=start, end=end, sample_count=count, percentile=tag))

    return periods


def detect_point_incidents(series: Sequence[DataPoint], indicator: Indicator) -> List[Incident]:
    """Flag individual samples well past the target, for timeline markers.

    Uses looser thresholds than :func:`detect_breach_periods`: counts must fall
    more than ``incident_ratio_margin`` points below target, latency must
    exceed ``target * incident_latency_factor``.
    """
    if not series:
        return []

    incidents: List[Incident] = []
    target = indicator.target

    if indicator.is_latency:
        rep = resolve_latency_representation(series)
        limit = target * settings.incident_latency_factor
        unit = indicator.unit.value
        for point in series:
            value = point_latency(point, rep)
            if value > limit:
                incidents.append(Incident(
                    timestamp=point.t,
                    value=value,
                    reason=f"Latency spiked to {value:.0f}{unit} (target: {target:g}{unit})",
                ))
        return incidents

    floor = target - settings.incident_ratio_margin
    for point in series:
        pct = point_ratio(point)
        if pct < floor:
            incidents.append(Incident(
                timestamp=point.t,
                value=pct,
                reason=f"{indicator.type.value} dropped to {pct:.2f}% (target: {target:g}%)",
            ))
    return incidents
