"""
Hourly and daily aggregation of an indicator series for heatmap rendering.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Union

from config import settings
from engine.models import DataPoint, Indicator
from engine.slo.reduce import strategy_for


@dataclass(frozen=True)
class HourlyBucket:
    day: int
    hour: int
    value: float
    sample_count: int
    date: Optional[date] = None


@dataclass(frozen=True)
class DailyBucket:
    date: date
    value: float
    sample_count: int


def aggregate_by_hour(
    series: Sequence[DataPoint],
    indicator: Indicator,
    by_date: Optional[bool] = None,
) -> List[HourlyBucket]:
    """Reduce each UTC hour of the series to one value.

    Buckets are keyed by (day-of-month, hour), so hours a month apart share a
    bucket. ``by_date=True`` keys by the absolute date instead.
    """
    if by_date is None:
        by_date = settings.heatmap_bucket_by_date

    grouped: Dict[Tuple[Union[int, date], int], List[DataPoint]] = {}
    for p in series:
        day_key: Union[int, date] = p.t.date() if by_date else p.t.day
        grouped.setdefault((day_key, p.t.hour), []).append(p)

    strategy = strategy_for(indicator)
    buckets: List[HourlyBucket] = []
    for (day_key, hour), points in grouped.items():
        d = day_key if isinstance(day_key, date) else None
        buckets.append(HourlyBucket(
            day=d.day if d is not None else int(day_key),
            hour=hour,
            value=strategy.value(points),
            sample_count=len(points),
            date=d,
        ))

    buckets.sort(key=lambda b: (b.date or date.min, b.day, b.hour))
    return buckets


def aggregate_by_day(series: Sequence[DataPoint], indicator: Indicator) -> List[DailyBucket]:
    grouped: Dict[date, List[DataPoint]] = {}
    for p in series:
        grouped.setdefault(p.t.date(), []).append(p)

    strategy = strategy_for(indicator)
    return [
        DailyBucket(date=d, value=strategy.value(points), sample_count=len(points))
        for d, points in sorted(grouped.items())
    ]
