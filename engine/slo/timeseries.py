"""
Burn rate curves over a sliding lookback and the cumulative error budget burn-down of a series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import numpy as np

from config import SECONDS_PER_HOUR, settings
from engine.enums import LatencyRepresentation, Percentile
from engine.models import DataPoint, Indicator
from engine.slo.budget import error_budget
from engine.slo.burn import burn_rate
from engine.slo.reduce import (
    NO_EVIDENCE_VALUE,
    meets_objective,
    point_latency,
    primary_percentile,
    resolve_latency_representation,
)


@dataclass(frozen=True)
class BurnRateSample:
    timestamp: datetime
    burn_rate: float
    sample_count: int
    p50_burn_rate: Optional[float] = None
    p90_burn_rate: Optional[float] = None
    p95_burn_rate: Optional[float] = None
    p99_burn_rate: Optional[float] = None


@dataclass(frozen=True)
class BurnDownSample:
    timestamp: datetime
    performance: float
    error_budget_remaining: float


def _prefix(vals: np.ndarray) -> np.ndarray:
    return np.concatenate(([0.0], np.cumsum(vals, dtype=float)))


def _latency_tracks(
    ordered: List[DataPoint],
    indicator: Indicator,
    representation: LatencyRepresentation,
) -> Dict[Optional[Percentile], np.ndarray]:
    keys: List[Optional[Percentile]]
    if representation is LatencyRepresentation.percentiles:
        keys = list(Percentile)
    else:
        keys = [None]
    tracks: Dict[Optional[Percentile], np.ndarray] = {}
    for key in keys:
        met = np.array(
            [meets_objective(indicator, point_latency(p, representation, key)) for p in ordered],
            dtype=float,
        )
        tracks[key] = _prefix(met)
    return tracks


def burn_rate_time_series(
    series: Sequence[DataPoint],
    indicator: Indicator,
    objective_percent: float,
    lookback_hours: Optional[float] = None,
) -> List[BurnRateSample]:
    """One burn rate sample per point, over the lookback ending at that point.

    Samples follow the input order. Latency series carrying percentiles get an
    independent curve per percentile; ``burn_rate`` is the primary one.
    """
    if lookback_hours is None:
        lookback_hours = settings.burn_curve_lookback_hours
    if not series:
        return []

    lookback = float(lookback_hours) * SECONDS_PER_HOUR
    ts = np.array([p.t.timestamp() for p in series], dtype=float)
    order = np.argsort(ts, kind="stable")
    sorted_ts = ts[order]
    ordered = [series[i] for i in order]

    lo = np.searchsorted(sorted_ts, ts - lookback, side="left")
    hi = np.searchsorted(sorted_ts, ts, side="right")

    results: List[BurnRateSample] = []

    if not indicator.is_latency:
        good = _prefix(np.array([p.good for p in ordered], dtype=float))
        bad = _prefix(np.array([p.bad for p in ordered], dtype=float))
        for i, point in enumerate(series):
            n = int(hi[i] - lo[i])
            if n <= 0:
                continue
            g = good[hi[i]] - good[lo[i]]
            b = bad[hi[i]] - bad[lo[i]]
            achieved = g * 100.0 / (g + b) if g + b > 0 else NO_EVIDENCE_VALUE
            results.append(
                BurnRateSample(
                    timestamp=point.t,
                    burn_rate=burn_rate(achieved, objective_percent),
                    sample_count=n,
                )
            )
        return results

    rep = resolve_latency_representation(series)
    tracks = _latency_tracks(ordered, indicator, rep)
    primary = primary_percentile() if rep is LatencyRepresentation.percentiles else None

    for i, point in enumerate(series):
        n = int(hi[i] - lo[i])
        if n <= 0:
            continue
        rates: Dict[Optional[Percentile], float] = {}
        for key, met in tracks.items():
            compliance = 100.0 * (met[hi[i]] - met[lo[i]]) / n
            rates[key] = burn_rate(compliance, objective_percent)
        results.append(
            BurnRateSample(
                timestamp=point.t,
                burn_rate=rates[primary],
                sample_count=n,
                p50_burn_rate=rates.get(Percentile.p50),
                p90_burn_rate=rates.get(Percentile.p90),
                p95_burn_rate=rates.get(Percentile.p95),
                p99_burn_rate=rates.get(Percentile.p99),
            )
        )

    return results


def cumulative_burn_down(
    series: Sequence[DataPoint],
    indicator: Indicator,
    objective_percent: float,
) -> List[BurnDownSample]:
    """Error budget remaining as of everything seen so far, in one pass.

    ``error_budget_remaining`` never rises again once spent: later good
    samples dilute ``performance`` but do not refund the budget.
    """
    if not series:
        return []

    rep = resolve_latency_representation(series) if indicator.is_latency else None
    good = bad = 0
    met = seen = 0
    floor = 100.0
    results: List[BurnDownSample] = []

    for point in series:
        if rep is not None:
            seen += 1
            if meets_objective(indicator, point_latency(point, rep)):
                met += 1
            performance = met * 100.0 / seen
        else:
            good += point.good
            bad += point.bad
            performance = good * 100.0 / (good + bad) if good + bad > 0 else NO_EVIDENCE_VALUE

        floor = min(floor, error_budget(performance, objective_percent).remaining_percent)
        results.append(
            BurnDownSample(
                timestamp=point.t,
                performance=performance,
                error_budget_remaining=floor,
            )
        )

    return results
