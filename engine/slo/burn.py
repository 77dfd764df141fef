"""
Burn rate evaluation over multiple lookback windows, with worst-case headline status.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from config import settings
from engine.enums import BurnStatus
from engine.models import DataPoint, Indicator
from engine.slo.reduce import NO_EVIDENCE_VALUE, achieved_percent
from engine.slo.window import as_utc, slice_window

WindowSpec = Union[Mapping[str, float], Sequence[Tuple[str, float]]]


@dataclass(frozen=True)
class BurnWindow:
    window_label: str
    window_seconds: float
    sample_count: int
    achieved_percent: float
    burn_rate: float
    status: BurnStatus


def burn_rate(achieved_percent: float, objective_percent: float) -> float:
    """Ratio of the observed error rate to the rate that exhausts the budget.

    1.0 consumes the budget exactly by the end of the window. A zero budget
    gives ``inf``.
    """
    err = 100.0 - achieved_percent
    budget = 100.0 - objective_percent
    return err / budget if budget > 0 else math.inf


def burn_rate_status(rate: float) -> BurnStatus:
    return BurnStatus.from_rate(rate)


def _get_windows(windows: Optional[WindowSpec] = None) -> List[Tuple[str, float]]:
    """Return (label, seconds) pairs from the argument or from settings."""
    if windows is None:
        windows = settings.burn_windows
    items = windows.items() if isinstance(windows, Mapping) else windows
    return [(str(label), float(seconds)) for label, seconds in items]


def evaluate_windows(
    series: Sequence[DataPoint],
    indicator: Indicator,
    objective_percent: float,
    windows: Optional[WindowSpec] = None,
    reference_end: Optional[datetime] = None,
) -> List[BurnWindow]:
    end = as_utc(reference_end)
    results: List[BurnWindow] = []

    for label, window_s in _get_windows(windows):
        points = slice_window(series, window_s, end)
        if not points:
            # no data reads as nothing burning, which under-reports stale series
            rate = 0.0
            achieved = NO_EVIDENCE_VALUE
        else:
            achieved = achieved_percent(indicator, points)
            rate = burn_rate(achieved, objective_percent)
        results.append(
            BurnWindow(
                window_label=label,
                window_seconds=window_s,
                sample_count=len(points),
                achieved_percent=achieved,
                burn_rate=rate,
                status=burn_rate_status(rate),
            )
        )

    return results


def burn_rates_for_windows(
    series: Sequence[DataPoint],
    indicator: Indicator,
    objective_percent: float,
    windows: Optional[WindowSpec] = None,
    reference_end: Optional[datetime] = None,
) -> Dict[str, float]:
    return {
        w.window_label: w.burn_rate
        for w in evaluate_windows(series, indicator, objective_percent, windows, reference_end)
    }


def worst_status(rates: Mapping[str, float]) -> BurnStatus:
    """Headline status: the worst window wins, never an average."""
    if not rates:
        return BurnStatus.ok
    return burn_rate_status(max(rates.values()))
