"""
Reduction of an indicator window to a single value, with one strategy per indicator variant.

Count-based indicators (availability, quality, freshness, correctness) reduce
to the good ratio in percent. Latency indicators have two reductions that are
not interchangeable: the mean latency is the headline "current value", while
the compliance percentage (share of samples meeting the target) is the only
valid input for error budget and burn rate math.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import LatencyRepresentation, Percentile
from engine.models import DataPoint, Indicator, Objective

EMPTY_WINDOW_VALUE = 0.0
NO_EVIDENCE_VALUE = 100.0


def primary_percentile() -> Percentile:
    return Percentile(settings.primary_percentile)


def resolve_latency_representation(points: Sequence[DataPoint]) -> LatencyRepresentation:
    if any(p.has_percentiles for p in points):
        return LatencyRepresentation.percentiles
    return LatencyRepresentation.single_value


def point_latency(
    point: DataPoint,
    representation: LatencyRepresentation,
    percentile: Optional[Percentile] = None,
) -> float:
    if representation is LatencyRepresentation.percentiles:
        v = point.percentile(percentile or primary_percentile())
        if v is not None:
            return float(v)
    return float(point.value) if point.value is not None else 0.0


def point_ratio(point: DataPoint) -> float:
    total = point.total
    if total == 0:
        return NO_EVIDENCE_VALUE
    return point.good * 100.0 / total


def meets_objective(indicator: Indicator, value: float) -> bool:
    return indicator.objective_direction.meets(value, indicator.target)


class ReductionStrategy(ABC):
    def __init__(self, indicator: Indicator):
        self.indicator = indicator

    @abstractmethod
    def value(self, points: Sequence[DataPoint]) -> float:
        """Headline value of the window in the indicator's own unit."""

    @abstractmethod
    def achieved(self, points: Sequence[DataPoint]) -> float:
        """Availability-like percent of the window, for budget and burn math."""


class CountStrategy(ReductionStrategy):

    def value(self, points: Sequence[DataPoint]) -> float:
        if not points:
            return EMPTY_WINDOW_VALUE
        good = sum(p.good for p in points)
        bad = sum(p.bad for p in points)
        if good + bad == 0:
            return NO_EVIDENCE_VALUE
        return good * 100.0 / (good + bad)

    def achieved(self, points: Sequence[DataPoint]) -> float:
        return self.value(points)


class LatencyStrategy(ReductionStrategy):

    def value(self, points: Sequence[DataPoint]) -> float:
        if not points:
            return EMPTY_WINDOW_VALUE
        rep = resolve_latency_representation(points)
        arr = np.array([point_latency(p, rep) for p in points], dtype=float)
        return float(np.mean(arr))

    def achieved(self, points: Sequence[DataPoint]) -> float:
        return self.compliance(points)

    def compliance(self, points: Sequence[DataPoint], percentile: Optional[Percentile] = None) -> float:
        if not points:
            return EMPTY_WINDOW_VALUE
        rep = resolve_latency_representation(points)
        meeting = sum(
            1 for p in points if meets_objective(self.indicator, point_latency(p, rep, percentile))
        )
        return 100.0 * meeting / len(points)


def strategy_for(indicator: Indicator) -> ReductionStrategy:
    if indicator.is_latency:
        return LatencyStrategy(indicator)
    return CountStrategy(indicator)


def reduce_value(indicator: Indicator, points: Sequence[DataPoint]) -> float:
    """Headline value: good ratio for counts, mean latency for latency.

    Empty input gives 0; non-empty count input with no trials gives 100.
    """
    return strategy_for(indicator).value(points)


def mean_latency(indicator: Indicator, points: Sequence[DataPoint]) -> float:
    return LatencyStrategy(indicator).value(points)


def compliance_percent(
    indicator: Indicator,
    points: Sequence[DataPoint],
    percentile: Optional[Percentile] = None,
) -> float:
    return LatencyStrategy(indicator).compliance(points, percentile)


def achieved_percent(indicator: Indicator, points: Sequence[DataPoint]) -> float:
    return strategy_for(indicator).achieved(points)


def is_objective_compliant(objective: Objective, values: Mapping[str, float]) -> bool:
    for indicator in objective.indicators:
        if not meets_objective(indicator, values.get(indicator.id, 0.0)):
            return False
    return True
