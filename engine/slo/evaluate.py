"""
Objective evaluation: headline compliance, error budget and burn status per objective, and health rollups per experience.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import SECONDS_PER_DAY, settings
from engine.enums import BudgetHealth, BurnStatus
from engine.models import DataPoint, Experience, Indicator, Objective
from engine.slo.budget import ErrorBudget, budget_health, error_budget
from engine.slo.burn import burn_rates_for_windows, worst_status
from engine.slo.reduce import NO_EVIDENCE_VALUE, meets_objective, strategy_for
from engine.slo.window import as_utc, slice_window

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorStatus:
    indicator_id: str
    current_value: float
    achieved_percent: float
    meets_objective: bool
    error_budget: ErrorBudget
    budget_health: BudgetHealth
    burn_rates: Dict[str, float]
    status: BurnStatus
    sample_count: int

    @property
    def message(self) -> str:
        return self.status.message


@dataclass(frozen=True)
class ObjectiveStatus:
    objective_id: str
    objective_percent: float
    error_budget_percent: float
    primary: Optional[IndicatorStatus]
    indicators: List[IndicatorStatus] = field(default_factory=list)

    @property
    def meets_objective(self) -> bool:
        return self.primary.meets_objective if self.primary else True

    @property
    def compliant(self) -> bool:
        return all(s.meets_objective for s in self.indicators)

    @property
    def status(self) -> BurnStatus:
        return self.primary.status if self.primary else BurnStatus.ok


@dataclass(frozen=True)
class HealthSummary:
    name: str
    meeting: int
    at_risk: int
    breaching: int
    total: int
    health_percent: float


def evaluate_indicator(
    indicator: Indicator,
    series: Sequence[DataPoint],
    objective_percent: float,
    budgeting_window_days: Optional[int] = None,
    reference_end: Optional[datetime] = None,
) -> IndicatorStatus:
    if budgeting_window_days is None:
        budgeting_window_days = settings.budgeting_window_days
    end = as_utc(reference_end)

    window = slice_window(series, budgeting_window_days * SECONDS_PER_DAY, end)
    strategy = strategy_for(indicator)
    current = strategy.value(window)
    if window:
        # latency budgets come from compliance, never from the latency itself
        achieved = strategy.achieved(window)
        meets = meets_objective(indicator, current)
    else:
        # no samples is no evidence of failure, whatever the indicator type
        achieved = NO_EVIDENCE_VALUE
        meets = True
    budget = error_budget(achieved, objective_percent)
    rates = burn_rates_for_windows(series, indicator, objective_percent, reference_end=end)

    result = IndicatorStatus(
        indicator_id=indicator.id,
        current_value=current,
        achieved_percent=achieved,
        meets_objective=meets,
        error_budget=budget,
        budget_health=budget_health(budget),
        burn_rates=rates,
        status=worst_status(rates),
        sample_count=len(window),
    )
    log.debug(
        "indicator %s: value=%.4f achieved=%.4f spent=%.4f status=%s",
        indicator.id, current, achieved, budget.spent, result.status.value,
    )
    return result


def evaluate_objective(
    objective: Objective,
    series_by_id: Mapping[str, Sequence[DataPoint]],
    reference_end: Optional[datetime] = None,
) -> ObjectiveStatus:
    """Evaluate every indicator of ``objective``; the first one is the headline."""
    end = as_utc(reference_end)
    statuses = [
        evaluate_indicator(
            indicator,
            series_by_id.get(indicator.id, []),
            objective.objective_percent,
            objective.budgeting_window_days,
            end,
        )
        for indicator in objective.indicators
    ]

    result = ObjectiveStatus(
        objective_id=objective.id,
        objective_percent=objective.objective_percent,
        error_budget_percent=objective.error_budget_percent,
        primary=statuses[0] if statuses else None,
        indicators=statuses,
    )
    if result.status is not BurnStatus.ok:
        log.info("objective %s is %s (%s)", objective.id, result.status.value, result.status.message)
    return result


def summarize_health(name: str, statuses: Iterable[ObjectiveStatus]) -> HealthSummary:
    meeting = at_risk = breaching = 0
    for s in statuses:
        if s.primary is None:
            continue
        if s.status is BurnStatus.ok:
            meeting += 1
        elif s.status is BurnStatus.warn:
            at_risk += 1
        else:
            breaching += 1

    total = meeting + at_risk + breaching
    return HealthSummary(
        name=name,
        meeting=meeting,
        at_risk=at_risk,
        breaching=breaching,
        total=total,
        health_percent=(meeting / total * 100.0) if total else 100.0,
    )


def evaluate_experience(
    experience: Experience,
    series_by_id: Mapping[str, Sequence[DataPoint]],
    reference_end: Optional[datetime] = None,
) -> Tuple[HealthSummary, Dict[str, ObjectiveStatus]]:
    end = as_utc(reference_end)
    statuses: Dict[str, ObjectiveStatus] = {}
    for journey in experience.journeys:
        for objective in journey.slos:
            statuses[objective.id] = evaluate_objective(objective, series_by_id, end)
    return summarize_health(experience.name, statuses.values()), statuses
