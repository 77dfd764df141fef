"""
SLO evaluation engine: windowing, reduction, error budget accounting, burn rates, breach detection, aggregation and trend comparison.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.slo.aggregate import DailyBucket, HourlyBucket, aggregate_by_day, aggregate_by_hour
from engine.slo.breach import BreachPeriod, Incident, detect_breach_periods, detect_point_incidents
from engine.slo.budget import ErrorBudget, budget_health, error_budget
from engine.slo.burn import (
    BurnWindow,
    burn_rate,
    burn_rate_status,
    burn_rates_for_windows,
    evaluate_windows,
    worst_status,
)
from engine.slo.evaluate import (
    HealthSummary,
    IndicatorStatus,
    ObjectiveStatus,
    evaluate_experience,
    evaluate_indicator,
    evaluate_objective,
    summarize_health,
)
from engine.slo.reduce import (
    achieved_percent,
    compliance_percent,
    is_objective_compliant,
    mean_latency,
    meets_objective,
    reduce_value,
    strategy_for,
)
from engine.slo.timeseries import BurnDownSample, BurnRateSample, burn_rate_time_series, cumulative_burn_down
from engine.slo.trend import TrendComparison, compare_windows
from engine.slo.window import slice_window

__all__ = [
    "DailyBucket", "HourlyBucket", "aggregate_by_day", "aggregate_by_hour",
    "BreachPeriod", "Incident", "detect_breach_periods", "detect_point_incidents",
    "ErrorBudget", "budget_health", "error_budget",
    "BurnWindow", "burn_rate", "burn_rate_status", "burn_rates_for_windows", "evaluate_windows", "worst_status",
    "HealthSummary", "IndicatorStatus", "ObjectiveStatus",
    "evaluate_experience", "evaluate_indicator", "evaluate_objective", "summarize_health",
    "achieved_percent", "compliance_percent", "is_objective_compliant", "mean_latency",
    "meets_objective", "reduce_value", "strategy_for",
    "BurnDownSample", "BurnRateSample", "burn_rate_time_series", "cumulative_burn_down",
    "TrendComparison", "compare_windows",
    "slice_window",
]
