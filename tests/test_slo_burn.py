"""
Test cases for burn rate math, multi-window evaluation, the worst-case headline status and agreement with budget health.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
from datetime import timedelta

import pytest

from conftest import END, counts, latencies
from engine.enums import BudgetHealth, BurnStatus
from engine.slo.budget import budget_health, error_budget
from engine.slo.burn import (
    BurnWindow,
    burn_rate,
    burn_rate_status,
    burn_rates_for_windows,
    evaluate_windows,
    worst_status,
)


def test_burn_rate_scenario_critical():
    rate = burn_rate(99.8, 99.9)
    assert rate == pytest.approx(2.0)
    assert burn_rate_status(rate) is BurnStatus.critical


def test_burn_rate_sustainable():
    assert burn_rate(99.95, 99.9) == pytest.approx(0.5)
    assert burn_rate(100.0, 99.9) == 0.0


def test_burn_rate_zero_budget_is_infinite():
    assert math.isinf(burn_rate(99.0, 100.0))
    assert burn_rate_status(burn_rate(99.0, 100.0)) is BurnStatus.critical


def test_burn_rates_canonical_windows(availability):
    # 72 hourly points; only the last hour is bad
    pairs = [(1000, 0)] * 71 + [(998, 2)]
    rates = burn_rates_for_windows(counts(pairs), availability, 99.9, reference_end=END)
    assert list(rates) == ["1h", "6h", "24h", "3d"]
    assert rates["1h"] == pytest.approx(2.0 / 2000 * 100 / 0.1)
    assert rates["1h"] > rates["6h"] > rates["24h"] > rates["3d"]


def test_empty_window_burns_nothing(availability):
    series = counts([(0, 100)] * 3, end=END - timedelta(days=10))
    rates = burn_rates_for_windows(series, availability, 99.9, reference_end=END)
    assert rates == {"1h": 0.0, "6h": 0.0, "24h": 0.0, "3d": 0.0}
    assert worst_status(rates) is BurnStatus.ok


def test_empty_window_reports_full_achievement(availability):
    series = counts([(0, 100)] * 3, end=END - timedelta(days=10))
    window = evaluate_windows(series, availability, 99.9, windows=[("1h", 3600)], reference_end=END)[0]
    assert window.sample_count == 0
    assert window.achieved_percent == 100.0
    assert window.burn_rate == burn_rate(window.achieved_percent, 99.9) == 0.0
    assert window.status is BurnStatus.ok


def test_custom_windows_mapping(availability):
    series = counts([(999, 1)] * 3)
    rates = burn_rates_for_windows(series, availability, 99.9, windows={"2h": 7200}, reference_end=END)
    assert list(rates) == ["2h"]
    assert rates["2h"] == pytest.approx(1.0)


def test_latency_burn_uses_compliance(latency):
    series = latencies([50, 60, 150, 200, 180, 90])
    windows = evaluate_windows(series, latency, 99.0, windows=[("1h", 3600)], reference_end=END)
    assert isinstance(windows[0], BurnWindow)
    assert windows[0].sample_count == 6
    assert windows[0].achieved_percent == pytest.approx(50.0)
    assert windows[0].burn_rate == pytest.approx(50.0)
    assert windows[0].status is BurnStatus.critical


def test_worst_status_is_max_not_average():
    assert worst_status({"1h": 2.5, "6h": 0.1, "24h": 0.1, "3d": 0.1}) is BurnStatus.critical
    assert worst_status({"1h": 0.2, "6h": 1.2}) is BurnStatus.warn
    assert worst_status({}) is BurnStatus.ok


@pytest.mark.parametrize("achieved", [100.0, 99.99, 99.95, 99.92, 99.9, 99.85, 99.8, 99.0])
def test_burn_status_agrees_with_budget_health(achieved):
    # over a whole budgeting window the burn rate is the unclamped spend
    rate = burn_rate(achieved, 99.9)
    budget = error_budget(achieved, 99.9)
    assert budget.spent == pytest.approx(min(rate, 1.0))
    health = budget_health(budget)
    if burn_rate_status(rate) is not BurnStatus.ok:
        assert health is BudgetHealth.depleted
    if health is BudgetHealth.healthy:
        assert burn_rate_status(rate) is BurnStatus.ok
