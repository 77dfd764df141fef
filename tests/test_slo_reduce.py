"""
Test cases for window reduction, covering count ratios, latency mean versus compliance, representation resolution and objective checks.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from conftest import counts, latencies
from config import settings
from engine.enums import LatencyRepresentation, Percentile
from engine.models import Indicator, Objective
from engine.slo.reduce import (
    CountStrategy,
    LatencyStrategy,
    achieved_percent,
    compliance_percent,
    is_objective_compliant,
    mean_latency,
    meets_objective,
    reduce_value,
    resolve_latency_representation,
    strategy_for,
)


def test_reduce_all_good_is_100(availability):
    series = counts([(1000, 0)] * 100)
    assert reduce_value(availability, series) == 100.0


def test_reduce_sums_before_dividing(availability):
    series = counts([(90, 10), (10, 0)])
    assert reduce_value(availability, series) == pytest.approx(100.0 * 100 / 110)


def test_reduce_empty_is_zero(availability, latency):
    assert reduce_value(availability, []) == 0.0
    assert reduce_value(latency, []) == 0.0
    assert compliance_percent(latency, []) == 0.0


def test_reduce_zero_trials_is_100(availability):
    assert reduce_value(availability, counts([(0, 0), (0, 0)])) == 100.0


def test_strategy_selected_by_type(availability, latency):
    assert isinstance(strategy_for(availability), CountStrategy)
    assert isinstance(strategy_for(latency), LatencyStrategy)
    for kind in ("quality", "freshness", "correctness"):
        ind = Indicator(id=kind, name=kind, type=kind, target=99.0)
        assert isinstance(strategy_for(ind), CountStrategy)


def test_latency_mean_and_compliance_differ(latency):
    series = latencies([50, 60, 150, 200, 180, 90])
    assert mean_latency(latency, series) == pytest.approx(730 / 6)
    assert reduce_value(latency, series) == pytest.approx(730 / 6)
    assert compliance_percent(latency, series) == pytest.approx(50.0)
    assert achieved_percent(latency, series) == pytest.approx(50.0)


def test_latency_percentiles_take_precedence(latency):
    series = latencies([90, 95], field="p95")
    series.append(series[-1].model_copy(update={"value": 500.0}))
    assert resolve_latency_representation(series) is LatencyRepresentation.percentiles
    # third point has p95=95 as well, value ignored
    assert mean_latency(latency, series) == pytest.approx((90 + 95 + 95) / 3)


def test_latency_single_value_representation(latency):
    assert resolve_latency_representation(latencies([1, 2])) is LatencyRepresentation.single_value


def test_compliance_per_percentile(latency):
    series = latencies([80, 120], field="p99")
    series = [p.model_copy(update={"p50": 40.0}) for p in series]
    assert compliance_percent(latency, series, Percentile.p99) == pytest.approx(50.0)
    assert compliance_percent(latency, series, Percentile.p50) == pytest.approx(100.0)


def test_primary_percentile_from_settings(monkeypatch, latency):
    series = [p.model_copy(update={"p50": 40.0}) for p in latencies([150, 150], field="p95")]
    assert compliance_percent(latency, series) == 0.0
    monkeypatch.setattr(settings, "primary_percentile", "p50")
    assert compliance_percent(latency, series) == 100.0


def test_meets_objective_directions(availability, latency):
    assert meets_objective(availability, 99.9)
    assert not meets_objective(availability, 99.89)
    assert meets_objective(latency, 100.0)
    assert not meets_objective(latency, 100.5)


def test_is_objective_compliant(availability, latency):
    slo = Objective(id="s", name="s", objective_percent=99.9, indicators=[availability, latency])
    assert is_objective_compliant(slo, {availability.id: 99.95, latency.id: 80.0})
    assert not is_objective_compliant(slo, {availability.id: 99.95, latency.id: 120.0})
    # a missing availability value reads as 0
    assert not is_objective_compliant(slo, {latency.id: 80.0})


def test_reduce_is_idempotent(availability):
    series = counts([(99, 1), (98, 2)])
    assert reduce_value(availability, series) == reduce_value(availability, series)
