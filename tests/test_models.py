"""
Test cases for the engine input models, covering timestamp normalisation, count validation, camelCase aliases and per-type defaults.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from config import settings
from engine.enums import Direction, IndicatorType, Percentile, Unit
from engine.models import DataPoint, Indicator, Objective


def test_datapoint_parses_iso_and_alias():
    p = DataPoint.model_validate({"timestamp": "2025-03-15T12:00:00Z", "good": 10, "bad": 2})
    assert p.t == datetime(2025, 3, 15, 12, tzinfo=timezone.utc)
    assert p.total == 12


def test_datapoint_naive_timestamp_is_utc():
    p = DataPoint(t=datetime(2025, 1, 1, 8, 30))
    assert p.t.tzinfo is not None
    assert p.t.utcoffset().total_seconds() == 0


def test_datapoint_rejects_negative_counts():
    with pytest.raises(ValidationError):
        DataPoint(t="2025-01-01T00:00:00Z", good=-1, bad=0)


def test_datapoint_percentiles():
    p = DataPoint(t="2025-01-01T00:00:00Z", p95=120.0)
    assert p.has_percentiles
    assert p.percentile(Percentile.p95) == 120.0
    assert p.percentile(Percentile.p50) is None
    assert not DataPoint(t="2025-01-01T00:00:00Z", value=3.0).has_percentiles


def test_indicator_defaults_follow_type():
    lat = Indicator(id="l", name="l", type="latency", target=300)
    assert lat.unit is Unit.ms
    assert lat.objective_direction is Direction.lte
    assert lat.is_latency

    avail = Indicator(id="a", name="a", type="availability", target=99.9)
    assert avail.unit is Unit.percent
    assert avail.objective_direction is Direction.gte
    assert avail.type is IndicatorType.availability


def test_indicator_camel_case_direction():
    ind = Indicator.model_validate(
        {"id": "x", "name": "x", "type": "quality", "target": 50, "objectiveDirection": "lte", "unit": "count"}
    )
    assert ind.objective_direction is Direction.lte
    assert ind.unit is Unit.count


def test_indicator_rejects_unknown_type():
    with pytest.raises(ValidationError):
        Indicator(id="x", name="x", type="throughput", target=1)


def test_objective_error_budget_is_derived(availability):
    slo = Objective.model_validate(
        {"id": "s", "name": "s", "objectivePercent": 99.5, "errorBudgetPercent": 42, "indicators": [availability]}
    )
    assert slo.error_budget_percent == pytest.approx(0.5)
    assert slo.primary == availability
    assert slo.budgeting_window_days == settings.budgeting_window_days


def test_objective_without_indicators_has_no_primary():
    slo = Objective(id="s", name="s", objective_percent=99.0, budgeting_window_days=7)
    assert slo.primary is None
    assert slo.budgeting_window_days == 7


def test_objective_percent_bounds():
    with pytest.raises(ValidationError):
        Objective(id="s", name="s", objective_percent=100.5)
