import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.models import DataPoint, Indicator, Objective

END = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def counts(pairs, end=END, step_minutes=60):
    """Build a count series ending at ``end`` from (good, bad) pairs, oldest first."""
    n = len(pairs)
    return [
        DataPoint(t=end - timedelta(minutes=step_minutes * (n - 1 - i)), good=g, bad=b)
        for i, (g, b) in enumerate(pairs)
    ]


def latencies(values, end=END, step_minutes=5, field="value"):
    n = len(values)
    return [
        DataPoint(t=end - timedelta(minutes=step_minutes * (n - 1 - i)), **{field: v})
        for i, v in enumerate(values)
    ]


@pytest.fixture
def availability():
    return Indicator(id="checkout-avail", name="Checkout availability", type="availability", target=99.9)


@pytest.fixture
def latency():
    return Indicator(id="checkout-p95", name="Checkout latency", type="latency", target=100.0)


@pytest.fixture
def objective(availability, latency):
    return Objective(
        id="checkout",
        name="Checkout",
        objective_percent=99.9,
        indicators=[availability, latency],
    )
