"""
Enumerations for indicator types, objective directions, latency percentiles and the status vocabularies used by the SLO engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import STATUS_MESSAGES


class IndicatorType(str, Enum):
    availability = "availability"
    latency = "latency"
    quality = "quality"
    freshness = "freshness"
    correctness = "correctness"

    @property
    def is_count_based(self) -> bool:
        return self is not IndicatorType.latency


class Unit(str, Enum):
    percent = "percent"
    ms = "ms"
    count = "count"


class Direction(str, Enum):
    gte = "gte"
    lte = "lte"

    def meets(self, value: float, target: float) -> bool:
        if self is Direction.gte:
            return value >= target
        return value <= target


class Source(str, Enum):
    synthetic = "synthetic"
    rum = "rum"
    server = "server"
    queue = "queue"
    db = "db"


class Criticality(str, Enum):
    tier_0 = "tier-0"
    tier_1 = "tier-1"
    tier_2 = "tier-2"


class Percentile(str, Enum):
    p50 = "p50"
    p90 = "p90"
    p95 = "p95"
    p99 = "p99"

    @classmethod
    def by_severity(cls) -> tuple[Percentile, ...]:
        # worst signal first
        return (cls.p99, cls.p95, cls.p90, cls.p50)

    def rank(self) -> int:
        return _PERCENTILE_RANK[self.value]


_PERCENTILE_RANK: dict[str, int] = {"p50": 0, "p90": 1, "p95": 2, "p99": 3}


class LatencyRepresentation(str, Enum):
    percentiles = "percentiles"
    single_value = "single_value"


class BurnStatus(str, Enum):
    ok = "ok"
    warn = "warn"
    critical = "critical"

    @classmethod
    def from_rate(cls, rate: float) -> BurnStatus:
        from config import settings

        if rate >= settings.burn_rate_critical:
            return cls.critical
        if rate >= settings.burn_rate_warn:
            return cls.warn
        return cls.ok

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self.value]


class BudgetHealth(str, Enum):
    healthy = "healthy"
    low = "low"
    depleted = "depleted"


class Trend(str, Enum):
    improving = "improving"
    worsening = "worsening"
    none = "none"
