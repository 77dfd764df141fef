"""
Constants and configuration for the SLO evaluation engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings


SECONDS_PER_HOUR: int = 3600
SECONDS_PER_DAY: int = 24 * SECONDS_PER_HOUR

SLO_BUDGETING_WINDOW_DAYS: int = 28
SLO_PRIMARY_PERCENTILE: str = "p95"
PERCENTILE_NAMES: Tuple[str, ...] = ("p50", "p90", "p95", "p99")

# canonical multi-window burn rate lookbacks as (label, window_seconds)
DEFAULT_BURN_WINDOWS: List[Tuple[str, float]] = [
    ("1h", 1 * SECONDS_PER_HOUR),
    ("6h", 6 * SECONDS_PER_HOUR),
    ("24h", 24 * SECONDS_PER_HOUR),
    ("3d", 3 * SECONDS_PER_DAY),
]

# human readable headline per burn status
STATUS_MESSAGES: dict[str, str] = {
    "ok": "Within budget",
    "warn": "At risk",
    "critical": "Breaching",
}


class Settings(BaseSettings):
    budgeting_window_days: int = SLO_BUDGETING_WINDOW_DAYS

    burn_windows: List[Tuple[str, float]] = DEFAULT_BURN_WINDOWS

    # burn rate status boundaries (multiples of the sustainable rate)
    burn_rate_warn: float = 1.0
    burn_rate_critical: float = 2.0

    # budget health bands on the remaining fraction
    budget_low_remaining: float = 0.5
    budget_depleted_remaining: float = 0.2

    # point incident markers, looser than the objective itself
    incident_ratio_margin: float = 0.3
    incident_latency_factor: float = 1.25

    # trend comparison
    trend_min_relative_change: float = 0.02
    trend_window_days: int = 7

    # latency track used when a single curve is needed
    primary_percentile: str = SLO_PRIMARY_PERCENTILE

    # heatmap buckets keyed by day-of-month unless set
    heatmap_bucket_by_date: bool = False

    burn_curve_lookback_hours: float = 1.0

    @field_validator("primary_percentile", mode="before")
    @classmethod
    def _normalise_percentile(cls, v: object) -> str:
        name = str(v).strip().lower()
        if name not in PERCENTILE_NAMES:
            raise ValueError(f"primary_percentile must be one of {', '.join(PERCENTILE_NAMES)}, got {v!r}")
        return name

    model_config = {
        "env_prefix": "SLO_",
        "extra": "ignore",
    }


settings = Settings()
