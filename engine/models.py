"""
Input models for indicators, objectives and time series samples, validated at the engine boundary.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from config import settings
from engine.enums import Criticality, Direction, IndicatorType, Percentile, Source, Unit


class DataPoint(BaseModel):
    """One sample for one indicator at one instant.

    Count-based indicators fill ``good``/``bad``; latency indicators fill
    ``value`` and/or the ``p50``..``p99`` percentiles. A series is expected to
    use one representation throughout; mixing them is not supported.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    t: datetime = Field(validation_alias=AliasChoices("t", "timestamp"))
    good: int = Field(default=0, ge=0)
    bad: int = Field(default=0, ge=0)
    value: Optional[float] = None
    p50: Optional[float] = None
    p90: Optional[float] = None
    p95: Optional[float] = None
    p99: Optional[float] = None

    @field_validator("t")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def total(self) -> int:
        return self.good + self.bad

    def percentile(self, p: Percentile) -> Optional[float]:
        return getattr(self, p.value)

    @property
    def has_percentiles(self) -> bool:
        return any(getattr(self, p.value) is not None for p in Percentile)


class Indicator(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    type: IndicatorType
    unit: Unit
    objective_direction: Direction = Field(
        validation_alias=AliasChoices("objective_direction", "objectiveDirection"),
    )
    target: float
    source: Source = Source.synthetic

    @model_validator(mode="before")
    @classmethod
    def _defaults_for_type(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        latency = data.get("type") == IndicatorType.latency.value
        # latency objectives read "at most", everything else "at least"
        data.setdefault("unit", Unit.ms if latency else Unit.percent)
        if "objective_direction" not in data and "objectiveDirection" not in data:
            data["objective_direction"] = Direction.lte if latency else Direction.gte
        return data

    @property
    def is_latency(self) -> bool:
        return self.type is IndicatorType.latency


class Objective(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    name: str
    description: str = ""
    criticality: Criticality = Criticality.tier_1
    owner: str = ""
    budgeting_window_days: int = Field(
        default_factory=lambda: settings.budgeting_window_days,
        ge=1,
        validation_alias=AliasChoices("budgeting_window_days", "budgetingWindowDays"),
    )
    objective_percent: float = Field(
        gt=0.0,
        le=100.0,
        validation_alias=AliasChoices("objective_percent", "objectivePercent"),
    )
    indicators: List[Indicator] = Field(default_factory=list)

    @property
    def error_budget_percent(self) -> float:
        return 100.0 - self.objective_percent

    @property
    def primary(self) -> Optional[Indicator]:
        return self.indicators[0] if self.indicators else None


class Journey(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    experience: str = ""
    slos: List[Objective] = Field(default_factory=list)


class Experience(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    journeys: List[Journey] = Field(default_factory=list)
