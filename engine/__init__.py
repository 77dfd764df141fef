"""
Engine package for SLO evaluation over indicator time series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.enums import BudgetHealth, BurnStatus, Direction, IndicatorType, Percentile, Trend
from engine.models import DataPoint, Experience, Indicator, Journey, Objective

__all__ = [
    "BudgetHealth", "BurnStatus", "Direction", "IndicatorType", "Percentile", "Trend",
    "DataPoint", "Experience", "Indicator", "Journey", "Objective",
]
