"""
Error budget accounting for an objective, from the achieved percent of its window.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

from dataclasses import dataclass

from config import settings
from engine.enums import BudgetHealth


@dataclass(frozen=True)
class ErrorBudget:
    error_budget_percent: float
    spent: float
    remaining: float
    spent_percent: float
    remaining_percent: float


def error_budget(achieved_percent: float, objective_percent: float) -> ErrorBudget:
    """Budget consumed by ``achieved_percent`` against ``objective_percent``.

    ``achieved_percent`` must be availability-like: for latency indicators
    pass the compliance percentage, never a latency value. ``spent`` is
    clamped to [0, 1]. With a zero budget any error at all consumes it fully.
    """
    error_budget_percent = 100.0 - objective_percent
    error_percent = 100.0 - achieved_percent

    if error_budget_percent > 0:
        spent = error_percent / error_budget_percent
    else:
        spent = 1.0 if error_percent > 0 else 0.0

    spent = min(1.0, max(0.0, spent))
    remaining = 1.0 - spent

    return ErrorBudget(
        error_budget_percent=error_budget_percent,
        spent=spent,
        remaining=remaining,
        spent_percent=spent * 100.0,
        remaining_percent=remaining * 100.0,
    )


def budget_health(budget: ErrorBudget) -> BudgetHealth:
    if budget.remaining >= settings.budget_low_remaining:
        return BudgetHealth.healthy
    if budget.remaining >= settings.budget_depleted_remaining:
        return BudgetHealth.low
    return BudgetHealth.depleted
