"""
Time windowing of indicator series relative to an explicit reference instant.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from engine.models import DataPoint


def as_utc(instant: Optional[datetime]) -> datetime:
    if instant is None:
        return datetime.now(timezone.utc)
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def slice_window(
    series: Sequence[DataPoint],
    window_seconds: float,
    reference_end: Optional[datetime] = None,
) -> List[DataPoint]:
    """Return the points with ``reference_end - window <= t <= reference_end``.

    Filtering compares timestamps only, so unsorted input is handled and the
    relative order of the input is preserved. ``reference_end`` defaults to
    the current UTC time.
    """
    if not series:
        return []
    end = as_utc(reference_end)
    start = end - timedelta(seconds=window_seconds)
    return [p for p in series if start <= p.t <= end]
