"""
Parsing of indicator series documents and experience metadata into engine models, skipping malformed records unless strict.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from engine.exceptions import InvalidSeries
from engine.models import DataPoint, Experience

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_series(records: Any, strict: bool = False) -> List[DataPoint]:
    if not isinstance(records, list):
        raise InvalidSeries(f"series must be a list of records, got {type(records).__name__}")

    points: List[DataPoint] = []
    for i, record in enumerate(records):
        try:
            points.append(DataPoint.model_validate(record))
        except ValidationError as exc:
            if strict:
                raise InvalidSeries(f"record {i} is invalid: {exc.errors()[0].get('msg')}") from exc
            log.warning("parse_series: skipping record %d: %s", i, exc.errors()[0].get("msg"))
    return points


def parse_dataset(raw: Any, strict: bool = False) -> Dict[str, List[DataPoint]]:
    """Parse ``{indicator_id: [records]}`` into series keyed by indicator id."""
    if not isinstance(raw, dict):
        raise InvalidSeries(f"dataset must be an object keyed by indicator id, got {type(raw).__name__}")

    dataset: Dict[str, List[DataPoint]] = {}
    for indicator_id, records in raw.items():
        try:
            dataset[str(indicator_id)] = parse_series(records, strict=strict)
        except InvalidSeries as exc:
            if strict:
                raise
            log.warning("parse_dataset: skipping series %s: %s", indicator_id, exc)
    return dataset


def parse_experiences(raw: Any) -> List[Experience]:
    if isinstance(raw, dict):
        raw = raw.get("experiences", [])
    if not isinstance(raw, list):
        raise InvalidSeries(f"experiences must be a list, got {type(raw).__name__}")
    return [Experience.model_validate(item) for item in raw]


def load_dataset(
    series_path: PathLike,
    seed_path: Optional[PathLike] = None,
    strict: bool = False,
) -> Tuple[Dict[str, List[DataPoint]], List[Experience]]:
    with open(series_path, encoding="utf-8") as fh:
        dataset = parse_dataset(json.load(fh), strict=strict)

    experiences: List[Experience] = []
    if seed_path is not None:
        with open(seed_path, encoding="utf-8") as fh:
            experiences = parse_experiences(json.load(fh))

    log.info("loaded %d series and %d experiences", len(dataset), len(experiences))
    return dataset, experiences
