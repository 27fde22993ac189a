"""Dataset files for the CLI.

Supported layouts:

- JSON: ``[{"x": 1, "y": 2, "id": "a"}, ...]``, ``[[1, 2], ...]``, or an
  object with a ``"points"`` list in either form.
- CSV: header row with ``x`` and ``y`` columns and an optional ``id``.

Numeric strings become floats and ISO-8601 strings become ``date`` or
``datetime`` values; the engine projects them like any other value.
"""

from __future__ import annotations

import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from chartnorm.domain.models import DataPoint


class DatasetFormatError(ValueError):
    """A dataset file could not be read or has an unexpected shape."""


def coerce_value(raw: Any) -> Any:
    """Turn textual cells into numbers or dates; leave everything else alone."""
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    try:
        return float(text)
    except ValueError:
        pass
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text)
        return date.fromisoformat(text)
    except ValueError:
        return text


def _point_from_json(item: Any, index: int) -> DataPoint:
    if isinstance(item, dict):
        if "x" not in item or "y" not in item:
            msg = f"Point {index} is missing 'x' or 'y'"
            raise DatasetFormatError(msg)
        return DataPoint(coerce_value(item["x"]), coerce_value(item["y"]), item.get("id"))
    if isinstance(item, list) and len(item) in (2, 3):
        return DataPoint(*(coerce_value(v) for v in item[:2]), *item[2:])
    msg = f"Point {index} must be an object or an [x, y] pair, got {item!r}"
    raise DatasetFormatError(msg)


def parse_json_dataset(text: str) -> list[DataPoint]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise DatasetFormatError(msg) from exc
    if isinstance(payload, dict):
        payload = payload.get("points")
    if not isinstance(payload, list):
        msg = "Expected a list of points or an object with a 'points' list"
        raise DatasetFormatError(msg)
    return [_point_from_json(item, i) for i, item in enumerate(payload)]


def parse_csv_dataset(text: str) -> list[DataPoint]:
    reader = csv.DictReader(text.splitlines())
    fields = {name.strip().lower() for name in reader.fieldnames or ()}
    if not {"x", "y"} <= fields:
        msg = "CSV header must contain 'x' and 'y' columns"
        raise DatasetFormatError(msg)
    points: list[DataPoint] = []
    for row in reader:
        cells = {k.strip().lower(): v for k, v in row.items() if k is not None}
        points.append(
            DataPoint(coerce_value(cells["x"]), coerce_value(cells["y"]), cells.get("id") or None)
        )
    return points


def load_dataset(path: Path) -> list[DataPoint]:
    """Read *path* as CSV (``.csv``) or JSON (anything else)."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read dataset {path}: {exc}"
        raise DatasetFormatError(msg) from exc
    if path.suffix.lower() == ".csv":
        return parse_csv_dataset(text)
    return parse_json_dataset(text)
