"""Bounded memo of normalization results.

A render pass typically normalizes the same dataset for every redraw;
keying on ``(dataset content hash, geometry)`` lets those repeats skip the
engine. Results are immutable, so sharing them between callers is safe.
"""

from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any

from chartnorm.domain.models import DataPoint, Geometry
from chartnorm.domain.values import project_point


def cache_key(
    kind: str,
    dataset: Sequence[DataPoint],
    geometry: Geometry,
    **options: Any,
) -> str:
    """SHA-256 over the projected dataset, point ids, geometry, and options.

    Raises:
        InvalidValueError: a point cannot be projected.
    """
    payload = {
        "kind": kind,
        "points": [
            [*project_point(point, index=i), repr(point.id)] for i, point in enumerate(dataset)
        ],
        "geometry": [geometry.width, geometry.height],
        "options": {name: repr(value) for name, value in sorted(options.items())},
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class NormalizationCache:
    """Thread-safe LRU cache holding at most *max_entries* results."""

    def __init__(self, max_entries: int = 128) -> None:
        if max_entries < 1:
            msg = f"max_entries must be >= 1, got {max_entries}"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Any | None:
        with self._lock:
            if key not in self._entries:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
