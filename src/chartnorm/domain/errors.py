"""Normalization failures.

INVARIANT: The domain never catches these. They surface to the caller,
which decides what to render (usually nothing).
"""

from __future__ import annotations

from typing import Any


class NormalizationError(Exception):
    """Base class for every failure raised by the engine."""

    code = "NORMALIZATION_ERROR"


class EmptyDatasetError(NormalizationError, ValueError):
    """Extent computation or normalization was invoked on zero points."""

    code = "EMPTY_DATASET"

    def __init__(self, message: str = "Dataset contains no points") -> None:
        super().__init__(message)


class InvalidValueError(NormalizationError, ValueError):
    """A value projected to NaN/Infinity or cannot be projected at all."""

    code = "INVALID_VALUE"

    def __init__(self, message: str, *, value: Any = None, index: int | None = None) -> None:
        super().__init__(message)
        self.value = value
        self.index = index

    def detail(self) -> dict[str, Any]:
        """JSON-friendly context for error payloads."""
        out: dict[str, Any] = {"value": repr(self.value)}
        if self.index is not None:
            out["index"] = self.index
        return out
