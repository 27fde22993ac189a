"""Chart kinds and bar directions."""

from __future__ import annotations

from enum import StrEnum


class ChartKind(StrEnum):
    """Chart families served by the normalization engine."""

    LINE = "line"
    POINT = "point"
    BAR = "bar"
    STACKED_BAR = "stacked_bar"

    @classmethod
    def parse(cls, raw: str) -> ChartKind:
        """Parse a chart kind, accepting ``stackedBar`` / ``stacked-bar`` spellings."""
        if not isinstance(raw, str):
            msg = f"Chart kind must be a string, got {raw!r}"
            raise ValueError(msg)
        text = raw.strip()
        aliases = {"stackedbar": cls.STACKED_BAR, "stacked-bar": cls.STACKED_BAR}
        alias = aliases.get(text.lower())
        if alias is not None:
            return alias
        return cls(text.lower())


class BarDirection(StrEnum):
    """Direction a bar grows from the baseline (screen space)."""

    UP = "up"
    DOWN = "down"
