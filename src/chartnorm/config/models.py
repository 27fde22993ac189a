"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chartnorm.toml only contains overrides.
An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- chartnorm.toml sections ---


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True}

    epsilon: float = Field(default=1e-3, gt=0)


class StackingConfig(BaseModel):
    """[stacking] section."""

    model_config = {"frozen": True}

    key_digits: int | None = Field(default=None, ge=0)


class GeometryConfig(BaseModel):
    """[geometry] section: drawing area used when the caller gives none."""

    model_config = {"frozen": True}

    width: float = Field(default=320.0, ge=0)
    height: float = Field(default=200.0, ge=0)


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    max_entries: int = Field(default=128, ge=1)


class ChartnormConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    engine: EngineConfig = Field(default_factory=EngineConfig)
    stacking: StackingConfig = Field(default_factory=StackingConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
