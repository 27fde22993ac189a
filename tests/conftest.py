"""Shared pytest fixtures and test helpers for chartnorm tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from chartnorm.config.settings import ChartnormSettings
from chartnorm.domain.models import DataPoint


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ChartnormSettings:
    """Default settings, isolated from any chartnorm.toml or env overrides."""
    monkeypatch.delenv("CHARTNORM_CONFIG", raising=False)
    return ChartnormSettings.from_cli(start_dir=tmp_path)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no stray chartnorm.toml is found."""
    monkeypatch.delenv("CHARTNORM_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mixed_points() -> list[DataPoint]:
    """Mixed-sign y values: extent [-10, 20]."""
    return [DataPoint(0, -10, "a"), DataPoint(1, 20, "b"), DataPoint(2, 5, "c")]


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON (or raw text) dataset file and return its path."""

    def _write(payload: Any, name: str = "data.json") -> Path:
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
