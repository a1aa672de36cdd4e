"""Shared pytest fixtures for the kirimase test suite.

Provides reusable fixtures for:
- Temporary Next.js project directories (with and without ``src/``)
- Pre-built configs and config stores
- An analytics reporter that never touches the network
- questionary prompt stubs
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from kirimase.analytics import AnalyticsReporter
from kirimase.config import Config, ConfigStore
from kirimase.packages import PMType


# ---------------------------------------------------------------------------
# Project directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory (auto-cleanup)."""
    root = tmp_path / "next-app"
    root.mkdir()
    yield root


@pytest.fixture
def src_project_root(project_root: Path) -> Path:
    """Project directory that uses the ``src/`` convention."""
    (project_root / "src" / "app").mkdir(parents=True)
    yield project_root


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def base_config() -> Config:
    """A freshly initialised config: no packages, analytics off."""
    return Config(
        has_src=False,
        packages=[],
        preferred_package_manager=PMType.NPM,
        t3=False,
        alias="@",
        analytics=False,
    )


@pytest.fixture
def src_config(base_config: Config) -> Config:
    return base_config.model_copy(update={"has_src": True})


@pytest.fixture
def store(project_root: Path) -> ConfigStore:
    return ConfigStore(project_root)


@pytest.fixture
def initialised_store(store: ConfigStore, base_config: Config) -> ConfigStore:
    """A store whose config file already exists."""
    store.create(base_config)
    return store


def write_raw_config(root: Path, data: dict[str, Any]) -> Path:
    """Write *data* verbatim as ``kirimase.config.json`` under *root*."""
    path = root / "kirimase.config.json"
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------

@pytest.fixture
def silent_reporter(base_config: Config) -> MagicMock:
    """Stand-in reporter that records calls instead of sending them."""
    reporter = MagicMock(spec=AnalyticsReporter)
    reporter.flush = AsyncMock()
    return reporter


# ---------------------------------------------------------------------------
# questionary stubs
# ---------------------------------------------------------------------------

def question(answer: Any) -> MagicMock:
    """A questionary ``Question`` double whose ``ask_async`` returns *answer*."""
    q = MagicMock()
    q.ask_async = AsyncMock(return_value=answer)
    return q


@pytest.fixture
def make_question():
    """Factory fixture for :func:`question`."""
    return question


@pytest.fixture
def raw_config_writer():
    """Factory fixture for :func:`write_raw_config`."""
    return write_raw_config
