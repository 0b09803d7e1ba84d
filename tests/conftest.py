"""Shared pytest fixtures for plugin-graph tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog


def write_plugin(root: Path, folder: str, name: str | None, require: dict | None = None) -> Path:
    """Create *root/folder* with a composer.json (or none if *name* is None)."""
    plugin_dir = root / folder
    plugin_dir.mkdir(parents=True, exist_ok=True)
    if name is not None:
        manifest: dict = {"name": name}
        if require is not None:
            manifest["require"] = require
        (plugin_dir / "composer.json").write_text(json.dumps(manifest))
    return plugin_dir


@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """core + widgets, where widgets needs core, guzzle and a php constraint."""
    root = tmp_path / "plugins"
    root.mkdir()
    write_plugin(root, "core", "acme/core", {})
    write_plugin(
        root,
        "widgets",
        "acme/widgets",
        {"php": ">=8.1", "acme/core": "^1.0", "guzzlehttp/guzzle": "^7.0"},
    )
    return root


@pytest.fixture
def make_plugin():
    return write_plugin


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo setup_logging() so handlers never outlive a CliRunner stream."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
