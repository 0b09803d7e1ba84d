"""Custom exceptions for plugin-graph."""

from __future__ import annotations

from pathlib import Path


class PluginGraphError(Exception):
    """Base exception for all plugin-graph errors."""


class PluginsDirError(PluginGraphError):
    """Raised when the plugins root directory cannot be listed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to read plugins directory {path}: {reason}")


class ManifestError(PluginGraphError):
    """Base for per-package manifest problems. Never fatal to a scan."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ManifestNotFoundError(ManifestError):
    """Raised when a package folder has no composer.json."""


class ManifestReadError(ManifestError):
    """Raised when composer.json exists but cannot be read."""


class ManifestParseError(ManifestError):
    """Raised when composer.json is not valid JSON or has the wrong shape."""


class RenderError(PluginGraphError):
    """Raised when the Graphviz subprocess fails."""


class RendererNotFoundError(PluginGraphError):
    """Raised when the Graphviz executable is not on PATH."""
