"""Reader for composer.json package manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from plugin_graph.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestReadError,
)
from plugin_graph.models import Manifest

MANIFEST_FILENAME = "composer.json"

# "vendor/name" keys are packages; bare keys ("php", "ext-json") are platform
# constraints.
NAMESPACE_SEPARATOR = "/"


class ComposerManifest(BaseModel):
    """The subset of composer.json this tool reads."""

    model_config = ConfigDict(extra="ignore")

    name: str
    require: dict[str, Any] = {}

    @field_validator("require", mode="before")
    @classmethod
    def _empty_require(cls, v: Any) -> Any:
        # PHP encodes an empty map as []
        if v is None or v == []:
            return {}
        return v


def is_package_reference(key: str) -> bool:
    """Return True if a requirement key names a vendor/package."""
    return NAMESPACE_SEPARATOR in key


def read_manifest(package_dir: Path) -> Manifest:
    """Load ``composer.json`` from *package_dir*.

    Raises ``ManifestNotFoundError`` if the file is absent,
    ``ManifestReadError`` if it cannot be read and ``ManifestParseError``
    if it is not a JSON object with a string ``name`` and an object
    ``require``.
    """
    path = package_dir / MANIFEST_FILENAME
    if not path.is_file():
        raise ManifestNotFoundError(path, f"no {MANIFEST_FILENAME} found")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(path, str(e)) from e

    try:
        parsed = ComposerManifest.model_validate_json(content)
    except ValidationError as e:
        raise ManifestParseError(path, _describe(e)) from e

    requires = {key: str(value) for key, value in parsed.require.items()}
    return Manifest(name=parsed.name, requires=requires, path=path)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "document"
    return f"{loc}: {first.get('msg', 'invalid')}"
