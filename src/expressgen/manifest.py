"""Merge npm scripts into a generated ``package.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from .errors import FilesystemError
from .naming import package_name

__all__ = ["MANIFEST_NAME", "default_manifest", "update_scripts"]


LOGGER = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def default_manifest(project_dir: Path) -> dict[str, Any]:
    """Return the fields ``npm init -y`` would write for ``project_dir``."""

    return {
        "name": package_name(project_dir.name),
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "scripts": {},
        "keywords": [],
        "author": "",
        "license": "ISC",
    }


def update_scripts(project_dir: str | Path, scripts: Mapping[str, str]) -> Path:
    """Add ``scripts`` to the manifest in ``project_dir`` and return its path.

    Existing scripts are kept unless ``scripts`` redefines them. A missing
    manifest is created from :func:`default_manifest`, and an unreadable one
    raises :class:`FilesystemError`.
    """

    project_dir = Path(project_dir)
    manifest_path = project_dir / MANIFEST_NAME

    try:
        if manifest_path.exists():
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        else:
            LOGGER.info("no %s in %s, writing a default one", MANIFEST_NAME, project_dir)
            manifest = default_manifest(project_dir)
    except json.JSONDecodeError as exc:
        raise FilesystemError(manifest_path, OSError(f"invalid JSON: {exc}")) from exc
    except UnicodeDecodeError as exc:
        raise FilesystemError(manifest_path, OSError(f"not UTF-8 text: {exc}")) from exc
    except OSError as exc:
        raise FilesystemError(manifest_path, exc) from exc

    if not isinstance(manifest, dict):
        raise FilesystemError(manifest_path, OSError("manifest is not a JSON object"))

    merged = dict(manifest.get("scripts") or {})
    merged.update(scripts)
    manifest["scripts"] = merged

    try:
        manifest_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(manifest_path, exc) from exc
    return manifest_path
