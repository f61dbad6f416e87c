"""Shared fixtures for monodeps tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from monodeps.package_manifest import PackageManifest, PackageManifestFile
from monodeps.types import Directory


def make_manifest(
    name: str,
    version: str = "1.0.0",
    directory: Optional[str] = None,
    **fields: Any,
) -> PackageManifest:
    """Build an in-memory manifest without touching the filesystem."""
    contents = PackageManifestFile.model_validate(
        {"name": name, "version": version, **fields}
    )
    relative = directory or f"packages/{name.split('/')[-1]}"
    return PackageManifest(Directory.unchecked_from_path(relative), contents)


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON document relative to ``tmp_path``."""

    def _write(relative: str, payload: Any) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def monorepo_root(tmp_path: Path, write_json) -> Path:
    """A small workspace: app -> lib-a -> lib-b, app -> react (external)."""
    write_json(
        "package.json",
        {"name": "root", "version": "0.0.0", "private": True, "workspaces": ["packages/*"]},
    )
    packages: Dict[str, Dict[str, Any]] = {
        "app": {
            "name": "@acme/app",
            "version": "1.0.0",
            "dependencies": {"@acme/lib-a": "^1.0.0", "react": "^18.0.0"},
        },
        "lib-a": {
            "name": "@acme/lib-a",
            "version": "1.0.0",
            "dependencies": {"@acme/lib-b": "workspace:*"},
        },
        "lib-b": {"name": "@acme/lib-b", "version": "2.0.0"},
    }
    for directory, manifest in packages.items():
        write_json(f"packages/{directory}/package.json", manifest)
    return tmp_path
