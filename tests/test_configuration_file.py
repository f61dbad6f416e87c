"""Tests for loading configuration documents from disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from monodeps.errors import (
    ConfigurationFileError,
    ConfigurationFileNotFoundError,
    ConfigurationFileParseError,
    ConfigurationFileReadError,
)
from monodeps.io import read_json_from_file
from monodeps.package_manifest import PackageManifest
from monodeps.types import Directory, PackageName
from monodeps.typescript_config import (
    TypescriptConfig,
    TypescriptParentProjectReference,
)


def _root(tmp_path: Path) -> Directory:
    return Directory.unchecked_from_path(tmp_path)


def test_load_package_manifest(tmp_path: Path, write_json) -> None:
    write_json(
        "packages/core/package.json",
        {
            "name": "@acme/core",
            "version": "1.4.0",
            "dependencies": {"lodash": "^4.17.0"},
            "x-custom": {"keep": ["me", 1]},
        },
    )

    manifest = PackageManifest.from_directory(
        _root(tmp_path), Directory.unchecked_from_path("packages/core")
    )

    assert manifest.name == PackageName("@acme/core")
    assert isinstance(manifest.name, PackageName)
    assert manifest.version == "1.4.0"
    assert manifest.directory() == Directory.unchecked_from_path("packages/core")
    assert manifest.relative_directory == manifest.directory()
    assert manifest.path() == Path("packages/core/package.json")
    assert manifest.get_contents() is manifest.contents
    assert manifest.contents.extra_fields["x-custom"] == {"keep": ["me", 1]}


def test_unknown_fields_survive_reserialization(tmp_path: Path, write_json) -> None:
    original = {
        "name": "pkg",
        "version": "0.0.1",
        "exports": {".": {"import": "./dist/index.mjs", "require": "./dist/index.cjs"}},
        "sideEffects": False,
        "keywords": ["a", "b"],
        "engines": {"node": ">=18"},
    }
    write_json("pkg/package.json", original)

    manifest = PackageManifest.from_directory(
        _root(tmp_path), Directory.unchecked_from_path("pkg")
    )

    assert json.loads(manifest.to_json()) == original


def test_missing_manifest_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationFileNotFoundError) as exc_info:
        PackageManifest.from_directory(
            _root(tmp_path), Directory.unchecked_from_path("nope")
        )

    assert exc_info.value.path == tmp_path / "nope" / "package.json"
    assert isinstance(exc_info.value, ConfigurationFileError)


def test_invalid_json_raises_parse_error_naming_the_path(tmp_path: Path) -> None:
    target = tmp_path / "broken" / "package.json"
    target.parent.mkdir()
    target.write_text("{ not json", encoding="utf-8")

    with pytest.raises(ConfigurationFileParseError) as exc_info:
        PackageManifest.from_directory(
            _root(tmp_path), Directory.unchecked_from_path("broken")
        )

    assert exc_info.value.path == target
    assert str(target) in str(exc_info.value)


@pytest.mark.parametrize(
    "payload",
    [
        {"version": "1.0.0"},
        {"name": "x"},
        {"name": "", "version": "1.0.0"},
        {"name": "x", "version": 1},
        ["not", "an", "object"],
    ],
)
def test_schema_mismatch_raises_parse_error(tmp_path: Path, write_json, payload) -> None:
    write_json("bad/package.json", payload)

    with pytest.raises(ConfigurationFileParseError):
        PackageManifest.from_directory(
            _root(tmp_path), Directory.unchecked_from_path("bad")
        )


def test_unreadable_file_raises_read_error(tmp_path: Path) -> None:
    # A directory where the file should be cannot be read as text
    (tmp_path / "odd" / "package.json").mkdir(parents=True)

    with pytest.raises(ConfigurationFileReadError):
        read_json_from_file(tmp_path / "odd" / "package.json", dict)


def test_load_parent_project_reference(tmp_path: Path, write_json) -> None:
    write_json(
        "tsconfig.json",
        {"files": [], "references": [{"path": "packages/a"}, {"path": "packages/b"}]},
    )

    tsconfig = TypescriptParentProjectReference.from_directory(
        _root(tmp_path), Directory.unchecked_from_path(".")
    )

    assert tsconfig.contents.files == []
    assert tsconfig.reference_paths() == ["packages/a", "packages/b"]
    assert tsconfig.path() == Path("tsconfig.json")


def test_parent_project_reference_defaults(tmp_path: Path, write_json) -> None:
    write_json("tsconfig.json", {})

    tsconfig = TypescriptParentProjectReference.from_directory(
        _root(tmp_path), Directory.unchecked_from_path(".")
    )

    assert tsconfig.contents.files == []
    assert tsconfig.contents.references == []


def test_parent_project_reference_rejects_bad_reference(tmp_path: Path, write_json) -> None:
    write_json("tsconfig.json", {"references": [{"prepend": True}]})

    with pytest.raises(ConfigurationFileParseError):
        TypescriptParentProjectReference.from_directory(
            _root(tmp_path), Directory.unchecked_from_path(".")
        )


def test_load_untyped_typescript_config(tmp_path: Path, write_json) -> None:
    write_json(
        "packages/a/tsconfig.json",
        {"extends": "../../tsconfig.base.json", "compilerOptions": {"outDir": "dist"}},
    )

    tsconfig = TypescriptConfig.from_directory(
        _root(tmp_path), Directory.unchecked_from_path("packages/a")
    )

    assert tsconfig.contents["compilerOptions"] == {"outDir": "dist"}
    assert tsconfig.path() == Path("packages/a/tsconfig.json")
