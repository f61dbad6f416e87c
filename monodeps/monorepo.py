"""Monorepo package discovery and the package name table.

Discovery follows the conventions of npm/yarn workspaces and lerna:

1. explicit globs from configuration,
2. the root package.json ``workspaces`` field (list, or ``{"packages": [...]}``),
3. lerna.json ``packages``,
4. otherwise a recursive scan for package.json files.

The resulting ``{PackageName: PackageManifest}`` table is what every graph
query in ``monodeps.package_manifest`` resolves names against.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from monodeps.config import MonodepsConfig
from monodeps.errors import (
    ConfigError,
    ConfigurationFileError,
    ConfigurationFileNotFoundError,
    DuplicatePackageNameError,
    UnknownPackageError,
)
from monodeps.io import read_json_from_file
from monodeps.package_manifest import PackageManifest
from monodeps.types import Directory, PackageName
from monodeps.typescript_config import TypescriptParentProjectReference
from monodeps.utils.scanner import is_ignored, load_gitignore_patterns, scan_files

logger = logging.getLogger("monodeps.monorepo")

LERNA_FILENAME = "lerna.json"


def _read_optional_json(path: Path) -> Optional[Dict[str, Any]]:
    if not path.is_file():
        return None
    return read_json_from_file(path, Dict[str, Any])


def workspace_globs(monorepo_root: Directory) -> Optional[List[str]]:
    """Return the package globs declared by the monorepo, if any.

    Raises:
        ConfigurationFileError: The root package.json or lerna.json is
            malformed.
    """
    root_manifest = _read_optional_json(monorepo_root.join(PackageManifest.FILENAME))
    if root_manifest is not None:
        workspaces = root_manifest.get("workspaces")
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages")
        if isinstance(workspaces, list):
            logger.debug("Using package.json workspaces: %s", workspaces)
            return [str(pattern) for pattern in workspaces]

    lerna = _read_optional_json(monorepo_root.join(LERNA_FILENAME))
    if lerna is not None and isinstance(lerna.get("packages"), list):
        logger.debug("Using lerna.json packages: %s", lerna["packages"])
        return [str(pattern) for pattern in lerna["packages"]]

    return None


def _expand_glob(root: Path, pattern: str) -> Iterator[Path]:
    """Expand one workspace glob relative to the monorepo root.

    Raises:
        ConfigError: The glob is an absolute path.
    """
    if Path(pattern.strip()).is_absolute():
        raise ConfigError(f"Workspace glob must be relative to the root: {pattern!r}")
    pattern = pattern.strip().rstrip("/")
    if pattern.startswith("./"):
        pattern = pattern[2:]
    if pattern in ("", "."):
        yield root
        return
    yield from root.glob(pattern)


def discover_package_directories(
    monorepo_root: Directory, config: Optional[MonodepsConfig] = None
) -> List[Directory]:
    """Find every package directory in the monorepo.

    Args:
        monorepo_root: Absolute monorepo root.
        config: Configuration; defaults apply when omitted.

    Returns:
        List[Directory]: Sorted, de-duplicated package directories relative
        to the root.

    Raises:
        ConfigError: A workspace glob is an absolute path.
    """
    config = config or MonodepsConfig.default()
    root = monorepo_root.path

    globs = config.workspace.packages
    if globs is None:
        globs = workspace_globs(monorepo_root)

    found: Dict[str, Directory] = {}

    if globs is None:
        logger.info("No workspace globs declared; scanning %s for package.json", root)
        ignores = load_gitignore_patterns(root) + config.workspace.all_ignore_patterns()
        for manifest_path in scan_files(root, PackageManifest.FILENAME, ignores):
            relative = manifest_path.parent.relative_to(root.resolve()).as_posix()
            # The root manifest describes the monorepo itself
            if relative != ".":
                found[relative] = Directory.unchecked_from_path(relative)
    else:
        ignore_patterns = config.workspace.workspace_ignore_patterns()
        includes = [g for g in globs if not g.startswith("!")]
        excludes = [g[1:].strip().rstrip("/") for g in globs if g.startswith("!")]

        for pattern in includes:
            for candidate in _expand_glob(root, pattern):
                if not (candidate / PackageManifest.FILENAME).is_file():
                    continue
                relative = candidate.relative_to(root).as_posix()
                if is_ignored(relative, ignore_patterns):
                    logger.debug("Ignoring package directory %s", relative)
                    continue
                if any(fnmatch.fnmatch(relative, exclude) for exclude in excludes):
                    logger.debug("Excluded package directory %s", relative)
                    continue
                found[relative] = Directory.unchecked_from_path(relative)

    directories = sorted(found.values())
    logger.info("Discovered %d package director(ies)", len(directories))
    return directories


def load_package_manifests(
    monorepo_root: Directory,
    directories: Iterable[Directory],
    on_error: str = "raise",
) -> List[PackageManifest]:
    """Load the package.json of every directory.

    Args:
        monorepo_root: Absolute monorepo root.
        directories: Package directories relative to the root.
        on_error: ``raise`` to propagate the first failure, ``skip`` to log
            it and leave the package out.

    Raises:
        ConfigurationFileError: A manifest failed to load and ``on_error``
            is ``raise``.
    """
    manifests: List[PackageManifest] = []
    for directory in directories:
        try:
            manifests.append(PackageManifest.from_directory(monorepo_root, directory))
        except ConfigurationFileError as e:
            if on_error != "skip":
                raise
            logger.warning("Skipping package in %s: %s", directory, e)
    return manifests


def package_manifests_by_package_name(
    manifests: Iterable[PackageManifest], on_collision: str = "warn"
) -> Dict[PackageName, PackageManifest]:
    """Index manifests by declared package name.

    When two manifests declare the same name the later one wins.

    Raises:
        DuplicatePackageNameError: On a collision when ``on_collision`` is
            ``error``.
    """
    table: Dict[PackageName, PackageManifest] = {}
    for manifest in manifests:
        previous = table.get(manifest.name)
        if previous is not None:
            if on_collision == "error":
                raise DuplicatePackageNameError(
                    manifest.name, previous.path(), manifest.path()
                )
            logger.warning(
                "Package name %s is declared by both %s and %s; using %s",
                manifest.name,
                previous.path(),
                manifest.path(),
                manifest.path(),
            )
        table[manifest.name] = manifest
    return table


class MonorepoManifest:
    """All internal packages of a monorepo, indexed by name."""

    def __init__(
        self,
        root: Directory,
        package_manifests: Iterable[PackageManifest],
        on_collision: str = "warn",
    ) -> None:
        self.root = root
        self.package_manifests = list(package_manifests)
        self.package_manifests_by_package_name = package_manifests_by_package_name(
            self.package_manifests, on_collision=on_collision
        )

    @classmethod
    def from_directory(
        cls,
        root: Union[str, Path, Directory],
        config: Optional[MonodepsConfig] = None,
    ) -> "MonorepoManifest":
        """Discover and load every package of the monorepo at ``root``."""
        config = config or MonodepsConfig.default()
        if not isinstance(root, Directory):
            root = Directory.unchecked_from_path(Path(root).resolve())

        directories = discover_package_directories(root, config)
        manifests = load_package_manifests(
            root, directories, on_error=config.workspace.on_load_error
        )
        monorepo = cls(root, manifests, on_collision=config.workspace.on_collision)
        logger.info("Loaded %d package(s) from %s", len(monorepo), root)
        return monorepo

    def get(self, name: str) -> PackageManifest:
        """Return the manifest of an internal package.

        Raises:
            UnknownPackageError: ``name`` is not an internal package.
        """
        try:
            return self.package_manifests_by_package_name[PackageName(name)]
        except KeyError:
            raise UnknownPackageError(name) from None

    def internal_dependencies(
        self, name: str, transitive: bool = False
    ) -> List[PackageManifest]:
        """Internal dependencies of ``name``, sorted by package name."""
        manifest = self.get(name)
        table = self.package_manifests_by_package_name
        if transitive:
            dependencies = manifest.transitive_internal_dependency_package_names_exclusive(
                table
            )
        else:
            dependencies = manifest.internal_dependencies_iter(table)
        unique = {dependency.name: dependency for dependency in dependencies}
        return [unique[key] for key in sorted(unique)]

    def project_references(self) -> Optional[TypescriptParentProjectReference]:
        """Load the root tsconfig.json project references, if the file exists."""
        try:
            return TypescriptParentProjectReference.from_directory(
                self.root, Directory.unchecked_from_path(".")
            )
        except ConfigurationFileNotFoundError:
            return None

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return PackageName(name) in self.package_manifests_by_package_name

    def __iter__(self) -> Iterator[PackageManifest]:
        return iter(self.package_manifests_by_package_name.values())

    def __len__(self) -> int:
        return len(self.package_manifests_by_package_name)


__all__ = [
    "MonorepoManifest",
    "discover_package_directories",
    "load_package_manifests",
    "package_manifests_by_package_name",
    "workspace_globs",
]
