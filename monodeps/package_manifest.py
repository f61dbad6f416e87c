"""package.json model and internal dependency queries.

A ``PackageManifest`` wraps the parsed ``package.json`` of one package. Only
``name`` and ``version`` are typed; every other top-level field is preserved
verbatim so the document round-trips. Dependency queries resolve names
against a caller-owned ``{PackageName: PackageManifest}`` table, which keeps
manifests free of references to each other.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from enum import Enum
from typing import Any, Deque, Dict, Iterator, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict

from monodeps.configuration_file import ConfigurationFile
from monodeps.types import Directory, PackageName

logger = logging.getLogger("monodeps.package_manifest")

PackageTable = Mapping[PackageName, "PackageManifest"]


class DependencyGroup(str, Enum):
    """Top-level manifest fields holding dependency declarations.

    Declaration order is lookup precedence.
    """

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"
    PEER_DEPENDENCIES = "peerDependencies"


class PackageManifestFile(BaseModel):
    """Contents of a package.json file.

    Unknown fields are kept in ``model_extra`` and emitted again by
    ``model_dump``.
    """

    model_config = ConfigDict(extra="allow")

    name: PackageName
    version: str

    @property
    def extra_fields(self) -> Dict[str, Any]:
        return self.model_extra or {}


class PackageManifest(ConfigurationFile[PackageManifestFile]):
    """A package.json loaded from a package directory."""

    FILENAME = "package.json"
    CONTENTS_TYPE = PackageManifestFile

    @property
    def relative_directory(self) -> Directory:
        return self._directory

    @property
    def name(self) -> PackageName:
        return self.contents.name

    @property
    def version(self) -> str:
        return self.contents.version

    def dependency_groups(self) -> Iterator[Tuple[DependencyGroup, Dict[str, Any]]]:
        """Yield the dependency group objects present in the manifest.

        Groups are yielded in precedence order. A group whose value is not a
        JSON object is skipped.
        """
        extra = self.contents.extra_fields
        for group in DependencyGroup:
            value = extra.get(group.value)
            if isinstance(value, dict):
                yield group, value

    def get_dependency_version(self, dependency: str) -> Optional[str]:
        """Return the declared version of ``dependency``.

        Only the first group (in precedence order) declaring the dependency is
        consulted. If that declaration is not a plain string, for example an
        object, ``None`` is returned without looking at later groups.

        Args:
            dependency: Dependency package name.

        Returns:
            Optional[str]: The version specifier, or None.
        """
        for _group, declarations in self.dependency_groups():
            if dependency in declarations:
                version = declarations[dependency]
                return version if isinstance(version, str) else None
        return None

    def dependencies_iter(self) -> Iterator[Tuple[PackageName, Any]]:
        """Iterate over every dependency declaration in every group.

        A dependency declared in several groups is yielded once per group.
        """
        for _group, declarations in self.dependency_groups():
            for package_name, package_version in declarations.items():
                yield PackageName(package_name), package_version

    def internal_dependencies_iter(
        self, package_manifests_by_package_name: PackageTable
    ) -> Iterator["PackageManifest"]:
        """Iterate over the manifests of dependencies that live in the monorepo.

        Names missing from the table are external dependencies and are
        skipped.
        """
        for package_name, _version in self.dependencies_iter():
            manifest = package_manifests_by_package_name.get(package_name)
            if manifest is not None:
                yield manifest

    def transitive_internal_dependency_package_names_exclusive(
        self, package_manifests_by_package_name: PackageTable
    ) -> Iterator["PackageManifest"]:
        """Iterate over all internal packages this package depends on.

        Breadth-first search over internal dependencies. Every reachable
        package is yielded once; this package itself is never yielded, even
        when a dependency cycle leads back to it.

        Args:
            package_manifests_by_package_name: The table the dependency names
                are resolved against. It must not change during iteration.

        Raises:
            KeyError: A discovered name is missing from the table.
        """
        seen_package_names: Set[PackageName] = {self.name}
        internal_dependencies: Dict[PackageName, None] = {}
        to_visit: Deque[PackageManifest] = deque([self])

        while to_visit:
            current_manifest = to_visit.popleft()
            for dependency in current_manifest.internal_dependencies_iter(
                package_manifests_by_package_name
            ):
                if dependency.name != self.name:
                    internal_dependencies[dependency.name] = None
                if dependency.name not in seen_package_names:
                    seen_package_names.add(dependency.name)
                    to_visit.append(dependency)

        logger.debug(
            "%s has %d transitive internal dependencies",
            self.name,
            len(internal_dependencies),
        )

        for dependency_package_name in internal_dependencies:
            yield package_manifests_by_package_name[dependency_package_name]

    def npm_pack_file_basename(self) -> str:
        """Name of the archive `npm pack` creates, e.g. "myscope-a-package-1.0.0.tgz"."""
        basename = self.name.as_str().lstrip("@").replace("/", "-")
        return f"{basename}-{self.version}.tgz"

    def unscoped_package_name(self) -> str:
        _scope, separator, name = self.name.as_str().rpartition("/")
        return name if separator else self.name.as_str()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the manifest contents, extra fields included."""
        return self.contents.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


__all__ = [
    "DependencyGroup",
    "PackageManifest",
    "PackageManifestFile",
    "PackageTable",
]
