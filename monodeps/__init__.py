"""monodeps - internal dependency graph of a JavaScript/TypeScript monorepo.

Loads every package's package.json, resolves which dependencies are other
packages of the same monorepo, and answers graph queries over them.
"""

from monodeps.configuration_file import ConfigurationFile
from monodeps.errors import (
    ConfigurationFileError,
    ConfigurationFileNotFoundError,
    ConfigurationFileParseError,
    ConfigurationFileReadError,
    MonodepsError,
)
from monodeps.monorepo import MonorepoManifest
from monodeps.package_manifest import (
    DependencyGroup,
    PackageManifest,
    PackageManifestFile,
)
from monodeps.types import Directory, PackageName
from monodeps.typescript_config import (
    TypescriptConfig,
    TypescriptParentProjectReference,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationFile",
    "ConfigurationFileError",
    "ConfigurationFileNotFoundError",
    "ConfigurationFileParseError",
    "ConfigurationFileReadError",
    "DependencyGroup",
    "Directory",
    "MonodepsError",
    "MonorepoManifest",
    "PackageManifest",
    "PackageManifestFile",
    "PackageName",
    "TypescriptConfig",
    "TypescriptParentProjectReference",
]
