"""Exception hierarchy for monodeps.

Document errors describe a single configuration file that could not be
loaded. They are terminal for that file; whether a bulk scan aborts or skips
the package is decided by the caller (see ``monodeps.monorepo``).
"""

from pathlib import Path
from typing import Optional, Union


class MonodepsError(Exception):
    """Base class for all errors raised by monodeps."""

    pass


# =============================================================================
# Configuration file errors
# =============================================================================


class ConfigurationFileError(MonodepsError):
    """A configuration document (package.json, tsconfig.json) failed to load.

    Attributes:
        path: Path of the offending file.
    """

    def __init__(self, path: Union[str, Path], message: Optional[str] = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Unable to load {self.path}")


class ConfigurationFileNotFoundError(ConfigurationFileError):
    """The expected document does not exist."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(path, f"File not found: {path}")


class ConfigurationFileReadError(ConfigurationFileError):
    """The document exists but could not be read (permissions, I/O fault)."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(path, f"Cannot read {path}: {reason}")


class ConfigurationFileParseError(ConfigurationFileError):
    """The document was read but is not valid JSON of the expected shape."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(path, f"Unable to parse JSON from file {path}: {reason}")


# =============================================================================
# Monorepo errors
# =============================================================================


class DuplicatePackageNameError(MonodepsError):
    """Two manifests in the monorepo declare the same package name."""

    def __init__(self, name: str, first: Path, second: Path) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Package name {name!r} is declared by both {first} and {second}"
        )


class UnknownPackageError(MonodepsError, KeyError):
    """A package name was looked up that is not part of the monorepo."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown package: {name}")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(MonodepsError):
    """Invalid monodeps configuration."""

    pass


__all__ = [
    "MonodepsError",
    "ConfigurationFileError",
    "ConfigurationFileNotFoundError",
    "ConfigurationFileReadError",
    "ConfigurationFileParseError",
    "DuplicatePackageNameError",
    "UnknownPackageError",
    "ConfigError",
]
