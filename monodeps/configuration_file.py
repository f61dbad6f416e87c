"""Common interface for configuration documents stored in a package directory.

Every on-disk document monodeps understands lives at
``<monorepo_root>/<relative_directory>/<FILENAME>``. Subclasses only declare
the filename and the contents type; locating and reading the file happens
here.
"""

from __future__ import annotations

import logging
from abc import ABC
from pathlib import Path
from typing import Any, ClassVar, Generic, Type, TypeVar

from monodeps.io import read_json_from_file
from monodeps.types import Directory

logger = logging.getLogger("monodeps.configuration_file")

ContentsT = TypeVar("ContentsT")
SelfT = TypeVar("SelfT", bound="ConfigurationFile[Any]")


class ConfigurationFile(ABC, Generic[ContentsT]):
    """Base class for a typed configuration document.

    Attributes:
        FILENAME: Fixed basename of the document, e.g. ``package.json``.
        CONTENTS_TYPE: Type the JSON payload is validated into.
    """

    FILENAME: ClassVar[str] = ""
    CONTENTS_TYPE: ClassVar[Any] = None

    def __init__(self, directory: Directory, contents: ContentsT) -> None:
        self._directory = directory
        self.contents = contents

    @classmethod
    def from_directory(
        cls: Type[SelfT], monorepo_root: Directory, directory: Directory
    ) -> SelfT:
        """Load the document stored in ``directory``.

        Args:
            monorepo_root: Absolute monorepo root.
            directory: Directory of the document, relative to the root.

        Raises:
            ConfigurationFileError: The file is missing, unreadable or
                malformed.
        """
        filename = monorepo_root.join(directory, cls.FILENAME)
        logger.debug("Reading %s from %s", cls.FILENAME, directory)
        contents = read_json_from_file(filename, cls.CONTENTS_TYPE)
        return cls(directory, contents)

    def directory(self) -> Directory:
        return self._directory

    def path(self) -> Path:
        """Root-relative path of the document, including its filename."""
        return self._directory.join(self.FILENAME)

    def get_contents(self) -> ContentsT:
        return self.contents

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path())!r})"


__all__ = ["ConfigurationFile"]
