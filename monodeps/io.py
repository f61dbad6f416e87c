"""JSON file reading helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from monodeps.errors import (
    ConfigurationFileNotFoundError,
    ConfigurationFileParseError,
    ConfigurationFileReadError,
)

logger = logging.getLogger("monodeps.io")

T = TypeVar("T")


def read_json_from_file(filename: Path, target: Type[T]) -> T:
    """Read a JSON document and validate it into ``target``.

    The whole file is read into memory before decoding; manifests are small.

    Args:
        filename: Path of the JSON file.
        target: Type to deserialize into. Any type pydantic can validate is
            accepted: a ``BaseModel`` subclass, ``Dict[str, Any]``, ...

    Returns:
        The validated value.

    Raises:
        ConfigurationFileNotFoundError: The file does not exist.
        ConfigurationFileReadError: The file exists but cannot be read.
        ConfigurationFileParseError: The content is not valid JSON or does
            not match ``target``.
    """
    try:
        text = filename.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationFileNotFoundError(filename) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationFileReadError(filename, str(e)) from e

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationFileParseError(filename, str(e)) from e

    try:
        value = TypeAdapter(target).validate_python(data)
    except ValidationError as e:
        raise ConfigurationFileParseError(filename, str(e)) from e

    logger.debug("Loaded %s", filename)
    return value


__all__ = ["read_json_from_file"]
