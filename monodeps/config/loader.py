"""Helpers for loading monodeps configuration from TOML/JSON sources.

``load_config`` accepts:

* None -> ``<root>/monodeps.toml`` when present, else defaults
* dict -> MonodepsConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from monodeps.config.schema import MonodepsConfig
from monodeps.errors import ConfigError

logger = logging.getLogger("monodeps.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

DEFAULT_CONFIG_FILENAME = "monodeps.toml"


def _parse(text: str, fmt: str) -> Dict[str, Any]:
    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Invalid {fmt.upper()} configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Top-level configuration must be a mapping")
    return data


def _validate(data: Dict[str, Any]) -> MonodepsConfig:
    try:
        return MonodepsConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def load_config(
    source: ConfigSource = None, root: Optional[Path] = None
) -> MonodepsConfig:
    """Load MonodepsConfig from various configuration sources.

    Args:
        source: One of:
            * None: ``<root>/monodeps.toml`` if it exists, else defaults
            * dict: already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)
        root: Monorepo root searched when ``source`` is None.

    Returns:
        MonodepsConfig instance.

    Raises:
        ConfigError: The configuration cannot be parsed or is invalid.
    """
    if source is None:
        candidate = (root or Path.cwd()) / DEFAULT_CONFIG_FILENAME
        if not candidate.is_file():
            logger.debug("No config source provided; using default MonodepsConfig")
            return MonodepsConfig.default()
        source = candidate

    if isinstance(source, dict):
        logger.debug("Loading MonodepsConfig from provided dict")
        return _validate(source)

    if isinstance(source, (str, Path)):
        path = Path(source)

        if os.path.isfile(path):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Cannot read configuration {path}: {e}") from e
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading configuration from inline %s string", fmt)

        return _validate(_parse(text, fmt))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "DEFAULT_CONFIG_FILENAME", "load_config"]
