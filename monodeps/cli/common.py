"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from monodeps.config import MonodepsConfig, load_config
from monodeps.monorepo import MonorepoManifest

logger = logging.getLogger("monodeps.cli.common")

# Results go to stdout; logging goes through RichHandler on stderr.
console = Console(highlight=False, markup=False, soft_wrap=True)


def resolve_root(args) -> Path:
    root_arg = getattr(args, "root", None)
    return Path(root_arg or ".").expanduser().resolve()


def load_command_config(args, root: Optional[Path] = None) -> MonodepsConfig:
    """Load configuration from ``--config`` or ``<root>/monodeps.toml``."""
    return load_config(getattr(args, "config", None), root=root or resolve_root(args))


def load_monorepo(args, config: Optional[MonodepsConfig] = None) -> MonorepoManifest:
    """Discover and load the monorepo named by ``--root``.

    Raises:
        MonodepsError: Configuration or manifests could not be loaded.
    """
    root = resolve_root(args)
    if config is None:
        config = load_command_config(args, root)
    logger.info("Loading monorepo at %s", root)
    return MonorepoManifest.from_directory(root, config)
