"""CLI command verifying the root tsconfig.json project references.

Every package directory holding a tsconfig.json should be listed in the
root tsconfig.json ``references``, and every reference should point at an
existing package.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Set

from monodeps.cli.common import console, load_monorepo
from monodeps.errors import MonodepsError
from monodeps.monorepo import MonorepoManifest
from monodeps.typescript_config import TypescriptConfig

logger = logging.getLogger("monodeps.cli.check")


def _typescript_package_directories(monorepo: MonorepoManifest) -> Set[str]:
    directories = set()
    for manifest in monorepo:
        directory = manifest.directory()
        # The root tsconfig.json is the file holding the references
        if str(directory) == ".":
            continue
        if monorepo.root.join(directory, TypescriptConfig.FILENAME).is_file():
            directories.add(str(directory))
    return directories


def check_command(args) -> int:
    """Compare root project references with the packages on disk.

    Returns:
        int: 0 when references and packages agree, 1 otherwise.
    """
    try:
        monorepo = load_monorepo(args)
        references = monorepo.project_references()
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    if references is None:
        logger.error("No tsconfig.json found at %s", monorepo.root)
        return 1

    referenced: Set[str] = set()
    for path in references.reference_paths():
        # A reference may name the tsconfig file instead of its directory
        if path.endswith(".json"):
            path = posixpath.dirname(path)
        referenced.add(posixpath.normpath(path))
    expected = _typescript_package_directories(monorepo)

    missing = sorted(expected - referenced)
    stale = sorted(referenced - expected)

    for directory in missing:
        console.print(f"missing reference: {directory}")
    for directory in stale:
        console.print(f"stale reference: {directory}")

    if missing or stale:
        logger.error(
            "Project references out of date (%d missing, %d stale)",
            len(missing),
            len(stale),
        )
        return 1

    logger.info("Project references match %d TypeScript package(s)", len(expected))
    return 0
