"""CLI commands that query individual packages."""

from __future__ import annotations

import json
import logging

from rich.table import Table

from monodeps.cli.common import console, load_monorepo
from monodeps.errors import MonodepsError

logger = logging.getLogger("monodeps.cli.packages")


def list_command(args) -> int:
    """List every internal package with its version and directory."""
    try:
        monorepo = load_monorepo(args)
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    manifests = sorted(monorepo, key=lambda manifest: manifest.name)

    if getattr(args, "json", False):
        payload = [
            {
                "name": str(manifest.name),
                "version": manifest.version,
                "directory": str(manifest.directory()),
            }
            for manifest in manifests
        ]
        console.print_json(json.dumps(payload))
        return 0

    table = Table("Package", "Version", "Directory")
    for manifest in manifests:
        table.add_row(str(manifest.name), manifest.version, str(manifest.directory()))
    console.print(table)
    return 0


def deps_command(args) -> int:
    """Print the internal dependencies of one package.

    Args:
        args: Parsed arguments with ``package``, ``transitive`` and ``json``.

    Returns:
        int: 0 on success, 1 when the package is unknown or loading fails.
    """
    try:
        monorepo = load_monorepo(args)
        dependencies = monorepo.internal_dependencies(
            args.package, transitive=getattr(args, "transitive", False)
        )
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    if getattr(args, "json", False):
        console.print_json(json.dumps([str(dep.name) for dep in dependencies]))
        return 0

    for dependency in dependencies:
        console.print(f"{dependency.name} ({dependency.directory()})")
    return 0


def version_command(args) -> int:
    """Print the declared version of a dependency of one package.

    Returns 1 when the dependency is not declared, or is declared with a
    non-string specifier.
    """
    try:
        manifest = load_monorepo(args).get(args.package)
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    version = manifest.get_dependency_version(args.dependency)
    if version is None:
        logger.error("%s does not declare a version for %s", args.package, args.dependency)
        return 1

    console.print(version)
    return 0


def pack_name_command(args) -> int:
    """Print the archive basename `npm pack` produces for one package."""
    try:
        manifest = load_monorepo(args).get(args.package)
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    console.print(manifest.npm_pack_file_basename())
    return 0
