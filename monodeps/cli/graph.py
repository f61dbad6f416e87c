"""CLI commands that inspect the whole internal dependency graph.

``cycles`` reports dependency cycles between internal packages and can fail
the process so CI pipelines can enforce acyclicity. ``order`` prints a
dependency-first build order.
"""

from __future__ import annotations

import json
import logging

from monodeps.cli.common import console, load_command_config, load_monorepo, resolve_root
from monodeps.errors import MonodepsError
from monodeps.graph import build_dependency_graph, build_order, find_cycles

logger = logging.getLogger("monodeps.cli.graph")


def cycles_command(args) -> int:
    """Report dependency cycles.

    Args:
        args: Parsed arguments with ``limit`` and ``fail_on_cycle``.

    Returns:
        int: 1 if cycles were found and ``--fail-on-cycle`` is set, or on
        load failure; 0 otherwise.
    """
    try:
        config = load_command_config(args, resolve_root(args))
        monorepo = load_monorepo(args, config)
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    limit_arg = getattr(args, "limit", None)
    limit = limit_arg if limit_arg is not None else config.graph.cycle_limit

    graph = build_dependency_graph(monorepo.package_manifests_by_package_name)
    cycles = find_cycles(graph, limit=limit)

    if not cycles:
        logger.info("No dependency cycles between %d packages", len(monorepo))
        return 0

    logger.warning("Detected %d dependency cycle(s)", len(cycles))
    for idx, cycle in enumerate(cycles, start=1):
        # Closed loop for readability: A -> B -> A
        console.print(f"Cycle {idx}: {' -> '.join(cycle + [cycle[0]])}")

    if getattr(args, "fail_on_cycle", False):
        logger.error("Dependency cycles detected")
        return 1
    return 0


def order_command(args) -> int:
    """Print packages in dependency-first build order."""
    try:
        monorepo = load_monorepo(args)
    except MonodepsError as e:
        logger.error("%s", e)
        return 1

    graph = build_dependency_graph(monorepo.package_manifests_by_package_name)
    steps = build_order(graph)

    if getattr(args, "json", False):
        console.print_json(json.dumps(steps))
        return 0

    for idx, step in enumerate(steps, start=1):
        if len(step) > 1:
            console.print(f"{idx}. {', '.join(step)} (cycle)")
        else:
            console.print(f"{idx}. {step[0]}")
    return 0
