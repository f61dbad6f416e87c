"""NetworkX view of the internal dependency graph.

Nodes are package names; an edge ``dependent -> dependency`` exists for each
internal dependency. The condensation (each strongly connected component
collapsed into one node) gives a DAG even when packages depend on each other
in a cycle, so a build order can always be produced.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

import networkx as nx

from monodeps.package_manifest import PackageManifest
from monodeps.types import PackageName

logger = logging.getLogger("monodeps.graph")


def build_dependency_graph(
    package_manifests_by_package_name: Mapping[PackageName, PackageManifest],
) -> nx.DiGraph:
    """Build a directed graph of internal dependencies.

    Args:
        package_manifests_by_package_name: The monorepo package table.

    Returns:
        nx.DiGraph: Nodes carry ``version`` and ``directory`` attributes;
        edges carry ``groups``, the dependency groups that declare the
        dependency, in precedence order.
    """
    graph = nx.DiGraph()

    for name, manifest in package_manifests_by_package_name.items():
        graph.add_node(
            str(name),
            version=manifest.version,
            directory=str(manifest.directory()),
        )

    for name, manifest in package_manifests_by_package_name.items():
        for group, declarations in manifest.dependency_groups():
            for dependency_name in declarations:
                if dependency_name not in package_manifests_by_package_name:
                    continue
                if graph.has_edge(str(name), dependency_name):
                    graph.edges[str(name), dependency_name]["groups"].append(group.value)
                else:
                    graph.add_edge(str(name), dependency_name, groups=[group.value])

    logger.debug(
        "Built dependency graph: %d packages, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def find_cycles(graph: nx.DiGraph, limit: Optional[int] = None) -> List[List[str]]:
    """Enumerate dependency cycles.

    Args:
        graph: Graph from ``build_dependency_graph``.
        limit: Maximum number of cycles to return. None or a non-positive
            value returns all cycles (may be expensive on large graphs).

    Returns:
        List[List[str]]: Cycles as package names in traversal order, each
        rotated to start at its smallest name. The first node is not
        repeated at the end.
    """
    max_cycles = limit if limit is not None and limit > 0 else None
    cycles: List[List[str]] = []

    for cycle in nx.simple_cycles(graph):
        start = cycle.index(min(cycle))
        cycles.append(cycle[start:] + cycle[:start])
        if max_cycles is not None and len(cycles) >= max_cycles:
            break

    cycles.sort(key=lambda c: (len(c), c))
    return cycles


def build_order(graph: nx.DiGraph) -> List[List[str]]:
    """Order packages so that dependencies come before their dependents.

    Packages in a dependency cycle cannot be ordered among themselves and
    are returned together as one step.

    Returns:
        List[List[str]]: Steps in build order; each step is a sorted list of
        package names.
    """
    condensed = nx.condensation(graph)
    members: Dict[int, List[str]] = {
        node: sorted(data["members"]) for node, data in condensed.nodes(data=True)
    }

    # Edges point at dependencies, so the reversed topological order builds
    # dependencies first. Ties are broken by name for stable output.
    steps = list(
        nx.lexicographical_topological_sort(
            condensed.reverse(copy=False), key=lambda node: members[node][0]
        )
    )
    return [members[node] for node in steps]


__all__ = ["build_dependency_graph", "build_order", "find_cycles"]
