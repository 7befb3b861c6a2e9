"""
k-core decomposition by batch degree peeling.

Every pass walks all actors and removes each still-active actor whose degree
is below k, decrementing the degree of its active neighbors. Passes repeat
until one removes nothing. Peeling order never changes the surviving set, so
the result is the maximal subgraph in which every actor has at least k
neighbors among the other survivors.
"""

import logging
from dataclasses import dataclass
from typing import List, Set

from actorgraph.graph_builder import ProjectedGraph

logger = logging.getLogger("actorgraph.core_decomposer")


@dataclass
class PeelResult:
    k: int
    survivors: Set[int]
    passes: int
    removed: int


def peel(graph: ProjectedGraph, k: int) -> PeelResult:
    """
    Peel actors of degree < k until none remain.

    Args:
        graph: Projected actor-actor graph (not modified)
        k: Minimum number of connections to survive

    Returns:
        PeelResult with the ids of surviving actors and pass statistics
    """
    n = len(graph)
    adj = graph.graph.adj
    degree = [len(adj[i]) for i in range(n)]
    removed = [False] * n

    passes = 0
    total_removed = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        logger.debug("Pruning pass %d", passes)
        for i in range(n):
            if removed[i] or degree[i] >= k:
                continue
            removed[i] = True
            changed = True
            total_removed += 1
            for j in adj[i]:
                if not removed[j]:
                    degree[j] -= 1

    survivors = {i for i in range(n) if not removed[i]}
    logger.info(
        "k=%d core: %d of %d actors survive (%d passes)",
        k, len(survivors), n, passes,
    )
    return PeelResult(k=k, survivors=survivors, passes=passes, removed=total_removed)


def k_core(graph: ProjectedGraph, k: int) -> List[str]:
    """Names of the actors in the k-core, sorted lexicographically."""
    result = peel(graph, k)
    return sorted(graph.name(i) for i in result.survivors)
