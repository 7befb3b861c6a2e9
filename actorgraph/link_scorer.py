"""
Link prediction and collaboration recommendation by common neighbors.

For a query actor u, mutual(v) is the number of actors adjacent to both u and
v in the projected graph. Two rankings are built from it:

- predict: among u's existing collaborators, the strongest ties
- recommend: among actors u has never worked with, the best new ties

Candidates with no common neighbor are dropped; the rest are ordered by
descending mutual count, then by name, and the top PREDICT_MAX are kept.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from actorgraph import config
from actorgraph.graph_builder import ProjectedGraph

logger = logging.getLogger("actorgraph.link_scorer")

Ranking = List[Tuple[str, int]]


def mutual_counts(graph: ProjectedGraph, actor_id: int) -> List[int]:
    """
    Common-neighbor counts between actor_id and every actor.

    Equivalent to the dot product of adjacency rows, but only walks the
    two-hop neighborhood of actor_id: every path u - w - v adds one to v.

    Returns:
        List indexed by actor id; the query actor's own entry is 0
    """
    counts = [0] * len(graph)
    adj = graph.graph.adj
    for w in adj[actor_id]:
        for v in adj[w]:
            counts[v] += 1
    counts[actor_id] = 0
    return counts


def rank_candidates(
    graph: ProjectedGraph,
    actor: str,
    neighbor: bool,
    limit: Optional[int] = None,
) -> Ranking:
    """
    Rank candidate collaborators for one actor.

    Args:
        graph: Projected actor-actor graph
        actor: Query actor name
        neighbor: True ranks existing collaborators (predict), False ranks
            actors not yet connected to the query actor (recommend)
        limit: Number of names to keep (default config.PREDICT_MAX)

    Returns:
        List of (name, mutual count), strongest first

    Raises:
        UnknownActorError: actor does not appear in the dataset
    """
    if limit is None:
        limit = config.PREDICT_MAX
    u = graph.lookup(actor)
    counts = mutual_counts(graph, u)
    adjacent = graph.neighbors(u)

    candidates = [
        (graph.name(v), count)
        for v, count in enumerate(counts)
        if count > 0 and v != u and (v in adjacent) == neighbor
    ]
    candidates.sort(key=lambda c: (-c[1], c[0]))
    return candidates[:limit]


def predict(graph: ProjectedGraph, actor: str, limit: Optional[int] = None) -> Ranking:
    """Strongest existing collaborations of actor."""
    return rank_candidates(graph, actor, neighbor=True, limit=limit)


def recommend(graph: ProjectedGraph, actor: str, limit: Optional[int] = None) -> Ranking:
    """Most promising new collaborations for actor."""
    return rank_candidates(graph, actor, neighbor=False, limit=limit)


def rank_targets(graph: ProjectedGraph, targets: Iterable[str], neighbor: bool) -> Iterator[Tuple[str, Ranking]]:
    """Yield (target, ranking) for each target actor in order."""
    targets = list(targets)
    mode = "predicted interactions" if neighbor else "recommended collaborations"
    logger.info("Finding top %s for %d actors", mode, len(targets))
    for actor in tqdm(targets, desc=f"Ranking {mode}", disable=not config.SHOW_PROGRESS):
        logger.debug("Computing for (%s)", actor)
        yield actor, rank_candidates(graph, actor, neighbor)


def format_ranking(ranking: Ranking) -> str:
    """Tab-separated names, no trailing tab; empty string when nothing qualifies."""
    return "\t".join(name for name, _ in ranking)
