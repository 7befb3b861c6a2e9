"""
Shortest paths between actors through shared movies.

Dijkstra's algorithm over a MovieIndex: every movie an actor appears in
connects them to each co-star at the movie's weight. Vertex state (distance,
visited flag, predecessor actor and movie) lives in a table created fresh for
every query, so queries never influence each other and can run in any order
against the same read-only index.

Frontier order is ascending distance; equal distances are ordered by the name
of the predecessor actor recorded when the entry was pushed, then by the
actor's own name. Entries are immutable once pushed, which keeps the result
deterministic for a given index.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from actorgraph.errors import UnknownActorError
from actorgraph.graph_builder import MovieIndex, MovieKey, movie_label

logger = logging.getLogger("actorgraph.pathfinder")


@dataclass
class VertexState:
    distance: float = math.inf
    visited: bool = False
    predecessor_actor: Optional[str] = None
    predecessor_movie: Optional[MovieKey] = None


@dataclass
class PathResult:
    """
    Outcome of one path query.

    actors holds the actor sequence from start to end; movies[i] is the movie
    linking actors[i] and actors[i + 1]. When no path exists, found is False,
    actors is just [start] and total_weight is None.
    """

    start: str
    end: str
    found: bool
    total_weight: Optional[int] = None
    actors: List[str] = field(default_factory=list)
    movies: List[MovieKey] = field(default_factory=list)

    @property
    def hops(self) -> List[Tuple[str, MovieKey, str]]:
        return [
            (self.actors[i], self.movies[i], self.actors[i + 1])
            for i in range(len(self.movies))
        ]


def _search(index: MovieIndex, start: str, end: str) -> Dict[str, VertexState]:
    state: Dict[str, VertexState] = {name: VertexState() for name in index.actor_movies}
    state[start].distance = 0
    frontier = [(0, "", start)]

    while frontier:
        _, _, actor = heapq.heappop(frontier)
        if actor == end:
            break

        vertex = state[actor]
        # Stale entry, a shorter one was settled already
        if vertex.visited:
            continue
        vertex.visited = True

        for key in index.movies_of(actor):
            movie = index.movie(key)
            candidate = vertex.distance + movie.weight
            for co_star in movie.cast:
                if co_star == actor:
                    continue
                other = state[co_star]
                if candidate < other.distance:
                    other.distance = candidate
                    other.predecessor_actor = actor
                    other.predecessor_movie = key
                    heapq.heappush(frontier, (candidate, actor, co_star))

    return state


def find_path(index: MovieIndex, start: str, end: str) -> PathResult:
    """
    Find the cheapest actor/movie path from start to end.

    Args:
        index: Weighted or unweighted movie index
        start: Starting actor name
        end: Ending actor name

    Returns:
        PathResult; found is False when end is unreachable from start

    Raises:
        UnknownActorError: start or end does not appear in the dataset
    """
    for name in (start, end):
        if name not in index:
            raise UnknownActorError(name)

    state = _search(index, start, end)
    if state[end].distance == math.inf:
        logger.info("No path from %s to %s", start, end)
        return PathResult(start, end, found=False, actors=[start])

    actors = [end]
    movies: List[MovieKey] = []
    current = state[end]
    while current.predecessor_actor is not None:
        movies.append(current.predecessor_movie)
        actors.append(current.predecessor_actor)
        current = state[current.predecessor_actor]
    actors.reverse()
    movies.reverse()

    total = int(state[end].distance)
    logger.debug("Path %s -> %s: %d hops, weight %d", start, end, len(movies), total)
    return PathResult(start, end, found=True, total_weight=total, actors=actors, movies=movies)


def find_paths(index: MovieIndex, pairs: Iterable[Tuple[str, str]]) -> Iterator[PathResult]:
    """Run find_path for each (start, end) pair in order."""
    for start, end in pairs:
        logger.info("Computing path (%s) -> (%s)", start, end)
        yield find_path(index, start, end)


def format_path(result: PathResult) -> str:
    """
    Render a path as (A)--[M#@Y]-->(B)--[M2#@Y2]-->(C).

    A query without a path renders as the start actor alone: (A).
    """
    if not result.found:
        return f"({result.start})"
    parts = []
    for actor, movie in zip(result.actors, result.movies):
        parts.append(f"({actor})--[{movie_label(movie)}]-->")
    parts.append(f"({result.actors[-1]})")
    return "".join(parts)
