"""
Build actor graphs from (actor, movie, year) records.

Construction happens in two passes:
1. group_records() groups rows by movie key (title, year), collecting each
   movie's cast in encounter order and registering actor ids on first sight.
2. The grouped cast table is materialized as either
   - a ProjectedGraph: actor-actor graph, an edge for every pair of actors
     who share at least one movie (used for link scoring and k-cores), or
   - a MovieIndex: actor -> movies and movie -> (weight, cast) maps, keeping
     every shared movie as its own edge (used for shortest paths).

A malformed record aborts the build by raising; no partially built graph is
ever returned.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx
from tqdm import tqdm

from actorgraph import config
from actorgraph.errors import FormatError, ParseError
from actorgraph.records import Row, read_rows
from actorgraph.registry import ActorRegistry

logger = logging.getLogger("actorgraph.graph_builder")

MovieKey = Tuple[str, int]

RECORD_FIELDS = 3


def movie_label(key: MovieKey) -> str:
    """Display form of a movie key, e.g. ('Heat', 1995) -> 'Heat#@1995'."""
    title, year = key
    return f"{title}{config.MOVIE_KEY_SEPARATOR}{year}"


def parse_year(value: str, line_number: Optional[int] = None) -> int:
    """Parse a base-10 year field, raising ParseError on anything else."""
    text = value.strip()
    try:
        return int(text, 10)
    except ValueError:
        raise ParseError(value, line_number=line_number) from None


# ---------------------------------------------------------------------------
# Pass 1: group records by movie
# ---------------------------------------------------------------------------

@dataclass
class CastTable:
    """Movie casts in encounter order plus the registry built alongside them."""

    registry: ActorRegistry = field(default_factory=ActorRegistry)
    casts: Dict[MovieKey, List[str]] = field(default_factory=dict)

    @property
    def number_of_records(self) -> int:
        return sum(len(cast) for cast in self.casts.values())


def group_records(rows: Iterable[Row], source=None) -> CastTable:
    """
    Group (actor, title, year) rows by movie key.

    Args:
        rows: (line_number, fields) pairs with the header already removed
        source: Optional file name used in error messages

    Returns:
        CastTable with casts keyed by (title, year) and a populated registry

    Raises:
        FormatError: a row does not have exactly three fields
        ParseError: a year field is not an integer
    """
    table = CastTable()
    for line_number, fields in tqdm(rows, desc="Reading records", disable=not config.SHOW_PROGRESS):
        if len(fields) != RECORD_FIELDS:
            raise FormatError(line_number, RECORD_FIELDS, len(fields), source=source)
        actor_name, title, year_text = fields
        key = (title, parse_year(year_text, line_number))
        table.registry.register(actor_name)
        table.casts.setdefault(key, []).append(actor_name)

    logger.info(
        "Finished reading tsv: %d actors, %d movies",
        len(table.registry), len(table.casts),
    )
    return table


def load_cast_table(path) -> CastTable:
    """Read a dataset file (header discarded) and group its records."""
    return group_records(read_rows(path), source=path)


# ---------------------------------------------------------------------------
# Pass 2a: projected actor-actor graph
# ---------------------------------------------------------------------------

class ProjectedGraph:
    """
    Unweighted actor-actor graph over dense actor ids.

    Two actors are adjacent iff they share at least one movie; multiplicity
    is collapsed and self loops never exist. The wrapped networkx graph uses
    the registry ids as nodes and carries each actor's name as a node
    attribute. Treat it as read-only once built.
    """

    def __init__(self, registry: ActorRegistry, graph: nx.Graph):
        self.registry = registry
        self.graph = graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def neighbors(self, actor_id: int) -> Set[int]:
        return set(self.graph.adj[actor_id])

    def degree(self, actor_id: int) -> int:
        return len(self.graph.adj[actor_id])

    def has_edge(self, a: int, b: int) -> bool:
        return self.graph.has_edge(a, b)

    def name(self, actor_id: int) -> str:
        return self.registry.name(actor_id)

    def lookup(self, name: str) -> int:
        return self.registry.lookup(name)


def project(table: CastTable) -> ProjectedGraph:
    """
    Connect every unordered pair of actors within each movie's cast.

    Single-member casts add no edges. A name listed twice in one cast does not
    produce a self loop.
    """
    G = nx.Graph()
    G.add_nodes_from((i, {"name": name}) for i, name in enumerate(table.registry))

    registry = table.registry
    for cast in tqdm(table.casts.values(), desc="Projecting movies", disable=not config.SHOW_PROGRESS):
        ids = [registry.lookup(name) for name in cast]
        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                if ids[i] != ids[j]:
                    G.add_edge(ids[i], ids[j])

    n = G.number_of_nodes()
    logger.info(
        "Finished creating graph: %d actors, %d edges, avg degree %.2f",
        n, G.number_of_edges(), (2 * G.number_of_edges() / n) if n else 0.0,
    )
    return ProjectedGraph(registry, G)


# ---------------------------------------------------------------------------
# Pass 2b: weighted actor/movie multigraph
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Movie:
    title: str
    year: int
    weight: int
    cast: Tuple[str, ...]

    @property
    def key(self) -> MovieKey:
        return (self.title, self.year)

    @property
    def label(self) -> str:
        return movie_label(self.key)


def movie_weight(year: int, weighted: bool, reference_year: Optional[int] = None) -> int:
    """
    Edge weight of a movie.

    Unweighted mode gives every movie weight 1. Weighted mode gives
    (reference_year - year) + 1 so that newer movies are cheaper to traverse.

    Raises:
        ParseError: the year lies after the reference year (non-positive weight)
    """
    if not weighted:
        return 1
    if reference_year is None:
        reference_year = config.REFERENCE_YEAR
    weight = reference_year - year + 1
    if weight < 1:
        raise ParseError(
            str(year),
            message=f"movie year {year} is after reference year {reference_year}",
        )
    return weight


class MovieIndex:
    """
    Actor -> movie keys and movie key -> Movie maps.

    Distinct movies shared by the same two actors stay distinct, each one a
    separate relaxation candidate for path search.
    """

    def __init__(self, actor_movies: Dict[str, List[MovieKey]], movies: Dict[MovieKey, Movie], weighted: bool):
        self.actor_movies = actor_movies
        self.movies = movies
        self.weighted = weighted

    def __contains__(self, name) -> bool:
        return name in self.actor_movies

    def __len__(self) -> int:
        return len(self.actor_movies)

    def movies_of(self, name: str) -> List[MovieKey]:
        return self.actor_movies[name]

    def movie(self, key: MovieKey) -> Movie:
        return self.movies[key]


def build_movie_index(table: CastTable, weighted: bool, reference_year: Optional[int] = None) -> MovieIndex:
    """
    Build the weighted multigraph maps from a cast table.

    Args:
        table: Output of group_records()
        weighted: True for year-based weights, False for unit weights
        reference_year: Overrides config.REFERENCE_YEAR

    Returns:
        MovieIndex with actor filmographies in encounter order
    """
    actor_movies: Dict[str, List[MovieKey]] = {name: [] for name in table.registry}
    movies: Dict[MovieKey, Movie] = {}

    for key, cast in table.casts.items():
        title, year = key
        movies[key] = Movie(title, year, movie_weight(year, weighted, reference_year), tuple(cast))
        for name in cast:
            actor_movies[name].append(key)

    logger.info(
        "Built %s movie index: %d actors, %d movies",
        "weighted" if weighted else "unweighted", len(actor_movies), len(movies),
    )
    return MovieIndex(actor_movies, movies, weighted)


# ---------------------------------------------------------------------------
# Everything at once
# ---------------------------------------------------------------------------

class ActorGraph:
    """
    All representations of one dataset, built once and shared read-only.

    Used by the HTTP service, which answers every kind of query against the
    same dataset.
    """

    def __init__(self, table: CastTable, reference_year: Optional[int] = None):
        self.registry = table.registry
        self.projected = project(table)
        self.unweighted = build_movie_index(table, weighted=False)
        self.weighted = build_movie_index(table, weighted=True, reference_year=reference_year)

    @classmethod
    def from_file(cls, path, reference_year: Optional[int] = None) -> "ActorGraph":
        return cls(load_cast_table(path), reference_year=reference_year)

    def movie_index(self, weighted: bool) -> MovieIndex:
        return self.weighted if weighted else self.unweighted

    @property
    def number_of_movies(self) -> int:
        return len(self.unweighted.movies)
