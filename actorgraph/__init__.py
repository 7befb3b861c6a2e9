"""
actorgraph: queries over the actor collaboration graph implied by shared movies.

- shortest actor/movie paths (pathfinder)
- link prediction and recommendation by common neighbors (link_scorer)
- k-core extraction (core_decomposer)
"""

from actorgraph.core_decomposer import k_core, peel
from actorgraph.errors import (
    ActorGraphError,
    FileOpenError,
    FormatError,
    ParseError,
    UnknownActorError,
)
from actorgraph.graph_builder import (
    ActorGraph,
    CastTable,
    Movie,
    MovieIndex,
    ProjectedGraph,
    build_movie_index,
    group_records,
    load_cast_table,
    project,
)
from actorgraph.link_scorer import mutual_counts, predict, rank_candidates, recommend
from actorgraph.pathfinder import PathResult, find_path, format_path
from actorgraph.registry import ActorRegistry

__version__ = "0.1.0"
