"""
Command-line programs.

pathfinder
    pathfinder movie_tsv u|w pairs_tsv output_paths
predictorandrecommender
    predictorandrecommender movie_tsv targets predicted_interact recommended_collab
popularityfinder
    popularityfinder movie_tsv k pop_actors

Every program builds its graph once, answers its queries, and exits 0. Any
error prints a diagnostic to standard output and exits 1. Queries are all
read and checked against the dataset before an output file is opened, so a
bad query row leaves no partial output behind.
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional

from actorgraph import config
from actorgraph.core_decomposer import k_core
from actorgraph.errors import ActorGraphError, ParseError, UnknownActorError
from actorgraph.graph_builder import build_movie_index, load_cast_table, project
from actorgraph.link_scorer import format_ranking, rank_targets
from actorgraph.pathfinder import find_paths, format_path
from actorgraph.records import open_output, read_pairs, read_targets

logger = logging.getLogger("actorgraph.cli")

EXIT_OK = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors on stdout with exit status 1."""

    def error(self, message):
        print(f"{self.prog} called with incorrect arguments: {message}")
        self.print_usage(sys.stdout)
        sys.exit(EXIT_FAILURE)


def _parse_int(text: str) -> int:
    try:
        return int(text.strip(), 10)
    except ValueError:
        raise ParseError(text) from None


def _check_known(names: Iterable[str], known) -> None:
    for name in names:
        if name not in known:
            raise UnknownActorError(name)


def _write_lines(path, header: str, lines: Iterable[str]) -> None:
    with open_output(path) as out:
        out.write(header + "\n")
        for line in lines:
            out.write(line + "\n")


# ---------------------------------------------------------------------------
# pathfinder
# ---------------------------------------------------------------------------

def pathfinder_main(argv: Optional[List[str]] = None) -> int:
    parser = _ArgumentParser(
        prog="pathfinder",
        description="Find shortest paths between actors through mutual movies.",
    )
    parser.add_argument(
        "movie_tsv",
        help="Tab delimited actor, movie title, movie year file (header row expected)",
    )
    parser.add_argument(
        "mode",
        choices=["u", "w"],
        help="u: every movie weighs 1; w: newer movies weigh less, "
             f"({config.REFERENCE_YEAR} - year) + 1",
    )
    parser.add_argument(
        "pairs_tsv",
        help="Tab delimited start actor, end actor pairs (header row expected)",
    )
    parser.add_argument("output_paths", help="File to create with one path per pair")
    args = parser.parse_args(argv)
    config.configure_logging()

    try:
        table = load_cast_table(args.movie_tsv)
        index = build_movie_index(table, weighted=args.mode == "w")
        pairs = read_pairs(args.pairs_tsv)
        _check_known((name for pair in pairs for name in pair), index)

        lines = [format_path(result) for result in find_paths(index, pairs)]
        _write_lines(args.output_paths, config.PATH_HEADER, lines)
    except ActorGraphError as e:
        print(f"pathfinder: {e}")
        return EXIT_FAILURE

    logger.info("Wrote %d paths to %s", len(lines), args.output_paths)
    return EXIT_OK


# ---------------------------------------------------------------------------
# predictorandrecommender
# ---------------------------------------------------------------------------

def predictor_main(argv: Optional[List[str]] = None) -> int:
    parser = _ArgumentParser(
        prog="predictorandrecommender",
        description="Predict future interactions and recommend new collaborations.",
    )
    parser.add_argument(
        "movie_tsv",
        help="Tab delimited actor, movie title, movie year file (header row expected)",
    )
    parser.add_argument("targets", help="Actor names to suggest for, one per line (header row expected)")
    parser.add_argument("predicted_interact", help="Output file of predicted interactions")
    parser.add_argument("recommended_collab", help="Output file of recommended collaborations")
    args = parser.parse_args(argv)
    config.configure_logging()

    try:
        graph = project(load_cast_table(args.movie_tsv))
        targets = read_targets(args.targets)
        _check_known(targets, graph.registry)

        predicted = [format_ranking(r) for _, r in rank_targets(graph, targets, neighbor=True)]
        recommended = [format_ranking(r) for _, r in rank_targets(graph, targets, neighbor=False)]
        _write_lines(args.predicted_interact, config.PREDICT_HEADER, predicted)
        _write_lines(args.recommended_collab, config.PREDICT_HEADER, recommended)
    except ActorGraphError as e:
        print(f"predictorandrecommender: {e}")
        return EXIT_FAILURE

    logger.info("Wrote suggestions for %d actors", len(targets))
    return EXIT_OK


# ---------------------------------------------------------------------------
# popularityfinder
# ---------------------------------------------------------------------------

def popularity_main(argv: Optional[List[str]] = None) -> int:
    parser = _ArgumentParser(
        prog="popularityfinder",
        description="Find actors with at least k connections by k-core decomposition.",
    )
    parser.add_argument(
        "movie_tsv",
        help="Tab delimited actor, movie title, movie year file (header row expected)",
    )
    parser.add_argument("k", help="Minimum number of connections to remain in the output")
    parser.add_argument("pop_actors", help="Output file of actors in the k-core")
    args = parser.parse_args(argv)
    config.configure_logging()

    try:
        k = _parse_int(args.k)
        graph = project(load_cast_table(args.movie_tsv))
        names = k_core(graph, k)
        _write_lines(args.pop_actors, config.CORE_HEADER, names)
    except ActorGraphError as e:
        print(f"popularityfinder: {e}")
        return EXIT_FAILURE

    logger.info("Wrote %d actors to %s", len(names), args.pop_actors)
    return EXIT_OK

