"""Shared fixtures and helpers for actorgraph tests."""

import os
import pathlib
import random
import sys

import networkx as nx
import pytest

os.environ.setdefault("ACTORGRAPH_PROGRESS", "0")

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from actorgraph.graph_builder import (  # noqa: E402
    ProjectedGraph,
    build_movie_index,
    group_records,
    project,
)
from actorgraph.registry import ActorRegistry  # noqa: E402

# ======================================================================
# DATA
# ======================================================================

DATASET_HEADER = "Actor/Actress\tMovie\tYear"

# A, B, C share M1 (2000); A and D share M2 (2010)
SAMPLE_RECORDS = [
    ("A", "M1", "2000"),
    ("B", "M1", "2000"),
    ("C", "M1", "2000"),
    ("A", "M2", "2010"),
    ("D", "M2", "2010"),
]


def as_rows(records):
    """(line_number, fields) rows as produced by records.iter_rows."""
    return [(i, list(r)) for i, r in enumerate(records, start=2)]


def write_tsv(path, header, rows):
    lines = [header] + ["\t".join(r) if not isinstance(r, str) else r for r in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def random_records(seed, n_actors=8, n_movies=6, max_cast=4):
    """Small random dataset; some actors may appear in no shared movie."""
    rng = random.Random(seed)
    actors = [f"actor{i}" for i in range(n_actors)]
    records = []
    for m in range(n_movies):
        year = str(rng.randint(1990, 2017))
        for name in rng.sample(actors, rng.randint(1, max_cast)):
            records.append((name, f"movie{m}", year))
    return records


def graph_from_nx(G):
    """Wrap an arbitrary networkx graph as a ProjectedGraph over dense ids."""
    registry = ActorRegistry()
    H = nx.Graph()
    for node in sorted(G.nodes(), key=str):
        H.add_node(registry.register(str(node)), name=str(node))
    for u, v in G.edges():
        if u != v:
            H.add_edge(registry.lookup(str(u)), registry.lookup(str(v)))
    return ProjectedGraph(registry, H)


# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def sample_table():
    return group_records(as_rows(SAMPLE_RECORDS))


@pytest.fixture
def sample_graph(sample_table):
    return project(sample_table)


@pytest.fixture
def weighted_index(sample_table):
    return build_movie_index(sample_table, weighted=True, reference_year=2018)


@pytest.fixture
def unweighted_index(sample_table):
    return build_movie_index(sample_table, weighted=False)


@pytest.fixture
def dataset_file(tmp_path):
    return write_tsv(tmp_path / "movie_casts.tsv", DATASET_HEADER, SAMPLE_RECORDS)
