"""
HTTP query service over one immutable actor graph.

The graph is built once when the app is created and shared read-only by every
request; each path or ranking query allocates its own working state.

Run with:
    ACTORGRAPH_DATASET_PATH=movie_casts.tsv uvicorn --factory actorgraph.api:load_app
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from actorgraph import config
from actorgraph.core_decomposer import k_core
from actorgraph.errors import UnknownActorError
from actorgraph.graph_builder import ActorGraph, movie_label
from actorgraph.link_scorer import rank_candidates
from actorgraph.pathfinder import find_path, format_path

logger = logging.getLogger("actorgraph.api")


# ---------- Models ----------
class MetaResponse(BaseModel):
    actors: int
    movies: int
    edges: int


class PathResponse(BaseModel):
    start: str
    end: str
    weighted: bool
    found: bool
    total_weight: Optional[int] = None
    actors: List[str]
    movies: List[str]
    line: str


class Candidate(BaseModel):
    name: str
    mutual: int


class RankingResponse(BaseModel):
    actor: str
    mode: str
    candidates: List[Candidate]


class CoreResponse(BaseModel):
    k: int
    actors: List[str]


def create_app(graph: ActorGraph) -> FastAPI:
    """Build the FastAPI app answering queries against *graph*."""
    app = FastAPI(
        title="actorgraph API",
        description="Shortest paths, collaboration predictions and k-cores over an actor graph.",
        version="0.1.0",
    )
    app.state.graph = graph

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(UnknownActorError)
    async def unknown_actor(request: Request, exc: UnknownActorError):
        return JSONResponse(status_code=404, content={"error": "Unknown actor", "actor": exc.name})

    @app.get("/health")
    def health():
        return {"ok": True, "service": "actorgraph"}

    @app.get("/meta", response_model=MetaResponse)
    def meta():
        return MetaResponse(
            actors=len(graph.registry),
            movies=graph.number_of_movies,
            edges=graph.projected.number_of_edges,
        )

    @app.get("/path", response_model=PathResponse)
    def path(
        start: str = Query(..., min_length=1),
        end: str = Query(..., min_length=1),
        weighted: bool = False,
    ):
        result = find_path(graph.movie_index(weighted), start, end)
        return PathResponse(
            start=start,
            end=end,
            weighted=weighted,
            found=result.found,
            total_weight=result.total_weight,
            actors=result.actors,
            movies=[movie_label(m) for m in result.movies],
            line=format_path(result),
        )

    def ranking(actor: str, neighbor: bool, limit: int) -> RankingResponse:
        ranked = rank_candidates(graph.projected, actor, neighbor=neighbor, limit=limit)
        return RankingResponse(
            actor=actor,
            mode="predict" if neighbor else "recommend",
            candidates=[Candidate(name=name, mutual=count) for name, count in ranked],
        )

    @app.get("/predict", response_model=RankingResponse)
    def predict(actor: str = Query(..., min_length=1), limit: int = Query(config.PREDICT_MAX, ge=1)):
        return ranking(actor, True, limit)

    @app.get("/recommend", response_model=RankingResponse)
    def recommend(actor: str = Query(..., min_length=1), limit: int = Query(config.PREDICT_MAX, ge=1)):
        return ranking(actor, False, limit)

    @app.get("/core", response_model=CoreResponse)
    def core(k: int = Query(...)):
        return CoreResponse(k=k, actors=k_core(graph.projected, k))

    return app


def load_app() -> FastAPI:
    """App factory reading the dataset named by ACTORGRAPH_DATASET_PATH."""
    config.configure_logging()
    logger.info("Loading dataset %s", config.DATASET_PATH)
    graph = ActorGraph.from_file(config.DATASET_PATH)
    logger.info(
        "Loaded graph: actors=%d movies=%d edges=%d",
        len(graph.registry), graph.number_of_movies, graph.projected.number_of_edges,
    )
    return create_app(graph)
