from __future__ import annotations

"""
FastAPI application for board-game lookups used when scheduling play sessions.

- /bgg/search ranks catalog candidates by heuristic relevance (at most RESULT_MAX)
- queries shorter than MIN_QUERY_CHARS are "no search" and return []
- catalog outages degrade to the built-in fallback table instead of a 5xx
"""

from typing import List, Optional

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .catalog_client import CatalogUnavailableError, fetch_game_details, search_catalog
from .config import MIN_QUERY_CHARS, GameDetails, HealthResponse, ScoredCandidate
from .fallback import get_fallback_game_details, search_fallback_games
from .normalize import clean_query_text
from .ranking import rank_candidates


# -----------------------
# Pipeline
# -----------------------

def run_search(query: str, client: Optional[httpx.Client] = None) -> List[ScoredCandidate]:
    query = clean_query_text(query)
    if len(query) < MIN_QUERY_CHARS:
        return []

    try:
        candidates = search_catalog(query, client=client)
    except CatalogUnavailableError as e:
        logger.warning("Catalog search failed for '{}', using fallback games: {}", query, e)
        candidates = search_fallback_games(query)

    results = rank_candidates(query, candidates)
    logger.info(
        "Found {} results for '{}'; top: {}",
        len(results),
        query,
        [f"{r.name} (score: {r.relevance_score})" for r in results[:3]],
    )
    return results


def run_details(game_id: str, client: Optional[httpx.Client] = None) -> Optional[GameDetails]:
    try:
        details = fetch_game_details(game_id, client=client)
    except CatalogUnavailableError as e:
        logger.warning("Catalog details failed for id={}, using fallback games: {}", game_id, e)
        return get_fallback_game_details(game_id)

    if details is not None:
        logger.info(
            "Parsed game {}: name='{}' complexity={} players={}-{}",
            details.id,
            details.name,
            details.complexity,
            details.min_players,
            details.max_players,
        )
    return details


# -----------------------
# FastAPI app
# -----------------------

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/bgg/search", response_model=List[ScoredCandidate], response_model_exclude_none=True)
def bgg_search(q: str = ""):
    return run_search(q)


@app.get("/bgg/details", response_model=GameDetails, response_model_exclude_none=True)
def bgg_details(id: Optional[str] = None):
    game_id = (id or "").strip()
    if not game_id:
        raise HTTPException(status_code=400, detail="Game ID is required")
    details = run_details(game_id)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return details
