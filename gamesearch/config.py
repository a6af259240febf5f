from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# External game catalog (BoardGameGeek XML API v2)
# ---------------------------

BGG_BASE_URL = os.getenv("BGG_BASE_URL", "https://boardgamegeek.com/xmlapi2")
BGG_SEARCH_URL = f"{BGG_BASE_URL}/search"
BGG_THING_URL = f"{BGG_BASE_URL}/thing"
BGG_SEARCH_TYPE = "boardgame"

# BGG started requiring registered app tokens; unset means anonymous
BGG_API_TOKEN: Optional[str] = os.getenv("BGG_API_TOKEN") or None


# ---------------------------
# HTTP hardening
# ---------------------------

HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = 7.0
HTTP_MAX_REDIRECTS = 2
HTTP_MAX_BYTES = 2_000_000  # search responses for short queries can be large

HTTP_USER_AGENT = "boardgame-session-search/1.0 (+https://example.com)"


# ---------------------------
# Result size policy
# ---------------------------

MIN_QUERY_CHARS = 2       # shorter queries are "no search"
DEFAULT_RESULT_MAX = 10
RESULT_MAX = int(os.getenv("RESULT_MAX", str(DEFAULT_RESULT_MAX)))

MAX_INPUT_CHARS = 200     # query size cap


# ---------------------------
# Relevance scoring weights
# ---------------------------

EXACT_MATCH_BONUS = 1000
PREFIX_MATCH_BONUS = 500
SUBSTRING_MATCH_BONUS = 300
WORD_MATCH_BONUS = 100
IN_ORDER_WORD_BONUS = 50

SHORT_NAME_CHARS = 30
SHORT_NAME_BONUS = 20
LONG_NAME_CHARS = 60
LONG_NAME_PENALTY = 50

# Expansions, promos and fan-made variants are demoted unless asked for
OFF_TOPIC_TERMS: List[str] = ["fan", "expansion", "promo"]
OFF_TOPIC_PENALTY = 100


# ---------------------------
# Game detail defaults
# ---------------------------

COMPLEXITY_MIN = 0.0
COMPLEXITY_MAX = 5.0
DEFAULT_MIN_PLAYERS = 1
DEFAULT_MAX_PLAYERS = 4


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class Candidate(BaseModel):
    """
    A single game returned by the catalog search for a query.
    """

    id: str
    name: str
    year: Optional[str] = None


class ScoredCandidate(Candidate):
    """
    Candidate plus the heuristic relevance score used for ordering.
    Exposed on the wire as ``relevanceScore``.
    """

    model_config = ConfigDict(populate_by_name=True)

    relevance_score: int = Field(serialization_alias="relevanceScore")


class GameDetails(BaseModel):
    """
    Detail record for a single game, used to pre-fill a play session.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    complexity: float = Field(default=0.0, ge=COMPLEXITY_MIN, le=COMPLEXITY_MAX)
    min_playing_time: int = Field(default=0, ge=0, serialization_alias="minPlayingTime")
    max_playing_time: int = Field(default=0, ge=0, serialization_alias="maxPlayingTime")
    min_players: int = Field(default=DEFAULT_MIN_PLAYERS, ge=0, serialization_alias="minPlayers")
    max_players: int = Field(default=DEFAULT_MAX_PLAYERS, ge=0, serialization_alias="maxPlayers")
    description: Optional[str] = None
    thumbnail: Optional[str] = None


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
