from __future__ import annotations

"""Built-in game table served when the external catalog is unreachable."""

from functools import lru_cache
from typing import List, Optional

import pandas as pd
from loguru import logger

from . import config
from .config import Candidate, GameDetails
from .mapping import rows_to_candidates, to_game_details

FALLBACK_GAMES = [
    {"id": "1", "name": "Catan", "complexity": 2.3, "playing_time": 90, "min_players": 3, "max_players": 4},
    {"id": "2", "name": "Ticket to Ride", "complexity": 1.9, "playing_time": 60, "min_players": 2, "max_players": 5},
    {"id": "3", "name": "Pandemic", "complexity": 2.4, "playing_time": 45, "min_players": 2, "max_players": 4},
    {"id": "4", "name": "Carcassonne", "complexity": 1.9, "playing_time": 45, "min_players": 2, "max_players": 5},
    {"id": "5", "name": "Settlers of Catan", "complexity": 2.3, "playing_time": 90, "min_players": 3, "max_players": 4},
    {"id": "6", "name": "Dominion", "complexity": 2.4, "playing_time": 30, "min_players": 2, "max_players": 4},
    {"id": "7", "name": "7 Wonders", "complexity": 2.3, "playing_time": 30, "min_players": 3, "max_players": 7},
    {"id": "8", "name": "Agricola", "complexity": 3.6, "playing_time": 150, "min_players": 1, "max_players": 5},
    {"id": "9", "name": "Puerto Rico", "complexity": 3.3, "playing_time": 150, "min_players": 3, "max_players": 5},
    {"id": "10", "name": "Power Grid", "complexity": 3.3, "playing_time": 120, "min_players": 2, "max_players": 6},
]


@lru_cache(maxsize=1)
def get_fallback_df() -> pd.DataFrame:
    df = pd.DataFrame(FALLBACK_GAMES)
    # the built-in table only knows a single typical playing time
    df["min_playing_time"] = df["playing_time"]
    df["max_playing_time"] = df["playing_time"]
    df["name_lower"] = df["name"].str.lower()
    return df.set_index("id", drop=False)


def search_fallback_games(query: str) -> List[Candidate]:
    """
    Plain substring match over the built-in table, in table order.
    """
    if not query or not query.strip():
        return []

    df = get_fallback_df()
    hits = df[df["name_lower"].str.contains(query.lower(), regex=False)]
    results = rows_to_candidates(hits.head(config.RESULT_MAX))
    logger.info("Fallback search '{}' matched {} games", query, len(results))
    return results


def get_fallback_game_details(game_id: str) -> Optional[GameDetails]:
    df = get_fallback_df()
    key = str(game_id).strip()
    if key not in df.index:
        return None
    return to_game_details(df.loc[key])
