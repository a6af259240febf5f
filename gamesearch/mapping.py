from __future__ import annotations
"""
Mapping utilities to convert loosely-typed catalog rows into API schemas.

Both the XML catalog client and the built-in fallback table produce rows
with string or numpy scalars; this module coerces them into GameDetails /
Candidate in one place so defaults and clamping stay consistent.
"""

from typing import Any, List, Mapping, Optional

import numpy as np
import pandas as pd
from loguru import logger

from . import config
from .config import Candidate, GameDetails


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def _coerce_int(val: Any, default: int = 0) -> int:
    try:
        if _is_missing(val):
            return default
        if isinstance(val, (int, np.integer)):
            return int(val)
        return int(_coerce_float(val, default=float(default)))
    except (TypeError, ValueError, OverflowError):
        return default


def _coerce_float(val: Any, default: float = 0.0) -> float:
    try:
        if _is_missing(val):
            return default
        s = str(val).strip()
        out = float(s) if s else default
    except (TypeError, ValueError):
        return default
    # "nan" / "inf" parse as floats but are not usable numbers
    return out if np.isfinite(out) else default


def _coerce_str(val: Any) -> Optional[str]:
    if _is_missing(val):
        return None
    s = str(val).strip()
    return s or None


def clamp_complexity(value: float) -> float:
    return float(np.clip(value, config.COMPLEXITY_MIN, config.COMPLEXITY_MAX))


def to_game_details(row: Mapping[str, Any]) -> GameDetails:
    """
    Convert a catalog row (dict or pandas Series) into GameDetails.

    Missing numbers fall back to 0 playing time and 1-4 players;
    complexity is clamped into [0, 5].
    """
    min_time = _coerce_int(row.get("min_playing_time"), default=0)
    max_time = _coerce_int(row.get("max_playing_time"), default=min_time)
    return GameDetails(
        id=str(row.get("id", "") or "").strip(),
        name=str(row.get("name", "") or "").strip(),
        complexity=clamp_complexity(_coerce_float(row.get("complexity"), default=0.0)),
        min_playing_time=max(min_time, 0),
        max_playing_time=max(max_time, 0),
        min_players=max(_coerce_int(row.get("min_players"), default=config.DEFAULT_MIN_PLAYERS), 0),
        max_players=max(_coerce_int(row.get("max_players"), default=config.DEFAULT_MAX_PLAYERS), 0),
        description=_coerce_str(row.get("description")),
        thumbnail=_coerce_str(row.get("thumbnail")),
    )


def to_candidate(row: Mapping[str, Any]) -> Candidate:
    return Candidate(
        id=str(row.get("id", "") or "").strip(),
        name=str(row.get("name", "") or "").strip(),
        year=_coerce_str(row.get("year")),
    )


def rows_to_candidates(df: pd.DataFrame) -> List[Candidate]:
    out: List[Candidate] = []
    for _, row in df.iterrows():
        try:
            out.append(to_candidate(row))
        except ValueError as e:
            logger.warning("Skipping malformed catalog row {}: {}", dict(row), e)
    return out
