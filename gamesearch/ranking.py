# gamesearch/ranking.py
from __future__ import annotations

from typing import List, Optional, Sequence

from loguru import logger

from . import config
from .config import Candidate, ScoredCandidate


def _has_off_topic_term(text: str) -> bool:
    return any(term in text for term in config.OFF_TOPIC_TERMS)


def relevance_score(name: str, query: str) -> int:
    """
    Heuristic relevance of a catalog game name for a user query.

    Comparison is case-insensitive. Terms, in order:
      1) exact match / prefix / contiguous substring of the whole query
      2) per-word hits (first occurrence) plus a bonus for each word found
         to the right of the previously found word
      3) short-name bonus, long-name penalty
      4) off-topic penalty for fan/expansion/promo items the query did not ask for
    """
    lower_name = name.lower()
    lower_query = query.lower()
    query_words = lower_query.split()

    score = 0

    if lower_name == lower_query:
        score += config.EXACT_MATCH_BONUS
    if lower_name.startswith(lower_query):
        score += config.PREFIX_MATCH_BONUS
    if lower_query in lower_name:
        score += config.SUBSTRING_MATCH_BONUS

    matched_words = 0
    consecutive_matches = 0
    last_match_index = -1
    for word in query_words:
        idx = lower_name.find(word)
        if idx == -1:
            continue
        matched_words += 1
        if last_match_index != -1 and idx > last_match_index:
            consecutive_matches += 1
        last_match_index = idx

    score += matched_words * config.WORD_MATCH_BONUS
    score += consecutive_matches * config.IN_ORDER_WORD_BONUS

    # length checks use the name as given, not lower-cased
    if len(name) < config.SHORT_NAME_CHARS:
        score += config.SHORT_NAME_BONUS
    if len(name) > config.LONG_NAME_CHARS:
        score -= config.LONG_NAME_PENALTY

    if not _has_off_topic_term(lower_query) and _has_off_topic_term(lower_name):
        score -= config.OFF_TOPIC_PENALTY

    return score


def rank_candidates(
    query: str,
    candidates: Sequence[Candidate],
    limit: Optional[int] = None,
) -> List[ScoredCandidate]:
    """
    Score every candidate against the query and return the best ones.

    Sorted by relevance_score descending; equal scores keep catalog order
    (sorted() is stable). Truncated to ``limit`` (RESULT_MAX by default).
    Blank query or no candidates -> [].
    """
    if not query or not query.strip() or not candidates:
        return []

    if limit is None:
        limit = config.RESULT_MAX

    scored = [
        ScoredCandidate(
            id=c.id,
            name=c.name,
            year=c.year,
            relevance_score=relevance_score(c.name, query),
        )
        for c in candidates
    ]
    ranked = sorted(scored, key=lambda c: -c.relevance_score)[: max(limit, 0)]

    logger.debug(
        "Ranked {} candidates for '{}'; top: {}",
        len(scored),
        query,
        [f"{c.name} ({c.relevance_score})" for c in ranked[:3]],
    )
    return ranked
