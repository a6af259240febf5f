# gamesearch/search_cli.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import pandas as pd
from loguru import logger

from .api import run_search
from .config import MIN_QUERY_CHARS, ScoredCandidate
from .fallback import search_fallback_games
from .normalize import clean_query_text
from .ranking import rank_candidates

OUT_COLUMNS = ["Query", "Rank", "Game_id", "Game_name", "Relevance_score"]


def search(query: str, offline: bool = False) -> List[ScoredCandidate]:
    if not offline:
        return run_search(query)
    query = clean_query_text(query)
    if len(query) < MIN_QUERY_CHARS:
        return []
    return rank_candidates(query, search_fallback_games(query))


def _read_queries(path: Path) -> List[str]:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    df = pd.read_csv(path, encoding="utf-8")
    cols = {c.lower(): c for c in df.columns}
    qcol = cols.get("query")
    if not qcol:
        raise ValueError(f"Expected a 'Query' column. Found: {list(df.columns)}")
    return [clean_query_text(q) for q in df[qcol].fillna("").astype(str)]


def rank_batch(queries: List[str], offline: bool = False) -> pd.DataFrame:
    """
    Rank every query; one output row per (query, result) in rank order.
    Queries with no results produce no rows.
    """
    rows = []
    for q in queries:
        for rank, r in enumerate(search(q, offline=offline), start=1):
            rows.append(
                {
                    "Query": q,
                    "Rank": rank,
                    "Game_id": r.id,
                    "Game_name": r.name,
                    "Relevance_score": r.relevance_score,
                }
            )
    return pd.DataFrame(rows, columns=OUT_COLUMNS)


def _print_results(query: str, results: List[ScoredCandidate]) -> None:
    print(f"Results for '{query}': {len(results)}")
    for r in results:
        year = f" ({r.year})" if r.year else ""
        print(f"{r.relevance_score:>6}  {r.id:>8}  {r.name}{year}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Rank board-game catalog matches for a query.")
    ap.add_argument("query", nargs="?", help="Search text (omit when using --queries_csv)")
    ap.add_argument("--queries_csv", type=Path, help="CSV with a 'Query' column")
    ap.add_argument("--out_csv", type=Path, help="Where to write batch results")
    ap.add_argument("--offline", action="store_true", help="Use only the built-in fallback games")
    args = ap.parse_args(argv)

    if args.queries_csv:
        if not args.out_csv:
            ap.error("--out_csv is required with --queries_csv")
        df = rank_batch(_read_queries(args.queries_csv), offline=args.offline)
        args.out_csv.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.out_csv, index=False, encoding="utf-8")
        logger.info("Wrote {} rows to {}", len(df), args.out_csv)
        return

    if not args.query:
        ap.error("a query or --queries_csv is required")
    _print_results(args.query, search(args.query, offline=args.offline))


if __name__ == "__main__":
    main()
