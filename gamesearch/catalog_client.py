from __future__ import annotations

from typing import Dict, List, Optional

import httpx
from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from . import config
from .config import Candidate, GameDetails
from .mapping import to_game_details
from .normalize import basic_clean


class CatalogUnavailableError(RuntimeError):
    """The external game catalog could not be reached or returned junk."""


def _http_client() -> httpx.Client:
    headers = {"User-Agent": config.HTTP_USER_AGENT}
    if config.BGG_API_TOKEN:
        headers["Authorization"] = f"Bearer {config.BGG_API_TOKEN}"
    return httpx.Client(
        headers=headers,
        follow_redirects=True,
        timeout=httpx.Timeout(config.HTTP_READ_TIMEOUT, connect=config.HTTP_CONNECT_TIMEOUT),
        max_redirects=config.HTTP_MAX_REDIRECTS,
    )


def _fetch_xml(client: httpx.Client, url: str, params: Dict[str, str]) -> str:
    logger.info("Fetching catalog: {} {}", url, params)
    try:
        r = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise CatalogUnavailableError(f"Request to {url} failed: {e}") from e
    # BGG answers 202 while it queues a request; treat anything but 200 as no data
    if r.status_code != 200:
        raise CatalogUnavailableError(f"HTTP {r.status_code} for {url}")
    if len(r.content) > config.HTTP_MAX_BYTES:
        raise CatalogUnavailableError(f"Response too large ({len(r.content)} bytes) for {url}")
    return r.text


def _parse_xml(xml_text: str) -> BeautifulSoup:
    soup = BeautifulSoup(xml_text, "xml")
    if soup.find("items") is None:
        raise CatalogUnavailableError("Catalog response has no <items> root")
    return soup


def _value_of(tag: Optional[Tag]) -> Optional[str]:
    """BGG puts most scalars in a value="" attribute; older payloads use text."""
    if tag is None:
        return None
    value = tag.get("value")
    if value is None:
        value = tag.get_text(strip=True)
    value = str(value).strip()
    return value or None


def _primary_name(item: Tag) -> Optional[str]:
    names = item.find_all("name")
    for tag in names:
        if tag.get("type") == "primary":
            return _value_of(tag)
    return _value_of(names[0]) if names else None


def parse_search_results(xml_text: str) -> List[Candidate]:
    soup = _parse_xml(xml_text)

    results: List[Candidate] = []
    for item in soup.find_all("item"):
        game_id = str(item.get("id", "") or "").strip()
        name = _value_of(item.find("name"))
        if not game_id or not name:
            continue
        results.append(
            Candidate(id=game_id, name=name, year=_value_of(item.find("yearpublished")))
        )

    logger.info("Parsed {} candidates from catalog search", len(results))
    return results


def parse_game_details(xml_text: str) -> Optional[GameDetails]:
    soup = _parse_xml(xml_text)
    item = soup.find("item")
    if item is None:
        return None

    playing_time = _value_of(item.find("playingtime"))
    description = _value_of(item.find("description"))
    row = {
        "id": str(item.get("id", "") or "").strip(),
        "name": _primary_name(item) or "",
        "complexity": _value_of(item.find("averageweight")),
        "min_playing_time": _value_of(item.find("minplaytime")) or playing_time,
        "max_playing_time": _value_of(item.find("maxplaytime")) or playing_time,
        "min_players": _value_of(item.find("minplayers")),
        "max_players": _value_of(item.find("maxplayers")),
        "description": basic_clean(description) if description else None,
        "thumbnail": _value_of(item.find("thumbnail")),
    }
    try:
        return to_game_details(row)
    except ValueError as e:
        raise CatalogUnavailableError(f"Unusable game details for id={row['id']}: {e}") from e


def search_catalog(query: str, client: Optional[httpx.Client] = None) -> List[Candidate]:
    """
    Look up games matching ``query`` in the external catalog.

    Results come back in catalog order, unranked.
    Raises CatalogUnavailableError on transport or payload problems.
    """
    params = {"query": query, "type": config.BGG_SEARCH_TYPE}
    if client is not None:
        return parse_search_results(_fetch_xml(client, config.BGG_SEARCH_URL, params))
    with _http_client() as c:
        return parse_search_results(_fetch_xml(c, config.BGG_SEARCH_URL, params))


def fetch_game_details(game_id: str, client: Optional[httpx.Client] = None) -> Optional[GameDetails]:
    """
    Fetch one game's details (with stats, for the complexity weight).
    Returns None when the catalog knows no such game.
    """
    params = {"id": game_id, "stats": "1", "type": config.BGG_SEARCH_TYPE}
    if client is not None:
        return parse_game_details(_fetch_xml(client, config.BGG_THING_URL, params))
    with _http_client() as c:
        return parse_game_details(_fetch_xml(c, config.BGG_THING_URL, params))
