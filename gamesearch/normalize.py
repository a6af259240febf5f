from __future__ import annotations

"""
Text normalisation helpers shared by the catalog client and the search routes.

Public helpers:

* clean_query_text(text) -> str
    Collapse whitespace and cap the length of a user query.

* strip_html(text) -> str
    Turn catalog markup (entities, <br/>, tags) into plain text.

* basic_clean(text) -> str
    strip_html + unicode/whitespace tidy-up, used for game descriptions.
"""

import re
import unicodedata

from bs4 import BeautifulSoup

from .config import MAX_INPUT_CHARS

_WS_RE = re.compile(r"\s+")


def strip_html(text: str) -> str:
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    return soup.get_text(" ", strip=True)


# BGG descriptions are user-written and full of typographic punctuation
_TYPOGRAPHIC = str.maketrans({
    "‘": "'", "’": "'",
    "“": '"', "”": '"',
    "–": "-", "—": "-",
    "…": "...",
})


def _plain_punctuation(text: str) -> str:
    return unicodedata.normalize("NFKC", text).translate(_TYPOGRAPHIC)


def basic_clean(text: str) -> str:
    """
    Light-weight clean for catalog descriptions:
      - decode entities / drop markup
      - normalise quotes and dashes
      - collapse whitespace
    """
    if not text:
        return ""
    text = strip_html(text)
    text = _plain_punctuation(text)
    return _WS_RE.sub(" ", text).strip()


def clean_query_text(q: str, max_len: int = MAX_INPUT_CHARS) -> str:
    """
    Game-search query as typed into the autocomplete box, made comparable:
    runs of spaces/newlines become one space, ends are trimmed, and the
    result is cut at MAX_INPUT_CHARS (game names are short; anything longer
    is pasted junk).
    """
    q = "" if q is None else str(q)
    q = _WS_RE.sub(" ", q).strip()
    if len(q) > max_len:
        q = q[:max_len]
    return q
