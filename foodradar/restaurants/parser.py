"""
Turn Gemini's free-text restaurant listing into structured records.

The prompt asks for ``Name || Cuisine || Description`` lines, but grounded
answers frequently come back as markdown lists instead, so each line is tried
against the strict format first and a list-item heuristic second.
"""
from __future__ import annotations

import logging
import re
from typing import Sequence
from urllib.parse import quote

from .models import (
    DEFAULT_CUISINE,
    DEFAULT_DESCRIPTION,
    CitationRecord,
    RestaurantRecord,
)

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "||"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/{query}"

_PREAMBLE_PREFIXES = ("here are", "sure,")

_LIST_MARKER_RE = re.compile(r"^[\d\-*•]+[.)]?\s+")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_LEADING_PUNCT_RE = re.compile(r"^[:\-–,]+\s*")
_NAME_SEPARATOR_RE = re.compile(r"[:\-–]")


def maps_search_url(name: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent
    return MAPS_SEARCH_URL.format(query=quote(name, safe="!~*'()"))


# ---------------------------------------------------------------------------
# Citation matching
# ---------------------------------------------------------------------------


def match_citation(name: str, citations: Sequence[CitationRecord]) -> str | None:
    """
    Return the URI of the first citation whose title contains ``name`` or is
    contained in it, ignoring case.

    The first matching citation wins even when it carries no URI.
    """
    needle = name.lower()
    for citation in citations:
        if not citation.title:
            continue
        title = citation.title.lower()
        if needle in title or title in needle:
            return citation.uri
    return None


# ---------------------------------------------------------------------------
# Line strategies
# ---------------------------------------------------------------------------


def _parse_strict(line: str) -> tuple[str, str, str]:
    parts = [p.strip() for p in line.split(FIELD_SEPARATOR)]
    name = parts[0]
    cuisine = parts[1] if len(parts) > 1 and parts[1] else DEFAULT_CUISINE
    description = parts[2] if len(parts) > 2 and parts[2] else DEFAULT_DESCRIPTION
    return name, cuisine, description


def _parse_list_item(content: str) -> tuple[str, str]:
    name = ""
    description = DEFAULT_DESCRIPTION

    bold = _BOLD_RE.search(content)
    if bold:
        name = bold.group(1)
        remaining = _BOLD_RE.sub("", content, count=1).strip()
        remaining = _LEADING_PUNCT_RE.sub("", remaining)
        if remaining:
            description = remaining
        return name, description

    separator = _NAME_SEPARATOR_RE.search(content)
    if separator:
        name = content[: separator.start()].strip()
        rest = content[separator.end():].strip()
        if rest:
            description = rest
    elif 2 < len(content) < 50:
        name = content

    return name, description


def _parse_line(line: str) -> tuple[str, str, str] | None:
    lowered = line.lower()
    if lowered.startswith(_PREAMBLE_PREFIXES):
        return None

    if FIELD_SEPARATOR in line:
        name, cuisine, description = _parse_strict(line)
    else:
        marker = _LIST_MARKER_RE.match(line)
        if not marker:
            return None
        name, description = _parse_list_item(line[marker.end():])
        cuisine = DEFAULT_CUISINE

    name = name.replace("**", "").strip()
    if len(name) <= 1:
        return None
    return name, cuisine, description


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def parse_restaurants(
    text: str,
    citations: Sequence[CitationRecord] = (),
    fallback_uri: bool = True,
) -> list[RestaurantRecord]:
    """
    Extract restaurant records from model output, one candidate per line.

    Output order follows input order. When no citation matches a name and
    ``fallback_uri`` is set, a Google Maps search link is built from the name.
    """
    records: list[RestaurantRecord] = []

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        parsed = _parse_line(line)
        if parsed is None:
            continue
        name, cuisine, description = parsed

        uri = match_citation(name, citations)
        if not uri and fallback_uri:
            uri = maps_search_url(name)

        records.append(
            RestaurantRecord(
                name=name,
                cuisine=cuisine,
                description=description,
                map_uri=uri,
            )
        )

    logger.debug("Parsed %d restaurants from %d characters", len(records), len(text))
    return records
