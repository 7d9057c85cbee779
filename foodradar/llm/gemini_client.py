from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from ..errors import FetchTransportError
from ..restaurants.models import CitationRecord, Coordinates
from .config import DEFAULT_GEMINI_CONFIG, GeminiConfig

logger = logging.getLogger(__name__)


def build_nearby_prompt(coords: Coordinates, count: int) -> str:
    return (
        f"Find {count} popular restaurants near latitude {coords.latitude}, "
        f"longitude {coords.longitude}.\n\n"
        "Instructions:\n"
        "1. Provide a diverse mix of cuisines.\n"
        "2. Strictly use this format for each line:\n"
        "Name || Cuisine Type || Short description\n\n"
        "Example:\n"
        "Joe's Pizza || Italian || Famous for their thin crust."
    )


def _build_request_config(coords: Coordinates) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(
                    latitude=coords.latitude,
                    longitude=coords.longitude,
                ),
            ),
        ),
    )


def extract_citations(response: Any) -> list[CitationRecord]:
    """Flatten the first candidate's grounding chunks into citation records."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    citations: list[CitationRecord] = []
    for chunk in chunks:
        for source in ("web", "maps"):
            part = getattr(chunk, source, None)
            if part is None:
                continue
            citations.append(
                CitationRecord(
                    title=getattr(part, "title", None),
                    uri=getattr(part, "uri", None),
                    source=source,
                )
            )
    return citations


async def generate_nearby_listing(
    coords: Coordinates,
    config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
) -> tuple[str, list[CitationRecord]]:
    """
    Ask Gemini, grounded on Google Maps around ``coords``, for nearby restaurants.

    Returns the raw answer text and its grounding citations. Any failure of the
    call is raised as ``FetchTransportError``.
    """
    try:
        client = genai.Client(
            api_key=config.api_key,
            http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
        )
        response = await client.aio.models.generate_content(
            model=config.model,
            contents=build_nearby_prompt(coords, config.result_count),
            config=_build_request_config(coords),
        )
    except Exception as exc:
        raise FetchTransportError(f"Gemini request failed: {exc}") from exc

    text = response.text or ""
    citations = extract_citations(response)
    logger.info(
        "Gemini returned %d characters and %d citations", len(text), len(citations)
    )
    return text, citations
