from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ..errors import NoResultsError
from ..llm.config import DEFAULT_GEMINI_CONFIG, GeminiConfig
from ..llm.gemini_client import generate_nearby_listing
from .fallback import demo_restaurants
from .models import CitationRecord, Coordinates, RestaurantRecord
from .parser import parse_restaurants

logger = logging.getLogger(__name__)

ListingGenerator = Callable[
    [Coordinates, GeminiConfig], Awaitable[tuple[str, list[CitationRecord]]]
]


class NearbyRestaurantService:
    """
    Fetch nearby restaurants from Gemini, degrading to the demo dataset.

    ``fetch`` never fails: a missing API key, a failed Gemini call and an
    answer that yields no parsable restaurants all produce the canned list.
    """

    def __init__(
        self,
        config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
        generate: ListingGenerator = generate_nearby_listing,
    ) -> None:
        self.config = config
        self._generate = generate

    @property
    def demo_mode(self) -> bool:
        return not self.config.is_live

    async def _demo(self) -> list[RestaurantRecord]:
        if self.config.demo_latency > 0:
            await asyncio.sleep(self.config.demo_latency)
        return demo_restaurants()

    async def fetch(self, coords: Coordinates) -> list[RestaurantRecord]:
        if self.demo_mode:
            logger.warning("Gemini API key not configured, serving demo restaurants")
            return await self._demo()

        try:
            text, citations = await self._generate(coords, self.config)
            records = parse_restaurants(text, citations, fallback_uri=True)
            if not records:
                raise NoResultsError("Gemini returned no parsable restaurants")
            return records

        except Exception:
            logger.warning(
                "Nearby restaurant fetch failed, falling back to demo restaurants",
                exc_info=True,
            )
            return demo_restaurants()
