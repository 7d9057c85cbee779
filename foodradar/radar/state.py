"""
Radar session state machine.

One ``RadarSession`` per browser walks through::

    idle -> locating -> scanning -> results -> picking -> winner
                 \\            \\
                  -> error      -> error

``reset()`` returns to ``idle`` from any state. The browser acquires the
location itself and reports either coordinates or the failure reason.
"""
from __future__ import annotations

import asyncio
import logging

from ..errors import InvalidTransition, LocationError, NoResultsError
from ..restaurants.models import Coordinates, RestaurantRecord
from ..restaurants.service import NearbyRestaurantService
from .animator import SelectionAnimator
from .config import DEFAULT_RADAR_CONFIG, RadarConfig
from .models import RadarState, RadarStatus

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = "Could not find restaurants. Please try again later."


class RadarSession:
    def __init__(
        self,
        service: NearbyRestaurantService,
        config: RadarConfig = DEFAULT_RADAR_CONFIG,
        animator: SelectionAnimator | None = None,
    ) -> None:
        self._service = service
        self._config = config
        self._animator = animator or SelectionAnimator(
            tick_interval=config.tick_interval,
            tick_count=config.tick_count,
        )
        self._pick_task: asyncio.Task | None = None
        # Bumped on reset so a fetch that outlives its session is ignored
        self._generation = 0
        self._clear()

    def _clear(self) -> None:
        self.state = RadarState.idle
        self.restaurants: tuple[RestaurantRecord, ...] = ()
        self.highlighted: RestaurantRecord | None = None
        self.winner: RestaurantRecord | None = None
        self.error: str | None = None

    def _require(self, event: str, *allowed: RadarState) -> None:
        if self.state not in allowed:
            raise InvalidTransition(event, self.state.value)

    def _fail(self, message: str) -> None:
        self.state = RadarState.error
        self.error = message

    # ── Events ──────────────────────────────────────────────────────────

    def start(self) -> None:
        self._require("start scanning", RadarState.idle)
        self.state = RadarState.locating

    def location_failed(self, error: LocationError) -> None:
        self._require("report a location error", RadarState.locating)
        logger.info("Location unavailable: %s", error.message)
        self._fail(error.message)

    async def location_acquired(self, coords: Coordinates) -> None:
        self._require("report a location", RadarState.locating)
        self.state = RadarState.scanning
        generation = self._generation

        try:
            records = await self._service.fetch(coords)
            if not records:
                raise NoResultsError("No results found.")
            if self._config.scan_delay > 0:
                await asyncio.sleep(self._config.scan_delay)
        except Exception as exc:
            logger.warning("Scan failed", exc_info=True)
            if generation == self._generation:
                self._fail(str(exc) or GENERIC_FETCH_ERROR)
            return

        if generation != self._generation:
            logger.info("Session was reset during the scan, dropping %d results", len(records))
            return

        self.restaurants = tuple(records)
        self.state = RadarState.results

    def pick(self) -> None:
        self._require("pick a restaurant", RadarState.results)
        self.highlighted = None
        self.winner = None
        self.state = RadarState.picking
        self._pick_task = self._animator.select(
            self.restaurants, self._on_tick, self._on_done
        )

    def reset(self) -> None:
        if self._pick_task is not None and not self._pick_task.done():
            self._pick_task.cancel()
        self._pick_task = None
        self._generation += 1
        self._clear()

    # ── Animator callbacks ──────────────────────────────────────────────

    def _on_tick(self, record: RestaurantRecord) -> None:
        self.highlighted = record

    def _on_done(self, record: RestaurantRecord) -> None:
        self.highlighted = record
        self.winner = record
        self.state = RadarState.winner
        self._pick_task = None

    @property
    def pick_task(self) -> asyncio.Task | None:
        return self._pick_task

    def status(self) -> RadarStatus:
        return RadarStatus(
            state=self.state,
            restaurants=list(self.restaurants),
            highlighted=self.highlighted,
            winner=self.winner,
            error=self.error,
            demo_mode=self._service.demo_mode,
        )
