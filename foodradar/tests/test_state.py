from __future__ import annotations

import asyncio
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from foodradar.errors import (
    InvalidTransition,
    LocationDenied,
    LocationUnavailable,
    NoResultsError,
)
from foodradar.radar.animator import SelectionAnimator
from foodradar.radar.config import RadarConfig
from foodradar.radar.models import RadarState
from foodradar.radar.state import RadarSession
from foodradar.restaurants.fallback import DEMO_RESTAURANTS
from foodradar.restaurants.models import Coordinates

COORDS = Coordinates(latitude=37.7749, longitude=-122.4194)
FAST_CONFIG = RadarConfig(tick_interval=0, tick_count=15, scan_delay=0)


async def _no_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


def _service(records=None, side_effect=None) -> MagicMock:
    service = MagicMock()
    service.fetch = AsyncMock(
        return_value=list(DEMO_RESTAURANTS) if records is None else records,
        side_effect=side_effect,
    )
    service.demo_mode = False
    return service


def _session(service=None, animator=None) -> RadarSession:
    return RadarSession(
        service or _service(),
        FAST_CONFIG,
        animator or SelectionAnimator(tick_count=15, rng=random.Random(3), sleep=_no_sleep),
    )


def _scan(session: RadarSession) -> None:
    session.start()
    asyncio.run(session.location_acquired(COORDS))


class TestScanning:
    def test_starts_idle(self):
        status = _session().status()
        assert status.state == RadarState.idle
        assert status.restaurants == []
        assert status.winner is None

    def test_start_moves_to_locating(self):
        session = _session()
        session.start()
        assert session.state == RadarState.locating

    def test_location_then_results(self):
        service = _service()
        session = _session(service)
        _scan(session)

        assert session.state == RadarState.results
        assert list(session.restaurants) == list(DEMO_RESTAURANTS)
        service.fetch.assert_awaited_once_with(COORDS)

    def test_location_error_goes_to_error_state(self):
        session = _session()
        session.start()
        session.location_failed(LocationDenied())

        assert session.state == RadarState.error
        assert session.error == "Please enable location access to find food nearby."

    def test_unsupported_geolocation_message(self):
        session = _session()
        session.start()
        session.location_failed(LocationUnavailable())
        assert session.error == "Geolocation is not supported by your browser"

    def test_empty_fetch_goes_to_error_state(self):
        session = _session(_service(records=[]))
        _scan(session)

        assert session.state == RadarState.error
        assert session.error == "No results found."

    def test_fetch_error_message_surfaces(self):
        session = _session(_service(side_effect=NoResultsError("Nothing nearby")))
        _scan(session)

        assert session.state == RadarState.error
        assert session.error == "Nothing nearby"

    def test_unexpected_fetch_error_goes_to_error_state(self):
        session = _session(_service(side_effect=ValueError("bad payload")))
        _scan(session)

        assert session.state == RadarState.error
        assert session.error == "bad payload"

    def test_blank_fetch_error_uses_generic_message(self):
        session = _session(_service(side_effect=RuntimeError()))
        _scan(session)

        assert session.state == RadarState.error
        assert session.error == "Could not find restaurants. Please try again later."

    def test_reset_during_scan_discards_results(self):
        service = _service()
        session = _session(service)

        async def fetch_then_reset(coords):
            session.reset()
            return list(DEMO_RESTAURANTS)

        service.fetch.side_effect = fetch_then_reset
        _scan(session)

        assert session.state == RadarState.idle
        assert session.restaurants == ()


class TestPicking:
    def test_pick_reaches_winner(self):
        session = _session()
        _scan(session)

        async def pick():
            session.pick()
            assert session.state == RadarState.picking
            await session.pick_task

        asyncio.run(pick())

        assert session.state == RadarState.winner
        assert session.winner in DEMO_RESTAURANTS
        assert session.highlighted == session.winner
        assert session.pick_task is None

    def test_reset_cancels_pick(self):
        session = RadarSession(_service(), RadarConfig(tick_interval=0.01, scan_delay=0))
        _scan(session)

        async def pick_then_reset():
            session.pick()
            task = session.pick_task
            await asyncio.sleep(0.025)
            session.reset()
            await asyncio.gather(task, return_exceptions=True)
            await asyncio.sleep(0.05)
            return task

        task = asyncio.run(pick_then_reset())

        assert task.cancelled()
        assert session.state == RadarState.idle
        assert session.winner is None
        assert session.highlighted is None


class TestTransitions:
    def test_pick_before_results_rejected(self):
        session = _session()
        with pytest.raises(InvalidTransition):
            session.pick()

    def test_double_start_rejected(self):
        session = _session()
        session.start()
        with pytest.raises(InvalidTransition):
            session.start()

    def test_location_without_start_rejected(self):
        session = _session()
        with pytest.raises(InvalidTransition):
            asyncio.run(session.location_acquired(COORDS))

    def test_reset_from_error_allows_retry(self):
        session = _session()
        session.start()
        session.location_failed(LocationDenied())
        session.reset()

        assert session.state == RadarState.idle
        assert session.error is None
        session.start()
        assert session.state == RadarState.locating
