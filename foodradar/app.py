from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .errors import (
    InvalidTransition,
    LocationDenied,
    LocationError,
    LocationTimeout,
    LocationUnavailable,
)
from .llm.config import DEFAULT_GEMINI_CONFIG
from .radar.config import DEFAULT_RADAR_CONFIG
from .radar.models import LocationErrorReport, RadarState, RadarStatus
from .radar.state import RadarSession
from .radar.store import create_session, get_session
from .restaurants.models import Coordinates, NearbyResponse
from .restaurants.service import NearbyRestaurantService

app = FastAPI(title="FoodRadar API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "foodradar-secret-change-in-production"),
)

_service = NearbyRestaurantService(DEFAULT_GEMINI_CONFIG)
_radar_config = DEFAULT_RADAR_CONFIG

_LOCATION_ERRORS: dict[str, type[LocationError]] = {
    "unavailable": LocationUnavailable,
    "denied": LocationDenied,
    "timeout": LocationTimeout,
}


def _new_session() -> RadarSession:
    return RadarSession(_service, _radar_config)


def _current_session(request: Request) -> RadarSession | None:
    return get_session(request.session.get("radar_id"))


def _require_session(request: Request, event: str) -> RadarSession:
    # Without a stored session the flow is idle; only /radar/start creates one
    radar = _current_session(request)
    if radar is None:
        raise _conflict(InvalidTransition(event, RadarState.idle.value))
    return radar


def _idle_status() -> RadarStatus:
    return RadarStatus(state=RadarState.idle, demo_mode=_service.demo_mode)


def _conflict(exc: InvalidTransition) -> HTTPException:
    return HTTPException(status_code=409, detail=str(exc))


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/restaurants/nearby", response_model=NearbyResponse)
async def nearby_restaurants(coords: Coordinates) -> NearbyResponse:
    restaurants = await _service.fetch(coords)
    return NearbyResponse(restaurants=restaurants, demo_mode=_service.demo_mode)


# ── Radar flow ───────────────────────────────────────────────────────────
# All radar handlers are async so session eviction and the animator task
# run on the server's event loop.


@app.get("/radar", response_model=RadarStatus)
async def radar_status(request: Request) -> RadarStatus:
    radar = _current_session(request)
    return radar.status() if radar is not None else _idle_status()


@app.post("/radar/start", response_model=RadarStatus)
async def radar_start(request: Request) -> RadarStatus:
    radar = _current_session(request)
    if radar is None:
        session_id, radar = create_session(_new_session)
        request.session["radar_id"] = session_id
    try:
        radar.start()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return radar.status()


@app.post("/radar/location", response_model=RadarStatus)
async def radar_location(coords: Coordinates, request: Request) -> RadarStatus:
    radar = _require_session(request, "report a location")
    try:
        await radar.location_acquired(coords)
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return radar.status()


@app.post("/radar/location-error", response_model=RadarStatus)
async def radar_location_error(body: LocationErrorReport, request: Request) -> RadarStatus:
    radar = _require_session(request, "report a location error")
    try:
        radar.location_failed(_LOCATION_ERRORS[body.reason]())
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return radar.status()


@app.post("/radar/pick", response_model=RadarStatus)
async def radar_pick(request: Request) -> RadarStatus:
    radar = _require_session(request, "pick a restaurant")
    try:
        radar.pick()
    except InvalidTransition as exc:
        raise _conflict(exc) from exc
    return radar.status()


@app.post("/radar/reset", response_model=RadarStatus)
async def radar_reset(request: Request) -> RadarStatus:
    radar = _current_session(request)
    if radar is None:
        return _idle_status()
    radar.reset()
    return radar.status()
