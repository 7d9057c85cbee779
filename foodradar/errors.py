from __future__ import annotations


class FetchError(Exception):
    """No usable restaurant list could be produced."""


class FetchTransportError(FetchError):
    """The Gemini call itself failed (network, auth, quota, timeout)."""


class NoResultsError(FetchError):
    """The model answered but no restaurant survived parsing."""


class LocationError(Exception):
    message = "Could not determine your location."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class LocationUnavailable(LocationError):
    message = "Geolocation is not supported by your browser"


class LocationDenied(LocationError):
    message = "Please enable location access to find food nearby."


class LocationTimeout(LocationError):
    message = "Timed out while acquiring your location. Please try again."


class InvalidTransition(Exception):
    def __init__(self, event: str, state: str) -> None:
        super().__init__(f"Cannot {event} while {state}")
        self.event = event
        self.state = state
