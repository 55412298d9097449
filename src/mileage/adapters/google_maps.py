"""Google Distance Matrix adapter - HTTP client for driving distances."""

import logging

import requests

from mileage.core.distance import DistanceLookup
from mileage.errors import ExternalServiceError

logger = logging.getLogger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class GoogleMapsDistanceAdapter:
    """
    Google Distance Matrix adapter.

    Implements DistanceService protocol. One origin/destination pair per
    request; no business logic - just I/O.
    """

    def __init__(self, api_key: str, timeout: float = 30.0, session: requests.Session | None = None):
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def _api_request(self, params: dict) -> dict:
        """Make the API request, mapping every failure to ExternalServiceError."""
        if not self.api_key:
            raise ExternalServiceError("GOOGLE_MAPS_API_KEY is not set")

        try:
            resp = self._session.get(
                DISTANCE_MATRIX_URL,
                params={**params, "key": self.api_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise ExternalServiceError(f"Distance Matrix request failed: {e}") from e
        except ValueError as e:
            raise ExternalServiceError(f"Distance Matrix returned invalid JSON: {e}") from e

        status = data.get("status")
        if status != "OK":
            message = data.get("error_message", "")
            raise ExternalServiceError(f"Distance Matrix error {status}: {message}".rstrip(": "))
        return data

    def lookup(self, origin: str, destination: str) -> DistanceLookup:
        """Look up the driving route from origin to destination."""
        data = self._api_request(
            {
                "origins": origin,
                "destinations": destination,
                "units": "imperial",
            }
        )

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError) as e:
            raise ExternalServiceError("Distance Matrix response had no elements") from e

        status = element.get("status", "")
        if status != "OK":
            return DistanceLookup(status=status)

        return DistanceLookup(
            status=status,
            one_way=(element.get("distance") or {}).get("text"),
            duration=(element.get("duration") or {}).get("text"),
        )
