"""Tests for Google Distance Matrix adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from mileage.adapters.google_maps import DISTANCE_MATRIX_URL, GoogleMapsDistanceAdapter
from mileage.errors import ExternalServiceError


def _session(payload: dict) -> MagicMock:
    session = MagicMock()
    session.get.return_value.json.return_value = payload
    return session


def _matrix(element: dict, status: str = "OK") -> dict:
    return {"status": status, "rows": [{"elements": [element]}]}


class TestGoogleMapsDistanceAdapter:
    def test_ok_element(self):
        session = _session(
            _matrix(
                {
                    "status": "OK",
                    "distance": {"text": "15.2 mi", "value": 24462},
                    "duration": {"text": "22 mins", "value": 1320},
                }
            )
        )
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=session)

        lookup = adapter.lookup("1 Home Rd", "123 Main St")

        assert lookup.status == "OK"
        assert lookup.one_way == "15.2 mi"
        assert lookup.duration == "22 mins"

    def test_request_parameters(self):
        session = _session(_matrix({"status": "ZERO_RESULTS"}))
        adapter = GoogleMapsDistanceAdapter(api_key="secret", timeout=5, session=session)

        adapter.lookup("1 Home Rd", "123 Main St")

        session.get.assert_called_once_with(
            DISTANCE_MATRIX_URL,
            params={
                "origins": "1 Home Rd",
                "destinations": "123 Main St",
                "units": "imperial",
                "key": "secret",
            },
            timeout=5,
        )

    @pytest.mark.parametrize("status", ["NOT_FOUND", "ZERO_RESULTS"])
    def test_no_route_is_not_an_error(self, status):
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=_session(_matrix({"status": status})))

        lookup = adapter.lookup("Home", "Nowhere")

        assert lookup.status == status
        assert lookup.one_way is None

    def test_request_denied_raises(self):
        payload = {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}
        adapter = GoogleMapsDistanceAdapter(api_key="bad", session=_session(payload))

        with pytest.raises(ExternalServiceError, match="REQUEST_DENIED"):
            adapter.lookup("Home", "Office")

    def test_transport_error_raises(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection reset")
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=session)

        with pytest.raises(ExternalServiceError, match="connection reset"):
            adapter.lookup("Home", "Office")

    def test_http_error_raises(self):
        session = MagicMock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=session)

        with pytest.raises(ExternalServiceError):
            adapter.lookup("Home", "Office")

    def test_invalid_json_raises(self):
        session = MagicMock()
        session.get.return_value.json.side_effect = ValueError("not json")
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=session)

        with pytest.raises(ExternalServiceError):
            adapter.lookup("Home", "Office")

    def test_empty_rows_raise(self):
        adapter = GoogleMapsDistanceAdapter(api_key="key", session=_session({"status": "OK", "rows": []}))

        with pytest.raises(ExternalServiceError):
            adapter.lookup("Home", "Office")

    def test_missing_api_key(self):
        session = MagicMock()
        adapter = GoogleMapsDistanceAdapter(api_key="", session=session)

        with pytest.raises(ExternalServiceError, match="GOOGLE_MAPS_API_KEY"):
            adapter.lookup("Home", "Office")
        session.get.assert_not_called()
