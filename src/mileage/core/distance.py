"""Distance parsing and resolution."""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from mileage.errors import ExternalServiceError

if TYPE_CHECKING:
    from mileage.ports.distance_service import DistanceService

logger = logging.getLogger(__name__)

TENTH = Decimal("0.1")
FEET_PER_MILE = Decimal(5280)
MILES_PER_KM = Decimal("0.621371")

_DISTANCE_TEXT = re.compile(r"^\s*([\d,]*\.?\d+)\s*(mi|ft|km|m)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class DistanceLookup:
    """One origin/destination element of a distance-matrix response."""

    status: str
    one_way: str | None = None
    duration: str | None = None


@dataclass(frozen=True)
class DistanceResult:
    """Resolved distance between home and an event location."""

    one_way_miles: Decimal
    round_trip_miles: Decimal
    duration: str

    @classmethod
    def from_one_way(cls, one_way_miles: Decimal, duration: str = "") -> "DistanceResult":
        round_trip = (one_way_miles * 2).quantize(TENTH, rounding=ROUND_HALF_UP)
        return cls(one_way_miles=one_way_miles, round_trip_miles=round_trip, duration=duration)


def parse_miles(text: str | None) -> Decimal:
    """
    Convert distance text from the API to miles.

    Accepts "15.2 mi", "1,204 mi", "850 ft", "12.3 km" and "900 m".
    Raises ExternalServiceError for anything else.
    """
    match = _DISTANCE_TEXT.match(text or "")
    if not match:
        raise ExternalServiceError(f"Unrecognized distance text: {text!r}")

    try:
        value = Decimal(match.group(1).replace(",", ""))
    except InvalidOperation as e:
        raise ExternalServiceError(f"Unrecognized distance text: {text!r}") from e

    unit = match.group(2).lower()
    if unit == "mi":
        return value
    if unit == "ft":
        return (value / FEET_PER_MILE).quantize(TENTH, rounding=ROUND_HALF_UP)
    if unit == "km":
        return (value * MILES_PER_KM).quantize(TENTH, rounding=ROUND_HALF_UP)
    return (value / 1000 * MILES_PER_KM).quantize(TENTH, rounding=ROUND_HALF_UP)


class DistanceResolver:
    """Turns distance-matrix lookups into DistanceResults."""

    def __init__(self, service: "DistanceService"):
        self.service = service

    def resolve(self, origin: str, destination: str) -> DistanceResult | None:
        """
        Resolve the distance from origin to destination.

        Returns None when the service has no route for the pair. Transport
        and authorization failures raise ExternalServiceError.
        """
        lookup = self.service.lookup(origin, destination)
        if lookup.status != "OK":
            logger.debug(f"No distance for {destination!r}: {lookup.status}")
            return None
        return DistanceResult.from_one_way(parse_miles(lookup.one_way), lookup.duration or "")
