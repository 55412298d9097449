"""Calendar events and their mileage classification."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from mileage.errors import ExternalServiceError

from .attendees import (
    Attendee,
    Organizer,
    RawAttendee,
    normalize_attendees,
    normalize_organizer,
)
from .distance import DistanceResolver, DistanceResult

logger = logging.getLogger(__name__)

NO_LOCATION = "no location provided"
DISTANCE_UNAVAILABLE = "distance unavailable"
LOOKUP_FAILED = "lookup failed"


def parse_instant(value: str) -> datetime:
    """Parse an RFC 3339 timestamp from the calendar API."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class RawEvent:
    """A calendar event as listed by the calendar API."""

    summary: str
    start: datetime
    all_day: bool = False
    location: str | None = None
    attendees: list[RawAttendee] = field(default_factory=list)
    organizer_email: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "RawEvent":
        """
        Build from a Google Calendar event resource.

        All-day events carry a naive midnight start. Raises ValueError when
        the event has no start at all.
        """
        start_raw = data.get("start") or {}
        if start_raw.get("dateTime"):
            start = parse_instant(start_raw["dateTime"])
            all_day = False
        elif start_raw.get("date"):
            start = datetime.combine(date.fromisoformat(start_raw["date"]), datetime.min.time())
            all_day = True
        else:
            raise ValueError(f"Event {data.get('id', '?')} has no start")

        return cls(
            summary=data.get("summary") or "",
            start=start,
            all_day=all_day,
            location=data.get("location") or None,
            attendees=[RawAttendee.from_api(a) for a in data.get("attendees") or []],
            organizer_email=(data.get("organizer") or {}).get("email"),
        )


@dataclass(frozen=True)
class EventPage:
    """One page of the event listing."""

    items: list[RawEvent]
    next_page_token: str | None = None


@dataclass(frozen=True)
class ClassifiedEvent:
    """
    An event with its mileage outcome.

    Exactly one of distance and error_reason is set. include_in_total is
    only ever True when distance is set and within the threshold.
    """

    summary: str
    start: datetime
    all_day: bool
    location: str | None
    distance: DistanceResult | None
    include_in_total: bool
    error_reason: str | None
    attendees: list[Attendee]
    organizer: Organizer

    @property
    def has_distance(self) -> bool:
        return self.distance is not None


def classify_event(
    raw: RawEvent,
    threshold: float,
    resolver: DistanceResolver,
    origin: str,
    *,
    record_lookup_failures: bool = False,
) -> ClassifiedEvent | None:
    """
    Classify one event against the one-way distance threshold.

    Returns None when the distance lookup fails outright; the failure is
    logged and the event is left out of the report. With
    record_lookup_failures the event is kept with a "lookup failed" reason.
    """
    attendees = normalize_attendees(raw.attendees)
    organizer = normalize_organizer(raw.organizer_email)

    def _classified(
        distance: DistanceResult | None = None,
        error_reason: str | None = None,
        include: bool = False,
    ) -> ClassifiedEvent:
        return ClassifiedEvent(
            summary=raw.summary,
            start=raw.start,
            all_day=raw.all_day,
            location=raw.location,
            distance=distance,
            include_in_total=include,
            error_reason=error_reason,
            attendees=attendees,
            organizer=organizer,
        )

    if not raw.location:
        logger.info(f'Skipping event (no location): "{raw.summary}" on {raw.start.isoformat()}')
        return _classified(error_reason=NO_LOCATION)

    try:
        distance = resolver.resolve(origin, raw.location)
    except ExternalServiceError as e:
        logger.warning(f'Error processing "{raw.summary}": {e}')
        if record_lookup_failures:
            return _classified(error_reason=LOOKUP_FAILED)
        return None

    if distance is None:
        return _classified(error_reason=DISTANCE_UNAVAILABLE)

    include = distance.one_way_miles <= Decimal(str(threshold))
    return _classified(distance=distance, include=include)
