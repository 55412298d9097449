"""Shared fixtures and fakes for mileage tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from mileage.core.attendees import Attendee, Organizer, RawAttendee
from mileage.core.distance import DistanceLookup, DistanceResult
from mileage.core.events import ClassifiedEvent, EventPage, RawEvent
from mileage.core.report import DateRangeInput


class FakeEventSource:
    """EventSource serving canned pages and recording each request."""

    def __init__(self, pages: list[list[RawEvent]], log: list | None = None):
        self.pages = pages
        self.calls: list[tuple] = []
        self.log = log if log is not None else []

    def list_events(self, time_range, page_token=None, page_size=100) -> EventPage:
        index = int(page_token[1:]) if page_token else 0
        self.calls.append((time_range, page_token, page_size))
        self.log.append(("fetch", page_token))
        next_token = f"p{index + 1}" if index + 1 < len(self.pages) else None
        return EventPage(items=self.pages[index], next_page_token=next_token)


class FakeDistanceService:
    """DistanceService answering from a destination -> one-way text map.

    Unknown destinations are NOT_FOUND; destinations mapped to an exception
    raise it.
    """

    def __init__(self, distances: dict):
        self.distances = distances
        self.calls: list[tuple[str, str]] = []

    def lookup(self, origin: str, destination: str) -> DistanceLookup:
        self.calls.append((origin, destination))
        value = self.distances.get(destination)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return DistanceLookup(status="NOT_FOUND")
        return DistanceLookup(status="OK", one_way=value, duration="20 mins")


@pytest.fixture
def base_time():
    return datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def date_range():
    return DateRangeInput(
        start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        end=datetime(2025, 1, 31, 23, 59, 59, tzinfo=timezone.utc),
        max_one_way_miles=20,
    )


@pytest.fixture
def make_raw_event(base_time):
    """Factory for raw calendar events."""
    def _make(
        summary: str = "Meeting",
        location: str | None = None,
        day_offset: int = 0,
        attendees: list[RawAttendee] | None = None,
        organizer_email: str | None = "boss@acme.com",
    ) -> RawEvent:
        return RawEvent(
            summary=summary,
            start=base_time + timedelta(days=day_offset),
            location=location,
            attendees=attendees or [],
            organizer_email=organizer_email,
        )
    return _make


@pytest.fixture
def make_classified(base_time):
    """Factory for classified events."""
    def _make(
        summary: str = "Meeting",
        location: str | None = None,
        one_way: str | None = None,
        include: bool = False,
        error_reason: str | None = None,
        attendees: list[Attendee] | None = None,
        day_offset: int = 0,
    ) -> ClassifiedEvent:
        distance = None
        if one_way is not None:
            distance = DistanceResult.from_one_way(Decimal(one_way), "20 mins")
        return ClassifiedEvent(
            summary=summary,
            start=base_time + timedelta(days=day_offset),
            all_day=False,
            location=location,
            distance=distance,
            include_in_total=include,
            error_reason=error_reason,
            attendees=attendees or [],
            organizer=Organizer(email="boss@acme.com", company="acme"),
        )
    return _make
