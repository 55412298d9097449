"""Event source interface."""

from typing import Protocol

from mileage.core.events import EventPage
from mileage.core.report import TimeRange


class EventSource(Protocol):
    """Interface for listing calendar events one page at a time.

    Pages are ordered by start time and contain expanded single instances.
    Implementations raise RateLimitError when throttled.
    """

    def list_events(
        self,
        time_range: TimeRange,
        page_token: str | None = None,
        page_size: int = 100,
    ) -> EventPage:
        """Fetch one page of events."""
        ...
