"""Mileage aggregation over a paginated event listing."""

import logging
import time
from enum import Enum, auto
from typing import Callable

from .core.distance import DistanceResolver
from .core.events import ClassifiedEvent, EventPage, classify_event
from .core.report import DateRangeInput, MileageReport, build_report
from .ports.event_source import EventSource

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_DELAY = 0.1


class PageState(Enum):
    AWAITING_PAGE = auto()
    PROCESSING_PAGE = auto()
    DONE = auto()


def aggregate_events(
    source: EventSource,
    date_range: DateRangeInput,
    resolver: DistanceResolver,
    origin: str,
    *,
    page_size: int = MAX_PAGE_SIZE,
    page_delay: float = DEFAULT_PAGE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    record_lookup_failures: bool = False,
) -> MileageReport:
    """
    Page through the calendar, classify every event, and total the miles.

    One page request is in flight at a time and successive requests are
    spaced by page_delay seconds. A RateLimitError from the source aborts
    the whole run.

    Args:
        source: Authenticated event listing
        date_range: Validated range and one-way threshold
        resolver: Distance resolver for event locations
        origin: Home address every trip starts from
        page_size: Events per page (1-100)
        page_delay: Seconds to wait before each page after the first
        sleep: Delay function, injectable for tests
        record_lookup_failures: Keep events whose lookup failed instead of dropping them

    Returns:
        The finished MileageReport
    """
    page_size = max(1, min(page_size, MAX_PAGE_SIZE))
    time_range = date_range.time_range
    threshold = date_range.max_one_way_miles

    state = PageState.AWAITING_PAGE
    page: EventPage | None = None
    page_token: str | None = None
    pages_fetched = 0
    total_events = 0
    classified: list[ClassifiedEvent] = []

    while state is not PageState.DONE:
        if state is PageState.AWAITING_PAGE:
            if pages_fetched:
                sleep(page_delay)
            page = source.list_events(time_range, page_token=page_token, page_size=page_size)
            pages_fetched += 1
            total_events += len(page.items)
            logger.info(f"Processing events... ({total_events} so far)")
            state = PageState.PROCESSING_PAGE

        elif state is PageState.PROCESSING_PAGE:
            for raw in page.items:
                event = classify_event(
                    raw,
                    threshold,
                    resolver,
                    origin,
                    record_lookup_failures=record_lookup_failures,
                )
                if event is not None:
                    classified.append(event)

            page_token = page.next_page_token
            state = PageState.AWAITING_PAGE if page_token else PageState.DONE

    logger.info(f"Processed {total_events} total events across {pages_fetched} page(s)")
    dropped = total_events - len(classified)
    if dropped:
        logger.warning(f"{dropped} event(s) dropped after distance lookup failures")

    return build_report(classified, date_range)
