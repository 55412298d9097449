"""Mileage report model and totals - pure, no I/O."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from decimal import Decimal

from mileage.errors import ValidationError

from .events import ClassifiedEvent


@dataclass(frozen=True)
class TimeRange:
    """A timezone-aware [start, end] interval."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValidationError("Date range bounds must be timezone-aware")
        if self.start > self.end:
            raise ValidationError(
                f"Start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )


@dataclass(frozen=True)
class DateRangeInput:
    """Validated run parameters: date range plus maximum one-way miles."""

    start: datetime
    end: datetime
    max_one_way_miles: float

    def __post_init__(self):
        if isinstance(self.max_one_way_miles, bool) or not isinstance(
            self.max_one_way_miles, (int, float)
        ):
            raise ValidationError("Maximum distance must be a number")
        if not math.isfinite(self.max_one_way_miles) or self.max_one_way_miles <= 0:
            raise ValidationError("Invalid distance. Please enter a positive number")
        # Raises for naive or inverted bounds
        TimeRange(self.start, self.end)

    @classmethod
    def from_dates(
        cls,
        start_date: date,
        end_date: date,
        max_one_way_miles: float,
        tz: tzinfo | None = None,
    ) -> "DateRangeInput":
        """Cover start_date 00:00 through end_date 23:59:59.999999 in tz (default: local)."""
        start = datetime.combine(start_date, time.min)
        end = datetime.combine(end_date, time.max)
        if tz is None:
            start, end = start.astimezone(), end.astimezone()
        else:
            start, end = start.replace(tzinfo=tz), end.replace(tzinfo=tz)
        return cls(start=start, end=end, max_one_way_miles=max_one_way_miles)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start, self.end)


@dataclass(frozen=True)
class ReportSummary:
    total_miles: Decimal
    excluded_miles: Decimal
    max_one_way_miles: float
    error_count: int
    date_range: TimeRange


@dataclass(frozen=True)
class MileageReport:
    """Aggregated result of one run."""

    summary: ReportSummary
    events: list[ClassifiedEvent]

    @property
    def drive_events(self) -> list[ClassifiedEvent]:
        """Events with a resolved distance, in report order."""
        return [e for e in self.events if e.has_distance]

    @property
    def max_attendees(self) -> int:
        return max((len(e.attendees) for e in self.events), default=0)


def build_report(events: list[ClassifiedEvent], date_range: DateRangeInput) -> MileageReport:
    """
    Total up classified events.

    Included and excluded miles sum round-trip miles; error_count counts
    events carrying an error reason.
    """
    total = Decimal("0")
    excluded = Decimal("0")
    errors = 0

    for event in events:
        if event.distance is not None:
            if event.include_in_total:
                total += event.distance.round_trip_miles
            else:
                excluded += event.distance.round_trip_miles
        elif event.error_reason:
            errors += 1

    summary = ReportSummary(
        total_miles=total,
        excluded_miles=excluded,
        max_one_way_miles=date_range.max_one_way_miles,
        error_count=errors,
        date_range=date_range.time_range,
    )
    return MileageReport(summary=summary, events=list(events))


def format_threshold(value: float) -> str:
    """Render a mile threshold without a trailing ".0"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def report_basename(date_range: DateRangeInput) -> str:
    """driving-deduction-<start>-<end>-<N>mi"""
    return (
        f"driving-deduction-{date_range.start.date().isoformat()}"
        f"-{date_range.end.date().isoformat()}"
        f"-{format_threshold(date_range.max_one_way_miles)}mi"
    )
