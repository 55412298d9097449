"""Functional core - pure mileage logic with no I/O."""

from .attendees import Attendee, Organizer, RawAttendee, company_from_email, normalize_attendee
from .distance import DistanceLookup, DistanceResolver, DistanceResult, parse_miles
from .events import ClassifiedEvent, EventPage, RawEvent, classify_event
from .report import DateRangeInput, MileageReport, TimeRange, build_report, report_basename
from .emit import ReportArtifacts, emit_report, sanitize_csv_text

__all__ = [
    # Attendees
    "Attendee",
    "Organizer",
    "RawAttendee",
    "company_from_email",
    "normalize_attendee",
    # Distance
    "DistanceLookup",
    "DistanceResolver",
    "DistanceResult",
    "parse_miles",
    # Events
    "ClassifiedEvent",
    "EventPage",
    "RawEvent",
    "classify_event",
    # Report
    "DateRangeInput",
    "MileageReport",
    "TimeRange",
    "build_report",
    "report_basename",
    # Rendering
    "ReportArtifacts",
    "emit_report",
    "sanitize_csv_text",
]
