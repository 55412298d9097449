"""Report rendering - JSON snapshot plus mileage and meetings CSVs.

All functions are pure: the same report renders to the same text.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from .attendees import Attendee
from .distance import TENTH
from .events import ClassifiedEvent
from .report import MileageReport, format_threshold

MILEAGE_HEADER = "Time,Meeting Title,Location,Round Trip Miles,One-Way Miles,Included In Total"
VIRTUAL_LOCATION = "Virtual Meeting"

_PICTOGRAPHS = re.compile("[\U0001F000-\U0001FAFF\u2600-\u27BF\uFE0F\u200D]")
_CONTROL_CHARS = re.compile("[\x00-\x1F\x7F-\x9F]")


@dataclass(frozen=True)
class ReportArtifacts:
    """The three rendered outputs of a run."""

    json: str
    mileage_csv: str
    meetings_csv: str


def sanitize_csv_text(text: str | None) -> str:
    """Strip emoji and control characters, swap commas and double quotes, trim."""
    if not text:
        return ""
    text = _PICTOGRAPHS.sub("", text)
    text = _CONTROL_CHARS.sub("", text)
    return text.replace(",", ";").replace('"', "'").strip()


def _quoted(text: str | None) -> str:
    return f'"{sanitize_csv_text(text)}"'


def format_miles(value: Decimal) -> str:
    return str(value.quantize(TENTH, rounding=ROUND_HALF_UP))


def format_local_time(start: datetime, all_day: bool = False, tz: tzinfo | None = None) -> str:
    """
    Format an event start as "YYYY-MM-DD HH:MM" in tz (default: system local).

    All-day starts are calendar dates, so they are not shifted.
    """
    if all_day or start.tzinfo is None:
        return start.strftime("%Y-%m-%d %H:%M")
    return start.astimezone(tz).strftime("%Y-%m-%d %H:%M")


# ============== JSON ==============


def _attendee_dict(attendee: Attendee) -> dict:
    return {
        "fullName": attendee.full_name,
        "firstName": attendee.first_name,
        "lastName": attendee.last_name,
        "email": attendee.email,
        "company": attendee.company,
    }


def _event_dict(event: ClassifiedEvent) -> dict:
    distance = None
    if event.distance is not None:
        distance = {
            "roundTripMiles": float(event.distance.round_trip_miles),
            "oneWayMiles": float(event.distance.one_way_miles),
            "duration": event.distance.duration,
        }
    start = event.start.date().isoformat() if event.all_day else event.start.isoformat()
    return {
        "summary": event.summary,
        "location": event.location,
        "start": start,
        "allDay": event.all_day,
        "distance": distance,
        "includeInTotal": event.include_in_total,
        "errorReason": event.error_reason,
        "attendees": [_attendee_dict(a) for a in event.attendees],
        "organizer": {
            "email": event.organizer.email,
            "company": event.organizer.company,
        },
    }


def report_to_dict(report: MileageReport) -> dict:
    summary = report.summary
    return {
        "summary": {
            "totalMiles": float(summary.total_miles.quantize(TENTH)),
            "excludedMiles": float(summary.excluded_miles.quantize(TENTH)),
            "maxOneWayMiles": summary.max_one_way_miles,
            "errorCount": summary.error_count,
            "dateRange": {
                "start": summary.date_range.start.isoformat(),
                "end": summary.date_range.end.isoformat(),
            },
        },
        "events": [_event_dict(e) for e in report.events],
    }


def render_json(report: MileageReport, indent: int = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=False)


# ============== CSV ==============


def render_mileage_csv(report: MileageReport, tz: tzinfo | None = None) -> str:
    """Summary block followed by one row per event with a distance."""
    summary = report.summary
    drive_events = report.drive_events

    lines = [
        "MILEAGE SUMMARY",
        f"Total Included Mileage: {format_miles(summary.total_miles)} miles",
        f"Excluded Mileage: {format_miles(summary.excluded_miles)} miles",
        f"Maximum One-Way Distance: {format_threshold(summary.max_one_way_miles)} miles",
        f"Total Drive Events: {len(drive_events)}",
        "",
        "DETAILED MILEAGE LIST",
        "",
        MILEAGE_HEADER,
    ]

    for event in drive_events:
        lines.append(
            ",".join(
                [
                    format_local_time(event.start, event.all_day, tz),
                    _quoted(event.summary),
                    _quoted(event.location),
                    format_miles(event.distance.round_trip_miles),
                    format_miles(event.distance.one_way_miles),
                    "Yes" if event.include_in_total else "No",
                ]
            )
        )

    return "\n".join(lines)


def render_meetings_csv(report: MileageReport, tz: tzinfo | None = None) -> str:
    """Summary block followed by one row per event, attendee columns padded to the widest event."""
    width = report.max_attendees
    header = ["Time", "Meeting Title", "Location"]
    header.extend(f"Attendee {i}" for i in range(1, width + 1))

    lines = [
        "MEETING SUMMARY",
        f"Total Meetings: {len(report.events)}",
        "",
        "DETAILED MEETING LIST",
        "",
        ",".join(header),
    ]

    for event in report.events:
        attendee_cells = [_quoted(a.label) for a in event.attendees][:width]
        attendee_cells.extend([""] * (width - len(attendee_cells)))
        row = [
            format_local_time(event.start, event.all_day, tz),
            _quoted(event.summary),
            _quoted(event.location or VIRTUAL_LOCATION),
            *attendee_cells,
        ]
        lines.append(",".join(row))

    return "\n".join(lines)


def emit_report(report: MileageReport, *, tz: tzinfo | None = None, indent: int = 2) -> ReportArtifacts:
    """Render all three artifacts for a report."""
    return ReportArtifacts(
        json=render_json(report, indent=indent),
        mileage_csv=render_mileage_csv(report, tz=tz),
        meetings_csv=render_meetings_csv(report, tz=tz),
    )
