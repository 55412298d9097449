"""Adapters - I/O implementations of ports."""

from .google_calendar import GoogleCalendarAdapter
from .google_maps import GoogleMapsDistanceAdapter
from .file_reports import FileReportStore

__all__ = [
    "GoogleCalendarAdapter",
    "GoogleMapsDistanceAdapter",
    "FileReportStore",
]
