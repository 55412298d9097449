"""Ports - interfaces/protocols for external dependencies."""

from .event_source import EventSource
from .distance_service import DistanceService
from .report_store import ReportStore

__all__ = [
    "EventSource",
    "DistanceService",
    "ReportStore",
]
