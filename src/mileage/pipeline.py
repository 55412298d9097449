"""Single-run pipeline shared by the CLI.

generate_mileage_report: validates settings, aggregates the calendar,
renders all artifacts in memory, then writes them in one pass.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .adapters.file_reports import FileReportStore
from .adapters.google_calendar import GoogleCalendarAdapter
from .adapters.google_maps import GoogleMapsDistanceAdapter
from .aggregator import aggregate_events
from .config import Config
from .core.distance import DistanceResolver
from .core.emit import emit_report
from .core.report import DateRangeInput, MileageReport, report_basename
from .errors import ValidationError
from .ports import DistanceService, EventSource, ReportStore

logger = logging.getLogger(__name__)


@dataclass
class ReportRun:
    """Outcome of a completed run."""

    report: MileageReport
    paths: list[Path]


def get_calendar(config: Config) -> GoogleCalendarAdapter:
    return GoogleCalendarAdapter(
        config_folder=config.google_config_folder,
        calendar_id=config.calendar_id,
        client_secret_file=config.google_client_secret_file,
    )


def get_distance_service(config: Config) -> GoogleMapsDistanceAdapter:
    return GoogleMapsDistanceAdapter(
        api_key=config.google_maps_api_key,
        timeout=config.request_timeout,
    )


def get_timezone(config: Config) -> ZoneInfo | None:
    """Configured display timezone, or None for the system local zone."""
    if not config.timezone:
        return None
    try:
        return ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {config.timezone}") from e


def generate_mileage_report(
    config: Config,
    date_range: DateRangeInput,
    *,
    calendar: EventSource | None = None,
    distance_service: DistanceService | None = None,
    store: ReportStore | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ReportRun:
    """Aggregate the calendar for date_range and write the three report files."""
    if not config.home_address:
        raise ValidationError("HOME_ADDRESS is not set")

    tz = get_timezone(config)
    calendar = calendar or get_calendar(config)
    resolver = DistanceResolver(distance_service or get_distance_service(config))

    report = aggregate_events(
        calendar,
        date_range,
        resolver,
        config.home_address,
        page_size=config.page_size,
        page_delay=config.page_delay,
        sleep=sleep,
        record_lookup_failures=config.record_lookup_failures,
    )

    artifacts = emit_report(report, tz=tz)
    store = store or FileReportStore(config.output_dir)
    paths = store.write(report_basename(date_range), artifacts)
    logger.debug(f"Wrote {', '.join(str(p) for p in paths)}")

    return ReportRun(report=report, paths=paths)
