"""Mileage CLI - driving deduction reports from Google Calendar."""

import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.distance import DistanceResolver
from .core.emit import format_miles
from .core.report import DateRangeInput, format_threshold
from .errors import MileageError
from .pipeline import generate_mileage_report, get_calendar, get_distance_service, get_timezone


def _parse_date(ctx, param, value):
    """Click callback: YYYY-MM-DD string to date."""
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter("Invalid date format. Use YYYY-MM-DD")


@click.group()
@click.version_option(package_name="mileage")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Mileage - driving deduction reports from your calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    else:
        logging.basicConfig(format="%(message)s", level=logging.INFO)


@main.command()
@click.option("--check", is_flag=True, help="Only verify the stored token")
def auth(check: bool):
    """Authenticate with Google Calendar."""
    config = load_config()
    adapter = get_calendar(config)

    if check:
        if adapter.verify():
            click.echo("✓ Found existing valid authorization")
        else:
            click.echo("✗ Stored token is missing or invalid - run 'mileage auth'", err=True)
            sys.exit(1)
        return

    if not config.google_client_secret_file:
        click.echo("GOOGLE_CLIENT_SECRET_FILE not set in mileage.conf", err=True)
        sys.exit(1)

    if adapter.authenticate():
        click.echo(f"✓ Token saved to {adapter.token_path}")
    else:
        click.echo("✗ Authentication failed", err=True)
        sys.exit(1)


@main.command()
@click.option("--start", "start_date", callback=_parse_date, prompt="Start date (YYYY-MM-DD)",
              help="First day of the range")
@click.option("--end", "end_date", callback=_parse_date, prompt="End date (YYYY-MM-DD)",
              help="Last day of the range")
@click.option("--max-miles", type=float, prompt="Maximum one-way distance to include (in miles)",
              help="Trips farther than this one way are excluded from the total")
def report(start_date: date, end_date: date, max_miles: float):
    """Build the mileage report for a date range."""
    config = load_config()

    try:
        tz = get_timezone(config)
        date_range = DateRangeInput.from_dates(start_date, end_date, max_miles, tz=tz)
        run = generate_mileage_report(config, date_range)
    except MileageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    summary = run.report.summary
    click.echo("\nSummary:")
    click.echo(f"Total included mileage: {format_miles(summary.total_miles)} miles")
    click.echo(
        f"Excluded mileage (over {format_threshold(summary.max_one_way_miles)} miles one-way): "
        f"{format_miles(summary.excluded_miles)} miles"
    )
    if summary.error_count > 0:
        click.echo(f"{summary.error_count} event(s) had errors calculating distance")

    click.echo(f"\nFiles written to {run.paths[0].parent}:")
    for path in run.paths:
        click.echo(f"- {path.name}")


@main.command()
@click.argument("destination")
@click.option("--origin", default=None, help="Start address (default: HOME_ADDRESS)")
def distance(destination: str, origin: str | None):
    """Look up the driving distance to one address."""
    config = load_config()
    origin = origin or config.home_address
    if not origin:
        click.echo("HOME_ADDRESS not set; pass --origin", err=True)
        sys.exit(1)

    resolver = DistanceResolver(get_distance_service(config))
    try:
        result = resolver.resolve(origin, destination)
    except MileageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result is None:
        click.echo("Distance unavailable for that address.")
        return

    click.echo(f"One-way:    {format_miles(result.one_way_miles)} mi")
    click.echo(f"Round trip: {format_miles(result.round_trip_miles)} mi")
    if result.duration:
        click.echo(f"Duration:   {result.duration}")


if __name__ == "__main__":
    main()
