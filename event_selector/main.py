"""Command-line entry point.

Thin wrapper that loads configuration, builds criteria from arguments and
prints the events selected for a viewer.

Usage:
    event-selector --viewer u1 --tag hiking --max-cost 20
    event-selector --config config/config.yaml --viewer u1 --preset cheap-hikes
"""

import argparse
import logging
import os
import sys

from event_selector.core.config import Config
from event_selector.core.event import Event
from event_selector.core.filters import ByAddress, ByLocation, ByTag, build_criteria
from event_selector.orchestrator import Orchestrator
from event_selector.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config(config_path: str | None) -> Config:
    """Load configuration from file or environment."""
    if config_path:
        return load_config(config_path)
    elif os.environ.get("CONFIG_PATH"):
        return load_config()
    else:
        return load_config_from_env()


def _parse_near(value: str) -> ByLocation:
    """Parse LAT,LON,RADIUS_KM into a location criterion."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("expected LAT,LON,RADIUS_KM")
    try:
        lat, lon, radius = (float(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError("expected numbers in LAT,LON,RADIUS_KM")
    return ByLocation(latitude=lat, longitude=lon, radius_km=radius)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="event-selector",
        description="Select the events a viewer may see that match filters",
    )
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--viewer", required=True, help="Viewer user ID")
    parser.add_argument("--tag", action="append", default=[], help="Required tag (repeatable)")
    parser.add_argument("--address", help="Address substring")
    parser.add_argument("--near", type=_parse_near, help="LAT,LON,RADIUS_KM")
    parser.add_argument("--from", dest="start_date", help="Start date YYYY-MM-DD")
    parser.add_argument("--to", dest="end_date", help="End date YYYY-MM-DD")
    parser.add_argument("--max-cost", type=float, help="Maximum estimated cost")
    parser.add_argument("--group-size", type=int, help="Maximum attendee cap")
    parser.add_argument(
        "--mine",
        action="store_true",
        help="Only events the viewer hosts or attends",
    )
    parser.add_argument("--preset", help="Named filter preset from config")
    parser.add_argument("--search", help="Free-text search")
    parser.add_argument(
        "--ignore-unknown",
        action="store_true",
        help="Let unrecognized criteria pass instead of matching nothing",
    )
    return parser


def format_event_line(event: Event) -> str:
    """Format a one-line summary of an event."""
    name = event.name or event.id
    return (
        f"{event.id}\t{event.date} {event.start_time}\t{name}"
        f"\t{event.address}\t${event.estimated_cost:.2f}"
    )


def main(argv: list[str] | None = None) -> int:
    """Run one selection and print the result.

    Returns:
        Process exit code: 0 on success, 1 on errors
    """
    args = build_parser().parse_args(argv)

    try:
        config = _get_config(args.config)
    except Exception as e:
        logger.exception("Failed to load configuration: %s", e)
        return 1

    if args.ignore_unknown:
        config.ignore_unknown_criteria = True

    criteria = build_criteria(
        start_date=args.start_date,
        end_date=args.end_date,
        group_size=args.group_size,
        max_cost=args.max_cost,
        own_events_for=args.viewer if args.mine else None,
    )
    criteria.extend(ByTag(tag) for tag in args.tag)
    if args.address:
        criteria.append(ByAddress(args.address))
    if args.near is not None:
        criteria.append(args.near)

    try:
        orchestrator = Orchestrator(config)
    except Exception as e:
        logger.exception("Failed to open record store: %s", e)
        return 1

    result = orchestrator.select(
        args.viewer,
        criteria=criteria,
        search=args.search,
        preset=args.preset,
    )

    for event in result.events:
        print(format_event_line(event))

    if not result.success:
        for error in result.errors:
            print(f"error: {error}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
