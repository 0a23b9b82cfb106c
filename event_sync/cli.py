"""Command line entrypoint.

Subcommands:
  * list / list-calendars: stream events or calendars to stdout
  * sync: one-way copy of missing events between two calendars
  * import-event: create one event from an external iCalUID
  * get-token: interactive OAuth flow producing the --token file
"""
from __future__ import annotations
import argparse
import logging
from itertools import islice
from typing import List, Optional

from .adapters.google_calendar_provider import GoogleCalendarProvider
from .config import Settings, get_settings
from .domain.timestamps import parse_timestamp
from .errors import EventSyncError
from .formatting import STYLES, render, render_lines
from .log_setup import configure_logging
from .services.auth_service import GOOGLE_SCOPES, load_credentials, obtain_token
from .services.metrics import write_metrics
from .usecases.import_event import ImportEventUseCase
from .usecases.list_events import list_calendars, list_events
from .usecases.sync_events import SyncEventsUseCase

logger = logging.getLogger("event_sync")


def _timestamp(value: str):
    try:
        return parse_timestamp(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timestamp: {value!r}")


def _count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must not be negative: {count}")
    return count


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--style", choices=STYLES, default="json", help="Output style")
    parser.add_argument("--no-index", action="store_true", help="Don't prefix items with their index")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="event-sync", description="Sync events between calendars")
    parser.add_argument("-t", "--token", default=settings.token_file, help="Token file (authorized user JSON)")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-format", choices=("text", "json"), default=settings.log_format)
    parser.add_argument("--metrics-file", default=settings.metrics_file, help="Write Prometheus metrics here on exit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List events of a calendar")
    list_parser.add_argument("-c", "--calendar", default="primary", help="Calendar ID")
    list_parser.add_argument("-n", "--num", type=_count, default=50, help="Number of items to list")
    _add_output_args(list_parser)

    calendars_parser = subparsers.add_parser("list-calendars", help="List calendars of the account")
    _add_output_args(calendars_parser)

    sync_parser = subparsers.add_parser("sync", help="Copy events missing from --dst out of --src")
    sync_parser.add_argument("--src", required=True, help="Source calendar ID")
    sync_parser.add_argument("--dst", required=True, help="Destination calendar ID")
    sync_parser.add_argument("-u", "--updated-after", type=_timestamp, help="Only events updated after this time")
    sync_parser.add_argument("--after", type=_timestamp, help="Only events starting after this time")
    sync_parser.add_argument("--colour-id", help="Colour ID of created events")
    sync_parser.add_argument("--dry-run", action="store_true", help="Log decisions without creating events")

    import_parser = subparsers.add_parser("import-event", help="Import one event by iCalUID")
    import_parser.add_argument("-c", "--calendar", default="primary", help="Calendar ID")
    import_parser.add_argument("--ical-uid", required=True)
    import_parser.add_argument("--start", required=True, type=_timestamp)
    import_parser.add_argument("--end", required=True, type=_timestamp)

    token_parser = subparsers.add_parser("get-token", help="Obtain a token file through the browser")
    token_parser.add_argument("-c", "--client-secret", required=True, help="OAuth client secret JSON")
    token_parser.add_argument("-o", "--output", required=True, help="Where to write the token file")
    token_parser.add_argument("-s", "--scope", dest="scopes", action="append", help="OAuth scope (repeatable)")
    token_parser.add_argument("--port", type=int, default=0, help="Local redirect port (0 picks a free one)")
    token_parser.add_argument("--no-browser", action="store_true", help="Print the URL instead of opening it")
    return parser


def _run(args: argparse.Namespace, settings: Settings) -> None:
    if args.command == "get-token":
        obtain_token(args.client_secret, args.output, args.scopes or GOOGLE_SCOPES, args.port, not args.no_browser)
        return

    credentials = load_credentials(args.token)
    provider = GoogleCalendarProvider.from_credentials(credentials, timeout=settings.http_timeout)

    if args.command == "list":
        events = islice(list_events(provider, args.calendar), args.num)
        for line in render_lines(events, args.style, with_index=not args.no_index):
            print(line, flush=True)
    elif args.command == "list-calendars":
        for line in render_lines(list_calendars(provider), args.style, with_index=not args.no_index):
            print(line, flush=True)
    elif args.command == "sync":
        SyncEventsUseCase(provider).execute(
            args.src,
            args.dst,
            updated_after=args.updated_after,
            starting_after=args.after,
            colour_id=args.colour_id,
            dry_run=args.dry_run,
        )
    elif args.command == "import-event":
        imported = ImportEventUseCase(provider).execute(args.calendar, args.ical_uid, args.start, args.end)
        print(render(imported))


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValueError as e:
        build_parser(Settings()).error(str(e))
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    if args.command != "get-token" and not args.token:
        parser.error("--token is required (or set EVENT_SYNC_TOKEN_FILE)")
    configure_logging(args.log_level, args.log_format)

    try:
        _run(args, settings)
    except EventSyncError as e:
        logger.error("%s failed [%s]: %s", args.command, e.code, e.message)
        return e.exit_code
    finally:
        if args.metrics_file:
            write_metrics(args.metrics_file)
    return 0
