"""
Command-line interface for the record board.

Usage:
    python -m syncboard.cli.board_cli sync [--url <url>] [--limit <n>] [--seed <n>]
    python -m syncboard.cli.board_cli list [--search <term>] [--category <name>] [options]
    python -m syncboard.cli.board_cli show <record_id>
    python -m syncboard.cli.board_cli create --title <t> --body <b> [--category <c>] [--date <d>]
    python -m syncboard.cli.board_cli update <record_id> [--title <t>] [--body <b>] [options]
    python -m syncboard.cli.board_cli delete <record_id> [--yes]
    python -m syncboard.cli.board_cli stats [--start <date> --end <date>] [--json]
    python -m syncboard.cli.board_cli status
"""

import argparse
import asyncio
import datetime as dt
import json
import sys
from typing import Sequence

from syncboard.config import Settings, load_settings
from syncboard.core.aggregation import dashboard
from syncboard.core.errors import SyncboardError, ValidationError
from syncboard.core.models import (
    CATEGORIES,
    AggregationWindow,
    DateRange,
    QuerySpec,
    Record,
    SortSpec,
)
from syncboard.core.query import filter_and_sort, toggle_sort
from syncboard.core.records import RecordService, blank_fields
from syncboard.observability.logger import get_logger, setup_logger
from syncboard.observability.metrics import start_metrics_server
from syncboard.store import JsonFileBackend, RecordStore
from syncboard.sync import HttpRemoteSource, RandomEnrichment, SyncService
from syncboard.utils.dates import parse_calendar_date, utc_now
from syncboard.utils.validation import InputValidationError, validate_limit, validate_record_id

logger = get_logger(__name__)

SORT_KEYS = ("title", "body", "category", "date", "created_at", "updated_at", "remote_id")
NO_DATA = "-"


def _date_arg(value: str) -> dt.date:
    try:
        return parse_calendar_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}': {e}")


def _record_id_arg(value: str) -> str:
    try:
        return validate_record_id(value)
    except InputValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def _limit_arg(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"limit must be an integer, got '{value}'")
    try:
        return validate_limit(limit)
    except InputValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def format_timestamp(ts: dt.datetime | None) -> str:
    """Format timestamp for display."""
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S") if ts else "never"


def open_store(settings: Settings) -> RecordStore:
    store = RecordStore(JsonFileBackend(settings.data_dir))
    store.load()
    return store


def print_records(records: Sequence[Record]) -> None:
    if not records:
        print("\nNo records. Run 'sync' to fetch records from the remote source.\n")
        return

    print(f"\n{'ID':<34} {'TITLE':<40} {'CATEGORY':<14} {'DATE':<10}  UPDATED")
    print("-" * 120)
    for record in records:
        title = record.title if len(record.title) <= 40 else record.title[:37] + "..."
        print(
            f"{record.id:<34} {title:<40} {record.category:<14} "
            f"{record.date.isoformat():<10}  {format_timestamp(record.updated_at)}"
        )
    print(f"\n{len(records)} record(s)\n")


def sync_command(args, settings: Settings) -> int:
    """
    Fetch remote items and merge them into the local collection.

    Args:
        args: Command line arguments
        settings: Resolved settings
    """
    store = open_store(settings)
    source = HttpRemoteSource(
        url=args.url or settings.remote_url,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )
    seed = args.seed if args.seed is not None else settings.enrichment_seed
    service = SyncService(
        store,
        source,
        enrichment=RandomEnrichment(seed=seed, window_days=settings.window_days),
        limit=args.limit or settings.fetch_limit,
    )

    result = asyncio.run(service.trigger_sync())

    print(f"\n{'=' * 60}")
    print("SYNC COMPLETE")
    print(f"{'=' * 60}")
    print(f"  Fetched:   {result.fetched}")
    print(f"  Inserted:  {result.report.inserted}")
    print(f"  Updated:   {result.report.updated}")
    print(f"  Kept:      {result.report.retained} user record(s)")
    print(f"  Dropped:   {result.report.dropped}")
    print(f"  Total:     {result.total}")
    print(f"  Synced at: {format_timestamp(result.synced_at)}")
    print(f"{'=' * 60}\n")
    return 0


def list_command(args, settings: Settings) -> int:
    """Print the filtered, sorted table."""
    store = open_store(settings)

    sort = SortSpec()
    if args.sort:
        sort = toggle_sort(sort, args.sort)
    if args.direction:
        sort = SortSpec(key=sort.key, direction=args.direction)

    spec = QuerySpec(
        search=args.search or "",
        category=args.category,
        date_range=DateRange(start=args.start, end=args.end),
        sort=sort,
    )
    records = filter_and_sort(store.snapshot, spec)

    if args.json:
        print(json.dumps([record.to_payload() for record in records], indent=2, ensure_ascii=False))
    else:
        print_records(records)
    return 0


def show_command(args, settings: Settings) -> int:
    store = open_store(settings)
    record = store.get(args.record_id)
    print(json.dumps(record.to_payload(), indent=2, ensure_ascii=False))
    return 0


def create_command(args, settings: Settings) -> int:
    """Create a user record; unspecified category and date take the form defaults."""
    store = open_store(settings)
    fields = blank_fields(utc_now().date())
    fields.update({
        key: value
        for key, value in (
            ("title", args.title),
            ("body", args.body),
            ("category", args.category),
            ("date", args.date),
        )
        if value is not None
    })

    record = RecordService(store).create_record(fields)
    print(f"Created record {record.id}")
    return 0


def update_command(args, settings: Settings) -> int:
    """Edit a record; unspecified fields keep their current value."""
    store = open_store(settings)
    existing = store.get(args.record_id)
    fields = {
        "title": args.title if args.title is not None else existing.title,
        "body": args.body if args.body is not None else existing.body,
        "category": args.category if args.category is not None else existing.category,
        "date": args.date if args.date is not None else existing.date,
    }

    record = RecordService(store).update_record(args.record_id, fields)
    print(f"Updated record {record.id}")
    return 0


def delete_command(args, settings: Settings) -> int:
    store = open_store(settings)

    def confirm(record: Record) -> bool:
        if args.yes:
            return True
        answer = input(f"Delete '{record.title}' ({record.id})? [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    if RecordService(store).delete_record(args.record_id, confirm):
        print(f"Deleted record {args.record_id}")
    else:
        print("Cancelled")
    return 0


def stats_command(args, settings: Settings) -> int:
    """Print dashboard aggregates for the trailing window or an explicit range."""
    store = open_store(settings)
    window = AggregationWindow(start=args.start, end=args.end, days=settings.window_days)
    view = dashboard(store.snapshot, window, utc_now())

    if args.json:
        print(view.model_dump_json(indent=2))
        return 0

    summary = view.summary
    print(f"\n{'=' * 60}")
    print(f"DASHBOARD  {view.window_start.isoformat()} .. {view.window_end.isoformat()}")
    print(f"{'=' * 60}\n")
    print(f"  Total records:  {summary.total}")
    print(f"  Top category:   {summary.top_category or NO_DATA}")
    print(f"  Latest date:    {summary.latest_date.isoformat() if summary.latest_date else NO_DATA}\n")

    print("By Category:")
    for entry in view.categories:
        print(f"  {entry.category:<30} {entry.count:>8}")

    print("\nBy Date:")
    for entry in view.dates:
        print(f"  {entry.date.isoformat():<30} {entry.count:>8}")
    print(f"\n{'=' * 60}\n")
    return 0


def status_command(args, settings: Settings) -> int:
    store = open_store(settings)
    print(f"Records:   {len(store.snapshot)}")
    print(f"Last sync: {format_timestamp(store.last_sync_time())}")
    return 0


COMMANDS = {
    "sync": sync_command,
    "list": list_command,
    "show": show_command,
    "create": create_command,
    "update": update_command,
    "delete": delete_command,
    "stats": stats_command,
    "status": status_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Locally persisted record board with remote sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pull the latest remote items
  python -m syncboard.cli.board_cli sync

  # Search titles and bodies, newest first
  python -m syncboard.cli.board_cli list --search hi --sort date --desc

  # Dashboard numbers for January
  python -m syncboard.cli.board_cli stats --start 2024-01-01 --end 2024-01-31
        """
    )
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--env-file", help=".env file with SYNCBOARD_* variables")
    parser.add_argument("--data-dir", help="Directory holding the saved records")
    parser.add_argument("--log-level", help="Log level (default: INFO)")
    parser.add_argument("--log-format", choices=["json", "text"], help="Log format (default: json)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser("sync", help="Fetch and merge remote items")
    sync_parser.add_argument("--url", help="Remote source URL")
    sync_parser.add_argument("--limit", type=_limit_arg, help="Maximum remote items to keep")
    sync_parser.add_argument("--seed", type=int, help="Seed for category/date enrichment")

    list_parser = subparsers.add_parser("list", help="List records")
    list_parser.add_argument("--search", help="Case-insensitive text in title or body")
    list_parser.add_argument("--category", choices=CATEGORIES, help="Only this category")
    list_parser.add_argument("--start", type=_date_arg, help="First date (needs --end)")
    list_parser.add_argument("--end", type=_date_arg, help="Last date (needs --start)")
    list_parser.add_argument("--sort", choices=SORT_KEYS, help="Sort key (default: updated_at, newest first)")
    direction = list_parser.add_mutually_exclusive_group()
    direction.add_argument("--asc", dest="direction", action="store_const", const="asc")
    direction.add_argument("--desc", dest="direction", action="store_const", const="desc")
    list_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    show_parser = subparsers.add_parser("show", help="Show one record as JSON")
    show_parser.add_argument("record_id", type=_record_id_arg)

    create_parser = subparsers.add_parser("create", help="Create a record")
    create_parser.add_argument("--title", required=True)
    create_parser.add_argument("--body", required=True)
    create_parser.add_argument("--category", help=f"One of: {', '.join(CATEGORIES)}")
    create_parser.add_argument("--date", help="YYYY-MM-DD (default: today)")

    update_parser = subparsers.add_parser("update", help="Edit a record")
    update_parser.add_argument("record_id", type=_record_id_arg)
    update_parser.add_argument("--title")
    update_parser.add_argument("--body")
    update_parser.add_argument("--category")
    update_parser.add_argument("--date")

    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("record_id", type=_record_id_arg)
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    stats_parser = subparsers.add_parser("stats", help="Dashboard aggregates")
    stats_parser.add_argument("--start", type=_date_arg, help="Window start (needs --end)")
    stats_parser.add_argument("--end", type=_date_arg, help="Window end (needs --start)")
    stats_parser.add_argument("--json", action="store_true", help="Print JSON")

    subparsers.add_parser("status", help="Record count and last sync time")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = load_settings(
            config_path=args.config,
            env_file=args.env_file,
            data_dir=args.data_dir,
            log_level=args.log_level,
            log_format=args.log_format,
        )
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logger("syncboard", level=settings.log_level, format_type=settings.log_format)
    if settings.metrics_port:
        start_metrics_server(settings.metrics_port)

    try:
        return COMMANDS[args.command](args, settings)
    except ValidationError as e:
        print("Error: record not saved", file=sys.stderr)
        for failure in e.failures:
            print(f"  {failure['field_name']}: {failure['message']}", file=sys.stderr)
        return 1
    except SyncboardError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
