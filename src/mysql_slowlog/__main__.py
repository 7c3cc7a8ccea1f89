"""CLI entry point: python -m mysql_slowlog <command> [args]."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from mysql_slowlog.config import load_config, validate_config
from mysql_slowlog.data.digest import summarize
from mysql_slowlog.data.event_store import EventStore
from mysql_slowlog.importer import SlowLogImporter, open_log_file
from mysql_slowlog.parsers import ParserRegistry

logger = logging.getLogger("mysql_slowlog")


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a slow log file and print one JSON event per line."""
    path = Path(args.logfile)
    if not path.is_file():
        print(f"Error: log file not found: {path}")
        return 1

    parser = ParserRegistry.get(args.parser)
    count = 0
    with open_log_file(path) as f:
        for event in parser.parse_lines(line.rstrip("\n\r") for line in f):
            print(json.dumps(event))
            count += 1
    logger.info("Parsed %d events from %s", count, path)
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Run the import described by a config file."""
    path = Path(args.config)
    if not path.exists():
        print(f"Error: config file not found: {path}")
        return 1

    errors = validate_config(path)
    if errors:
        for err in errors:
            print(f"Error: {err}")
        return 1

    config = load_config(path)
    importer = SlowLogImporter.from_config(config)
    try:
        total = importer.run(config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Imported {total} events into {config.db_path}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate an import config file."""
    path = Path(args.config)
    if not path.exists():
        print(f"Error: config file not found: {path}")
        return 1

    errors = validate_config(path)
    if errors:
        print(f"Validation FAILED for {path}:")
        for err in errors:
            print(f"  - {err}")
        return 1

    print(f"Valid: {path}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Print the top statements of an event database by total query time."""
    path = Path(args.db)
    if not path.exists():
        print(f"Error: database not found: {path}")
        return 1

    with EventStore(path, mode="r") as store:
        digests = summarize(store.iter_log_events(), top=args.top)
        time_range = store.get_time_range()

    if time_range:
        print(f"Time range: {time_range[0]} .. {time_range[1]}")
    print(f"{'count':>7} {'total_s':>10} {'mean_s':>9} {'p95_s':>9} {'max_s':>9} {'rows_exam':>10}  statement")
    for d in digests:
        print(
            f"{d.count:7d} {d.total_time:10.3f} {d.mean_time:9.4f} {d.p95_time:9.4f} "
            f"{d.max_time:9.4f} {d.rows_examined:10d}  {d.fingerprint[:80]}"
        )
    return 0


def cmd_list_parsers(args: argparse.Namespace) -> int:
    """List available parsers."""
    print("Available parsers:")
    for name in ParserRegistry.available():
        parser = ParserRegistry.get(name)
        doc = parser.__class__.__doc__ or ""
        first_line = doc.strip().split("\n")[0] if doc else "(no description)"
        print(f"  {name:20s} {first_line}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mysql-slowlog",
        description="Parse MySQL slow query logs into structured events",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # parse
    parse_parser = subparsers.add_parser("parse", help="Print events of a log file as JSON lines")
    parse_parser.add_argument("logfile", help="Path to slow log (.gz supported)")
    parse_parser.add_argument(
        "--parser", default="mysql_slow", choices=ParserRegistry.available(), help="Parser name",
    )
    parse_parser.set_defaults(func=cmd_parse)

    # import
    import_parser = subparsers.add_parser("import", help="Import logs into an event database")
    import_parser.add_argument("config", help="Path to import config YAML")
    import_parser.set_defaults(func=cmd_import)

    # validate
    val_parser = subparsers.add_parser("validate", help="Validate import config YAML")
    val_parser.add_argument("config", help="Path to import config YAML")
    val_parser.set_defaults(func=cmd_validate)

    # summary
    sum_parser = subparsers.add_parser("summary", help="Summarize statements in an event database")
    sum_parser.add_argument("db", help="Path to event database")
    sum_parser.add_argument("--top", type=int, default=20, help="Number of statements to show")
    sum_parser.set_defaults(func=cmd_summary)

    # list-parsers
    list_parser = subparsers.add_parser("list-parsers", help="List parsers")
    list_parser.set_defaults(func=cmd_list_parsers)

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
