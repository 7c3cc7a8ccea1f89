"""Import slow log files (plain, gzipped, or a directory of them) into EventStore."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import IO

from mysql_slowlog.config import DEFAULT_BATCH_SIZE, DEFAULT_PARSER, ImportConfig
from mysql_slowlog.data.event_store import EventStore
from mysql_slowlog.parsers import LogEvent, ParserRegistry

logger = logging.getLogger(__name__)

# Files in a directory are imported when their name contains this.
SLOW_LOG_MARKER = "slow"


def _is_gz(path: Path) -> bool:
    return path.suffix == ".gz"


def open_log_file(path: Path) -> IO[str]:
    """Open a log file, handling .gz compression transparently."""
    if _is_gz(path):
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, "r", encoding="utf-8", errors="replace")  # noqa: SIM115


def parse_file(path: Path, parser_name: str = DEFAULT_PARSER) -> list[LogEvent]:
    """Parse a single slow log file and return its events.

    A fresh parser is used per file, so an entry never spans two files.
    """
    parser = ParserRegistry.get(parser_name)
    with open_log_file(path) as f:
        events = list(parser.parse_lines(line.rstrip("\n\r") for line in f))
    empty = sum(1 for e in events if not e.get("Statement"))
    if empty:
        logger.warning("%d entries without a statement in %s", empty, path.name)
    return events


def _discover(root: Path) -> tuple[list[Path], int]:
    """Return the slow log files under a directory and the count of skipped files."""
    files: list[Path] = []
    skipped = 0
    for file_path in sorted(root.rglob("*")):
        if not file_path.is_file():
            continue
        if SLOW_LOG_MARKER not in file_path.name:
            skipped += 1
            logger.debug("Skipping: %s", file_path.relative_to(root))
            continue
        files.append(file_path)
    return files, skipped


class SlowLogImporter:
    """Parse slow log files and batch-insert their events into an EventStore."""

    def __init__(
        self,
        db_path: str | Path,
        parser_name: str = DEFAULT_PARSER,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.db_path = Path(db_path)
        self.parser_name = parser_name
        self.batch_size = batch_size

        # Counters
        self.total_events = 0
        self.files_processed = 0
        self.files_skipped = 0
        self.events_by_file: dict[str, int] = {}

    @classmethod
    def from_config(cls, config: ImportConfig) -> SlowLogImporter:
        return cls(config.db_path, parser_name=config.parser, batch_size=config.batch_size)

    def run(self, config: ImportConfig) -> int:
        """Import every source of a config. Returns total events inserted."""
        for source in config.sources:
            self.import_path(source.path, source_host=source.host)
        self._log_summary()
        return self.total_events

    def import_path(self, path: str | Path, source_host: str | None = None) -> int:
        """Import a slow log file or a directory of them. Returns events inserted."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if path.is_dir():
            files, skipped = _discover(path)
            self.files_skipped += skipped
            logger.info("Found %d slow log files in %s (%d skipped)", len(files), path, skipped)
        elif path.is_file():
            files = [path]
        else:
            raise ValueError(f"Path must be a file or directory: {path}")

        inserted = 0
        with EventStore(self.db_path, mode="a") as store:
            for file_path in files:
                logger.info("Parsing: %s", file_path)
                events = parse_file(file_path, self.parser_name)
                self.files_processed += 1
                self.events_by_file[str(file_path)] = len(events)

                for start in range(0, len(events), self.batch_size):
                    batch = events[start:start + self.batch_size]
                    inserted += store.bulk_insert(
                        batch, source=self.parser_name, source_host=source_host,
                    )
                    logger.debug("Inserted batch of %d events", len(batch))

        self.total_events += inserted
        return inserted

    def _log_summary(self) -> None:
        logger.info("─── Import Summary ───")
        logger.info("Files processed: %d", self.files_processed)
        logger.info("Files skipped:   %d", self.files_skipped)
        logger.info("Total events:    %d", self.total_events)
        for name, count in sorted(self.events_by_file.items()):
            logger.info("  %-40s %d", name, count)
