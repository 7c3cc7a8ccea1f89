"""Parser for the MySQL slow query log.

Format (one entry; entries are separated by a blank line or by the next
``#`` header)::

    # Time: 2021-01-01T00:00:00.123456Z
    # User@Host: user[user] @ host [1.2.3.4]  Id: 123
    # Query_time: 0.000123  Lock_time: 0.000045 Rows_sent: 1  Rows_examined: 10
    use some_db;
    SET timestamp=1609459200;
    SELECT * FROM t;

The log has no end-of-entry marker, so an entry is only complete once the
first line of the next one (or end of input) is seen.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from mysql_slowlog.parsers._user_host import parse_user_host_line
from mysql_slowlog.parsers.attributes import parse_attributes
from mysql_slowlog.parsers.base import LogEvent, StreamParser
from mysql_slowlog.parsers.registry import ParserRegistry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Written by mysqld when it (re)opens the log, e.g. after rotation:
# "/usr/sbin/mysqld, Version: 8.0.35 (MySQL Community Server - GPL). started with:"
ROTATION_MARKER = "started with:"

_EPOCH_PATTERN = re.compile(r"^[+-]?\d+$")


def _format_epoch(raw: str) -> str | None:
    """Format Unix epoch seconds as a UTC calendar string."""
    if not _EPOCH_PATTERN.match(raw):
        return None
    try:
        ts = datetime.fromtimestamp(int(raw), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return ts.strftime(TIMESTAMP_FORMAT)


def parse_entry(lines: list[str]) -> LogEvent:
    """Parse the buffered lines of one slow log entry into a LogEvent."""
    event: LogEvent = {}
    n = len(lines)
    i = 0

    # Header comments
    while i < n:
        line = lines[i]
        if line == "":
            i += 1
            continue
        if not line.startswith("#"):
            break
        if line.startswith("# User@Host"):
            event.update(parse_user_host_line(line))
        else:
            event.update(parse_attributes(line))
        i += 1

    # Context lines between the header and the statement
    while i < n:
        line = lines[i]
        if line.startswith("use "):
            event["Database"] = line.split(" ")[1].rstrip(";\n")
        elif line.startswith("SET "):
            if line.startswith("SET timestamp="):
                raw = line.split("=")[1].rstrip(";\n")
                event["Timestamp"] = _format_epoch(raw) or raw
        else:
            break
        i += 1

    statement_lines = []
    for line in lines[i:]:
        if line.endswith(ROTATION_MARKER):
            break
        statement_lines.append(line)

    event["Statement"] = "\n".join(statement_lines).strip()
    return event


@ParserRegistry.register("mysql_slow")
class SlowQueryParser(StreamParser):
    """Incremental parser for the MySQL slow query log.

    Feed lines with consume_line(); call flush() once after the last line or
    the final entry is lost.
    """

    name = "mysql_slow"

    def __init__(self) -> None:
        self.in_header = False
        self.in_query = False
        self._lines: list[str] = []

    def _finish_entry(self, next_line: str) -> LogEvent:
        event = parse_entry(self._lines)
        self._lines.clear()
        self._lines.append(next_line)
        self.in_query = False
        self.in_header = True
        return event

    def consume_line(self, line: str) -> LogEvent | None:
        line = line.rstrip("\r\n")

        if line == "":
            if self.in_query:
                return self._finish_entry(line)
            return None

        if line.startswith("#"):
            if self.in_query:
                return self._finish_entry(line)
            self.in_header = True
            self._lines.append(line)
            return None

        if self.in_header:
            self.in_header = False
            self.in_query = True
            self._lines.append(line)
        elif self.in_query:
            self._lines.append(line)
        # Lines before the first header (server banner) are dropped.
        return None

    def flush(self) -> LogEvent | None:
        if not self.in_query:
            return None
        event = parse_entry(self._lines)
        self._lines.clear()
        self.in_query = False
        self.in_header = False
        return event
