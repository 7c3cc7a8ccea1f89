"""mysql-slowlog: structured events from MySQL slow query logs."""

from mysql_slowlog.parsers import LogEvent, ParserRegistry, SlowQueryParser, StreamParser
from mysql_slowlog.data.event_store import EventStore
from mysql_slowlog.data.digest import QueryDigest, fingerprint, summarize
from mysql_slowlog.importer import SlowLogImporter

__all__ = [
    "EventStore",
    "LogEvent",
    "ParserRegistry",
    "QueryDigest",
    "SlowLogImporter",
    "SlowQueryParser",
    "StreamParser",
    "fingerprint",
    "summarize",
]
