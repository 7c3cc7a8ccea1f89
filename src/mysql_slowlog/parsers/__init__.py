from mysql_slowlog.parsers.base import AttributeValue, LogEvent, StreamParser
from mysql_slowlog.parsers.registry import ParserRegistry

# Import parsers to trigger registration
from mysql_slowlog.parsers.slow_query import SlowQueryParser, parse_entry

__all__ = [
    "AttributeValue",
    "LogEvent",
    "ParserRegistry",
    "SlowQueryParser",
    "StreamParser",
    "parse_entry",
]
