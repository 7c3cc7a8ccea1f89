"""Shared types for slow log parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, Union

AttributeValue = Union[str, bool, int, float]

# A parsed slow log entry. Only attributes observed in the source block are
# present; "Statement" is always set.
LogEvent = dict[str, AttributeValue]


class StreamParser(ABC):
    """Base class for line-at-a-time parsers of multi-line log entries.

    A parser instance holds the state of exactly one log stream and must not
    be shared between streams or threads.
    """

    name: str

    @abstractmethod
    def consume_line(self, line: str) -> LogEvent | None:
        """Consume one line. Returns an event when a block has just completed."""
        ...

    @abstractmethod
    def flush(self) -> LogEvent | None:
        """Complete any pending block at end of input."""
        ...

    def parse_lines(self, lines: Iterable[str]) -> Iterator[LogEvent]:
        """Feed every line through the parser, then flush once."""
        for line in lines:
            event = self.consume_line(line)
            if event is not None:
                yield event
        event = self.flush()
        if event is not None:
            yield event

    def parse_file(self, path: Path) -> Iterator[LogEvent]:
        """Parse all lines in a file, yielding an event per completed entry."""
        with open(path, encoding="utf-8", errors="replace") as f:
            yield from self.parse_lines(line.rstrip("\r\n") for line in f)
