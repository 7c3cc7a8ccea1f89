"""Decorator-based parser registry."""

from __future__ import annotations

from typing import Callable

from mysql_slowlog.parsers.base import StreamParser


class ParserRegistry:
    """Registry mapping parser names to StreamParser classes."""

    _parsers: dict[str, type[StreamParser]] = {}

    @classmethod
    def register(cls, name: str) -> Callable:
        """Decorator to register a parser class under a name."""
        def decorator(parser_cls: type[StreamParser]) -> type[StreamParser]:
            parser_cls.name = name
            cls._parsers[name] = parser_cls
            return parser_cls
        return decorator

    @classmethod
    def get(cls, name: str) -> StreamParser:
        """Instantiate and return a registered parser by name.

        Every call returns a fresh instance, so each log stream gets its own state.
        """
        if name not in cls._parsers:
            raise KeyError(f"Unknown parser: {name!r}. Available: {cls.available()}")
        return cls._parsers[name]()

    @classmethod
    def available(cls) -> list[str]:
        """Return list of registered parser names."""
        return sorted(cls._parsers.keys())
