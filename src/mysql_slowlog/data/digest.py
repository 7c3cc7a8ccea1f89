"""Per-statement digest of slow log events.

Events are grouped by a statement fingerprint (literals replaced with ``?``)
and each group gets count and Query_time statistics, in the spirit of
pt-query-digest's profile table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from mysql_slowlog.parsers.base import LogEvent

logger = logging.getLogger(__name__)

_STRING_LITERAL = re.compile(r"'(?:\\.|''|[^'\\])*'|\"(?:\\.|\"\"|[^\"\\])*\"")
_NUMBER_LITERAL = re.compile(r"\b\d+(?:\.\d+)?\b")
_IN_LIST = re.compile(r"\bin\s*\(\s*\?(?:\s*,\s*\?)*\s*\)")
_WHITESPACE = re.compile(r"\s+")


def fingerprint(statement: str) -> str:
    """Normalize a statement so that queries differing only in literals group together."""
    fp = _STRING_LITERAL.sub("?", statement)
    fp = _NUMBER_LITERAL.sub("?", fp)
    fp = _WHITESPACE.sub(" ", fp).strip().lower()
    fp = _IN_LIST.sub("in (?+)", fp)
    return fp.rstrip(";").rstrip()


@dataclass(frozen=True)
class QueryDigest:
    """Aggregate figures for one statement fingerprint."""

    fingerprint: str
    count: int
    total_time: float
    mean_time: float
    p95_time: float
    max_time: float
    rows_examined: int
    example: str


def _digest(fp: str, events: list[LogEvent]) -> QueryDigest:
    times = np.array(
        [float(e["Query_time"]) for e in events if "Query_time" in e],
        dtype=np.float64,
    )
    rows = sum(int(e.get("Rows_examined", 0)) for e in events)
    if times.size:
        total, mean = float(times.sum()), float(times.mean())
        p95, peak = float(np.percentile(times, 95)), float(times.max())
    else:
        total = mean = p95 = peak = 0.0
    return QueryDigest(
        fingerprint=fp,
        count=len(events),
        total_time=total,
        mean_time=mean,
        p95_time=p95,
        max_time=peak,
        rows_examined=rows,
        example=str(events[0].get("Statement", "")),
    )


def summarize(events: Iterable[LogEvent], top: int | None = None) -> list[QueryDigest]:
    """Group events by fingerprint, ordered by total query time (then count).

    Events with an empty statement are skipped.
    """
    groups: dict[str, list[LogEvent]] = {}
    skipped = 0
    for event in events:
        statement = str(event.get("Statement", ""))
        if not statement:
            skipped += 1
            continue
        groups.setdefault(fingerprint(statement), []).append(event)

    if skipped:
        logger.debug("Skipped %d events without a statement", skipped)

    digests = [_digest(fp, evs) for fp, evs in groups.items()]
    digests.sort(key=lambda d: (d.total_time, d.count), reverse=True)
    logger.info("Summarized %d distinct statements", len(digests))
    if top is not None:
        digests = digests[:top]
    return digests
