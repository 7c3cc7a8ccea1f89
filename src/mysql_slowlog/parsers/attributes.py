"""Typed attributes found on slow log header lines.

Header lines carry ``Name: value`` pairs, e.g.::

    # Query_time: 0.000123  Lock_time: 0.000045 Rows_sent: 1  Rows_examined: 10

Each known name has a fixed type. Values that do not parse under their type,
and names that are not in the table, are dropped.
"""

from __future__ import annotations

import re
from enum import Enum

from mysql_slowlog.parsers.base import AttributeValue

_ATTRIBUTE_PATTERN = re.compile(r"\b(?P<name>\w+):\s+(?P<value>\S+)")

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True", "YES", "yes", "Yes"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False", "NO", "no", "No"}


class AttributeType(Enum):
    STRING = "string"
    BOOL = "bool"
    FLOAT = "float"
    INT = "int"


ATTRIBUTE_TYPES: dict[str, AttributeType] = {
    # Stock MySQL
    "Query_time": AttributeType.FLOAT,
    "Lock_time": AttributeType.FLOAT,
    "Rows_sent": AttributeType.INT,
    "Rows_examined": AttributeType.INT,
    # MySQL 8 log_slow_extra
    "Thread_id": AttributeType.INT,
    "Errno": AttributeType.INT,
    "Killed": AttributeType.INT,
    "Bytes_received": AttributeType.INT,
    "Bytes_sent": AttributeType.INT,
    "Read_first": AttributeType.INT,
    "Read_last": AttributeType.INT,
    "Read_key": AttributeType.INT,
    "Read_next": AttributeType.INT,
    "Read_prev": AttributeType.INT,
    "Read_rnd": AttributeType.INT,
    "Read_rnd_next": AttributeType.INT,
    "Sort_merge_passes": AttributeType.INT,
    "Sort_range_count": AttributeType.INT,
    "Sort_rows": AttributeType.INT,
    "Sort_scan_count": AttributeType.INT,
    "Created_tmp_disk_tables": AttributeType.INT,
    "Created_tmp_tables": AttributeType.INT,
    "Start": AttributeType.STRING,
    "End": AttributeType.STRING,
    # Percona Server / MariaDB extended
    "Schema": AttributeType.STRING,
    "Last_errno": AttributeType.INT,
    "Rows_affected": AttributeType.INT,
    "Rows_read": AttributeType.INT,
    "QC_hit": AttributeType.BOOL,
    "Full_scan": AttributeType.BOOL,
    "Full_join": AttributeType.BOOL,
    "Tmp_table": AttributeType.BOOL,
    "Tmp_table_on_disk": AttributeType.BOOL,
    "Filesort": AttributeType.BOOL,
    "Filesort_on_disk": AttributeType.BOOL,
    "Priority_queue": AttributeType.BOOL,
    "Merge_passes": AttributeType.INT,
    "Tmp_tables": AttributeType.INT,
    "Tmp_disk_tables": AttributeType.INT,
    "Tmp_table_sizes": AttributeType.INT,
    "InnoDB_IO_r_ops": AttributeType.INT,
    "InnoDB_IO_r_bytes": AttributeType.INT,
    "InnoDB_IO_r_wait": AttributeType.FLOAT,
    "InnoDB_rec_lock_wait": AttributeType.FLOAT,
    "InnoDB_queue_wait": AttributeType.FLOAT,
    "InnoDB_pages_distinct": AttributeType.INT,
    "InnoDB_trx_id": AttributeType.STRING,
    "Log_slow_rate_type": AttributeType.STRING,
    "Log_slow_rate_limit": AttributeType.INT,
}


def _parse_bool(raw: str) -> bool | None:
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return None


def _parse_int(raw: str) -> int | None:
    if not _INT_PATTERN.match(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _parse_float(raw: str) -> float | None:
    if not _FLOAT_PATTERN.match(raw):
        return None
    return float(raw)


def coerce_attribute(name: str, raw: str) -> AttributeValue | None:
    """Convert a raw header value to the type declared for ``name``.

    Returns None for unknown names or values that do not parse.
    """
    attr_type = ATTRIBUTE_TYPES.get(name)
    if attr_type is AttributeType.STRING:
        return raw
    if attr_type is AttributeType.BOOL:
        return _parse_bool(raw)
    if attr_type is AttributeType.FLOAT:
        return _parse_float(raw)
    if attr_type is AttributeType.INT:
        return _parse_int(raw)
    return None


def parse_attributes(line: str) -> dict[str, AttributeValue]:
    """Extract every typed ``Name: value`` pair from a header line."""
    attributes: dict[str, AttributeValue] = {}
    for m in _ATTRIBUTE_PATTERN.finditer(line):
        value = coerce_attribute(m.group("name"), m.group("value"))
        if value is not None:
            attributes[m.group("name")] = value
    return attributes
