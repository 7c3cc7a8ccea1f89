"""Shared fixtures for mysql-slowlog tests."""

from __future__ import annotations

import gzip

import pytest

from mysql_slowlog.data.event_store import EventStore
from mysql_slowlog.parsers.slow_query import SlowQueryParser


# ── Sample log text ───────────────────────────────────────────────────

SAMPLE_SLOW_LOG = """\
/usr/sbin/mysqld, Version: 8.0.35 (MySQL Community Server - GPL). started with:
Tcp port: 3306  Unix socket: /var/run/mysqld/mysqld.sock
Time                 Id Command    Argument
# Time: 2021-01-01T00:00:00.123456Z
# User@Host: root[root] @ localhost []  Id:     8
# Query_time: 2.500000  Lock_time: 0.000100 Rows_sent: 1  Rows_examined: 1000
use shop;
SET timestamp=1609459200;
SELECT * FROM orders WHERE id = 42;
# Time: 2021-01-01T00:00:05.000000Z
# User@Host: app[app] @  [10.0.0.7]  Id:    12
# Query_time: 0.500000  Lock_time: 0.000050 Rows_sent: 10  Rows_examined: 200
SET timestamp=1609459205;
SELECT name
FROM customers
WHERE id IN (1, 2, 3);
# Time: 2021-01-01T00:00:09.000000Z
# User@Host: root[root] @ localhost []  Id:     8
# Query_time: 1.500000  Lock_time: 0.000100 Rows_sent: 1  Rows_examined: 800
SET timestamp=1609459209;
SELECT * FROM orders WHERE id = 7;
"""

SAMPLE_LINES = SAMPLE_SLOW_LOG.splitlines()

# Percona Server style entry with extended attributes
PERCONA_ENTRY = [
    "# User@Host: report[report] @ analytics.example.com [10.1.2.3]  Id: 4521",
    "# Schema: warehouse  Last_errno: 0  Killed: 0",
    "# Query_time: 12.034981  Lock_time: 0.000210  Rows_sent: 5  Rows_examined: 2500000  Rows_affected: 0",
    "# Bytes_sent: 612  Tmp_tables: 1  Tmp_disk_tables: 1  Tmp_table_sizes: 4194304",
    "# QC_hit: No  Full_scan: Yes  Full_join: No  Tmp_table: Yes  Tmp_table_on_disk: Yes",
    "# Filesort: Yes  Filesort_on_disk: No  Merge_passes: 0",
    "#   InnoDB_IO_r_ops: 1200  InnoDB_IO_r_bytes: 19660800  InnoDB_IO_r_wait: 0.834512",
    "#   InnoDB_rec_lock_wait: 0.000000  InnoDB_queue_wait: 0.000000",
    "#   InnoDB_pages_distinct: 987",
    "SET timestamp=1700000000;",
    "SELECT region, SUM(amount) FROM sales GROUP BY region ORDER BY 2 DESC;",
]


@pytest.fixture
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture
def percona_entry():
    return list(PERCONA_ENTRY)


@pytest.fixture
def sample_events():
    """The three events of SAMPLE_SLOW_LOG."""
    return list(SlowQueryParser().parse_lines(SAMPLE_LINES))


@pytest.fixture
def slow_log_file(tmp_path):
    path = tmp_path / "mysql-slow.log"
    path.write_text(SAMPLE_SLOW_LOG)
    return path


@pytest.fixture
def gz_slow_log_file(tmp_path):
    path = tmp_path / "mysql-slow.log.1.gz"
    with gzip.open(path, "wt") as f:
        f.write(SAMPLE_SLOW_LOG)
    return path


@pytest.fixture
def tmp_db(tmp_path, sample_events):
    """Create a temporary EventStore populated with the sample events."""
    db_path = tmp_path / "test_events.db"
    store = EventStore(db_path, mode="w")
    store.bulk_insert(sample_events, source_host="db1")
    store.close()
    return db_path


@pytest.fixture
def empty_db(tmp_path):
    """Create an empty EventStore."""
    db_path = tmp_path / "empty.db"
    store = EventStore(db_path, mode="w")
    store.close()
    return db_path
