"""SQLite schema for slow log event storage."""

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS events (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp     TEXT,
    source        TEXT NOT NULL,
    source_host   TEXT,

    -- Session
    user_name     TEXT,
    host          TEXT,
    ip            TEXT,
    db_name       TEXT,

    -- Timing / resource counters
    query_time    REAL,
    lock_time     REAL,
    rows_sent     INTEGER,
    rows_examined INTEGER,

    statement     TEXT NOT NULL,
    attributes    TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_events_timestamp ON events(timestamp);
CREATE INDEX IF NOT EXISTS idx_events_source ON events(source);
CREATE INDEX IF NOT EXISTS idx_events_user_name ON events(user_name);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""
