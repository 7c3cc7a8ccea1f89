from mysql_slowlog.data.digest import QueryDigest, fingerprint, summarize
from mysql_slowlog.data.event_store import EventStore
from mysql_slowlog.data.schema import SCHEMA_SQL, SCHEMA_VERSION

__all__ = ["EventStore", "QueryDigest", "SCHEMA_SQL", "SCHEMA_VERSION", "fingerprint", "summarize"]
