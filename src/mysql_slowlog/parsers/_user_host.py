"""Parsing of the ``# User@Host:`` slow log header line."""

from __future__ import annotations

import re
from typing import NamedTuple

# "# User@Host: user[user] @ host [1.2.3.4]  Id: 123"
# The host may be empty when only an IP was logged, the IP may be empty too.
USER_HOST_PATTERN = re.compile(
    r"User@Host:\s+"
    r"(?P<user>[^\[]*)\[(?P<priv_user>[^\]]*)\]\s*"
    r"@\s*(?P<host>[^\[]*?)\s*"
    r"\[(?P<ip>[^\]]*)\]"
    r"(?:\s+Id:\s+(?P<conn_id>\S+))?"
)


class UserHost(NamedTuple):
    """Parsed pieces of a User@Host line."""

    user: str
    priv_user: str
    host: str
    ip: str
    conn_id: str | None


def match_user_host(line: str) -> UserHost | None:
    """Match a User@Host line. Returns None if the line is malformed."""
    m = USER_HOST_PATTERN.search(line)
    if not m:
        return None
    return UserHost(
        user=m.group("user").strip(),
        priv_user=m.group("priv_user").strip(),
        host=m.group("host").strip(),
        ip=m.group("ip").strip(),
        conn_id=m.group("conn_id"),
    )


def parse_user_host_line(line: str) -> dict[str, str]:
    """Extract User, Host and IP from a User@Host line.

    Host falls back to the IP when the host name is empty. Empty values are
    left out. A line that does not match yields an empty dict.
    """
    parsed = match_user_host(line)
    if parsed is None:
        return {}

    fields = {"User": parsed.user}
    if parsed.ip:
        fields["IP"] = parsed.ip
    if parsed.host:
        fields["Host"] = parsed.host
    elif parsed.ip:
        fields["Host"] = parsed.ip
    return fields
