"""Cookie scope derivation for cookie bound tokens."""

from __future__ import annotations

import ipaddress
from typing import Optional


def is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def derive_cookie_scope(host: str) -> Optional[str]:
    """Return the cookie ``Domain`` to use for ``host``.

    Literal IP addresses are used as is. Otherwise the last two labels are
    used with a leading dot (``www.host1.example.com`` -> ``.example.com``).
    Public suffixes such as ``co.uk`` are not special-cased. Single label
    hosts like ``localhost`` have no scope and yield ``None``.
    """
    if is_ip(host):
        return host
    parts = host.split(".")
    if len(parts) >= 2:
        return f".{parts[-2]}.{parts[-1]}"
    return None
