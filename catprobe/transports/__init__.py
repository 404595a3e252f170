"""Token transport bindings and factory."""

from __future__ import annotations

import os
from typing import Optional, Union

from ..constants import DEFAULT_USER_AGENT
from ..contracts import TokenTransport
from .base import BaseBinding
from .cookie import CookieAsQueryBinding, CookieBinding
from .header import HeaderBinding
from .scope import derive_cookie_scope, is_ip


def get_binding(
    transport: Union[TokenTransport, str, None] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> BaseBinding:
    """Factory function returning the binding for ``transport``.

    Falls back to the ``CATPROBE_TOKEN_TYPE`` environment variable, then to
    cookie transport.
    """
    name = transport or os.getenv("CATPROBE_TOKEN_TYPE") or TokenTransport.COOKIE
    try:
        transport = TokenTransport(name)
    except ValueError:
        raise ValueError(f"Unsupported token transport: {name}") from None

    if transport is TokenTransport.HEADER:
        return HeaderBinding(user_agent)
    elif transport is TokenTransport.COOKIE:
        return CookieBinding(user_agent)
    else:
        return CookieAsQueryBinding(user_agent)


__all__ = [
    "BaseBinding",
    "CookieAsQueryBinding",
    "CookieBinding",
    "HeaderBinding",
    "derive_cookie_scope",
    "get_binding",
    "is_ip",
]
