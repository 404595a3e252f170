"""Renewal policy (``catr``) selection per token transport."""

from __future__ import annotations

from typing import Optional

from ..constants import TOKEN_NAME
from ..contracts import RenewalPolicy, RenewalType, TokenTransport
from ..errors import SigningError


def renewal_policy(
    transport: TokenTransport, now: int, ttl: int, cookie_domain: Optional[str]
) -> RenewalPolicy:
    """Build the renewal claim for ``transport``.

    Renewal is requested at the midpoint of the ttl. Cookie transports carry
    the cookie attributes the server should use when setting the new token.
    """
    deadline = now + ttl // 2
    transport = TokenTransport(transport)

    if transport is TokenTransport.HEADER:
        return RenewalPolicy(
            renewal_type=RenewalType.HEADER,
            expadd=ttl,
            deadline=deadline,
            header_name=TOKEN_NAME,
            header_params=[],
        )

    if not cookie_domain:
        raise SigningError(f"A cookie domain is required for {transport.value} tokens")
    return RenewalPolicy(
        renewal_type=RenewalType.COOKIE,
        expadd=ttl,
        deadline=deadline,
        cookie_name=TOKEN_NAME,
        cookie_params=[
            "Secure",
            "HttpOnly",
            f"Domain={cookie_domain}",
            "path=/",
            "SameSite=None",
        ],
    )
