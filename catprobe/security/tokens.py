"""Common Access Token issuance."""

from __future__ import annotations

import base64
import logging
import time
from typing import Any, Dict, Optional, Union

from ..constants import (
    CLAIM_CATR,
    DEFAULT_KEY_ID,
    DEFAULT_SUBJECT,
    DEFAULT_TOKEN_ID,
)
from ..contracts import RegisteredClaims, TokenTransport
from .cose import sign_mac0
from .keys import decode_key
from .renewal import renewal_policy

logger = logging.getLogger(__name__)


def current_timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


class TokenBuilder:
    """Builds signed CBOR Web Tokens with an embedded renewal policy.

    Subject and token id are fixed by default so that tokens issued within a
    process only differ in their timestamps.
    """

    def __init__(
        self,
        subject: str = DEFAULT_SUBJECT,
        token_id: bytes = DEFAULT_TOKEN_ID,
        key_id: Union[str, bytes] = DEFAULT_KEY_ID,
    ) -> None:
        self.subject = subject
        self.token_id = token_id
        self.key_id = key_id

    def claims(
        self,
        issuer: str,
        ttl: int,
        transport: TokenTransport,
        cookie_domain: Optional[str],
        now: int,
    ) -> Dict[int, Any]:
        """Return the claim set for a token issued at ``now``.

        The token itself is valid for twice ``ttl``; renewal is due halfway
        through ``ttl``.
        """
        registered = RegisteredClaims(
            issuer=issuer,
            subject=self.subject,
            issued_at=now,
            expiration=now + 2 * ttl,
            token_id=self.token_id,
        )
        claims = registered.to_cbor_map()
        claims[CLAIM_CATR] = renewal_policy(transport, now, ttl, cookie_domain).to_cbor_map()
        return claims

    def build(
        self,
        key: bytes,
        ttl: int,
        transport: TokenTransport,
        cookie_domain: Optional[str],
        issuer: str,
    ) -> bytes:
        """Sign a fresh token with ``key`` and return its binary encoding."""
        now = current_timestamp()
        claims = self.claims(issuer, ttl, transport, cookie_domain, now)
        token = sign_mac0(claims, key, self.key_id)
        logger.debug(
            f"Issued {TokenTransport(transport).value} token for issuer={issuer} "
            f"iat={now} ttl={ttl} ({len(token)} bytes)"
        )
        return token


def build_token(
    key_hex: str,
    ttl: int,
    transport: TokenTransport,
    cookie_domain: Optional[str],
    issuer: str,
) -> bytes:
    """Decode ``key_hex`` and build a signed token with default builder settings."""
    key = decode_key(key_hex)
    return TokenBuilder().build(key, ttl, transport, cookie_domain, issuer)


def encode_token(token: bytes) -> str:
    """Encode binary token bytes as unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(token).rstrip(b"=").decode("ascii")
