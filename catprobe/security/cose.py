"""COSE_Mac0 construction (RFC 9052) for CBOR Web Tokens."""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, Dict, Union

import cbor2
from cbor2 import CBORTag

from ..constants import (
    COSE_ALG_HMAC_256_256,
    COSE_HEADER_ALG,
    COSE_HEADER_KID,
    COSE_MAC0_TAG,
    CWT_TAG,
)
from ..errors import SigningError


def mac_structure(protected: bytes, payload: bytes, external_aad: bytes = b"") -> bytes:
    """Return the ``MAC_structure`` bytes that the HMAC is computed over."""
    return cbor2.dumps(["MAC0", protected, external_aad, payload])


def sign_mac0(
    claims: Dict[int, Any],
    key: bytes,
    key_id: Union[str, bytes],
    cwt_tag: bool = True,
) -> bytes:
    """Encode ``claims`` as a tagged COSE_Mac0 message signed with HMAC 256/256.

    The key id travels in the unprotected header so verifiers can pick a key;
    it is not covered by the MAC.
    """
    if not key:
        raise SigningError("Empty key material, cannot sign token")

    try:
        protected = cbor2.dumps({COSE_HEADER_ALG: COSE_ALG_HMAC_256_256})
        payload = cbor2.dumps(claims)
        tag = hmac.new(key, mac_structure(protected, payload), hashlib.sha256).digest()
        message = CBORTag(
            COSE_MAC0_TAG, [protected, {COSE_HEADER_KID: key_id}, payload, tag]
        )
        if cwt_tag:
            message = CBORTag(CWT_TAG, message)
        return cbor2.dumps(message)
    except (cbor2.CBOREncodeError, TypeError, ValueError) as exc:
        raise SigningError(f"Failed to sign token: {exc}") from exc
