"""Key material handling for token signing."""

from __future__ import annotations

import binascii

from ..errors import KeyDecodeError


def decode_key(key_hex: str) -> bytes:
    """Decode a hex encoded symmetric key into raw bytes.

    Raises:
        KeyDecodeError: If ``key_hex`` is not a valid hexadecimal string.
    """
    if not isinstance(key_hex, str):
        raise KeyDecodeError(f"Key must be a hex string, got {type(key_hex).__name__}")
    try:
        return binascii.unhexlify(key_hex)
    except ValueError as exc:
        raise KeyDecodeError("Could not create byte key from string") from exc
