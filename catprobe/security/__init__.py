"""Token signing primitives."""

from .cose import sign_mac0
from .keys import decode_key
from .renewal import renewal_policy
from .tokens import TokenBuilder, build_token, current_timestamp, encode_token

__all__ = [
    "TokenBuilder",
    "build_token",
    "current_timestamp",
    "decode_key",
    "encode_token",
    "renewal_policy",
    "sign_mac0",
]
