"""catprobe: test client for Common Access Token protected HLS streams."""

from .config import ProbeConfig, load_config
from .contracts import SessionResult, TokenTransport, WorkerState
from .errors import (
    CatProbeError,
    CookieScopeError,
    HttpTransportError,
    KeyDecodeError,
    MissingContentLengthError,
    NoSegmentFoundError,
    SigningError,
    UrlParseError,
)
from .playlist import find_line_after, resolve_segment
from .security import TokenBuilder, build_token, encode_token
from .transports import derive_cookie_scope, get_binding
from .worker import Worker

__version__ = "0.1.0"
__all__ = [
    "CatProbeError",
    "CookieScopeError",
    "HttpTransportError",
    "KeyDecodeError",
    "MissingContentLengthError",
    "NoSegmentFoundError",
    "ProbeConfig",
    "SessionResult",
    "SigningError",
    "TokenBuilder",
    "TokenTransport",
    "UrlParseError",
    "Worker",
    "WorkerState",
    "build_token",
    "derive_cookie_scope",
    "encode_token",
    "find_line_after",
    "get_binding",
    "load_config",
    "resolve_segment",
]
