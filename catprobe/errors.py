"""Exceptions raised by catprobe."""

from __future__ import annotations


class CatProbeError(Exception):
    """Base class for every error surfaced by a probe session."""


class KeyDecodeError(CatProbeError):
    """The signing key is not valid hexadecimal."""


class SigningError(CatProbeError):
    """The token could not be assembled or its MAC computed."""


class UrlParseError(CatProbeError):
    """The target playlist URL cannot be used."""


class CookieScopeError(CatProbeError):
    """A cookie binding was requested for a host without a cookie scope."""


class HttpTransportError(CatProbeError):
    """A playlist or segment fetch failed at the connection level."""


class NoSegmentFoundError(CatProbeError):
    """The playlist does not reference any segment."""


class MissingContentLengthError(CatProbeError):
    """A segment response came back without ``content-length``."""
