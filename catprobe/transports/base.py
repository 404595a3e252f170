"""Base interface for token transport bindings."""

from __future__ import annotations

import abc
from typing import Dict, Optional

import httpx

from ..constants import DEFAULT_USER_AGENT
from ..contracts import TokenTransport


class BaseBinding(metaclass=abc.ABCMeta):
    """Attaches a token to outbound requests and picks up renewals."""

    transport: TokenTransport
    # Cookie bindings need a cookie domain to embed in the renewal claim.
    requires_cookie_scope: bool = False
    # Whether the token is built when the worker is constructed.
    eager_token: bool = False
    # Whether renewals are expected back as a response header.
    renews_via_header: bool = False

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.user_agent = user_agent

    def preload(self, cookies: httpx.Cookies, token: str, domain: str) -> None:
        """Seed the client cookie jar before the first request (no-op by default)."""
        pass

    def request_headers(self, token: str) -> httpx.Headers:
        """Headers sent with every playlist and segment request."""
        return httpx.Headers({"User-Agent": self.user_agent})

    def playlist_params(self, token: str) -> Optional[Dict[str, str]]:
        """Extra query parameters for the initial playlist request."""
        return None

    @abc.abstractmethod
    def observe_renewal(self, response: httpx.Response) -> Optional[str]:
        """Return a renewed token carried by ``response`` if the binding tracks one."""
        raise NotImplementedError
