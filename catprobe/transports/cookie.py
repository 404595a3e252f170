"""Cookie bindings: the token lives in the client cookie jar."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from ..constants import DEFAULT_USER_AGENT, TOKEN_NAME, TOKEN_QUERY_PARAM
from ..contracts import TokenTransport
from .base import BaseBinding

logger = logging.getLogger(__name__)


class CookieBinding(BaseBinding):
    """Preloads the token as a cookie; renewals arrive through ``Set-Cookie``."""

    transport = TokenTransport.COOKIE
    requires_cookie_scope = True
    eager_token = True

    def preload(self, cookies: httpx.Cookies, token: str, domain: str) -> None:
        cookies.set(TOKEN_NAME, token, domain=domain, path="/")
        logger.debug(f"Preloaded {TOKEN_NAME} cookie for domain {domain}")

    def observe_renewal(self, response: httpx.Response) -> Optional[str]:
        # The cookie jar picks up renewed cookies on its own.
        return None


class CookieAsQueryBinding(CookieBinding):
    """Sends the initial token as a playlist query parameter.

    The server is expected to move it into a cookie, after which segment
    requests rely on the cookie jar like :class:`CookieBinding`.
    """

    transport = TokenTransport.COOKIE_AS_QUERY

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        query_param: str = TOKEN_QUERY_PARAM,
    ) -> None:
        super().__init__(user_agent)
        self.query_param = query_param

    def preload(self, cookies: httpx.Cookies, token: str, domain: str) -> None:
        pass

    def playlist_params(self, token: str) -> Optional[Dict[str, str]]:
        return {self.query_param: token}
