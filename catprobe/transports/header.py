"""Header binding: the token travels in a request header."""

from __future__ import annotations

from typing import Optional

import httpx

from ..constants import TOKEN_NAME
from ..contracts import TokenTransport
from .base import BaseBinding


class HeaderBinding(BaseBinding):
    """Sends the token as ``CTA-Common-Access-Token`` and reads renewals back."""

    transport = TokenTransport.HEADER
    renews_via_header = True

    def request_headers(self, token: str) -> httpx.Headers:
        headers = super().request_headers(token)
        headers[TOKEN_NAME] = token
        return headers

    def observe_renewal(self, response: httpx.Response) -> Optional[str]:
        # httpx header lookups are case-insensitive
        return response.headers.get(TOKEN_NAME)
