"""Session worker polling a CAT protected stream."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .config import ProbeConfig
from .constants import DEFAULT_USER_AGENT, SEGMENT_MARKER, TOKEN_NAME
from .contracts import SessionResult, TokenTransport, WorkerState
from .errors import (
    CatProbeError,
    CookieScopeError,
    HttpTransportError,
    MissingContentLengthError,
    NoSegmentFoundError,
    UrlParseError,
)
from .playlist import find_line_after, resolve_segment
from .security import build_token, decode_key, encode_token
from .transports import derive_cookie_scope, get_binding

logger = logging.getLogger(__name__)


class Worker:
    """Fetches a playlist then repeatedly fetches its first segment.

    The worker mimics a player on a protected live stream: it carries a
    Common Access Token with every request and, for header transport, swaps
    in whatever renewed token the server hands back.
    """

    def __init__(
        self,
        key: str,
        url: str,
        ttl: int,
        token_type: TokenTransport | str,
        issuer: str,
        max_iterations: int,
        sleep: int,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        strict_content_length: bool = False,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.ttl = ttl
        self.token_type = TokenTransport(token_type)
        self.issuer = issuer
        self.max_iterations = max_iterations
        self.sleep = sleep
        self.strict_content_length = strict_content_length
        self.state = WorkerState.CONSTRUCTED

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise UrlParseError(f"Invalid url {url!r}: {exc}") from exc
        if not parsed.scheme or not parsed.host:
            raise UrlParseError(f"Url {url!r} needs a scheme and a host")
        self.host = parsed.host
        self.cookie_domain = derive_cookie_scope(self.host)

        # Fail on a bad key now rather than on the first request.
        decode_key(key)
        self._key = key
        self._binding = get_binding(self.token_type, user_agent=user_agent)
        self._token: Optional[str] = None

        cookies = httpx.Cookies()
        if self._binding.requires_cookie_scope and self.cookie_domain is None:
            raise CookieScopeError(
                f"Cannot derive a cookie domain from host {self.host!r} "
                f"for {self.token_type.value} tokens"
            )
        if self._binding.eager_token:
            self._binding.preload(cookies, self.token, self.cookie_domain)

        self._client = httpx.AsyncClient(
            cookies=cookies, transport=transport, timeout=timeout
        )

    @classmethod
    def from_config(cls, url: str, config: ProbeConfig, **kwargs: Any) -> "Worker":
        """Create a worker for ``url`` from loaded configuration."""
        return cls(
            config.token.key,
            url,
            config.token.ttl,
            config.token.token_type,
            config.token.issuer,
            config.session.max_iterations,
            config.session.sleep,
            user_agent=config.session.user_agent,
            strict_content_length=config.session.strict_content_length,
            timeout=config.session.timeout,
            **kwargs,
        )

    @property
    def token(self) -> str:
        """Base64url token, issued on first access and reused afterwards."""
        if self._token is None:
            token_bytes = build_token(
                self._key, self.ttl, self.token_type, self.cookie_domain, self.issuer
            )
            self._token = encode_token(token_bytes)
        return self._token

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def run(self) -> SessionResult:
        """Run one session and return its result.

        Raises:
            CatProbeError: On the first failure; nothing is retried.
        """
        try:
            result = await self._run()
        except CatProbeError as e:
            self.state = WorkerState.FAILED
            logger.error(f"Session against {self.url} failed: {e}")
            raise
        self.state = WorkerState.DONE
        return result

    async def _run(self) -> SessionResult:
        headers = self._binding.request_headers(self.token)
        playlist = await self._get(
            self.url, headers, params=self._binding.playlist_params(self.token)
        )
        self.state = WorkerState.PLAYLIST_FETCHED

        segment = find_line_after(playlist.text, SEGMENT_MARKER)
        if segment is None:
            raise NoSegmentFoundError(
                f"No segment following {SEGMENT_MARKER} in playlist {self.url}"
            )
        segment_url = resolve_segment(self.url, segment)
        self.state = WorkerState.SEGMENT_RESOLVED
        logger.info(f"Polling segment {segment_url}")

        result = SessionResult(playlist_url=self.url, segment_url=segment_url)
        self.state = WorkerState.POLLING
        for i in range(1, self.max_iterations + 1):
            response = await self._get(segment_url, headers)
            self._carry_renewal(response, headers, result)
            content_length = self._content_length(response)
            logger.info(
                f"Req: {i}, Response: {response.status_code}, content-length: {content_length}"
            )
            result.iterations = i
            result.statuses.append(response.status_code)

            if self.sleep > 0 and i < self.max_iterations:
                await asyncio.sleep(self.sleep / 1000)
        return result

    def _carry_renewal(
        self, response: httpx.Response, headers: httpx.Headers, result: SessionResult
    ) -> None:
        if not self._binding.renews_via_header:
            return
        renewed = self._binding.observe_renewal(response)
        if renewed is None:
            logger.warning("No token found")
            logger.debug(f"Headers: {dict(response.headers)}")
            return
        headers[TOKEN_NAME] = renewed
        result.renewals += 1

    def _content_length(self, response: httpx.Response) -> Optional[str]:
        content_length = response.headers.get("content-length")
        if content_length is None:
            if self.strict_content_length:
                raise MissingContentLengthError(
                    f"Response from {response.request.url} has no content-length"
                )
            logger.warning(f"Response from {response.request.url} has no content-length")
        return content_length

    async def _get(
        self,
        url: str,
        headers: httpx.Headers,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            return await self._client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise HttpTransportError(f"GET {url} failed: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Worker":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
