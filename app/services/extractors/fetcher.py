"""Page fetcher with a hard time budget and a normalized error taxonomy."""

from __future__ import annotations

import asyncio
import logging

import httpx

from app.services.extractors.exceptions import (
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class PageFetcher:
    """Fetch raw markup for a URL.

    Exactly one outbound GET per call and no retries: a slow or broken site
    fails fast so the user can fall back to manual entry.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self._transport = transport

    async def fetch(self, url: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> str:
        """Fetch HTML content from an absolute URL.

        Args:
            url: Absolute http(s) URL to fetch.
            timeout_ms: Overall budget for the request, in milliseconds.

        Returns:
            Response body as text.

        Raises:
            FetchTimeoutError: If the request exceeds ``timeout_ms``.
            UpstreamError: If the site answers with a non-2xx status.
            InvalidUrlError: If httpx rejects the URL itself.
            NetworkError: For DNS, connection, TLS or redirect failures.
        """
        timeout_s = timeout_ms / 1000
        logger.debug("Fetching %s (timeout=%dms)", url, timeout_ms)
        try:
            # wait_for bounds the whole exchange; httpx alone bounds each phase
            return await asyncio.wait_for(self._get(url, timeout_s), timeout=timeout_s)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FetchTimeoutError(url=url, cause=e) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidUrlError(url=url, cause=e) from e
        except httpx.HTTPStatusError as e:
            raise UpstreamError(e.response.status_code, url, e) from e
        except httpx.TooManyRedirects as e:
            raise NetworkError(
                f"Too many redirects (max {self.max_redirects})", url, e
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(url=url, cause=e) from e

    async def _get(self, url: str, timeout_s: float) -> str:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
            max_redirects=self.max_redirects,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
