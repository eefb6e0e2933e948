"""Product information extraction from pasted shop URLs."""

from __future__ import annotations

import logging
from dataclasses import replace
from urllib.parse import urlparse

from app.core.config import settings
from app.services.extractors.base import ExtractionStrategy, ProductInfo
from app.services.extractors.basic_meta import extract_basic_meta
from app.services.extractors.document import Document
from app.services.extractors.exceptions import ExtractionFailedError, InvalidUrlError
from app.services.extractors.fetcher import PageFetcher
from app.services.extractors.json_ld import extract_json_ld
from app.services.extractors.open_graph import extract_open_graph

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "https://"
MAX_URL_LENGTH = 2048

# Priority order; the first strategy to return anything wins wholesale
STRATEGIES: tuple[tuple[str, ExtractionStrategy], ...] = (
    ("open_graph", extract_open_graph),
    ("json_ld", extract_json_ld),
    ("basic_meta", extract_basic_meta),
)


def normalize_url(raw: str) -> str:
    """Trim user input and prefix https:// when no http(s) scheme is given."""
    url = raw.strip()
    if not url.startswith(("http://", "https://")):
        url = DEFAULT_SCHEME + url
    return url


def validate_url(url: str) -> str:
    """Ensure ``url`` is an absolute http(s) URL with a host and a sane port.

    Raises:
        InvalidUrlError: If the URL is malformed.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        # Raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except ValueError as e:
        raise InvalidUrlError(url=url, cause=e) from e

    if len(url) > MAX_URL_LENGTH:
        raise InvalidUrlError(url=url[:MAX_URL_LENGTH])
    if parsed.scheme not in ("http", "https") or not hostname or any(c.isspace() for c in url):
        raise InvalidUrlError(url=url)
    return url


class ProductLinkExtractor:
    """Recover a product's title, price, description and image from its page.

    Holds no per-request state, so one instance can serve concurrent calls.

    Usage:
        extractor = ProductLinkExtractor()
        info = await extractor.extract("https://www.ikea.com/se/sv/p/billy/")
        print(info.title, info.price)
    """

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        timeout_ms: int | None = None,
        strategies: tuple[tuple[str, ExtractionStrategy], ...] = STRATEGIES,
    ) -> None:
        self.fetcher = fetcher or PageFetcher(
            user_agent=settings.link_fetch_user_agent,
            max_redirects=settings.link_fetch_max_redirects,
        )
        self.timeout_ms = (
            timeout_ms if timeout_ms is not None else settings.link_fetch_timeout_ms
        )
        self.strategies = strategies

    async def extract(self, url: str) -> ProductInfo:
        """Fetch ``url`` and run the strategy cascade over its markup.

        Args:
            url: Absolute URL (see normalize_url for raw user input).

        Returns:
            ProductInfo with at least a title or a price.

        Raises:
            InvalidUrlError: If the URL is malformed.
            FetchTimeoutError: If the page took longer than the time budget.
            NetworkError: If the site could not be reached.
            UpstreamError: If the site answered with an error status.
            ExtractionFailedError: If no usable product data was found.
        """
        logger.info("Extracting product info from %s", url)
        validate_url(url)

        html = await self.fetcher.fetch(url, timeout_ms=self.timeout_ms)
        info = self.extract_from_html(html)

        if not info.is_usable():
            logger.warning("No product information found on %s", url)
            raise ExtractionFailedError(url=url)

        logger.info("Extraction complete for %s: %s", url, info.to_dict())
        return info

    def extract_from_html(self, html: str) -> ProductInfo:
        """Run the strategies over ``html`` and validate the winner.

        Returns an empty ProductInfo when no strategy found anything.
        """
        document = Document.parse(html)
        info = self._run_strategies(document) or ProductInfo()

        if info.price is not None and not info.has_valid_price():
            logger.debug("Dropping invalid price %r", info.price)
            info = replace(info, price=None)
        return info

    def _run_strategies(self, document: Document) -> ProductInfo | None:
        for name, strategy in self.strategies:
            try:
                info = strategy(document)
            except Exception as e:
                logger.warning("Strategy %s failed: %s", name, e)
                continue
            logger.debug("Strategy %s -> %s", name, info.to_dict() if info else None)
            if info is not None and not info.is_empty():
                return info
        return None


async def extract_product_info(url: str) -> ProductInfo:
    """Module-level entry point using the configured defaults."""
    return await ProductLinkExtractor().extract(url)
