"""Unit tests for ProductLinkExtractor.

Tests cover:
- Strategy priority (Open Graph -> JSON-LD -> basic meta) and short-circuiting
- Validation of the winning record (usable check, price dropping)
- URL normalization and validation
- Error propagation from the fetcher
"""

from __future__ import annotations

import asyncio
import math
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.services.extractors.base import ProductInfo
from app.services.extractors.exceptions import (
    ExtractionFailedError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
    UpstreamError,
)
from app.services.extractors.fetcher import PageFetcher
from app.services.link_extractor import (
    MAX_URL_LENGTH,
    STRATEGIES,
    ProductLinkExtractor,
    extract_product_info,
    normalize_url,
    validate_url,
)

URL = "https://www.ikea.com/se/sv/p/billy-bookcase-white-00263850/"


# -----------------------------------------------------------------------------
# HTML Fixtures
# -----------------------------------------------------------------------------

OPEN_GRAPH_HTML = """
<html><head>
<title>BILLY Bookcase - IKEA</title>
<meta property="og:title" content="BILLY Bookcase">
<meta property="og:price" content="1 299,00">
<script type="application/ld+json">{"@type":"Product","name":"Ignored","offers":{"price":"1"}}</script>
</head><body></body></html>
"""

JSON_LD_ONLY_HTML = """
<html><head>
<script type="application/ld+json">{"@type":"Product","name":"BILLY","offers":{"price":"399"}}</script>
</head><body></body></html>
"""

BASIC_META_HTML = """
<html><head>
<title>Example Product – Shop</title>
<meta name="description" content="The best example product">
</head><body></body></html>
"""

NO_SIGNALS_HTML = """
<html><head></head><body><p>Nothing to see here</p></body></html>
"""

MALFORMED_LD_THEN_BASIC_HTML = """
<html><head>
<title>Fallback Title</title>
<script type="application/ld+json">{"@type": "Product", "name": </script>
</head><body></body></html>
"""

OG_DESCRIPTION_ONLY_HTML = """
<html><head>
<meta property="og:description" content="No title, no price">
<title>Has a title tag</title>
</head><body></body></html>
"""


def _extractor(html: str | None = None, **kwargs) -> ProductLinkExtractor:
    fetcher = MagicMock(spec=PageFetcher)
    fetcher.fetch = AsyncMock(return_value=html)
    return ProductLinkExtractor(fetcher=fetcher, **kwargs)


# -----------------------------------------------------------------------------
# Strategy cascade
# -----------------------------------------------------------------------------


class TestStrategyCascade:
    @pytest.mark.asyncio
    async def test_open_graph_wins(self):
        info = await _extractor(OPEN_GRAPH_HTML).extract(URL)
        assert info == ProductInfo(title="BILLY Bookcase", price=1299.0)

    @pytest.mark.asyncio
    async def test_json_ld_used_without_open_graph(self):
        info = await _extractor(JSON_LD_ONLY_HTML).extract(URL)
        assert info.to_dict() == {"title": "BILLY", "price": 399.0}

    @pytest.mark.asyncio
    async def test_basic_meta_fallback(self):
        info = await _extractor(BASIC_META_HTML).extract(URL)
        assert info.to_dict() == {
            "title": "Example Product – Shop",
            "description": "The best example product",
        }

    @pytest.mark.asyncio
    async def test_malformed_json_ld_falls_through(self):
        info = await _extractor(MALFORMED_LD_THEN_BASIC_HTML).extract(URL)
        assert info.title == "Fallback Title"

    @pytest.mark.asyncio
    async def test_no_signals_raises_extraction_failed(self):
        with pytest.raises(ExtractionFailedError) as exc_info:
            await _extractor(NO_SIGNALS_HTML).extract(URL)
        assert "could not find product information" in str(exc_info.value).lower()
        assert exc_info.value.url == URL

    @pytest.mark.asyncio
    async def test_winner_takes_all_without_merge(self):
        """og:description alone wins, so the <title> from basic meta is never used."""
        with pytest.raises(ExtractionFailedError):
            await _extractor(OG_DESCRIPTION_ONLY_HTML).extract(URL)

    def test_strategy_order(self):
        assert [name for name, _ in STRATEGIES] == ["open_graph", "json_ld", "basic_meta"]

    @pytest.mark.asyncio
    async def test_later_strategies_not_called_after_hit(self):
        second = MagicMock(return_value=ProductInfo(title="Second"))
        extractor = _extractor(
            "<html></html>",
            strategies=(
                ("first", lambda doc: ProductInfo(title="First")),
                ("second", second),
            ),
        )
        info = await extractor.extract(URL)
        assert info.title == "First"
        second.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_strategy_is_skipped(self):
        def broken(doc):
            raise RuntimeError("unexpected markup")

        extractor = _extractor(
            "<html></html>",
            strategies=(
                ("broken", broken),
                ("fallback", lambda doc: ProductInfo(price=10.0)),
            ),
        )
        info = await extractor.extract(URL)
        assert info == ProductInfo(price=10.0)


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class TestValidation:
    def test_non_finite_price_is_dropped(self):
        extractor = _extractor(
            strategies=(("nan", lambda doc: ProductInfo(title="Sofa", price=math.nan)),)
        )
        assert extractor.extract_from_html("<html></html>") == ProductInfo(title="Sofa")

    def test_negative_price_is_dropped(self):
        extractor = _extractor(
            strategies=(("neg", lambda doc: ProductInfo(title="Sofa", price=-3.0)),)
        )
        assert extractor.extract_from_html("").price is None

    def test_zero_price_is_kept(self):
        extractor = _extractor(
            strategies=(("zero", lambda doc: ProductInfo(price=0.0)),)
        )
        assert extractor.extract_from_html("").price == 0.0

    @pytest.mark.asyncio
    async def test_only_bad_price_fails_extraction(self):
        extractor = _extractor(
            "<html></html>",
            strategies=(("inf", lambda doc: ProductInfo(price=math.inf, description="x")),),
        )
        with pytest.raises(ExtractionFailedError):
            await extractor.extract(URL)

    @pytest.mark.asyncio
    async def test_og_price_without_digits_omitted(self):
        html = (
            '<html><head><meta property="og:title" content="Lamp">'
            '<meta property="og:price" content="Ask in store"></head></html>'
        )
        info = await _extractor(html).extract(URL)
        assert info.to_dict() == {"title": "Lamp"}

    @pytest.mark.asyncio
    async def test_idempotent_on_same_markup(self):
        extractor = _extractor(OPEN_GRAPH_HTML)
        first = await extractor.extract(URL)
        second = await extractor.extract(URL)
        assert first == second
        assert first.to_dict() == second.to_dict()


# -----------------------------------------------------------------------------
# URL handling
# -----------------------------------------------------------------------------


class TestUrlHandling:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  www.ikea.com/se  ", "https://www.ikea.com/se"),
            ("http://example.com", "http://example.com"),
            ("https://example.com/p?id=1", "https://example.com/p?id=1"),
        ],
    )
    def test_normalize_url(self, raw: str, expected: str):
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "https://",
            "https://not a url",
            "ftp://example.com/file",
            "https://[invalid",
            "example.com",
            "https://example.com:abc/p",
            "https://example.com:99999/p",
        ],
    )
    def test_validate_url_rejects(self, url: str):
        with pytest.raises(InvalidUrlError):
            validate_url(url)

    def test_validate_url_accepts(self):
        assert validate_url(URL) == URL

    def test_validate_url_accepts_explicit_port(self):
        assert validate_url("http://localhost:8080/p") == "http://localhost:8080/p"

    def test_validate_url_rejects_overlong_url(self):
        with pytest.raises(InvalidUrlError):
            validate_url("https://example.com/" + "a" * MAX_URL_LENGTH)

    @pytest.mark.asyncio
    async def test_invalid_url_never_fetches(self):
        extractor = _extractor(OPEN_GRAPH_HTML)
        with pytest.raises(InvalidUrlError):
            await extractor.extract("https://bad url")
        extractor.fetcher.fetch.assert_not_called()


# -----------------------------------------------------------------------------
# Fetch integration and error propagation
# -----------------------------------------------------------------------------


class TestFetchIntegration:
    @pytest.mark.asyncio
    async def test_passes_timeout_budget(self):
        extractor = _extractor(OPEN_GRAPH_HTML, timeout_ms=1234)
        await extractor.extract(URL)
        extractor.fetcher.fetch.assert_awaited_once_with(URL, timeout_ms=1234)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            FetchTimeoutError(url=URL),
            NetworkError(url=URL),
            UpstreamError(404, url=URL),
        ],
    )
    async def test_fetch_errors_propagate_unchanged(self, error):
        extractor = _extractor()
        extractor.fetcher.fetch.side_effect = error
        with pytest.raises(type(error)) as exc_info:
            await extractor.extract(URL)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_slow_fetch_times_out_within_budget(self):
        class SlowFetcher(PageFetcher):
            async def _get(self, url: str, timeout_s: float) -> str:
                await asyncio.sleep(5)
                return OPEN_GRAPH_HTML

        extractor = ProductLinkExtractor(fetcher=SlowFetcher(), timeout_ms=100)
        loop = asyncio.get_running_loop()
        start = loop.time()
        with pytest.raises(FetchTimeoutError):
            await extractor.extract(URL)
        assert loop.time() - start < 1.0

    @pytest.mark.asyncio
    async def test_concurrent_extractions_are_independent(self):
        pages = {
            "https://a.example/p": OPEN_GRAPH_HTML,
            "https://b.example/p": JSON_LD_ONLY_HTML,
        }
        fetcher = MagicMock(spec=PageFetcher)
        fetcher.fetch = AsyncMock(side_effect=lambda url, timeout_ms: pages[url])
        extractor = ProductLinkExtractor(fetcher=fetcher)

        a, b = await asyncio.gather(*(extractor.extract(u) for u in pages))

        assert a.title == "BILLY Bookcase"
        assert b.title == "BILLY"

    @pytest.mark.asyncio
    async def test_module_level_entry_point(self):
        with patch.object(
            ProductLinkExtractor,
            "extract",
            new_callable=AsyncMock,
            return_value=ProductInfo(title="X"),
        ) as mock_extract:
            info = await extract_product_info(URL)
        assert info.title == "X"
        mock_extract.assert_awaited_once_with(URL)
