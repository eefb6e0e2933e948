"""Product information extraction building blocks.

This package provides the pieces the link extractor cascades over:
1. PageFetcher - bounded-time fetch with a browser User-Agent
2. Document - structural (never executing) parse of the markup
3. Strategies, in priority order:
   extract_open_graph -> extract_json_ld -> extract_basic_meta

Usage:
    from app.services.extractors import Document, extract_open_graph

    info = extract_open_graph(Document.parse(html))
"""

from app.services.extractors.base import (
    ExtractionResult,
    ExtractionStrategy,
    ProductInfo,
)
from app.services.extractors.basic_meta import extract_basic_meta
from app.services.extractors.document import Document
from app.services.extractors.exceptions import (
    ExtractionError,
    ExtractionFailedError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkError,
    UpstreamError,
)
from app.services.extractors.fetcher import PageFetcher
from app.services.extractors.json_ld import extract_json_ld
from app.services.extractors.open_graph import extract_open_graph
from app.services.extractors.pricing import as_list, first_value, parse_price

__all__ = [
    # Base types
    "ExtractionResult",
    "ExtractionStrategy",
    "ProductInfo",
    # Fetching and parsing
    "Document",
    "PageFetcher",
    # Strategies
    "extract_open_graph",
    "extract_json_ld",
    "extract_basic_meta",
    # Helpers
    "as_list",
    "first_value",
    "parse_price",
    # Exceptions
    "ExtractionError",
    "InvalidUrlError",
    "FetchTimeoutError",
    "NetworkError",
    "UpstreamError",
    "ExtractionFailedError",
]
