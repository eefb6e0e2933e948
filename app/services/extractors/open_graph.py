"""Open Graph (``og:*``) meta tag strategy."""

from __future__ import annotations

from app.services.extractors.base import ProductInfo
from app.services.extractors.document import Document
from app.services.extractors.pricing import parse_price

# Fallback when og:price is missing; Open Graph product pages use it widely
PRODUCT_PRICE_PROPERTY = "product:price:amount"


def _og(document: Document, key: str) -> str | None:
    # Some sites misuse name= instead of property= for og tags
    return document.meta_content(property=f"og:{key}") or document.meta_content(
        name=f"og:{key}"
    )


def extract_open_graph(document: Document) -> ProductInfo | None:
    """Read og:title, og:price, og:description and og:image.

    A price tag without digits is ignored rather than failing the strategy.
    Returns None when none of the tags are present.
    """
    raw_price = _og(document, "price") or document.meta_content(
        property=PRODUCT_PRICE_PROPERTY
    )

    info = ProductInfo(
        title=_og(document, "title"),
        price=parse_price(raw_price),
        description=_og(document, "description"),
        image=_og(document, "image"),
    )
    return None if info.is_empty() else info
