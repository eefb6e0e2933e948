"""JSON-LD (schema.org) structured data strategy."""

from __future__ import annotations

import json
import logging
from typing import Any

from app.services.extractors.base import ProductInfo
from app.services.extractors.document import Document
from app.services.extractors.pricing import as_list, first_value, parse_price

logger = logging.getLogger(__name__)

PRODUCT_TYPES = frozenset({"Product", "Offer"})


def _nodes(data: Any) -> list[dict]:
    """Flatten a JSON-LD payload into its candidate nodes, in document order.

    A payload may be a single object, an array of objects, or an object
    carrying an ``@graph`` array.
    """
    nodes: list[dict] = []
    for item in as_list(data):
        if not isinstance(item, dict):
            continue
        nodes.append(item)
        nodes.extend(node for node in as_list(item.get("@graph")) if isinstance(node, dict))
    return nodes


def _first_offer(node: dict) -> dict | None:
    offer = first_value(node.get("offers"))
    return offer if isinstance(offer, dict) else None


def _is_product(node: dict) -> bool:
    if any(t in PRODUCT_TYPES for t in as_list(node.get("@type")) if isinstance(t, str)):
        return True
    offer = _first_offer(node)
    return offer is not None and offer.get("price") not in (None, "")


def _text(value: Any) -> str | None:
    value = first_value(value)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _image(value: Any) -> str | None:
    image = first_value(value)
    # ImageObject: {"@type": "ImageObject", "url": "..."}
    if isinstance(image, dict):
        image = image.get("url") or image.get("contentUrl")
    return _text(image)


def _schema_price(value: Any) -> float | None:
    """schema.org prices use "." as the decimal point; anything else is free text."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return parse_price(value)
    return parse_price(value)


def _price(node: dict) -> float | None:
    offer = _first_offer(node)
    if offer is None and "Offer" in as_list(node.get("@type")):
        offer = node
    if offer is None:
        return None
    price = _schema_price(first_value(offer.get("price")))
    if price is None:
        # AggregateOffer only carries a range
        price = _schema_price(first_value(offer.get("lowPrice")))
    return price


def _from_node(node: dict) -> ProductInfo:
    return ProductInfo(
        title=_text(node.get("name")),
        price=_price(node),
        description=_text(node.get("description")),
        image=_image(node.get("image")),
    )


def extract_json_ld(document: Document) -> ProductInfo | None:
    """Extract product data from the first relevant JSON-LD node.

    Blocks that fail to parse are skipped. Scanning stops at the first node
    typed Product/Offer (or carrying a priced offer), even if it yields
    nothing.
    """
    for index, raw in enumerate(document.json_ld_blocks()):
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.debug("Skipping malformed JSON-LD block %d: %s", index, e)
            continue

        for node in _nodes(data):
            if _is_product(node):
                info = _from_node(node)
                return None if info.is_empty() else info

    return None
