"""Plain HTML ``<meta>`` / ``<title>`` fallback strategy."""

from __future__ import annotations

from app.services.extractors.base import ProductInfo
from app.services.extractors.document import Document


def extract_basic_meta(document: Document) -> ProductInfo | None:
    """Title from meta[name=title] or <title>; description from meta[name=description]."""
    info = ProductInfo(
        title=document.meta_content(name="title") or document.title_text(),
        description=document.meta_content(name="description"),
    )
    return None if info.is_empty() else info
