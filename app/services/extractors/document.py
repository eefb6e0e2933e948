"""Queryable document wrapper around BeautifulSoup.

The parse is purely structural: scripts are never executed, and malformed
markup degrades to whatever tree lxml can recover instead of raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from bs4.element import Tag

JSON_LD_TYPE = "application/ld+json"


class Document:
    """Parsed markup for a single extraction call.

    Usage:
        doc = Document.parse(html)
        title = doc.meta_content(property="og:title") or doc.title_text()
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def parse(cls, markup: str) -> Document:
        return cls(BeautifulSoup(markup or "", "lxml"))

    # ------------------------------------------------------------------
    # Element lookups
    # ------------------------------------------------------------------

    def find_first(self, tag: str, **attrs: str) -> Tag | None:
        """First element named ``tag`` whose attributes equal ``attrs``."""
        return self._soup.find(tag, attrs=attrs)

    def find_all(self, tag: str, **attrs: str) -> list[Tag]:
        """All elements named ``tag`` whose attributes equal ``attrs``, in order."""
        return list(self._soup.find_all(tag, attrs=attrs))

    @staticmethod
    def attr(element: Tag | None, name: str) -> str | None:
        """Read an attribute, stripped; empty values read as absent."""
        if element is None:
            return None
        value: Any = element.get(name)
        # Multi-valued attributes (e.g. class) come back as lists
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @staticmethod
    def text(element: Tag | None) -> str | None:
        """Element text content, stripped; empty text reads as absent."""
        if element is None:
            return None
        return element.get_text().strip() or None

    # ------------------------------------------------------------------
    # Convenience queries used by the strategies
    # ------------------------------------------------------------------

    def meta_content(self, *, property: str | None = None, name: str | None = None) -> str | None:
        """Content of the first matching ``<meta>`` that carries a value."""
        key, value = ("property", property) if property is not None else ("name", name)
        if value is None:
            raise ValueError("meta_content() needs property or name")
        for element in self.find_all("meta", **{key: value}):
            content = self.attr(element, "content")
            if content is not None:
                return content
        return None

    def title_text(self) -> str | None:
        return self.text(self.find_first("title"))

    def json_ld_blocks(self) -> list[str]:
        """Raw text of every JSON-LD script block, in document order."""
        blocks = []
        for script in self._soup.find_all("script"):
            script_type = self.attr(script, "type") or ""
            # Ignore media-type parameters such as "; charset=utf-8"
            if script_type.split(";")[0].strip().lower() != JSON_LD_TYPE:
                continue
            raw = script.get_text()
            if raw.strip():
                blocks.append(raw)
        return blocks
