"""Base types shared by the extraction strategies."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.services.extractors.document import Document


@dataclass(frozen=True)
class ProductInfo:
    """Product data recovered from a page. Every field is optional."""

    title: str | None = None
    price: float | None = None
    description: str | None = None
    image: str | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def is_usable(self) -> bool:
        """A result is usable when it names the product or prices it."""
        return self.title is not None or self.price is not None

    def has_valid_price(self) -> bool:
        return (
            isinstance(self.price, (int, float))
            and not isinstance(self.price, bool)
            and math.isfinite(self.price)
            and self.price >= 0
        )

    def to_dict(self) -> dict[str, str | float]:
        """Return only the fields that were found."""
        return {key: value for key, value in asdict(self).items() if value is not None}


# Name used throughout the extraction docs
ExtractionResult = ProductInfo


class ExtractionStrategy(Protocol):
    """A single heuristic: parsed document in, partial product data out."""

    def __call__(self, document: Document) -> ProductInfo | None:
        """Return the fields this strategy found, or None to try the next one."""
        ...
