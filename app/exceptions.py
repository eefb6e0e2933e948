"""Custom exceptions for the budget tracker service.

Link extraction errors live in ``app.services.extractors.exceptions``; the
classes here cover the purchase store.
"""

from __future__ import annotations


class PurchaseError(Exception):
    """Base exception for purchase store errors."""

    pass


class PurchaseNotFoundError(PurchaseError):
    """Raised when a purchase ID does not exist.

    Error Code: PURCHASE_NOT_FOUND
    """

    def __init__(self, purchase_id: int) -> None:
        self.purchase_id = purchase_id
        super().__init__(f"Purchase with ID {purchase_id} not found")
