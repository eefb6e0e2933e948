"""Pydantic v2 schemas for the product link extraction endpoint."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Request Schemas
# -----------------------------------------------------------------------------


class ExtractLinkRequest(BaseModel):
    """Request body for POST /api/extract-link.

    ``url`` accepts any JSON value so that a bad one gets the endpoint's own
    400 error body instead of a 422 validation error. The route checks the
    type and validate_url checks the rest.
    """

    url: Any = Field(default=None, description="Product page URL; scheme optional")


# -----------------------------------------------------------------------------
# Response Schemas
# -----------------------------------------------------------------------------


class ProductInfoSchema(BaseModel):
    """Product fields recovered from the page; absent fields are omitted."""

    title: str | None = Field(default=None, description="Product name")
    price: float | None = Field(default=None, ge=0, description="Numeric price")
    description: str | None = Field(default=None, description="Product description")
    image: str | None = Field(default=None, description="Representative image URL")


class ExtractLinkResponse(BaseModel):
    """Successful response for POST /api/extract-link."""

    success: Literal[True] = True
    data: ProductInfoSchema


class ExtractLinkErrorResponse(BaseModel):
    """Failed response for POST /api/extract-link (HTTP 400)."""

    success: Literal[False] = False
    error: str = Field(..., description="User-facing error message")
