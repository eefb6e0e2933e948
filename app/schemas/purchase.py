"""Pydantic v2 schemas for purchase and totals endpoints."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.purchase import ROOMS


class PurchaseRequest(BaseModel):
    """Body for POST /api/purchases and PUT /api/purchases/{id}."""

    name: str = Field(..., min_length=1, max_length=255)
    link: str = Field(default="", max_length=2048)
    cost: float = Field(..., ge=0)
    bought: bool = False
    comments: str = Field(default="")
    room: str = Field(default="")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace; a blank name is rejected."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Product name is required")
        return stripped

    @field_validator("link", "comments", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return v or ""

    @field_validator("cost")
    @classmethod
    def validate_cost(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Cost must be a valid positive number")
        return v

    @field_validator("room", mode="before")
    @classmethod
    def validate_room(cls, v: str | None) -> str:
        """Room must be empty or one of the known ROOMS."""
        if v is None:
            return ""
        if not isinstance(v, str):
            return v
        room = v.strip()
        if room and room not in ROOMS:
            raise ValueError(f"Unknown room '{room}'")
        return room


class PurchaseResponse(BaseModel):
    """Single purchase returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    link: str
    cost: float
    bought: bool
    comments: str
    room: str
    created_at: datetime


class DeletePurchaseResponse(BaseModel):
    """Response for DELETE /api/purchases/{id}."""

    success: bool = True
    message: str = "Purchase deleted successfully"


class TotalsResponse(BaseModel):
    """Budget totals; serialised with the camelCase names the UI expects."""

    model_config = ConfigDict(populate_by_name=True)

    total_count: int = Field(0, alias="totalCount")
    total_cost: float = Field(0.0, alias="totalCost")
    purchased_count: int = Field(0, alias="purchasedCount")
    purchased_cost: float = Field(0.0, alias="purchasedCost")
    unpurchased_cost: float = Field(0.0, alias="unpurchasedCost")


class RoomsResponse(BaseModel):
    """Room categories available for purchases."""

    rooms: list[str]
