"""Pydantic schemas package."""

from app.schemas.common import ErrorResponse, HealthResponse  # noqa: F401
from app.schemas.links import (  # noqa: F401
    ExtractLinkErrorResponse,
    ExtractLinkRequest,
    ExtractLinkResponse,
    ProductInfoSchema,
)
from app.schemas.purchase import (  # noqa: F401
    DeletePurchaseResponse,
    PurchaseRequest,
    PurchaseResponse,
    RoomsResponse,
    TotalsResponse,
)
