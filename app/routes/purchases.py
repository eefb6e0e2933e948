"""Purchase management and budget totals REST endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.exceptions import PurchaseNotFoundError
from app.models.purchase import ROOMS
from app.schemas.purchase import (
    DeletePurchaseResponse,
    PurchaseRequest,
    PurchaseResponse,
    RoomsResponse,
    TotalsResponse,
)
from app.services import purchase_service

router = APIRouter(prefix="/api", tags=["purchases"])


def _not_found(e: PurchaseNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "PURCHASE_NOT_FOUND",
                "message": str(e),
            }
        },
    )


@router.get("/purchases", response_model=list[PurchaseResponse])
def list_purchases(db: Session = Depends(get_db)) -> list[PurchaseResponse]:
    """List all purchases, newest first."""
    return purchase_service.list_purchases(db)


@router.post("/purchases", response_model=PurchaseResponse, status_code=201)
def create_purchase(
    request: PurchaseRequest,
    db: Session = Depends(get_db),
) -> PurchaseResponse:
    """Add a new purchase."""
    return purchase_service.create_purchase(db, request)


@router.put("/purchases/{purchase_id}", response_model=PurchaseResponse)
def update_purchase(
    purchase_id: int,
    request: PurchaseRequest,
    db: Session = Depends(get_db),
) -> PurchaseResponse:
    """Replace a purchase's fields."""
    try:
        return purchase_service.update_purchase(db, purchase_id, request)
    except PurchaseNotFoundError as e:
        raise _not_found(e)


@router.delete("/purchases/{purchase_id}", response_model=DeletePurchaseResponse)
def delete_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
) -> DeletePurchaseResponse:
    """Delete a purchase."""
    try:
        purchase_service.delete_purchase(db, purchase_id)
    except PurchaseNotFoundError as e:
        raise _not_found(e)
    return DeletePurchaseResponse()


@router.get("/totals", response_model=TotalsResponse)
def get_totals(db: Session = Depends(get_db)) -> TotalsResponse:
    """Budget totals across all purchases."""
    return purchase_service.get_totals(db)


@router.get("/rooms", response_model=RoomsResponse)
def list_rooms() -> RoomsResponse:
    """Room categories a purchase can be assigned to."""
    return RoomsResponse(rooms=list(ROOMS))
