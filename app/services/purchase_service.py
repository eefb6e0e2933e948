"""Business logic for purchase CRUD operations and budget totals."""

from __future__ import annotations

import logging

from sqlalchemy import case, func
from sqlalchemy.orm import Session as DbSession

from app.exceptions import PurchaseNotFoundError
from app.models.purchase import Purchase
from app.schemas.purchase import PurchaseRequest, PurchaseResponse, TotalsResponse

logger = logging.getLogger(__name__)


def _get_or_raise(db: DbSession, purchase_id: int) -> Purchase:
    purchase = db.query(Purchase).filter(Purchase.id == purchase_id).first()
    if purchase is None:
        raise PurchaseNotFoundError(purchase_id)
    return purchase


def list_purchases(db: DbSession) -> list[PurchaseResponse]:
    """Return all purchases, newest first."""
    rows = (
        db.query(Purchase)
        .order_by(Purchase.created_at.desc(), Purchase.id.desc())
        .all()
    )
    return [PurchaseResponse.model_validate(p) for p in rows]


def create_purchase(db: DbSession, request: PurchaseRequest) -> PurchaseResponse:
    """Persist a new purchase and return it with its generated ID."""
    purchase = Purchase(
        name=request.name,
        link=request.link,
        cost=request.cost,
        bought=request.bought,
        comments=request.comments,
        room=request.room,
    )

    db.add(purchase)
    db.commit()
    db.refresh(purchase)

    logger.info("Created purchase %d (%s, cost=%.2f)", purchase.id, purchase.name, purchase.cost)
    return PurchaseResponse.model_validate(purchase)


def update_purchase(
    db: DbSession, purchase_id: int, request: PurchaseRequest
) -> PurchaseResponse:
    """Replace all mutable fields of a purchase.

    Raises:
        PurchaseNotFoundError: If no purchase has the given ID.
    """
    purchase = _get_or_raise(db, purchase_id)

    purchase.name = request.name
    purchase.link = request.link
    purchase.cost = request.cost
    purchase.bought = request.bought
    purchase.comments = request.comments
    purchase.room = request.room

    db.commit()
    db.refresh(purchase)

    logger.info("Updated purchase %d", purchase_id)
    return PurchaseResponse.model_validate(purchase)


def delete_purchase(db: DbSession, purchase_id: int) -> None:
    """Delete a purchase.

    Raises:
        PurchaseNotFoundError: If no purchase has the given ID.
    """
    purchase = _get_or_raise(db, purchase_id)
    db.delete(purchase)
    db.commit()
    logger.info("Deleted purchase %d", purchase_id)


def get_totals(db: DbSession) -> TotalsResponse:
    """Aggregate counts and cost sums over all purchases."""
    row = db.query(
        func.count(Purchase.id),
        func.coalesce(func.sum(Purchase.cost), 0),
        func.coalesce(func.sum(case((Purchase.bought, 1), else_=0)), 0),
        func.coalesce(func.sum(case((Purchase.bought, Purchase.cost), else_=0)), 0),
        func.coalesce(func.sum(case((Purchase.bought, 0), else_=Purchase.cost)), 0),
    ).one()

    total_count, total_cost, purchased_count, purchased_cost, unpurchased_cost = row
    return TotalsResponse(
        total_count=total_count or 0,
        total_cost=float(total_cost or 0),
        purchased_count=purchased_count or 0,
        purchased_cost=float(purchased_cost or 0),
        unpurchased_cost=float(unpurchased_cost or 0),
    )
