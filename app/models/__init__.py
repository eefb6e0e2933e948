"""ORM models package."""

from app.models.purchase import ROOMS, Purchase  # noqa: F401
