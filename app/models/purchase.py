"""SQLAlchemy ORM model for planned purchases."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from app.db.base import Base

# Room categories of the house; a purchase may also have no room ("")
ROOMS: tuple[str, ...] = (
    "Kitchen",
    "Bedroom 1",
    "Bedroom 2",
    "Bedroom 3",
    "Living Room (Small)",
    "Living Room (Big)",
    "Dining Room",
    "Bathroom 1",
    "Bathroom 2",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Purchase(Base):
    """A planned (or completed) purchase tracked against the budget."""

    __tablename__ = "purchases"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(255), nullable=False)
    link: str = Column(String(2048), nullable=False, default="")
    cost: float = Column(Float, nullable=False)
    bought: bool = Column(Boolean, nullable=False, default=False)
    comments: str = Column(Text, nullable=False, default="")
    room: str = Column(String(64), nullable=False, default="")

    created_at: datetime = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<Purchase {self.id}: {self.name}>"
