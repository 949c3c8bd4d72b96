"""
Ticket models for Ticket Sales Service.
Ticket tiers hold the stock counter; bookings are an append-only ledger of
consumed stock.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric,
    ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Largest value an Integer ticket count column holds (32-bit signed)
MAX_TICKET_COUNT = 2_147_483_647


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketTier(Base):
    """
    A class of ticket with fixed total quantity and a live remaining count.
    `available` is only ever changed by a conditional decrement.
    """

    __tablename__ = "ticket_tiers"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    available = Column(Integer, nullable=False)

    bookings = relationship("Booking", back_populates="ticket_tier", lazy="raise")

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_tier_price_non_negative'),
        CheckConstraint('quantity >= 0', name='check_tier_quantity_non_negative'),
        CheckConstraint('available >= 0', name='check_tier_available_non_negative'),
        CheckConstraint('available <= quantity', name='check_tier_available_within_quantity'),
        Index('idx_ticket_tier_price', 'price'),
    )

    def __repr__(self):
        return f"<TicketTier(id='{self.id}', name='{self.name}', available={self.available}/{self.quantity})>"

    def to_dict(self) -> dict:
        """Convert ticket tier to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "price": float(self.price) if self.price is not None else None,
            "quantity": self.quantity,
            "available": self.available
        }

    @property
    def is_sold_out(self) -> bool:
        """Check if no stock remains."""
        return self.available == 0

    @property
    def sold(self) -> int:
        """Number of tickets already booked."""
        return self.quantity - self.available


class Booking(Base):
    """
    Record that a reservation was consumed by a buyer.
    Created once, in the same transaction as the stock decrement.
    """

    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_new_id)
    ticket_tier_id = Column(String(36), ForeignKey("ticket_tiers.id"), nullable=False, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    ticket_tier = relationship("TicketTier", back_populates="bookings", lazy="raise")

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_booking_quantity_positive'),
        Index('idx_booking_tier_created', 'ticket_tier_id', 'created_at'),
    )

    def __repr__(self):
        return f"<Booking(id='{self.id}', ticket_tier_id='{self.ticket_tier_id}', quantity={self.quantity})>"

    def to_dict(self) -> dict:
        """Convert booking to dictionary representation."""
        return {
            "id": self.id,
            "ticket_tier_id": self.ticket_tier_id,
            "user_id": self.user_id,
            "quantity": self.quantity,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
