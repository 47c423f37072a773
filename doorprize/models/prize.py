"""Prize ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doorprize.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from doorprize.models.draw import Draw
    from doorprize.models.raffle_session import RaffleSession


class Prize(Base):
    """A prize with a fixed number of units to hand out.

    The remaining count is never stored; it is ``quantity`` minus the winners
    of every draw that targeted this prize.
    """

    __tablename__ = "prizes"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_prizes_quantity_positive"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    session: Mapped["RaffleSession"] = relationship(back_populates="prizes")
    draws: Mapped[list["Draw"]] = relationship(back_populates="prize")
