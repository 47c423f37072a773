"""Raffle session ORM model.

A session is the root scope of a door-prize event: contestants, prizes,
draws and (through draws) winners all belong to exactly one session.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doorprize.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from doorprize.models.contestant import Contestant
    from doorprize.models.draw import Draw
    from doorprize.models.prize import Prize


class RaffleSession(Base):
    """An isolated raffle event."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    contestants: Mapped[list["Contestant"]] = relationship(back_populates="session", passive_deletes=True)
    prizes: Mapped[list["Prize"]] = relationship(back_populates="session", passive_deletes=True)
    draws: Mapped[list["Draw"]] = relationship(back_populates="session", passive_deletes=True)
