"""Draw ORM model.

One row per engine run. A draw is written together with all of its winners
in a single transaction and is never updated afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doorprize.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from doorprize.models.prize import Prize
    from doorprize.models.raffle_session import RaffleSession
    from doorprize.models.winner import Winner


class Draw(Base):
    __tablename__ = "draws"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    prize_id: Mapped[str] = mapped_column(String(36), ForeignKey("prizes.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    session: Mapped["RaffleSession"] = relationship(back_populates="draws")
    prize: Mapped["Prize"] = relationship(back_populates="draws")
    winners: Mapped[list["Winner"]] = relationship(back_populates="draw", order_by="Winner.created_at")
