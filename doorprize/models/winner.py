"""Winner ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doorprize.models.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from doorprize.models.contestant import Contestant
    from doorprize.models.draw import Draw


class Winner(Base):
    """Links one contestant to the draw that consumed their eligibility.

    ``contestant_id`` is unique: a contestant wins at most once, ever, and the
    database enforces it even when two draws race. ``prize_name`` is copied at
    draw time so renaming a prize later leaves historical results intact.
    """

    __tablename__ = "winners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    draw_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("draws.id", ondelete="CASCADE"), nullable=False, index=True
    )
    contestant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contestants.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    prize_name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    draw: Mapped["Draw"] = relationship(back_populates="winners")
    contestant: Mapped["Contestant"] = relationship(back_populates="winner")
