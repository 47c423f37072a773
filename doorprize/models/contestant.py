"""Contestant ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doorprize.models.base import Base, new_id

if TYPE_CHECKING:
    from doorprize.models.raffle_session import RaffleSession
    from doorprize.models.winner import Winner


class Contestant(Base):
    """A person who can win at most one prize in their session.

    Exact (session, name) pairs are unique here; case-insensitive duplicates
    are filtered out by the import service before rows reach the table.
    """

    __tablename__ = "contestants"
    __table_args__ = (UniqueConstraint("session_id", "name", name="uq_contestants_session_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    session: Mapped["RaffleSession"] = relationship(back_populates="contestants")
    winner: Mapped[Optional["Winner"]] = relationship(back_populates="contestant")
