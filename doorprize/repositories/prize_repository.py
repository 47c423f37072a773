"""Repository layer for prize persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from doorprize.models.draw import Draw
from doorprize.models.prize import Prize
from doorprize.models.winner import Winner


class PrizeRepository:
    """CRUD operations for Prize plus the derived drawn/remaining counts."""

    def find_in_session(self, session: Session, session_id: str, prize_id: str) -> Prize | None:
        stmt = select(Prize).where(Prize.id == prize_id, Prize.session_id == session_id)
        return session.scalar(stmt)

    def list_for_session(self, session: Session, session_id: str) -> Sequence[Prize]:
        stmt = (
            select(Prize)
            .where(Prize.session_id == session_id)
            .order_by(Prize.created_at.asc(), Prize.id.asc())
        )
        return list(session.scalars(stmt).all())

    def drawn_counts(self, session: Session, session_id: str) -> dict[str, int]:
        """Winners per prize id, summed over every draw of the session."""

        stmt = (
            select(Draw.prize_id, func.count(Winner.id))
            .join(Winner, Winner.draw_id == Draw.id)
            .where(Draw.session_id == session_id)
            .group_by(Draw.prize_id)
        )
        return {prize_id: int(total) for prize_id, total in session.execute(stmt)}

    def drawn_count(self, session: Session, prize_id: str) -> int:
        stmt = (
            select(func.count(Winner.id))
            .join(Draw, Winner.draw_id == Draw.id)
            .where(Draw.prize_id == prize_id)
        )
        return int(session.scalar(stmt) or 0)

    def create(self, session: Session, session_id: str, name: str, quantity: int) -> Prize:
        prize = Prize(session_id=session_id, name=name, quantity=quantity)
        session.add(prize)
        session.flush()
        return prize

    def count(self, session: Session, session_id: str) -> int:
        stmt = select(func.count(Prize.id)).where(Prize.session_id == session_id)
        return int(session.scalar(stmt) or 0)
