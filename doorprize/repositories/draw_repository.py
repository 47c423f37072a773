"""Repository layer for draw and winner persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from doorprize.models.draw import Draw
from doorprize.models.winner import Winner


class DrawRepository:
    """Writes draws together with their winners; reads them back for reports."""

    def create_with_winners(
        self,
        session: Session,
        session_id: str,
        prize_id: str,
        contestant_ids: Sequence[str],
        prize_name: str,
    ) -> Draw:
        """Insert one Draw and one Winner per contestant, then flush.

        Raises ``sqlalchemy.exc.IntegrityError`` when a contestant already has
        a Winner row. The caller owns the transaction and must roll it back.
        """

        draw = Draw(session_id=session_id, prize_id=prize_id)
        session.add(draw)
        session.flush()

        session.add_all(
            Winner(draw_id=draw.id, contestant_id=contestant_id, prize_name=prize_name)
            for contestant_id in contestant_ids
        )
        session.flush()
        return draw

    def get_in_session(self, session: Session, session_id: str, draw_id: str) -> Draw | None:
        stmt = (
            select(Draw)
            .options(
                selectinload(Draw.prize),
                selectinload(Draw.winners).selectinload(Winner.contestant),
            )
            .where(Draw.id == draw_id, Draw.session_id == session_id)
        )
        return session.scalar(stmt)

    def list_for_session(self, session: Session, session_id: str) -> Sequence[Draw]:
        """Draws oldest first with prize, winners and contestants loaded."""

        stmt = (
            select(Draw)
            .options(
                selectinload(Draw.prize),
                selectinload(Draw.winners).selectinload(Winner.contestant),
            )
            .where(Draw.session_id == session_id)
            .order_by(Draw.created_at.asc(), Draw.id.asc())
        )
        return list(session.scalars(stmt).all())

    def count(self, session: Session, session_id: str) -> int:
        stmt = select(func.count(Draw.id)).where(Draw.session_id == session_id)
        return int(session.scalar(stmt) or 0)

    def count_winners(self, session: Session, session_id: str) -> int:
        stmt = (
            select(func.count(Winner.id))
            .join(Draw, Winner.draw_id == Draw.id)
            .where(Draw.session_id == session_id)
        )
        return int(session.scalar(stmt) or 0)
