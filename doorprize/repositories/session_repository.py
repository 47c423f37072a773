"""Repository layer for raffle session persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from doorprize.models.raffle_session import RaffleSession


class SessionRepository:
    """CRUD operations for RaffleSession."""

    def list_all(self, session: Session) -> Sequence[RaffleSession]:
        stmt = select(RaffleSession).order_by(RaffleSession.created_at.asc(), RaffleSession.id.asc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, session_id: str) -> RaffleSession | None:
        return session.get(RaffleSession, session_id)

    def exists(self, session: Session, session_id: str) -> bool:
        stmt = select(RaffleSession.id).where(RaffleSession.id == session_id)
        return session.scalar(stmt) is not None

    def create(self, session: Session, name: str) -> RaffleSession:
        raffle = RaffleSession(name=name)
        session.add(raffle)
        session.flush()  # assign PK + created_at
        return raffle
