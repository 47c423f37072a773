"""Service layer for raffle sessions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from doorprize.errors import NotFoundError, ValidationError
from doorprize.models.raffle_session import RaffleSession
from doorprize.repositories.contestant_repository import ContestantRepository
from doorprize.repositories.draw_repository import DrawRepository
from doorprize.repositories.prize_repository import PrizeRepository
from doorprize.repositories.session_repository import SessionRepository


@dataclass(frozen=True)
class SessionOverview:
    session: RaffleSession
    contestant_count: int
    eligible_count: int
    prize_count: int
    draw_count: int
    winner_count: int


class SessionService:
    """Session use-cases."""

    def __init__(self, repository: SessionRepository | None = None) -> None:
        self._repo = repository or SessionRepository()
        self._contestants = ContestantRepository()
        self._prizes = PrizeRepository()
        self._draws = DrawRepository()

    def list_sessions(self, session: Session) -> Sequence[RaffleSession]:
        return self._repo.list_all(session)

    def get_session(self, session: Session, session_id: str) -> RaffleSession:
        raffle = self._repo.get_by_id(session, session_id)
        if raffle is None:
            raise NotFoundError("Session not found")
        return raffle

    def require_session(self, session: Session, session_id: str) -> None:
        if not self._repo.exists(session, session_id):
            raise NotFoundError("Session not found")

    def overview(self, session: Session, session_id: str) -> SessionOverview:
        raffle = self.get_session(session, session_id)
        return SessionOverview(
            session=raffle,
            contestant_count=self._contestants.count(session, session_id),
            eligible_count=self._contestants.count_eligible(session, session_id),
            prize_count=self._prizes.count(session, session_id),
            draw_count=self._draws.count(session, session_id),
            winner_count=self._draws.count_winners(session, session_id),
        )

    def create_session(self, session: Session, name: str) -> RaffleSession:
        name = name.strip()
        if not name:
            raise ValidationError("Session name required")
        return self._repo.create(session, name=name)
