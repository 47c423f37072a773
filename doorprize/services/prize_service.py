"""Service layer for prizes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from doorprize.errors import ValidationError
from doorprize.models.prize import Prize
from doorprize.repositories.contestant_repository import ContestantRepository
from doorprize.repositories.prize_repository import PrizeRepository
from doorprize.services.session_service import SessionService


@dataclass(frozen=True)
class CreatedPrize:
    prize: Prize
    eligible_at_creation: int


@dataclass(frozen=True)
class PrizeStanding:
    """A prize with its derived draw progress."""

    id: str
    name: str
    quantity: int
    created_at: datetime
    already_drawn: int

    @property
    def remaining(self) -> int:
        return max(self.quantity - self.already_drawn, 0)


class PrizeService:
    """Prize use-cases."""

    def __init__(self, repository: PrizeRepository | None = None) -> None:
        self._repo = repository or PrizeRepository()
        self._contestants = ContestantRepository()
        self._sessions = SessionService()

    def create_prize(self, session: Session, session_id: str, *, name: str, quantity: int) -> CreatedPrize:
        """Create a prize whose quantity fits the current eligible pool.

        The bound is checked once, here; later draws do not re-validate it
        against the prize.
        """

        self._sessions.require_session(session, session_id)

        name = name.strip()
        if not name:
            raise ValidationError("Prize name is required")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        eligible = self._contestants.count_eligible(session, session_id)
        if quantity > eligible:
            raise ValidationError(
                "Quantity cannot exceed eligible contestants",
                details={"quantity": quantity, "eligible": eligible},
            )

        prize = self._repo.create(session, session_id, name=name, quantity=quantity)
        return CreatedPrize(prize=prize, eligible_at_creation=eligible)

    def list_prizes(self, session: Session, session_id: str) -> list[PrizeStanding]:
        self._sessions.require_session(session, session_id)

        drawn = self._repo.drawn_counts(session, session_id)
        return [
            PrizeStanding(
                id=p.id,
                name=p.name,
                quantity=p.quantity,
                created_at=p.created_at,
                already_drawn=drawn.get(p.id, 0),
            )
            for p in self._repo.list_for_session(session, session_id)
        ]
