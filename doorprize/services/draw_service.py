"""Draw engine: randomized, exactly-once winner assignment for a prize.

Concurrency model: no in-process locking. Eligibility is read inside the
transaction that performs the write, and the unique constraint on
``winners.contestant_id`` rejects any contestant that a concurrent draw
consumed in between. The losing draw is rolled back as a whole and reported
as a conflict; it is never retried here because the eligible pool has changed.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from doorprize.errors import ConflictError, NotFoundError, ValidationError
from doorprize.models.draw import Draw
from doorprize.repositories.contestant_repository import ContestantRepository, EligibleContestant
from doorprize.repositories.draw_repository import DrawRepository
from doorprize.repositories.prize_repository import PrizeRepository
from doorprize.repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly random permutation of ``items``.

    Walks from the last index down to 1 and swaps each slot with one picked
    uniformly from ``[0, i]``. The input is left untouched.
    """

    randrange = (rng or random).randrange
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


@dataclass(frozen=True)
class DrawnWinner:
    contestant_id: str
    name: str
    prize_name: str


@dataclass(frozen=True)
class DrawOutcome:
    """Result of one successful engine run."""

    draw_id: str
    session_id: str
    prize_id: str
    prize_name: str
    requested_quantity: int
    eligible_before: int
    winners: list[DrawnWinner]
    created_at: datetime


@dataclass(frozen=True)
class DrawSummary:
    session_id: str
    draw_count: int
    total_winners: int


def _require_quantity(quantity: object) -> int:
    # bool is an int subclass; True must not sneak through as 1.
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity must be an integer")
    if quantity < 1:
        raise ValidationError("quantity must be at least 1")
    return quantity


class DrawService:
    """Draw use-cases."""

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        sessions: SessionRepository | None = None,
        contestants: ContestantRepository | None = None,
        prizes: PrizeRepository | None = None,
        draws: DrawRepository | None = None,
    ) -> None:
        self._rng = rng
        self._sessions = sessions or SessionRepository()
        self._contestants = contestants or ContestantRepository()
        self._prizes = prizes or PrizeRepository()
        self._draws = draws or DrawRepository()

    def select_winners(self, eligible: Sequence[EligibleContestant], quantity: int) -> list[EligibleContestant]:
        return fisher_yates_shuffle(eligible, self._rng)[:quantity]

    def run_draw(
        self,
        session: Session,
        session_id: str,
        prize_id: str,
        quantity: object,
        *,
        enforce_prize_remaining: bool = True,
    ) -> DrawOutcome:
        """Pick ``quantity`` eligible contestants at random and record them as winners.

        Commits the session's transaction on success. On failure nothing from
        this call is persisted.

        Raises:
            ValidationError: bad quantity, or more winners requested than
                eligible contestants (or, when ``enforce_prize_remaining`` is
                set, than units left on the prize).
            NotFoundError: unknown session, or a prize outside that session.
            ConflictError: a selected contestant won elsewhere first.
        """

        quantity = _require_quantity(quantity)

        if not self._sessions.exists(session, session_id):
            raise NotFoundError("Session not found")

        prize = self._prizes.find_in_session(session, session_id, prize_id)
        if prize is None:
            raise NotFoundError("Prize not found")
        prize_name = prize.name

        eligible = self._contestants.find_eligible(session, session_id)
        eligible_before = len(eligible)
        if quantity > eligible_before:
            raise ValidationError(
                "Requested quantity exceeds eligible contestants",
                details={"requested": quantity, "eligible": eligible_before},
            )

        if enforce_prize_remaining:
            remaining = max(prize.quantity - self._prizes.drawn_count(session, prize.id), 0)
            if quantity > remaining:
                raise ValidationError(
                    "Requested quantity exceeds remaining prize quantity",
                    details={"requested": quantity, "remaining": remaining},
                )

        selected = self.select_winners(eligible, quantity)

        try:
            draw = self._draws.create_with_winners(
                session,
                session_id,
                prize.id,
                [c.id for c in selected],
                prize_name,
            )
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning(
                "Draw conflict session=%s prize=%s requested=%s: %s",
                session_id,
                prize_id,
                quantity,
                exc.orig,
            )
            raise ConflictError("Contestant already has a prize. Please refresh and try again.") from exc

        logger.info(
            "Draw committed session=%s prize=%s draw=%s winners=%s eligible_before=%s",
            session_id,
            prize.id,
            draw.id,
            len(selected),
            eligible_before,
        )

        return DrawOutcome(
            draw_id=draw.id,
            session_id=session_id,
            prize_id=prize.id,
            prize_name=prize_name,
            requested_quantity=quantity,
            eligible_before=eligible_before,
            winners=[DrawnWinner(contestant_id=c.id, name=c.name, prize_name=prize_name) for c in selected],
            created_at=draw.created_at,
        )

    def summary(self, session: Session, session_id: str) -> DrawSummary:
        if not self._sessions.exists(session, session_id):
            raise NotFoundError("Session not found")
        return DrawSummary(
            session_id=session_id,
            draw_count=self._draws.count(session, session_id),
            total_winners=self._draws.count_winners(session, session_id),
        )

    def get_draw(self, session: Session, session_id: str, draw_id: str) -> Draw:
        if not self._sessions.exists(session, session_id):
            raise NotFoundError("Session not found")
        draw = self._draws.get_in_session(session, session_id, draw_id)
        if draw is None:
            raise NotFoundError("Draw not found")
        return draw
