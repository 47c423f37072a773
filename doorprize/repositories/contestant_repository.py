"""Repository layer for contestant persistence."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from doorprize.models.contestant import Contestant


@dataclass(frozen=True)
class EligibleContestant:
    id: str
    name: str


def _eligible_filter():  # type: ignore[no-untyped-def]
    return ~Contestant.winner.has()


class ContestantRepository:
    """Reads and inserts for Contestant."""

    def find_eligible(self, session: Session, session_id: str) -> list[EligibleContestant]:
        """Contestants in the session that have no Winner row yet."""

        stmt = (
            select(Contestant.id, Contestant.name)
            .where(Contestant.session_id == session_id, _eligible_filter())
            .order_by(Contestant.id.asc())
        )
        return [EligibleContestant(id=row.id, name=row.name) for row in session.execute(stmt)]

    def list_for_session(
        self, session: Session, session_id: str, *, eligible_only: bool = False
    ) -> Sequence[Contestant]:
        stmt = (
            select(Contestant)
            .options(selectinload(Contestant.winner))
            .where(Contestant.session_id == session_id)
            .order_by(Contestant.name.asc())
        )
        if eligible_only:
            stmt = stmt.where(_eligible_filter())
        return list(session.scalars(stmt).all())

    def list_names(self, session: Session, session_id: str) -> list[str]:
        stmt = select(Contestant.name).where(Contestant.session_id == session_id)
        return list(session.scalars(stmt).all())

    def count(self, session: Session, session_id: str) -> int:
        stmt = select(func.count(Contestant.id)).where(Contestant.session_id == session_id)
        return int(session.scalar(stmt) or 0)

    def count_eligible(self, session: Session, session_id: str) -> int:
        stmt = select(func.count(Contestant.id)).where(
            Contestant.session_id == session_id, _eligible_filter()
        )
        return int(session.scalar(stmt) or 0)

    def create(self, session: Session, session_id: str, name: str) -> Contestant:
        contestant = Contestant(session_id=session_id, name=name)
        session.add(contestant)
        session.flush()
        return contestant

    def create_many(self, session: Session, session_id: str, names: Iterable[str]) -> int:
        rows = [Contestant(session_id=session_id, name=name) for name in names]
        session.add_all(rows)
        session.flush()
        return len(rows)
