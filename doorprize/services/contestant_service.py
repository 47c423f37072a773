"""Service layer for contestants, including CSV roster import."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from doorprize.errors import ConflictError, ValidationError
from doorprize.models.contestant import Contestant
from doorprize.repositories.contestant_repository import ContestantRepository
from doorprize.services.session_service import SessionService

logger = logging.getLogger(__name__)

NAME_FIELD = "name"


@dataclass(frozen=True)
class ContestantRoster:
    session_id: str
    total: int
    eligible: int
    contestants: Sequence[Contestant]


@dataclass(frozen=True)
class ImportResult:
    session_id: str
    total_rows: int
    valid_names: int
    inserted: int
    skipped_duplicates_in_file: int
    skipped_duplicates_in_db: int


def extract_names(csv_text: str) -> tuple[list[str], int]:
    """Pull raw contestant names out of CSV text.

    Uses the column headed ``name`` (any case) when the first row has one;
    otherwise every row, including the first, contributes its first cell.

    Returns:
        (raw names, number of data rows considered)
    """

    rows = list(csv.reader(io.StringIO(csv_text)))
    if not rows:
        return [], 0

    header = [cell.strip().lower() for cell in rows[0]]
    if NAME_FIELD in header:
        idx = header.index(NAME_FIELD)
        data = rows[1:]
        return [row[idx] if idx < len(row) else "" for row in data], len(data)

    return [row[0] if row else "" for row in rows], len(rows)


def dedupe_names(names: Sequence[str]) -> tuple[list[str], int]:
    """Trimmed, non-blank names with case-insensitive duplicates removed.

    The first spelling seen wins. Returns (unique names, duplicates skipped).
    """

    seen: set[str] = set()
    unique: list[str] = []
    skipped = 0
    for name in names:
        key = name.lower()
        if key in seen:
            skipped += 1
            continue
        seen.add(key)
        unique.append(name)
    return unique, skipped


class ContestantService:
    """Contestant use-cases."""

    def __init__(self, repository: ContestantRepository | None = None) -> None:
        self._repo = repository or ContestantRepository()
        self._sessions = SessionService()

    def roster(self, session: Session, session_id: str, *, eligible_only: bool = False) -> ContestantRoster:
        self._sessions.require_session(session, session_id)
        return ContestantRoster(
            session_id=session_id,
            total=self._repo.count(session, session_id),
            eligible=self._repo.count_eligible(session, session_id),
            contestants=self._repo.list_for_session(session, session_id, eligible_only=eligible_only),
        )

    def count(self, session: Session, session_id: str) -> int:
        self._sessions.require_session(session, session_id)
        return self._repo.count(session, session_id)

    def add_contestant(self, session: Session, session_id: str, name: str) -> Contestant:
        self._sessions.require_session(session, session_id)

        name = name.strip()
        if not name:
            raise ValidationError("Contestant name is required")

        existing = {n.lower() for n in self._repo.list_names(session, session_id)}
        if name.lower() in existing:
            raise ConflictError("Contestant already exists in this session", details={"name": name})

        return self._repo.create(session, session_id, name)

    def import_csv(self, session: Session, session_id: str, csv_text: str) -> ImportResult:
        self._sessions.require_session(session, session_id)

        raw_names, total_rows = extract_names(csv_text)
        cleaned = [name.strip() for name in raw_names if name.strip()]
        if not cleaned:
            raise ValidationError("No valid contestant names found")

        unique, skipped_in_file = dedupe_names(cleaned)

        existing = {n.lower() for n in self._repo.list_names(session, session_id)}
        to_insert = [name for name in unique if name.lower() not in existing]
        skipped_in_db = len(unique) - len(to_insert)

        inserted = self._repo.create_many(session, session_id, to_insert) if to_insert else 0

        logger.info(
            "Contestant import session=%s rows=%s inserted=%s dup_in_file=%s dup_in_db=%s",
            session_id,
            total_rows,
            inserted,
            skipped_in_file,
            skipped_in_db,
        )

        return ImportResult(
            session_id=session_id,
            total_rows=total_rows,
            valid_names=len(cleaned),
            inserted=inserted,
            skipped_duplicates_in_file=skipped_in_file,
            skipped_duplicates_in_db=skipped_in_db,
        )
