"""Session reports: every draw with its winners, as CSV or plain text."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from doorprize.models.draw import Draw
from doorprize.models.raffle_session import RaffleSession
from doorprize.models.winner import Winner
from doorprize.repositories.draw_repository import DrawRepository
from doorprize.services.session_service import SessionService
from doorprize.utils.timefmt import iso_utc

CSV_HEADER = (
    "drawNumber",
    "drawId",
    "drawCreatedAt",
    "prizeId",
    "prizeName",
    "contestantId",
    "contestantName",
    "wonAt",
)


@dataclass(frozen=True)
class Report:
    filename: str
    mimetype: str
    body: str


def _prize_label(draw: Draw) -> str:
    if draw.prize is not None and draw.prize.name:
        return draw.prize.name
    if draw.winners:
        return draw.winners[0].prize_name
    return "Prize"


def _winners_by_name(draw: Draw) -> list[Winner]:
    return sorted(draw.winners, key=lambda w: w.contestant.name.lower())


class ReportService:
    """Report rendering."""

    def __init__(self, draws: DrawRepository | None = None) -> None:
        self._draws = draws or DrawRepository()
        self._sessions = SessionService()

    def _load(self, session: Session, session_id: str) -> tuple[RaffleSession, Sequence[Draw]]:
        raffle = self._sessions.get_session(session, session_id)
        return raffle, self._draws.list_for_session(session, session_id)

    def csv_report(self, session: Session, session_id: str) -> Report:
        _, draws = self._load(session, session_id)

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for number, draw in enumerate(draws, start=1):
            prize_name = _prize_label(draw)
            for winner in _winners_by_name(draw):
                writer.writerow(
                    (
                        number,
                        draw.id,
                        iso_utc(draw.created_at),
                        draw.prize_id,
                        prize_name,
                        winner.contestant_id,
                        winner.contestant.name,
                        iso_utc(winner.created_at),
                    )
                )

        return Report(
            filename=f"doorprize-report-{session_id}.csv",
            mimetype="text/csv",
            body=buf.getvalue().rstrip("\n"),
        )

    def text_report(self, session: Session, session_id: str, *, now: datetime | None = None) -> Report:
        raffle, draws = self._load(session, session_id)
        generated_at = now or datetime.now(timezone.utc)
        total_winners = sum(len(d.winners) for d in draws)

        lines = [
            f"Session: {raffle.name}",
            f"Session ID: {raffle.id}",
            f"Generated At: {iso_utc(generated_at)}",
            "",
            f"Draws: {len(draws)}",
            f"Total Winners: {total_winners}",
            "",
        ]

        if not draws:
            lines.append("No draws have been run yet.")
        for number, draw in enumerate(draws, start=1):
            lines.append(
                f"[{number}] {iso_utc(draw.created_at)} - Prize: {_prize_label(draw)} ({len(draw.winners)})"
            )
            lines.extend(f"- {w.contestant.name}" for w in _winners_by_name(draw))
            lines.append("")

        return Report(
            filename=f"doorprize-report-{session_id}.txt",
            mimetype="text/plain",
            body="\n".join(lines),
        )
