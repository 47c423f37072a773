from __future__ import annotations

import itertools
import random
import tempfile
import unittest
from collections import Counter
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from doorprize.errors import ConflictError, NotFoundError, ValidationError
from doorprize.models import Contestant, Draw, Prize, Winner
from doorprize.repositories.contestant_repository import ContestantRepository, EligibleContestant
from doorprize.repositories.session_repository import SessionRepository
from doorprize.services.draw_service import DrawService, fisher_yates_shuffle
from doorprize.services.prize_service import PrizeService

from tests.base import DatabaseTestCase


class RecordingContestantRepository(ContestantRepository):
    def __init__(self) -> None:
        self.eligible_calls = 0

    def find_eligible(self, session, session_id):  # type: ignore[no-untyped-def]
        self.eligible_calls += 1
        return super().find_eligible(session, session_id)


class RecordingSessionRepository(SessionRepository):
    def __init__(self) -> None:
        self.exists_calls = 0

    def exists(self, session, session_id):  # type: ignore[no-untyped-def]
        self.exists_calls += 1
        return super().exists(session, session_id)


class RunDrawTests(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.service = DrawService(rng=random.Random(7))

    def test_draw_picks_distinct_winners_and_consumes_eligibility(self) -> None:
        session_id = self.seed_session(contestants=5)
        prize_id = self.seed_prize(session_id, name="Headphones", quantity=2)

        with self.Session() as session:
            outcome = self.service.run_draw(session, session_id, prize_id, 2)

        self.assertEqual(outcome.session_id, session_id)
        self.assertEqual(outcome.prize_id, prize_id)
        self.assertEqual(outcome.prize_name, "Headphones")
        self.assertEqual(outcome.requested_quantity, 2)
        self.assertEqual(outcome.eligible_before, 5)
        self.assertEqual(len(outcome.winners), 2)
        self.assertEqual(len({w.contestant_id for w in outcome.winners}), 2)
        self.assertTrue(all(w.prize_name == "Headphones" for w in outcome.winners))
        self.assertIsNotNone(outcome.created_at)

        with self.Session() as session:
            self.assertEqual(ContestantRepository().count_eligible(session, session_id), 3)
            draw = session.get(Draw, outcome.draw_id)
            self.assertIsNotNone(draw)
            stored = {w.contestant_id for w in draw.winners}
        self.assertEqual(stored, {w.contestant_id for w in outcome.winners})

    def test_winner_names_match_contestants(self) -> None:
        session_id = self.seed_session(contestants=3)
        prize_id = self.seed_prize(session_id, quantity=3)

        with self.Session() as session:
            outcome = self.service.run_draw(session, session_id, prize_id, 3)

        with self.Session() as session:
            for winner in outcome.winners:
                self.assertEqual(session.get(Contestant, winner.contestant_id).name, winner.name)

    def test_quantity_above_eligible_is_rejected_without_writes(self) -> None:
        session_id = self.seed_session(contestants=3)
        prize_id = self.seed_prize(session_id, quantity=3)

        with self.Session() as session:
            with self.assertRaises(ValidationError) as ctx:
                self.service.run_draw(session, session_id, prize_id, 5)

        self.assertIn("eligible", ctx.exception.message)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.count_draws(), 0)
        self.assertEqual(self.count_winners(), 0)

    def test_quantity_bound_holds_for_every_excess_value(self) -> None:
        session_id = self.seed_session(contestants=4)
        prize_id = self.seed_prize(session_id, quantity=4)

        with self.Session() as session:
            self.service.run_draw(session, session_id, prize_id, 1)

        # Three eligible remain.
        for k in range(4, 10):
            with self.Session() as session:
                with self.assertRaises(ValidationError):
                    self.service.run_draw(session, session_id, prize_id, k, enforce_prize_remaining=False)
        self.assertEqual(self.count_winners(), 1)

    def test_unknown_session_reads_nothing_else(self) -> None:
        contestants = RecordingContestantRepository()
        service = DrawService(contestants=contestants)

        with self.Session() as session:
            with self.assertRaises(NotFoundError) as ctx:
                service.run_draw(session, "missing-session", "missing-prize", 1)

        self.assertEqual(ctx.exception.message, "Session not found")
        self.assertEqual(contestants.eligible_calls, 0)
        self.assertEqual(self.count_draws(), 0)

    def test_prize_from_another_session_is_not_found(self) -> None:
        session_a = self.seed_session(contestants=2, name="A")
        session_b = self.seed_session(contestants=2, name="B")
        prize_b = self.seed_prize(session_b)

        with self.Session() as session:
            with self.assertRaises(NotFoundError) as ctx:
                self.service.run_draw(session, session_a, prize_b, 1)

        self.assertEqual(ctx.exception.message, "Prize not found")
        self.assertEqual(self.count_winners(), 0)

    def test_invalid_quantities_rejected_before_store_access(self) -> None:
        sessions = RecordingSessionRepository()
        service = DrawService(sessions=sessions)

        for bad in (0, -1, "abc", "2", 1.5, True, None):
            with self.subTest(quantity=bad):
                with self.Session() as session:
                    with self.assertRaises(ValidationError):
                        service.run_draw(session, "any", "any", bad)

        self.assertEqual(sessions.exists_calls, 0)

    def test_remaining_prize_quantity_is_enforced_by_default(self) -> None:
        session_id = self.seed_session(contestants=5)
        prize_id = self.seed_prize(session_id, quantity=2)

        with self.Session() as session:
            self.service.run_draw(session, session_id, prize_id, 2)

        with self.Session() as session:
            with self.assertRaises(ValidationError) as ctx:
                self.service.run_draw(session, session_id, prize_id, 1)
        self.assertIn("remaining", ctx.exception.message)
        self.assertEqual(self.count_winners(), 2)

    def test_remaining_check_can_be_disabled(self) -> None:
        session_id = self.seed_session(contestants=5)
        prize_id = self.seed_prize(session_id, quantity=1)

        with self.Session() as session:
            self.service.run_draw(session, session_id, prize_id, 1)
        with self.Session() as session:
            self.service.run_draw(session, session_id, prize_id, 2, enforce_prize_remaining=False)

        self.assertEqual(self.count_winners(), 3)

    def test_remaining_matches_recomputation_after_each_draw(self) -> None:
        session_id = self.seed_session(contestants=10)
        prize_id = self.seed_prize(session_id, quantity=6)
        prizes = PrizeService()

        expected_remaining = 6
        for k in (1, 2, 3):
            with self.Session() as session:
                self.service.run_draw(session, session_id, prize_id, k)
            expected_remaining -= k

            with self.Session() as session:
                (standing,) = prizes.list_prizes(session, session_id)
                drawn_from_scratch = len(
                    session.scalars(
                        select(Winner).join(Draw, Winner.draw_id == Draw.id).where(Draw.prize_id == prize_id)
                    ).all()
                )
            self.assertEqual(standing.remaining, expected_remaining)
            self.assertEqual(standing.quantity - drawn_from_scratch, expected_remaining)

    def test_prize_rename_does_not_change_recorded_winners(self) -> None:
        session_id = self.seed_session(contestants=2)
        prize_id = self.seed_prize(session_id, name="Bike", quantity=1)

        with self.Session() as session:
            outcome = self.service.run_draw(session, session_id, prize_id, 1)

        with self.Session.begin() as session:
            session.get(Prize, prize_id).name = "Scooter"

        with self.Session() as session:
            winner = session.scalar(select(Winner).where(Winner.draw_id == outcome.draw_id))
            self.assertEqual(winner.prize_name, "Bike")

    def test_store_rejects_second_winner_row_for_a_contestant(self) -> None:
        session_id = self.seed_session(contestants=1)
        prize_id = self.seed_prize(session_id)

        with self.Session() as session:
            outcome = self.service.run_draw(session, session_id, prize_id, 1)

        contestant_id = outcome.winners[0].contestant_id
        with self.Session() as session:
            draw = Draw(session_id=session_id, prize_id=prize_id)
            session.add(draw)
            session.flush()
            session.add(Winner(draw_id=draw.id, contestant_id=contestant_id, prize_name="Again"))
            with self.assertRaises(IntegrityError):
                session.flush()
            session.rollback()

        self.assertEqual(self.count_winners(), 1)

    def test_summary_and_lookup(self) -> None:
        session_id = self.seed_session(contestants=4)
        prize_id = self.seed_prize(session_id, quantity=3)

        with self.Session() as session:
            first = self.service.run_draw(session, session_id, prize_id, 1)
        with self.Session() as session:
            self.service.run_draw(session, session_id, prize_id, 2)

        with self.Session() as session:
            summary = self.service.summary(session, session_id)
            self.assertEqual((summary.draw_count, summary.total_winners), (2, 3))

            draw = self.service.get_draw(session, session_id, first.draw_id)
            self.assertEqual([w.contestant_id for w in draw.winners], [first.winners[0].contestant_id])

            with self.assertRaises(NotFoundError):
                self.service.get_draw(session, session_id, "nope")
            with self.assertRaises(NotFoundError):
                self.service.summary(session, "nope")


class RacingDrawService(DrawService):
    """Runs another draw to completion between the eligibility read and the write."""

    def __init__(self, race, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self._race = race

    def select_winners(self, eligible, quantity):  # type: ignore[no-untyped-def]
        self._race()
        return super().select_winners(eligible, quantity)


class ConcurrentDrawTests(DatabaseTestCase):
    """Two sessions on one file database, so each draw has its own connection."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.database_url = f"sqlite:///{Path(self._tmp.name) / 'draws.db'}"
        super().setUp()

    def tearDown(self) -> None:
        super().tearDown()
        self._tmp.cleanup()

    def test_overlapping_draws_one_wins_other_conflicts(self) -> None:
        session_id = self.seed_session(contestants=2)
        prize_a = self.seed_prize(session_id, name="A", quantity=2)
        prize_b = self.seed_prize(session_id, name="B", quantity=2)

        committed = {}

        def other_draw() -> None:
            with self.Session() as other:
                committed["b"] = DrawService().run_draw(other, session_id, prize_b, 1)

        racer = RacingDrawService(other_draw)
        with self.Session() as session:
            with self.assertRaises(ConflictError) as ctx:
                racer.run_draw(session, session_id, prize_a, 2)

        self.assertEqual(ctx.exception.status_code, 409)

        with self.Session() as session:
            draws = session.scalars(select(Draw)).all()
            winners = session.scalars(select(Winner)).all()
        self.assertEqual([d.prize_id for d in draws], [prize_b])
        self.assertEqual(len(winners), 1)
        self.assertEqual(winners[0].contestant_id, committed["b"].winners[0].contestant_id)
        self.assertEqual(winners[0].prize_name, "B")

    def test_session_stays_usable_after_conflict(self) -> None:
        session_id = self.seed_session(contestants=3)
        prize_a = self.seed_prize(session_id, name="A", quantity=3)
        prize_b = self.seed_prize(session_id, name="B", quantity=1)

        def other_draw() -> None:
            with self.Session() as other:
                DrawService().run_draw(other, session_id, prize_b, 1)

        with self.Session() as session:
            with self.assertRaises(ConflictError):
                RacingDrawService(other_draw).run_draw(session, session_id, prize_a, 3)

            # Caller refreshes and retries with what is left.
            outcome = DrawService().run_draw(session, session_id, prize_a, 2)

        self.assertEqual(outcome.eligible_before, 2)
        self.assertEqual(self.count_winners(), 3)


class ShuffleTests(unittest.TestCase):
    def test_input_is_not_mutated(self) -> None:
        items = [1, 2, 3, 4]
        out = fisher_yates_shuffle(items, random.Random(1))
        self.assertEqual(items, [1, 2, 3, 4])
        self.assertEqual(sorted(out), items)

    def test_trivial_inputs(self) -> None:
        self.assertEqual(fisher_yates_shuffle([]), [])
        self.assertEqual(fisher_yates_shuffle(["only"]), ["only"])

    def test_every_permutation_equally_likely(self) -> None:
        rng = random.Random(1234)
        trials = 60_000
        counts = Counter(tuple(fisher_yates_shuffle("abc", rng)) for _ in range(trials))

        self.assertEqual(set(counts), set(itertools.permutations("abc")))
        expected = trials / 6
        for perm, seen in counts.items():
            self.assertLess(abs(seen - expected), expected * 0.05, perm)

    def test_selection_frequency_close_to_k_over_n(self) -> None:
        pool = [EligibleContestant(id=str(i), name=f"c{i}") for i in range(10)]
        service = DrawService(rng=random.Random(99))
        trials, k = 20_000, 3

        counts: Counter[str] = Counter()
        for _ in range(trials):
            picked = service.select_winners(pool, k)
            self.assertEqual(len({c.id for c in picked}), k)
            counts.update(c.id for c in picked)

        expected = trials * k / len(pool)
        self.assertEqual(len(counts), len(pool))
        for contestant_id, seen in counts.items():
            self.assertLess(abs(seen - expected), 400, contestant_id)


if __name__ == "__main__":
    unittest.main()
