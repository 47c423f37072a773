from __future__ import annotations

import unittest

from sqlalchemy import func, select

from doorprize import create_app
from doorprize.db import create_app_engine, make_session_factory
from doorprize.models import Base, Contestant, Draw, Prize, RaffleSession, Winner


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database per test, no Flask app."""

    database_url = "sqlite://"

    def setUp(self) -> None:
        self.engine = create_app_engine(self.database_url)
        Base.metadata.create_all(self.engine)
        self.Session = make_session_factory(self.engine)

    def tearDown(self) -> None:
        self.engine.dispose()

    def seed_session(self, *, contestants: int = 0, name: str = "Year-end party") -> str:
        with self.Session.begin() as session:
            raffle = RaffleSession(name=name)
            session.add(raffle)
            session.flush()
            session.add_all(
                Contestant(session_id=raffle.id, name=f"Contestant {i:02d}") for i in range(contestants)
            )
            return raffle.id

    def seed_prize(self, session_id: str, *, name: str = "Mug", quantity: int = 1) -> str:
        with self.Session.begin() as session:
            prize = Prize(session_id=session_id, name=name, quantity=quantity)
            session.add(prize)
            session.flush()
            return prize.id

    def count_rows(self, model: type) -> int:
        with self.Session() as session:
            return int(session.scalar(select(func.count()).select_from(model)) or 0)

    def count_winners(self) -> int:
        return self.count_rows(Winner)

    def count_draws(self) -> int:
        return self.count_rows(Draw)


class ApiTestCase(unittest.TestCase):
    """Flask test client over an in-memory database."""

    config_overrides: dict[str, object] = {}

    def setUp(self) -> None:
        self.app = create_app({"TESTING": True, "DATABASE_URL": "sqlite://", **self.config_overrides})
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        self.app.extensions["engine"].dispose()

    def data(self, response) -> object:  # type: ignore[no-untyped-def]
        body = response.get_json()
        self.assertIsNotNone(body, response.data)
        return body["data"]

    def error(self, response) -> dict:  # type: ignore[no-untyped-def]
        body = response.get_json()
        self.assertFalse(body["success"])
        return body["error"]

    def create_session(self, name: str = "Gala") -> str:
        resp = self.client.post("/api/sessions", json={"name": name})
        self.assertEqual(resp.status_code, 201, resp.data)
        return self.data(resp)["id"]

    def add_contestants(self, session_id: str, *names: str) -> None:
        for name in names:
            resp = self.client.post(f"/api/sessions/{session_id}/contestants", json={"name": name})
            self.assertEqual(resp.status_code, 201, resp.data)

    def create_prize(self, session_id: str, name: str, quantity: int) -> str:
        resp = self.client.post(
            f"/api/sessions/{session_id}/prizes",
            json={"name": name, "quantity": quantity},
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        return self.data(resp)["id"]
