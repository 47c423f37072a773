"""Session routes."""

from __future__ import annotations

from flask import Blueprint, request

from doorprize.db import get_session
from doorprize.schemas.session import SessionCreateSchema, SessionOverviewSchema, SessionSchema
from doorprize.services.session_service import SessionService
from doorprize.utils.responses import ok

sessions_bp = Blueprint("sessions", __name__)

_session_schema = SessionSchema()
_sessions_schema = SessionSchema(many=True)
_create_schema = SessionCreateSchema()
_overview_schema = SessionOverviewSchema()
_service = SessionService()


@sessions_bp.get("/sessions")
def list_sessions():
    """List all sessions, oldest first."""

    sessions = _service.list_sessions(get_session())
    return ok(_sessions_schema.dump(sessions))


@sessions_bp.post("/sessions")
def create_session():
    """Create a new session."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    raffle = _service.create_session(get_session(), name=str(data["name"]))

    # Commit occurs in teardown if no exception.
    return ok(_session_schema.dump(raffle), status_code=201)


@sessions_bp.get("/sessions/<session_id>")
def get_session_overview(session_id: str):
    overview = _service.overview(get_session(), session_id)
    return ok(_overview_schema.dump(overview))
