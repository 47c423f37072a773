"""Draw routes."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from doorprize.db import get_session
from doorprize.schemas.draw import (
    DrawDetailSchema,
    DrawRequestSchema,
    DrawResponseSchema,
    DrawSummarySchema,
)
from doorprize.services.draw_service import DrawService
from doorprize.utils.responses import ok

draws_bp = Blueprint("draws", __name__)

_request_schema = DrawRequestSchema()
_response_schema = DrawResponseSchema()
_summary_schema = DrawSummarySchema()
_detail_schema = DrawDetailSchema()
_service = DrawService()


@draws_bp.post("/sessions/<session_id>/draws")
def run_draw(session_id: str):
    """Draw winners for a prize.

    The payload is validated before the database is touched. A 409 means a
    concurrent draw took one of the selected contestants; the client should
    refresh and try again.
    """

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    outcome = _service.run_draw(
        get_session(),
        session_id,
        str(data["prize_id"]),
        int(data["quantity"]),
        enforce_prize_remaining=bool(current_app.config.get("ENFORCE_PRIZE_REMAINING", True)),
    )
    return ok(_response_schema.dump(outcome), status_code=201)


@draws_bp.get("/sessions/<session_id>/draws")
def draw_summary(session_id: str):
    summary = _service.summary(get_session(), session_id)
    return ok(_summary_schema.dump(summary))


@draws_bp.get("/sessions/<session_id>/draws/<draw_id>")
def get_draw(session_id: str, draw_id: str):
    draw = _service.get_draw(get_session(), session_id, draw_id)
    return ok(_detail_schema.dump(draw))
