"""Prize routes."""

from __future__ import annotations

from flask import Blueprint, request

from doorprize.db import get_session
from doorprize.schemas.prize import CreatedPrizeSchema, PrizeCreateSchema, PrizeStandingSchema
from doorprize.services.prize_service import PrizeService
from doorprize.utils.responses import ok

prizes_bp = Blueprint("prizes", __name__)

_create_schema = PrizeCreateSchema()
_created_schema = CreatedPrizeSchema()
_standings_schema = PrizeStandingSchema(many=True)
_service = PrizeService()


@prizes_bp.get("/sessions/<session_id>/prizes")
def list_prizes(session_id: str):
    """List prizes with how many units are drawn and remaining."""

    standings = _service.list_prizes(get_session(), session_id)
    return ok({"sessionId": session_id, "prizes": _standings_schema.dump(standings)})


@prizes_bp.post("/sessions/<session_id>/prizes")
def create_prize(session_id: str):
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    created = _service.create_prize(
        get_session(),
        session_id,
        name=str(data["name"]),
        quantity=int(data["quantity"]),
    )
    return ok(_created_schema.dump(created), status_code=201)
