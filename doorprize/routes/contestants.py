"""Contestant routes."""

from __future__ import annotations

from flask import Blueprint, request

from doorprize.db import get_session
from doorprize.errors import ValidationError
from doorprize.schemas.contestant import (
    ContestantCreateSchema,
    ContestantSchema,
    ImportResultSchema,
    RosterSchema,
)
from doorprize.services.contestant_service import ContestantService
from doorprize.utils.responses import ok

contestants_bp = Blueprint("contestants", __name__)

_contestant_schema = ContestantSchema()
_create_schema = ContestantCreateSchema()
_roster_schema = RosterSchema()
_import_schema = ImportResultSchema()
_service = ContestantService()

_TRUTHY = {"true", "1", "yes"}


@contestants_bp.get("/sessions/<session_id>/contestants")
def list_contestants(session_id: str):
    """List contestants by name; ``?eligible=true`` keeps only those without a prize."""

    eligible_only = (request.args.get("eligible") or "").strip().lower() in _TRUTHY
    roster = _service.roster(get_session(), session_id, eligible_only=eligible_only)
    return ok(_roster_schema.dump(roster))


@contestants_bp.get("/sessions/<session_id>/contestants/count")
def count_contestants(session_id: str):
    count = _service.count(get_session(), session_id)
    return ok({"sessionId": session_id, "count": count})


@contestants_bp.post("/sessions/<session_id>/contestants")
def create_contestant(session_id: str):
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    contestant = _service.add_contestant(get_session(), session_id, str(data["name"]))
    return ok(_contestant_schema.dump(contestant), status_code=201)


@contestants_bp.post("/sessions/<session_id>/contestants/import")
def import_contestants(session_id: str):
    """Import contestants from an uploaded CSV (multipart field ``file``)."""

    upload = request.files.get("file")
    if upload is None:
        raise ValidationError("No CSV file uploaded")

    try:
        csv_text = upload.read().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationError("CSV file must be UTF-8 encoded") from e

    result = _service.import_csv(get_session(), session_id, csv_text)
    return ok(_import_schema.dump(result))
