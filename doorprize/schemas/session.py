"""Schemas for raffle sessions."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from doorprize.schemas.common import Timestamp


class SessionSchema(Schema):
    id = fields.Str(required=True)
    name = fields.Str(required=True)
    created_at = Timestamp(data_key="createdAt")


class SessionCreateSchema(Schema):
    """Validate create-session payload."""

    name = fields.Str(required=True, validate=validate.Length(min=1, error="Session name required"))


class SessionOverviewSchema(Schema):
    id = fields.Str(attribute="session.id")
    name = fields.Str(attribute="session.name")
    created_at = Timestamp(attribute="session.created_at", data_key="createdAt")
    contestant_count = fields.Int(data_key="contestants")
    eligible_count = fields.Int(data_key="eligible")
    prize_count = fields.Int(data_key="prizes")
    draw_count = fields.Int(data_key="draws")
    winner_count = fields.Int(data_key="winners")
