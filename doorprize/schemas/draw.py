"""Schemas for the draw API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from doorprize.schemas.common import Timestamp, coerce_int_string


class DrawRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    prize_id = fields.Str(
        required=True,
        data_key="prizeId",
        validate=validate.Length(min=1, error="prizeId is required"),
    )
    quantity = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="quantity must be at least 1"),
        error_messages={"invalid": "quantity must be an integer"},
    )

    @pre_load
    def _coerce_quantity(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return coerce_int_string(data, "quantity")


class PrizeRefSchema(Schema):
    id = fields.Str()
    name = fields.Str()


class DrawnWinnerSchema(Schema):
    contestant_id = fields.Str(data_key="contestantId")
    name = fields.Str()
    prize_name = fields.Str(data_key="prizeName")


class DrawResponseSchema(Schema):
    """Shape returned by a successful draw (a DrawOutcome)."""

    draw_id = fields.Str(data_key="drawId")
    session_id = fields.Str(data_key="sessionId")
    prize = fields.Function(lambda o: {"id": o.prize_id, "name": o.prize_name})
    requested_quantity = fields.Int(data_key="requestedQuantity")
    eligible_before = fields.Int(data_key="eligibleBefore")
    winners = fields.List(fields.Nested(DrawnWinnerSchema))
    created_at = Timestamp(data_key="createdAt")


class DrawSummarySchema(Schema):
    session_id = fields.Str(data_key="sessionId")
    draw_count = fields.Int(data_key="drawCount")
    total_winners = fields.Int(data_key="totalWinners")


class StoredWinnerSchema(Schema):
    contestant_id = fields.Str(data_key="contestantId")
    name = fields.Str(attribute="contestant.name")
    prize_name = fields.Str(data_key="prizeName")


class DrawDetailSchema(Schema):
    """A stored Draw with its winners, for presentation screens."""

    draw_id = fields.Str(attribute="id", data_key="drawId")
    session_id = fields.Str(data_key="sessionId")
    created_at = Timestamp(data_key="createdAt")
    prize = fields.Nested(PrizeRefSchema)
    winners = fields.List(fields.Nested(StoredWinnerSchema))
