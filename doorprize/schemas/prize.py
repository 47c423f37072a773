"""Schemas for prizes."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from doorprize.schemas.common import Timestamp, coerce_int_string


class PrizeCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, error="Prize name is required"))
    quantity = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="Quantity must be at least 1"),
        error_messages={"invalid": "Quantity must be an integer"},
    )

    @pre_load
    def _coerce_quantity(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return coerce_int_string(data, "quantity")


class CreatedPrizeSchema(Schema):
    id = fields.Str(attribute="prize.id")
    name = fields.Str(attribute="prize.name")
    quantity = fields.Int(attribute="prize.quantity")
    eligible_at_creation = fields.Int(data_key="eligibleAtCreation")
    created_at = Timestamp(attribute="prize.created_at", data_key="createdAt")


class PrizeStandingSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    quantity = fields.Int()
    created_at = Timestamp(data_key="createdAt")
    already_drawn = fields.Int(data_key="alreadyDrawn")
    remaining = fields.Int()
