"""Schemas for contestants and roster import."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class ContestantSchema(Schema):
    id = fields.Str(required=True)
    name = fields.Str(required=True)
    has_prize = fields.Function(lambda c: c.winner is not None, data_key="hasPrize")
    prize_name = fields.Function(
        lambda c: c.winner.prize_name if c.winner is not None else None,
        data_key="prizeName",
    )


class ContestantCreateSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1, error="Contestant name is required"))


class RosterSchema(Schema):
    session_id = fields.Str(data_key="sessionId")
    total = fields.Int()
    eligible = fields.Int()
    contestants = fields.List(fields.Nested(ContestantSchema))


class ImportResultSchema(Schema):
    session_id = fields.Str(data_key="sessionId")
    total_rows = fields.Int(data_key="totalRows")
    valid_names = fields.Int(data_key="validNames")
    inserted = fields.Int()
    skipped_duplicates_in_file = fields.Int(data_key="skippedDuplicatesInFile")
    skipped_duplicates_in_db = fields.Int(data_key="skippedDuplicatesInDb")
