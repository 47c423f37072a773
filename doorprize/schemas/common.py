"""Fields shared across schemas."""

from __future__ import annotations

import re
from typing import Any

from marshmallow import fields

from doorprize.utils.timefmt import iso_utc

_INT_STRING = re.compile(r"^\s*[+-]?\d+\s*$")


class Timestamp(fields.Field):
    """Serialize a datetime as UTC ISO 8601 (``...Z``)."""

    def _serialize(self, value: Any, attr: str | None, obj: Any, **kwargs: Any) -> str | None:
        return iso_utc(value)


def coerce_int_string(data: Any, key: str) -> Any:
    """Turn ``"3"`` into ``3`` so strict Integer fields accept numeric strings.

    Anything else (``"2.5"``, ``"abc"``, floats) is left for the field to reject.
    """

    if not isinstance(data, dict):
        return data
    value = data.get(key)
    if isinstance(value, str) and _INT_STRING.match(value):
        data = dict(data)
        data[key] = int(value)
    return data
