from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping


def sanitize(value: Any) -> Any:
    """Make a value safe for a JSON document store.

    Enums become their values, dates ISO text, tuples lists; records exposing
    ``to_dict()`` are expanded. Absent values are always explicit ``None``.
    """

    if hasattr(value, "to_dict"):
        return sanitize(value.to_dict())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): sanitize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize(v) for v in value]
    return value
