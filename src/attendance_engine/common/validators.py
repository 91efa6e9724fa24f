from __future__ import annotations

from datetime import date
from typing import Any

from ..core.exceptions import TimeParseError, ValidationError
from .datetime_utils import parse_iso_date, parse_month_year


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_iso_date(value: Any, field_name: str) -> date:
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text)
    except TimeParseError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def require_month_year(value: Any, field_name: str = "monthYear") -> str:
    text = require_non_empty(value, field_name)
    try:
        month, year = parse_month_year(text)
    except TimeParseError:
        raise ValidationError(f"{field_name} must be in MM-YYYY format")
    return f"{month:02d}-{year}"
