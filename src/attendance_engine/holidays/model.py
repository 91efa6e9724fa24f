from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from ..core.enums import HolidayType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Holiday:
    date: str
    name: str
    type: HolidayType = HolidayType.FULL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Holiday":
        try:
            holiday_type = HolidayType(str(data.get("type") or HolidayType.FULL.value).lower())
        except ValueError:
            holiday_type = HolidayType.FULL
        return cls(date=str(data["date"]), name=str(data.get("name") or ""), type=holiday_type)

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type.value}


def build_holiday_map(holidays: Iterable[Union[Holiday, Mapping[str, Any]]]) -> dict[str, Holiday]:
    """Reduce a holiday list to a ``date -> Holiday`` lookup (last one wins on duplicates)."""
    out: dict[str, Holiday] = {}
    for h in holidays:
        holiday = h if isinstance(h, Holiday) else Holiday.from_dict(h)
        if holiday.date in out:
            logger.warning("Duplicate holiday on %s: %r replaces %r", holiday.date, holiday.name, out[holiday.date].name)
        out[holiday.date] = holiday
    return out
