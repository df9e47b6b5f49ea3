from __future__ import annotations

from ..common.validators import require_date
from ..core.exceptions import ValidationError
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_range(self, *, start_date: str, end_date: str) -> list[dict]:
        start_date = require_date(start_date, "start")
        end_date = require_date(end_date, "end")
        if end_date < start_date:
            raise ValidationError("end must be >= start")
        return [h.to_dict() for h in self._holidays.find_in_range(start_date=start_date, end_date=end_date)]
