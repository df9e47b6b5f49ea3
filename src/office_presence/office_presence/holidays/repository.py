from __future__ import annotations

from typing import Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def find_in_range(self, *, start_date: str, end_date: str) -> Sequence[Holiday]:
        """Holidays ordered by date, bounds inclusive."""

        raise NotImplementedError
