from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from ..common.datetime_utils import add_days, today_str
from ..core.constants import PLANNING_WINDOW_DAYS
from ..core.enums import Role


@dataclass(frozen=True)
class EditWindowPolicy:
    """Which dates an actor may change.

    Admins have no date restriction. Members may edit the inclusive planning
    window [today, today + window_days], compared as UTC date strings.
    Weekends and holidays are not considered here.
    """

    window_days: int = PLANNING_WINDOW_DAYS
    today: Callable[[], str] = field(default=today_str)

    def window_end(self) -> str:
        return add_days(self.today(), self.window_days)

    def is_past(self, date: str) -> bool:
        return date < self.today()

    def is_editable(self, date: str, role: Role) -> bool:
        if role == Role.ADMIN:
            return True
        return self.today() <= date <= self.window_end()
