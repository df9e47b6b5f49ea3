from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository
from ..attendance.resolver import resolve
from ..common.datetime_utils import iter_date_range, month_range, today_str
from ..core.exceptions import ValidationError
from ..holidays.repository import HolidayRepository
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class TeamCalendarService:
    """Month-wide (user x date) view over all active users."""

    def __init__(
        self,
        users: UserRepository,
        entries: AttendanceRepository,
        holidays: HolidayRepository,
        *,
        today: Callable[[], str] = today_str,
    ):
        self._users = users
        self._entries = entries
        self._holidays = holidays
        self._today = today

    def month_view(self, *, month: str) -> dict:
        try:
            start_date, end_date = month_range(month)
        except ValueError:
            raise ValidationError("month query param is required in YYYY-MM format")

        users = self._users.list_active()
        entries = self._entries.find_for_users(
            user_ids=[u.user_id for u in users],
            start_date=start_date,
            end_date=end_date,
        )
        holiday_dates = {h.date for h in self._holidays.find_in_range(start_date=start_date, end_date=end_date)}

        by_user: dict[int, dict[str, AttendanceEntry]] = defaultdict(dict)
        for e in entries:
            by_user[e.user_id][e.date] = e

        dates = iter_date_range(start_date, end_date)
        team = []
        for user in users:
            user_entries = by_user.get(user.user_id, {})
            team.append(
                {
                    "user": {
                        "id": user.user_id,
                        "name": user.name,
                        "email": user.email,
                        "role": user.role.value,
                    },
                    "entries": {d: self._entry_cell(e) for d, e in sorted(user_entries.items())},
                    "days": {d: resolve(d, holiday_dates, user_entries.get(d)).value for d in dates},
                }
            )

        logger.debug("Team view %s: %d users, %d entries", month, len(users), len(entries))
        return {
            "month": month,
            "startDate": start_date,
            "endDate": end_date,
            "today": self._today(),
            "team": team,
        }

    @staticmethod
    def _entry_cell(entry: AttendanceEntry) -> dict:
        cell = {"status": entry.status.value}
        if entry.note:
            cell["note"] = entry.note
        if entry.start_time:
            cell["startTime"] = entry.start_time
        if entry.end_time:
            cell["endTime"] = entry.end_time
        return cell
