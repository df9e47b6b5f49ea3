from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import format_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_in_range(self, *, start_date: str, end_date: str) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (start_date, end_date),
            )
            return [
                Holiday(
                    holiday_id=int(r["holiday_id"]),
                    date=format_date(r["holiday_date"]),
                    name=r["name"],
                )
                for r in fetchall(cur)
            ]
