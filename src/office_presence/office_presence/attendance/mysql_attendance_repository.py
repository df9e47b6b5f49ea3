from __future__ import annotations

from datetime import timezone
from typing import Any, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import format_date
from ..core.enums import EntryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import KEEP, AttendanceEntry, FieldChange, FieldUpdate
from .repository import AttendanceRepository

_COLUMNS = "entry_id, user_id, entry_date, status, note, start_time, end_time, updated_at"


def _to_entry(r: Dict[str, Any]) -> AttendanceEntry:
    entry_date = r["entry_date"]
    updated_at = r.get("updated_at")
    # sessions run in UTC; the driver returns naive datetimes
    if updated_at is not None and updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    return AttendanceEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        date=entry_date if isinstance(entry_date, str) else format_date(entry_date),
        status=EntryStatus(r["status"]),
        note=r.get("note"),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        updated_at=updated_at,
    )


def _insert_value(update: FieldUpdate) -> Optional[str]:
    return None if isinstance(update, FieldChange) else update


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        user_id: int,
        date: str,
        status: EntryStatus,
        note: FieldUpdate,
        start_time: FieldUpdate,
        end_time: FieldUpdate,
    ) -> AttendanceEntry:
        # Fields marked KEEP are left untouched when the row already exists.
        updates = ["status=VALUES(status)"]
        for column, update in (("note", note), ("start_time", start_time), ("end_time", end_time)):
            if update is not KEEP:
                updates.append(f"{column}=VALUES({column})")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_entries(user_id, entry_date, status, note, start_time, end_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE {", ".join(updates)}
                """,
                (
                    int(user_id),
                    date,
                    status.value,
                    _insert_value(note),
                    _insert_value(start_time),
                    _insert_value(end_time),
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_entries WHERE user_id=%s AND entry_date=%s",
                (int(user_id), date),
            )
            return _to_entry(fetchone(cur))

    def delete(self, *, user_id: int, date: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_entries WHERE user_id=%s AND entry_date=%s",
                (int(user_id), date),
            )
            return cur.rowcount > 0

    def find_range(self, *, user_id: int, start_date: str, end_date: str) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE user_id=%s AND entry_date BETWEEN %s AND %s
                ORDER BY entry_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def find_for_dates(self, *, user_id: int, dates: Iterable[str]) -> Sequence[AttendanceEntry]:
        dates = list(dict.fromkeys(dates))
        if not dates:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE user_id=%s AND entry_date IN ({in_clause(dates)})
                """,
                (int(user_id), *dates),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def find_for_users(self, *, user_ids: Iterable[int], start_date: str, end_date: str) -> Sequence[AttendanceEntry]:
        ids = [int(u) for u in user_ids]
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE user_id IN ({in_clause(ids)}) AND entry_date BETWEEN %s AND %s
                """,
                (*ids, start_date, end_date),
            )
            return [_to_entry(r) for r in fetchall(cur)]
