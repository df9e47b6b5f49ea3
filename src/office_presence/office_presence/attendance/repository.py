from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from ..core.enums import EntryStatus
from .model import AttendanceEntry, FieldUpdate


class AttendanceRepository(Protocol):
    """Store for attendance entries, unique per (user_id, date)."""

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
        """Create or replace the entry; raises ConflictError on a duplicate-key race."""

        raise NotImplementedError

    def delete(self, *, user_id: int, date: str) -> bool:
        """Returns whether a record existed."""

        raise NotImplementedError

    def find_range(self, *, user_id: int, start_date: str, end_date: str) -> Sequence[AttendanceEntry]:
        """Entries ordered by date, bounds inclusive."""

        raise NotImplementedError

    def find_for_dates(self, *, user_id: int, dates: Iterable[str]) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def find_for_users(self, *, user_ids: Iterable[int], start_date: str, end_date: str) -> Sequence[AttendanceEntry]:
        """Unordered; caller groups by user_id."""

        raise NotImplementedError
