from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from office_presence.attendance.model import KEEP, AttendanceEntry, FieldChange
from office_presence.attendance.policy import EditWindowPolicy
from office_presence.container import wire_services
from office_presence.core.enums import EntryStatus, Role
from office_presence.holidays.model import Holiday
from office_presence.users.model import Actor, User

TODAY = "2026-02-01"  # a Sunday
PASSWORD_HASH = generate_password_hash("secret123")

ADMIN_ID, ALICE_ID, BOB_ID, CAROL_ID = 1, 2, 3, 4


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, User]
    favorites: dict[int, list[int]] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.email == email), None)

    def list_active(self):
        return sorted((u for u in self.users_by_id.values() if u.is_active), key=lambda u: u.name)

    def list_favorites(self, user_id: int):
        return [self.users_by_id[f] for f in self.favorites.get(user_id, [])]

    def add_favorite(self, *, user_id: int, favorite_id: int) -> None:
        favs = self.favorites.setdefault(user_id, [])
        if favorite_id not in favs:
            favs.append(favorite_id)

    def remove_favorite(self, *, user_id: int, favorite_id: int) -> bool:
        favs = self.favorites.get(user_id, [])
        if favorite_id in favs:
            favs.remove(favorite_id)
            return True
        return False


@dataclass
class InMemoryEntries:
    rows: dict[tuple[int, str], AttendanceEntry] = field(default_factory=dict)
    writes: list[tuple[int, str]] = field(default_factory=list)
    _seq: int = 0

    def _stamp(self) -> datetime:
        self._seq += 1
        return datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc) + timedelta(seconds=self._seq)

    def seed(self, user_id: int, date: str, status: EntryStatus, **fields) -> AttendanceEntry:
        self._seq += 1
        entry = AttendanceEntry(
            entry_id=self._seq,
            user_id=user_id,
            date=date,
            status=status,
            updated_at=self._stamp(),
            **fields,
        )
        self.rows[(user_id, date)] = entry
        return entry

    def find_one(self, *, user_id: int, date: str) -> Optional[AttendanceEntry]:
        return self.rows.get((user_id, date))

    def upsert(self, *, user_id, date, status, note, start_time, end_time) -> AttendanceEntry:
        existing = self.rows.get((user_id, date))

        def merged(update, current):
            if update is KEEP:
                return current
            return None if isinstance(update, FieldChange) else update

        if existing is None:
            self._seq += 1
            existing = AttendanceEntry(entry_id=self._seq, user_id=user_id, date=date, status=status)
        entry = replace(
            existing,
            status=status,
            note=merged(note, existing.note),
            start_time=merged(start_time, existing.start_time),
            end_time=merged(end_time, existing.end_time),
            updated_at=self._stamp(),
        )
        self.rows[(user_id, date)] = entry
        self.writes.append((user_id, date))
        return entry

    def delete(self, *, user_id: int, date: str) -> bool:
        return self.rows.pop((user_id, date), None) is not None

    def find_range(self, *, user_id: int, start_date: str, end_date: str):
        return sorted(
            (e for (uid, d), e in self.rows.items() if uid == user_id and start_date <= d <= end_date),
            key=lambda e: e.date,
        )

    def find_for_dates(self, *, user_id: int, dates):
        wanted = set(dates)
        return [e for (uid, d), e in self.rows.items() if uid == user_id and d in wanted]

    def find_for_users(self, *, user_ids, start_date: str, end_date: str):
        ids = set(user_ids)
        return [e for (uid, d), e in self.rows.items() if uid in ids and start_date <= d <= end_date]


@dataclass
class InMemoryHolidays:
    holidays: list[Holiday] = field(default_factory=list)

    def find_in_range(self, *, start_date: str, end_date: str):
        return sorted((h for h in self.holidays if start_date <= h.date <= end_date), key=lambda h: h.date)


def _user(user_id: int, name: str, role: Role, *, active: bool = True) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{name.split()[0].lower()}@example.com",
        password_hash=PASSWORD_HASH,
        role=role,
        is_active=active,
    )


@pytest.fixture()
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        users_by_id={
            ADMIN_ID: _user(ADMIN_ID, "Admin Demo", Role.ADMIN),
            ALICE_ID: _user(ALICE_ID, "Alice Member", Role.MEMBER),
            BOB_ID: _user(BOB_ID, "Bob Member", Role.MEMBER),
            CAROL_ID: _user(CAROL_ID, "Carol Former", Role.MEMBER, active=False),
        }
    )


@pytest.fixture()
def entries_repo() -> InMemoryEntries:
    return InMemoryEntries()


@pytest.fixture()
def holidays_repo() -> InMemoryHolidays:
    return InMemoryHolidays(holidays=[Holiday(holiday_id=1, date="2026-02-05", name="Company Day")])


@pytest.fixture()
def policy() -> EditWindowPolicy:
    return EditWindowPolicy(window_days=90, today=lambda: TODAY)


@pytest.fixture()
def container(users_repo, entries_repo, holidays_repo, policy):
    return wire_services(
        users_repo=users_repo,
        attendance_repo=entries_repo,
        holidays_repo=holidays_repo,
        policy=policy,
    )


@pytest.fixture()
def admin() -> Actor:
    return Actor(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture()
def alice() -> Actor:
    return Actor(user_id=ALICE_ID, role=Role.MEMBER)
