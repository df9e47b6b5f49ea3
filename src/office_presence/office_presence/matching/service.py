from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import AbstractSet, Any, Callable, Mapping, Optional, Sequence

from ..attendance.model import CLEAR, AttendanceEntry
from ..attendance.policy import EditWindowPolicy
from ..attendance.repository import AttendanceRepository
from ..attendance.resolver import resolve
from ..attendance.service import AttendanceService
from ..common.datetime_utils import is_valid_date_str, is_weekend, iter_date_range
from ..core.enums import EffectiveStatus, EntryStatus, MatchClassification, Role
from ..core.exceptions import StaleScheduleError, ValidationError
from ..holidays.repository import HolidayRepository
from ..users.model import Actor
from ..users.repository import UserRepository
from ..users.service import UserDirectory
from .model import (
    MSG_ALREADY_MATCHING,
    MSG_HOLIDAY,
    MSG_INVALID_DATE,
    MSG_LEAVE_CONFLICT,
    MSG_LOCKED,
    MSG_WEEKEND,
    MSG_WRITE_FAILED,
    ApplyResult,
    DateResult,
    MatchPreview,
    MatchPreviewDate,
)

logger = logging.getLogger(__name__)


def gather(*calls: Callable[[], Any]) -> list[Any]:
    """Run independent reads concurrently and return results in call order."""
    with ThreadPoolExecutor(max_workers=max(1, len(calls))) as pool:
        futures = [pool.submit(call) for call in calls]
        return [f.result() for f in futures]


def classify_date(
    date: str,
    *,
    favorite_status: EffectiveStatus,
    user_status: EffectiveStatus,
    holiday_dates: AbstractSet[str],
    role: Role,
    policy: EditWindowPolicy,
) -> MatchPreviewDate:
    """Classify one candidate date; the first matching rule wins."""

    def build(classification: MatchClassification, *, can_override: bool = False, reason: Optional[str] = None):
        return MatchPreviewDate(
            date=date,
            classification=classification,
            favorite_status=favorite_status,
            user_status=user_status,
            can_override=can_override,
            reason=reason,
        )

    if is_weekend(date):
        return build(MatchClassification.WEEKEND, reason="Weekend")
    if date in holiday_dates:
        return build(MatchClassification.HOLIDAY, reason="Public holiday")
    if role != Role.ADMIN and not policy.is_editable(date, role):
        return build(MatchClassification.LOCKED, reason="Outside editing window")
    if user_status == EffectiveStatus.OFFICE:
        return build(MatchClassification.ALREADY_MATCHING)
    if user_status == EffectiveStatus.LEAVE:
        return build(MatchClassification.CONFLICT_LEAVE, can_override=True, reason="You have leave on this day")
    return build(MatchClassification.WILL_BE_ADDED)


@dataclass(frozen=True)
class _ApplySnapshot:
    """Read-only facts gathered before the write loop."""

    holiday_dates: frozenset[str]
    user_entries: Mapping[str, AttendanceEntry]


class ScheduleMatchService:
    """Aligns a user's office days with a favorite colleague's.

    ``preview`` is read-only. ``apply`` re-checks the favorite's schedule and
    refuses the whole batch if any requested date changed; after that gate
    each date is written independently.
    """

    def __init__(
        self,
        entries: AttendanceRepository,
        holidays: HolidayRepository,
        users: UserRepository,
        attendance: AttendanceService,
    ):
        self._entries = entries
        self._holidays = holidays
        self._directory = UserDirectory(users)
        self._attendance = attendance
        self._policy = attendance.policy

    @staticmethod
    def _require_user_id(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError("Valid favoriteUserId is required")
        return value

    def preview(self, *, actor: Actor, favorite_user_id: int, start_date: str, end_date: str) -> MatchPreview:
        favorite_user_id = self._require_user_id(favorite_user_id)
        if not is_valid_date_str(start_date) or not is_valid_date_str(end_date):
            raise ValidationError("Valid startDate and endDate required (YYYY-MM-DD)")
        if end_date < start_date:
            raise ValidationError("endDate must be >= startDate")

        favorite = self._directory.require_active(favorite_user_id, label="Favorite user")

        favorite_entries, user_entries, holidays = gather(
            lambda: self._entries.find_range(user_id=favorite_user_id, start_date=start_date, end_date=end_date),
            lambda: self._entries.find_range(user_id=actor.user_id, start_date=start_date, end_date=end_date),
            lambda: self._holidays.find_in_range(start_date=start_date, end_date=end_date),
        )

        favorite_map = {e.date: e for e in favorite_entries}
        user_map = {e.date: e for e in user_entries}
        holiday_dates = frozenset(h.date for h in holidays)

        dates: list[MatchPreviewDate] = []
        for date in iter_date_range(start_date, end_date):
            favorite_status = resolve(date, holiday_dates, favorite_map.get(date))
            if favorite_status != EffectiveStatus.OFFICE:
                continue
            dates.append(
                classify_date(
                    date,
                    favorite_status=favorite_status,
                    user_status=resolve(date, holiday_dates, user_map.get(date)),
                    holiday_dates=holiday_dates,
                    role=actor.role,
                    policy=self._policy,
                )
            )

        stamps = [e.updated_at for e in favorite_entries if e.updated_at is not None]
        logger.info(
            "Match preview user=%s favorite=%s range=%s..%s candidates=%d",
            actor.user_id,
            favorite_user_id,
            start_date,
            end_date,
            len(dates),
        )
        return MatchPreview(favorite_user=favorite, dates=dates, last_updated=max(stamps) if stamps else None)

    def apply(
        self,
        *,
        actor: Actor,
        favorite_user_id: int,
        dates: Sequence[str],
        override_leave: bool = False,
    ) -> ApplyResult:
        favorite_user_id = self._require_user_id(favorite_user_id)
        if not isinstance(dates, (list, tuple)) or not dates:
            raise ValidationError("dates array is required")
        if not all(isinstance(d, str) for d in dates):
            raise ValidationError("dates must be YYYY-MM-DD strings")

        self._directory.require_active(favorite_user_id, label="Favorite user")

        requested = list(dates)
        snapshot = self._check_favorite_unchanged(actor, favorite_user_id, requested)
        result = self._write_dates(actor, requested, snapshot, override_leave=bool(override_leave))

        logger.info(
            "Match apply user=%s favorite=%s processed=%d skipped=%d",
            actor.user_id,
            favorite_user_id,
            result.processed,
            result.skipped,
        )
        return result

    def _check_favorite_unchanged(self, actor: Actor, favorite_user_id: int, requested: list[str]) -> _ApplySnapshot:
        """Phase one: reads plus the all-or-nothing staleness gate."""

        valid = list(dict.fromkeys(d for d in requested if is_valid_date_str(d)))
        if not valid:
            return _ApplySnapshot(holiday_dates=frozenset(), user_entries={})

        favorite_entries, user_entries, holidays = gather(
            lambda: self._entries.find_for_dates(user_id=favorite_user_id, dates=valid),
            lambda: self._entries.find_for_dates(user_id=actor.user_id, dates=valid),
            lambda: self._holidays.find_in_range(start_date=min(valid), end_date=max(valid)),
        )

        favorite_map = {e.date: e for e in favorite_entries}
        stale = [d for d in valid if d not in favorite_map or favorite_map[d].status != EntryStatus.OFFICE]
        if stale:
            logger.warning(
                "Match apply rejected for user=%s: favorite=%s changed on %s",
                actor.user_id,
                favorite_user_id,
                ", ".join(stale),
            )
            raise StaleScheduleError("Schedule has changed. Please review again.")

        return _ApplySnapshot(
            holiday_dates=frozenset(h.date for h in holidays),
            user_entries={e.date: e for e in user_entries},
        )

    def _write_dates(
        self,
        actor: Actor,
        requested: list[str],
        snapshot: _ApplySnapshot,
        *,
        override_leave: bool,
    ) -> ApplyResult:
        """Phase two: sequential per-date writes, failures isolated per date."""

        user_status = {d: e.status for d, e in snapshot.user_entries.items()}
        results: list[DateResult] = []

        for date in requested:
            if not is_valid_date_str(date):
                results.append(DateResult(date, False, MSG_INVALID_DATE))
                continue
            if is_weekend(date):
                results.append(DateResult(date, False, MSG_WEEKEND))
                continue
            if date in snapshot.holiday_dates:
                results.append(DateResult(date, False, MSG_HOLIDAY))
                continue
            if not actor.is_admin and not self._policy.is_editable(date, actor.role):
                results.append(DateResult(date, False, MSG_LOCKED))
                continue

            current = user_status.get(date)
            if current == EntryStatus.OFFICE:
                results.append(DateResult(date, True, MSG_ALREADY_MATCHING))
                continue
            if current == EntryStatus.LEAVE and not override_leave:
                results.append(DateResult(date, False, MSG_LEAVE_CONFLICT))
                continue

            try:
                self._attendance.upsert_entry(
                    user_id=actor.user_id,
                    date=date,
                    status=EntryStatus.OFFICE,
                    note=CLEAR,
                    start_time=CLEAR,
                    end_time=CLEAR,
                )
            except Exception:
                logger.exception("Match apply: write failed for user=%s date=%s", actor.user_id, date)
                results.append(DateResult(date, False, MSG_WRITE_FAILED))
                continue

            user_status[date] = EntryStatus.OFFICE
            results.append(DateResult(date, True))

        return ApplyResult(results=results)
