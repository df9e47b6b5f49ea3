from __future__ import annotations

import logging
from typing import Sequence, Union

from ..common.datetime_utils import is_weekend
from ..common.validators import require_date, validate_note, validate_time_window
from ..core.enums import EntryStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..holidays.repository import HolidayRepository
from ..users.model import Actor
from ..users.repository import UserRepository
from ..users.service import UserDirectory
from .model import CLEAR, KEEP, AttendanceEntry, FieldChange, FieldUpdate
from .policy import EditWindowPolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Union[str, EntryStatus, None]) -> EntryStatus:
    try:
        return EntryStatus(value)
    except ValueError:
        raise ValidationError('Status must be "office" or "leave"')


class AttendanceService:
    """Use cases around a user's declared daily status."""

    def __init__(
        self,
        entries: AttendanceRepository,
        holidays: HolidayRepository,
        users: UserRepository,
        *,
        policy: EditWindowPolicy | None = None,
    ):
        self._entries = entries
        self._holidays = holidays
        self._directory = UserDirectory(users)
        self._policy = policy or EditWindowPolicy()

    @property
    def policy(self) -> EditWindowPolicy:
        return self._policy

    # ----- store primitives -------------------------------------------------

    def upsert_entry(
        self,
        *,
        user_id: int,
        date: str,
        status: Union[str, EntryStatus],
        note: FieldUpdate = KEEP,
        start_time: FieldUpdate = KEEP,
        end_time: FieldUpdate = KEEP,
    ) -> AttendanceEntry:
        """Validate and create-or-replace the (user, date) entry.

        Clearing ``start_time`` clears the whole time window.
        """

        date = require_date(date)
        status = _parse_status(status)

        if start_time is CLEAR:
            end_time = CLEAR
        start_value = None if isinstance(start_time, FieldChange) else start_time
        end_value = None if isinstance(end_time, FieldChange) else end_time
        if start_value is not None or end_value is not None:
            validate_time_window(start_value, end_value)
        elif start_time is KEEP and end_time is CLEAR:
            raise ValidationError("Both startTime and endTime must be provided together")

        if not isinstance(note, FieldChange):
            note = validate_note(note) or CLEAR

        return self._entries.upsert(
            user_id=int(user_id),
            date=date,
            status=status,
            note=note,
            start_time=start_time,
            end_time=end_time,
        )

    def delete_entry(self, *, user_id: int, date: str) -> bool:
        return self._entries.delete(user_id=int(user_id), date=require_date(date))

    def list_entries(self, *, user_id: int, start_date: str, end_date: str) -> Sequence[AttendanceEntry]:
        start_date = require_date(start_date, "startDate")
        end_date = require_date(end_date, "endDate")
        if end_date < start_date:
            raise ValidationError("endDate must be >= startDate")
        return self._entries.find_range(user_id=int(user_id), start_date=start_date, end_date=end_date)

    # ----- actor-facing actions ---------------------------------------------

    def _ensure_editable(self, actor: Actor, date: str) -> None:
        if self._policy.is_editable(date, actor.role):
            return
        if self._policy.is_past(date):
            raise AuthorizationError("Cannot modify past dates")
        raise AuthorizationError(f"Date must be within {self._policy.window_days} days from today")

    def _ensure_workday(self, date: str) -> None:
        if is_weekend(date):
            raise ValidationError("Cannot set a status on a weekend")
        if self._holidays.find_in_range(start_date=date, end_date=date):
            raise ValidationError("Cannot set a status on a holiday")

    def set_status(
        self,
        *,
        actor: Actor,
        date: str,
        status: Union[str, EntryStatus],
        note: FieldUpdate = KEEP,
        start_time: FieldUpdate = KEEP,
        end_time: FieldUpdate = KEEP,
    ) -> AttendanceEntry:
        date = require_date(date)
        status = _parse_status(status)
        self._ensure_editable(actor, date)
        self._ensure_workday(date)

        entry = self.upsert_entry(
            user_id=actor.user_id,
            date=date,
            status=status,
            note=note,
            start_time=start_time,
            end_time=end_time,
        )
        logger.info("User %s set %s to %s", actor.user_id, date, status.value)
        return entry

    def admin_set_status(
        self,
        *,
        actor: Actor,
        target_user_id: int,
        date: str,
        status: Union[str, EntryStatus],
        note: FieldUpdate = KEEP,
        start_time: FieldUpdate = KEEP,
        end_time: FieldUpdate = KEEP,
    ) -> AttendanceEntry:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")

        date = require_date(date)
        status = _parse_status(status)
        self._directory.require_active(target_user_id)
        self._ensure_workday(date)

        entry = self.upsert_entry(
            user_id=target_user_id,
            date=date,
            status=status,
            note=note,
            start_time=start_time,
            end_time=end_time,
        )
        logger.info("Admin %s set %s to %s for user %s", actor.user_id, date, status.value, target_user_id)
        return entry

    def revert_to_wfh(self, *, actor: Actor, date: str) -> dict:
        date = require_date(date)
        self._ensure_editable(actor, date)
        existed = self.delete_entry(user_id=actor.user_id, date=date)
        return self._revert_result(existed)

    def admin_revert(self, *, actor: Actor, target_user_id: int, date: str) -> dict:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        existed = self.delete_entry(user_id=target_user_id, date=date)
        logger.info("Admin %s reverted %s for user %s (existed=%s)", actor.user_id, date, target_user_id, existed)
        return self._revert_result(existed)

    @staticmethod
    def _revert_result(existed: bool) -> dict:
        return {
            "existed": existed,
            "message": "Entry removed (status reverted to WFH)" if existed else "No entry found",
        }
