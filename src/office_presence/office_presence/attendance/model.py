from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Union

from ..core.enums import EntryStatus
from ..core.exceptions import ValidationError


class FieldChange(Enum):
    """Explicit instruction for an optional entry field on upsert.

    A plain string sets the field; ``KEEP`` leaves the stored value alone and
    ``CLEAR`` removes it from the record.
    """

    KEEP = "keep"
    CLEAR = "clear"


KEEP = FieldChange.KEEP
CLEAR = FieldChange.CLEAR

FieldUpdate = Union[str, FieldChange]


def field_update_from_json(payload: Mapping[str, object], key: str) -> FieldUpdate:
    """Absent key keeps, ``null`` or ``""`` clears, a string sets."""
    if key not in payload:
        return KEEP
    value = payload[key]
    if value is None or value == "":
        return CLEAR
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: a user's declared status for one date."""

    entry_id: int
    user_id: int
    date: str
    status: EntryStatus
    note: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        out: dict = {"userId": self.user_id, "date": self.date, "status": self.status.value}
        if self.note:
            out["note"] = self.note
        if self.start_time and self.end_time:
            out["startTime"] = self.start_time
            out["endTime"] = self.end_time
        if self.updated_at:
            out["updatedAt"] = self.updated_at.isoformat()
        return out
