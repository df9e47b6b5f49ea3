from __future__ import annotations

from typing import AbstractSet, Optional

from ..common.datetime_utils import is_weekend
from ..core.enums import EffectiveStatus
from .model import AttendanceEntry


def resolve(date: str, holiday_dates: AbstractSet[str], entry: Optional[AttendanceEntry] = None) -> EffectiveStatus:
    """Effective status of one date.

    Precedence: weekend > holiday > stored entry > implicit WFH.
    """

    if is_weekend(date):
        return EffectiveStatus.WEEKEND
    if date in holiday_dates:
        return EffectiveStatus.HOLIDAY
    if entry is not None:
        return EffectiveStatus(entry.status.value)
    return EffectiveStatus.WFH
