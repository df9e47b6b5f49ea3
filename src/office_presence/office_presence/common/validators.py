from __future__ import annotations

import re
from typing import Optional

from ..core.constants import NOTE_MAX_LENGTH
from ..core.exceptions import ValidationError
from .datetime_utils import is_valid_date_str

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_RE = re.compile(r"(?is)<(script|style)\b.*?>.*?</\1\s*>")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: object, field_name: str = "date") -> str:
    if not is_valid_date_str(value):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")
    return str(value)


def is_valid_time_str(value: object) -> bool:
    return isinstance(value, str) and bool(_TIME_RE.match(value))


def validate_time_window(start_time: Optional[str], end_time: Optional[str]) -> None:
    """Both or neither; HH:mm 24-hour; end strictly after start."""
    if not start_time and not end_time:
        return
    if not start_time or not end_time:
        raise ValidationError("Both startTime and endTime must be provided together")
    if not is_valid_time_str(start_time):
        raise ValidationError("startTime must be in HH:mm 24-hour format")
    if not is_valid_time_str(end_time):
        raise ValidationError("endTime must be in HH:mm 24-hour format")
    # Fixed-width zero-padded, so string order is time order.
    if end_time <= start_time:
        raise ValidationError("endTime must be after startTime")


def sanitize_text(text: str) -> str:
    """Strip script blocks and HTML tags."""
    return _TAG_RE.sub("", _SCRIPT_RE.sub("", text)).strip()


def validate_note(note: str) -> str:
    if len(note) > NOTE_MAX_LENGTH:
        raise ValidationError(f"Note cannot exceed {NOTE_MAX_LENGTH} characters")
    return sanitize_text(note)
