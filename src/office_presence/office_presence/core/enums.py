from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MEMBER = "member"


class EntryStatus(str, Enum):
    """Statuses that can be stored on an attendance entry."""

    OFFICE = "office"
    LEAVE = "leave"


class EffectiveStatus(str, Enum):
    """Status shown for a date once weekends and holidays are applied.

    Never persisted; ``WFH`` is the implicit status of a date without entry.
    """

    OFFICE = "office"
    LEAVE = "leave"
    WFH = "wfh"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class MatchClassification(str, Enum):
    """How a candidate date of a schedule match would be handled."""

    WILL_BE_ADDED = "will_be_added"
    CONFLICT_LEAVE = "conflict_leave"
    LOCKED = "locked"
    ALREADY_MATCHING = "already_matching"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"
