from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import EffectiveStatus, MatchClassification
from ..users.model import User

# Per-date apply messages are part of the API surface.
MSG_INVALID_DATE = "Invalid date format"
MSG_WEEKEND = "Weekend"
MSG_HOLIDAY = "Holiday"
MSG_LOCKED = "Outside editing window"
MSG_ALREADY_MATCHING = "Already matching"
MSG_LEAVE_CONFLICT = "Leave conflict — override not enabled"
MSG_WRITE_FAILED = "Failed to apply"


@dataclass(frozen=True)
class MatchPreviewDate:
    date: str
    classification: MatchClassification
    favorite_status: EffectiveStatus
    user_status: EffectiveStatus
    can_override: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "date": self.date,
            "classification": self.classification.value,
            "favoriteStatus": self.favorite_status.value,
            "userStatus": self.user_status.value,
            "canOverride": self.can_override,
        }
        if self.reason:
            out["reason"] = self.reason
        return out


@dataclass(frozen=True)
class MatchPreview:
    favorite_user: User
    dates: list[MatchPreviewDate]
    last_updated: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "favoriteUser": self.favorite_user.public_dict(),
            "preview": [d.to_dict() for d in self.dates],
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }


@dataclass(frozen=True)
class DateResult:
    date: str
    success: bool
    message: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"date": self.date, "success": self.success}
        if self.message:
            out["message"] = self.message
        return out


@dataclass(frozen=True)
class ApplyResult:
    results: list[DateResult] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "skipped": self.skipped,
            "results": [r.to_dict() for r in self.results],
        }
