from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    date: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.holiday_id, "date": self.date, "name": self.name}
