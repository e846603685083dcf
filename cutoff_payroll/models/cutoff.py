"""
Cutoff Model
Semi-monthly pay period definitions
"""
from datetime import date
from enum import Enum
from typing import Optional

from cutoff_payroll.models.base import EngineModel
from cutoff_payroll.utils.dates import count_working_days


class CutoffHalf(str, Enum):
    """Half of the month a cutoff (or a cash advance) belongs to"""
    FIRST = "first"
    SECOND = "second"


class CutoffPeriod(EngineModel):
    """One pay period, e.g. Jan 11-25 or Jan 26-Feb 10"""
    label: str = ""
    start: date
    end: date
    working_days: Optional[int] = None

    @property
    def half(self) -> CutoffHalf:
        """The 11-25 period is the second half; the 26-10 period is the first"""
        if 11 <= self.start.day <= 25:
            return CutoffHalf.SECOND
        if "11–25" in self.label or "11-25" in self.label:
            return CutoffHalf.SECOND
        return CutoffHalf.FIRST

    @property
    def working_day_count(self) -> int:
        if self.working_days is not None:
            return self.working_days
        return count_working_days(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    class Config:
        json_schema_extra = {
            "example": {
                "label": "Jan 11–25, 2026",
                "start": "2026-01-11",
                "end": "2026-01-25",
            }
        }
