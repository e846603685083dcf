"""
Attendance Model
Punch records and the derived per-day / per-cutoff figures
"""
import datetime as dt
from typing import Optional, List
from pydantic import model_validator

from cutoff_payroll.models.base import EngineModel, pop_first
from cutoff_payroll.config import settings
from cutoff_payroll.utils.dates import parse_clock, parse_date, parse_instant


class AttendanceRow(EngineModel):
    """One biometric punch pair for one calendar date"""
    date: Optional[dt.date] = None
    time_in: Optional[dt.datetime] = None
    time_out: Optional[dt.datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _canonicalise(cls, data):
        # Unreadable dates/instants become None instead of failing the row
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw_date = data.get("date")
        day = parse_date(raw_date)
        data["date"] = day
        for field, alias, legacy in (("time_in", "timeIn", "in"), ("time_out", "timeOut", "out")):
            raw = pop_first(data, field, alias, legacy)
            data[field] = parse_instant(raw, on=day)
        return data

    class Config:
        json_schema_extra = {
            "example": {
                "date": "01/13/2026",
                "timeIn": "2026-01-13T07:55:00",
                "timeOut": "2026-01-13T17:05:00",
            }
        }


class DailyComputation(EngineModel):
    """Credited hours and day-equivalent for one punch pair"""
    hours: float = 0.0
    days: float = 0.0


class MergedDay(EngineModel):
    """One calendar date after merging punches with filed requests"""
    date: dt.date
    worked_hours: float = 0.0
    rdot_hours: float = 0.0


class DailyMergeResult(EngineModel):
    """Cutoff totals from punches plus filed remote work / WFH / RDOT"""
    total_hours: float = 0.0
    total_days: float = 0.0
    rdot_hours: float = 0.0
    days: List[MergedDay] = []


class PunchSummary(EngineModel):
    """Draft-review totals for a list of punches"""
    hours_worked: float = 0.0
    days_worked: float = 0.0
    tardiness_minutes: int = 0


class AttendancePolicy(EngineModel):
    """Shift window and half-day rules used to credit punches"""
    shift_start: dt.time = parse_clock(settings.SHIFT_START)
    shift_end: dt.time = parse_clock(settings.SHIFT_END)
    lunch_start: dt.time = parse_clock(settings.LUNCH_START)
    lunch_end: dt.time = parse_clock(settings.LUNCH_END)
    earliest_time_in: dt.time = parse_clock(settings.EARLIEST_TIME_IN)
    earliest_time_out: dt.time = parse_clock(settings.EARLIEST_TIME_OUT)
    half_day_latest_out: dt.time = parse_clock(settings.HALF_DAY_LATEST_OUT)
    tardiness_grace_end: dt.time = parse_clock(settings.TARDINESS_GRACE_END)
    full_day_hours: float = settings.FULL_DAY_HOURS
    half_day_hours: float = settings.HALF_DAY_HOURS

    @property
    def half_day(self) -> "DailyComputation":
        return DailyComputation(hours=self.half_day_hours, days=0.5)
