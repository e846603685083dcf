"""
Employee Model
Directory record fields the payroll engine reads
"""
import datetime as dt
from typing import Optional, Union
from pydantic import field_validator

from cutoff_payroll.models.base import EngineModel
from cutoff_payroll.models.payroll import Benefits
from cutoff_payroll.utils.dates import parse_clock
from cutoff_payroll.utils.numbers import to_number


class EmployeeRates(EngineModel):
    """Per-employee rate overrides"""
    ob: Optional[float] = None
    ot: Optional[float] = None

    @field_validator("ob", "ot", mode="before")
    @classmethod
    def _coerce(cls, value):
        return to_number(value) or None


class EmployeeProfile(EngineModel):
    """
    Compensation view of an employee.

    ``category`` is free text as stored in the directory ("Core - Probationary",
    "intern", ...); it is normalised when a payroll input is built.
    ``fixed_out`` marks a fixed-schedule employee (e.g. interns with a
    contractual cutoff time) and caps their effective time-out when it reads as a clock time.
    """
    name: str = ""
    alias: Optional[str] = None
    category: str = "core"
    monthly_salary: float = 0.0
    per_day_rate: float = 0.0
    fixed_worked_days: float = 0.0
    fixed_out: Optional[Union[dt.time, str]] = None
    benefits: Benefits = Benefits()
    rates: EmployeeRates = EmployeeRates()

    @field_validator("monthly_salary", "per_day_rate", "fixed_worked_days", mode="before")
    @classmethod
    def _coerce(cls, value):
        return to_number(value)

    @field_validator("fixed_out", mode="before")
    @classmethod
    def _clock(cls, value):
        # an unreadable value is kept so the employee stays fixed-schedule
        if value is None or isinstance(value, dt.time):
            return value
        text = str(value).strip()
        if not text:
            return None
        return parse_clock(text) or text

    @field_validator("category", mode="before")
    @classmethod
    def _text(cls, value):
        return str(value or "")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Maria Santos",
                "alias": "msantos",
                "category": "intern",
                "fixedOut": "16:00",
                "benefits": {"sss": False, "pagibig": False, "philhealth": False},
                "rates": {"ob": 500},
            }
        }
