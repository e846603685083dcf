"""
Payroll Model
Calculator input, itemized output and the pay rules they are priced with
"""
from enum import Enum
from typing import Optional
from pydantic import field_validator

from cutoff_payroll.config import settings
from cutoff_payroll.exceptions import InvalidCategory
from cutoff_payroll.models.base import EngineModel
from cutoff_payroll.models.cutoff import CutoffHalf
from cutoff_payroll.utils.numbers import non_negative, non_negative_or_none


class Category(str, Enum):
    """Employee category; selects the base-pay branch"""
    CORE = "core"
    CORE_PROBATIONARY = "core_probationary"
    INTERN = "intern"
    FREELANCER = "freelancer"
    OWNER = "owner"


class ObCategory(str, Enum):
    """Official-business assignment kind"""
    VIDEOGRAPHER = "videographer"
    ASSISTED = "assisted"
    TALENT = "talent"


class Benefits(EngineModel):
    """Statutory contribution enrollment"""
    sss: bool = False
    pagibig: bool = False
    philhealth: bool = False


class CashAdvanceEntry(EngineModel):
    """One stored cash advance for an employee"""
    total_amount: float = 0.0
    per_cut_off: float = 0.0
    start_date_cut_off: CutoffHalf = CutoffHalf.FIRST
    approved: bool = False

    @field_validator("total_amount", "per_cut_off", mode="before")
    @classmethod
    def _coerce(cls, value):
        return non_negative(value)


class CashAdvanceState(EngineModel):
    """
    Repayment schedule of the employee's active advances for this cutoff.

    ``override`` is a manual finance amount: ``None`` means unset, any
    number (including 0) replaces the scheduled deduction. Negative
    amounts are clamped to 0.
    """
    total_amount: float = 0.0
    per_cut_off: float = 0.0
    current_cut_off: CutoffHalf = CutoffHalf.FIRST
    start_date_cut_off: CutoffHalf = CutoffHalf.FIRST
    approved: bool = False
    override: Optional[float] = None

    @field_validator("total_amount", "per_cut_off", mode="before")
    @classmethod
    def _coerce(cls, value):
        return non_negative(value)

    @field_validator("override", mode="before")
    @classmethod
    def _coerce_override(cls, value):
        return non_negative_or_none(value)


class PayrollInput(EngineModel):
    """Normalized per-employee, per-cutoff record consumed by the calculator"""
    monthly_salary: float = 0.0
    per_day_rate: Optional[float] = None
    allowance_per_day: Optional[float] = None
    worked_days: float = 0.0
    ob_quantity: float = 0.0
    ot_hours: float = 0.0
    nd_hours: float = 0.0
    rdot_hours: float = 0.0
    holiday30_hours: float = 0.0
    holiday_double_hours: float = 0.0
    holiday_ot_double_hours: float = 0.0
    tardiness_minutes: float = 0.0
    cutoff_working_days: Optional[float] = None
    fixed_worked_days: Optional[float] = None
    category: Category
    ob_category: Optional[ObCategory] = None
    benefits: Benefits = Benefits()
    cash_advance: CashAdvanceState = CashAdvanceState()
    manual_net_pay: Optional[float] = None
    ob_pay_from_reqs: Optional[float] = None

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value):
        if isinstance(value, Category):
            return value
        text = str(value).strip().lower() if value is not None else ""
        try:
            return Category(text)
        except ValueError:
            raise InvalidCategory(value) from None

    @field_validator("ob_category", mode="before")
    @classmethod
    def _lenient_ob_category(cls, value):
        # Unknown kinds price as the default (assisted) rate
        if value is None or isinstance(value, ObCategory):
            return value
        text = str(value).strip().lower()
        return text if text in ObCategory._value2member_map_ else None

    @field_validator("monthly_salary", mode="before")
    @classmethod
    def _coerce(cls, value):
        return non_negative(value)

    @field_validator(
        "per_day_rate", "allowance_per_day",
        "manual_net_pay", "ob_pay_from_reqs", mode="before",
    )
    @classmethod
    def _clamp_money(cls, value):
        # None stays unset; negative amounts never reach the calculator
        return non_negative_or_none(value)

    @field_validator(
        "worked_days", "ob_quantity", "ot_hours", "nd_hours", "rdot_hours",
        "holiday30_hours", "holiday_double_hours", "holiday_ot_double_hours",
        "tardiness_minutes", mode="before",
    )
    @classmethod
    def _clamp(cls, value):
        return non_negative(value)

    @field_validator("cutoff_working_days", "fixed_worked_days", mode="before")
    @classmethod
    def _clamp_optional(cls, value):
        if value is None:
            return None
        return non_negative(value)

    class Config:
        json_schema_extra = {
            "example": {
                "category": "core",
                "monthlySalary": 20000,
                "workedDays": 10,
                "cutoffWorkingDays": 10,
                "otHours": 2,
                "tardinessMinutes": 15,
                "benefits": {"sss": True, "pagibig": True, "philhealth": True},
                "cashAdvance": {
                    "totalAmount": 1500,
                    "perCutOff": 1000,
                    "currentCutOff": "second",
                    "startDateCutOff": "first",
                    "approved": True,
                },
            }
        }


class PayrollOutput(EngineModel):
    """Fully itemized pay breakdown for one employee and cutoff"""
    daily_rate: float = 0.0
    cutoff_pay: float = 0.0
    ob_pay: float = 0.0
    ot_rate: float = 0.0
    ot_pay: float = 0.0
    night_diff_pay: float = 0.0
    rdot_pay: float = 0.0
    holiday30_pay: float = 0.0
    holiday_double_pay: float = 0.0
    holiday_ot_double_pay: float = 0.0
    gross_earnings: float = 0.0
    sss: float = 0.0
    pagibig: float = 0.0
    philhealth: float = 0.0
    cash_advance_deduction: float = 0.0
    tardiness_deduction: float = 0.0
    total_deductions: float = 0.0
    net_pay: float = 0.0


class PayrollRules(EngineModel):
    """Rates and flat amounts the calculator prices with"""
    sss_deduction: float = settings.SSS_DEDUCTION
    pagibig_deduction: float = settings.PAGIBIG_DEDUCTION
    philhealth_deduction: float = settings.PHILHEALTH_DEDUCTION
    owner_cutoff_pay: float = settings.OWNER_CUTOFF_PAY
    default_intern_daily: float = settings.DEFAULT_INTERN_DAILY
    ob_rate_intern: float = settings.OB_RATE_INTERN
    ob_rate_videographer: float = settings.OB_RATE_VIDEOGRAPHER
    ob_rate_talent: float = settings.OB_RATE_TALENT
    ob_rate_assisted: float = settings.OB_RATE_ASSISTED
    night_diff_multiplier: float = settings.NIGHT_DIFF_MULTIPLIER
    rdot_multiplier: float = settings.RDOT_MULTIPLIER
    holiday_30_multiplier: float = settings.HOLIDAY_30_MULTIPLIER
    holiday_double_multiplier: float = settings.HOLIDAY_DOUBLE_MULTIPLIER
    holiday_ot_double_multiplier: float = settings.HOLIDAY_OT_DOUBLE_MULTIPLIER
    full_day_hours: float = settings.FULL_DAY_HOURS
