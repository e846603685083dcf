"""
Draft Model
Payroll draft lines, manual adjustments and preview results
"""
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import Field, field_validator

from cutoff_payroll.models.attendance import AttendanceRow
from cutoff_payroll.models.base import EngineModel
from cutoff_payroll.models.cutoff import CutoffPeriod
from cutoff_payroll.models.employee import EmployeeProfile
from cutoff_payroll.models.payroll import CashAdvanceEntry, PayrollInput, PayrollOutput
from cutoff_payroll.models.request import FiledRequest
from cutoff_payroll.utils.numbers import non_negative, to_number


class CommissionType(str, Enum):
    SALES = "sales"
    OTHER = "other"


class Commission(EngineModel):
    """Commission row entered by finance on a draft line"""
    client: str = "-"
    type: CommissionType = CommissionType.SALES
    amount: float = 0.0
    percent: float = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def _kind(cls, value):
        return CommissionType.SALES if str(value or "").lower() == "sales" else CommissionType.OTHER

    @field_validator("amount", "percent", mode="before")
    @classmethod
    def _coerce(cls, value):
        return to_number(value)


class OvertimeAdjustment(EngineModel):
    hours: float = 0.0

    @field_validator("hours", mode="before")
    @classmethod
    def _coerce(cls, value):
        return non_negative(value)


class DraftAdjustments(EngineModel):
    """Manual OB/OT entries added by finance during draft review"""
    ob: List[Dict[str, Any]] = Field(default_factory=list, alias="OB")
    ot: List[OvertimeAdjustment] = Field(default_factory=list, alias="OT")


class DraftLine(EngineModel):
    """One employee line of a payroll draft"""
    employee_id: str
    category: Optional[str] = None
    monthly_salary: float = 0.0
    time_in_out: List[AttendanceRow] = []
    days_worked: Optional[float] = None
    manual_cash_advance: Optional[float] = None
    adjustments: DraftAdjustments = DraftAdjustments()
    adjustments_total: float = 0.0
    commissions: List[Commission] = []

    @field_validator("monthly_salary", "adjustments_total", mode="before")
    @classmethod
    def _coerce(cls, value):
        return to_number(value)

    @field_validator("days_worked", "manual_cash_advance", mode="before")
    @classmethod
    def _coerce_optional(cls, value):
        return to_number(value, default=None)


class PreviewRequest(EngineModel):
    """Everything needed to price one draft line"""
    line: DraftLine
    profile: Optional[EmployeeProfile] = None
    requests: List[FiledRequest] = []
    cash_advances: List[CashAdvanceEntry] = []
    cutoff: CutoffPeriod


class LinePreview(EngineModel):
    """Priced draft line"""
    employee_id: str
    input: PayrollInput
    output: PayrollOutput
    commission_total: float = 0.0


class DraftTotals(EngineModel):
    """Preview totals across a draft"""
    count: int = 0
    gross: float = 0.0
    net: float = 0.0
