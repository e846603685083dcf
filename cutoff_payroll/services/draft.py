"""
Draft Service
Builds calculator inputs from payroll-draft lines and prices them for preview
"""
import logging
from typing import Iterable, List, Optional

from cutoff_payroll.config import settings
from cutoff_payroll.models.cutoff import CutoffHalf, CutoffPeriod
from cutoff_payroll.models.draft import (
    Commission,
    CommissionType,
    DraftLine,
    DraftTotals,
    LinePreview,
    PreviewRequest,
)
from cutoff_payroll.models.employee import EmployeeProfile
from cutoff_payroll.models.payroll import (
    Benefits,
    CashAdvanceEntry,
    CashAdvanceState,
    Category,
    PayrollInput,
)
from cutoff_payroll.models.request import FiledRequest, FiledRequestType
from cutoff_payroll.services.attendance import (
    compute_daily_with_filed,
    compute_tardiness_minutes,
    eligible_requests,
)
from cutoff_payroll.services.payroll import calculate_payroll
from cutoff_payroll.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

MIN_WORKED_DAYS = 0.0001


def normalize_category(text: Optional[str]) -> Category:
    """Map free-text directory categories onto a pricing category; unknown text is core"""
    label = str(text or "").lower()
    if "owner" in label:
        return Category.OWNER
    if "freelancer" in label:
        return Category.FREELANCER
    if "intern" in label:
        return Category.INTERN
    if "core" in label and "probation" in label:
        return Category.CORE_PROBATIONARY
    return Category.CORE


def compute_commission(row: Commission) -> float:
    """Sales rows earn a percentage of the amount; other rows are a flat amount"""
    if row.type == CommissionType.SALES:
        if row.amount > 0 and row.percent > 0:
            return round_half_up(row.amount * row.percent / 100, 2)
        return 0.0
    if row.amount > 0:
        return round_half_up(row.amount, 2)
    return 0.0


def aggregate_cash_advances(
    entries: Iterable[CashAdvanceEntry],
    current_half: CutoffHalf,
    manual_amount: Optional[float] = None,
) -> CashAdvanceState:
    """
    Fold an employee's advances into one repayment schedule.

    A manual finance amount replaces both the per-cutoff and total amounts
    and is carried as the override.
    """
    entries = list(entries)
    total_amount = sum(entry.total_amount for entry in entries)
    per_cut_off = sum(entry.per_cut_off for entry in entries)
    starts_second = any(entry.start_date_cut_off == CutoffHalf.SECOND for entry in entries)

    if manual_amount is not None:
        total_amount = manual_amount
        per_cut_off = manual_amount

    return CashAdvanceState(
        total_amount=total_amount,
        per_cut_off=per_cut_off,
        current_cut_off=current_half,
        start_date_cut_off=CutoffHalf.SECOND if starts_second else CutoffHalf.FIRST,
        approved=len(entries) > 0,
        override=manual_amount,
    )


def build_payroll_input(
    line: DraftLine,
    profile: Optional[EmployeeProfile],
    requests: Iterable[FiledRequest],
    cash_advances: Iterable[CashAdvanceEntry],
    cutoff: CutoffPeriod,
) -> PayrollInput:
    """Assemble the calculator input for one draft line"""
    if profile is None:
        profile = EmployeeProfile(name=line.employee_id, category=line.category or "")

    category = normalize_category(profile.category or line.category)
    requests = eligible_requests(requests, cutoff.start, cutoff.end)
    advance = aggregate_cash_advances(cash_advances, cutoff.half, line.manual_cash_advance)

    if category == Category.FREELANCER:
        return PayrollInput(
            category=Category.FREELANCER,
            cash_advance=advance.model_copy(update={"override": None}),
            manual_net_pay=line.adjustments_total,
        )

    merged = compute_daily_with_filed(line.time_in_out, requests, profile.fixed_out)

    # draft override, then the employee's fixed days, then attendance
    worked_days = max(merged.total_days, MIN_WORKED_DAYS)
    if line.days_worked is not None and line.days_worked > 0:
        worked_days = line.days_worked
    elif profile.fixed_worked_days > 0:
        worked_days = profile.fixed_worked_days

    if profile.per_day_rate > 0:
        monthly_salary = profile.per_day_rate * settings.PROBATIONARY_WORKING_DAYS * 2
    else:
        monthly_salary = profile.monthly_salary or line.monthly_salary

    ob_requests = [r for r in requests if r.type == FiledRequestType.OB]
    default_ob_rate = profile.rates.ob or settings.DEFAULT_OB_REQUEST_RATE
    ob_pay_from_reqs = sum(r.suggested_rate or default_ob_rate for r in ob_requests)
    ob_quantity = len(ob_requests) + len(line.adjustments.ob)

    ot_hours = sum(r.hours for r in requests if r.type == FiledRequestType.OT)
    ot_hours += sum(adjustment.hours for adjustment in line.adjustments.ot)

    return PayrollInput(
        monthly_salary=monthly_salary,
        per_day_rate=profile.per_day_rate,
        cutoff_working_days=cutoff.working_day_count,
        worked_days=worked_days,
        fixed_worked_days=profile.fixed_worked_days,
        ob_quantity=ob_quantity,
        ob_pay_from_reqs=ob_pay_from_reqs,
        ot_hours=ot_hours,
        rdot_hours=merged.rdot_hours,
        tardiness_minutes=compute_tardiness_minutes(line.time_in_out),
        category=category,
        benefits=profile.benefits,
        cash_advance=advance,
    )


def preview_line(request: PreviewRequest) -> LinePreview:
    """Price one draft line and total its commissions"""
    employee_requests = request.requests
    if request.profile is not None and request.profile.name:
        names = {request.profile.name, request.profile.alias}
        employee_requests = [
            r for r in request.requests if not r.employee_name or r.employee_name in names
        ]

    data = build_payroll_input(
        request.line,
        request.profile,
        employee_requests,
        request.cash_advances,
        request.cutoff,
    )
    output = calculate_payroll(data)
    commission_total = sum(compute_commission(row) for row in request.line.commissions)

    return LinePreview(
        employee_id=request.line.employee_id,
        input=data,
        output=output,
        commission_total=commission_total,
    )


def preview_totals(previews: List[LinePreview]) -> DraftTotals:
    """Draft gross and net, commissions included"""
    gross = 0.0
    net = 0.0
    for preview in previews:
        gross += preview.output.gross_earnings + preview.commission_total
        net += preview.output.net_pay + preview.commission_total
    return DraftTotals(count=len(previews), gross=gross, net=net)
