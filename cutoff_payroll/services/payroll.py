"""
Payroll Service
Pure pricing of one employee's cutoff: PayrollInput -> PayrollOutput
"""
import logging
from typing import Callable, Dict, Tuple

from cutoff_payroll.exceptions import InvalidCategory
from cutoff_payroll.models.cutoff import CutoffHalf
from cutoff_payroll.models.payroll import (
    CashAdvanceState,
    Category,
    ObCategory,
    PayrollInput,
    PayrollOutput,
    PayrollRules,
)
from cutoff_payroll.utils.numbers import round_money

logger = logging.getLogger(__name__)

DEFAULT_RULES = PayrollRules()
MINUTES_PER_DAY = 480


# Base pay: one pricing function per category, each returning (daily_rate, cutoff_pay)

def _core_base_pay(data: PayrollInput, rules: PayrollRules) -> Tuple[float, float]:
    cutoff_base = data.monthly_salary / 2
    if data.fixed_worked_days and data.fixed_worked_days > 0:
        divisor = data.fixed_worked_days
    else:
        divisor = data.cutoff_working_days
    # falls back to the employee's own worked days, then 1
    divisor = divisor or data.worked_days or 1
    daily_rate = cutoff_base / divisor
    return daily_rate, daily_rate * data.worked_days


def _probationary_base_pay(data: PayrollInput, rules: PayrollRules) -> Tuple[float, float]:
    daily_rate = data.per_day_rate or 0.0
    return daily_rate, daily_rate * data.worked_days


def _intern_base_pay(data: PayrollInput, rules: PayrollRules) -> Tuple[float, float]:
    daily_rate = data.allowance_per_day or rules.default_intern_daily
    return daily_rate, daily_rate * data.worked_days


def _owner_base_pay(data: PayrollInput, rules: PayrollRules) -> Tuple[float, float]:
    return 0.0, rules.owner_cutoff_pay


BASE_PAY: Dict[Category, Callable[[PayrollInput, PayrollRules], Tuple[float, float]]] = {
    Category.CORE: _core_base_pay,
    Category.CORE_PROBATIONARY: _probationary_base_pay,
    Category.INTERN: _intern_base_pay,
    Category.OWNER: _owner_base_pay,
}


def _freelancer_output(data: PayrollInput) -> PayrollOutput:
    net = data.manual_net_pay or 0.0
    return PayrollOutput(gross_earnings=net, net_pay=net)


def ob_unit_rate(category: Category, ob_category, rules: PayrollRules = DEFAULT_RULES) -> float:
    if category == Category.INTERN:
        return rules.ob_rate_intern
    if ob_category == ObCategory.VIDEOGRAPHER:
        return rules.ob_rate_videographer
    if ob_category == ObCategory.TALENT:
        return rules.ob_rate_talent
    return rules.ob_rate_assisted


def cash_advance_deduction(advance: CashAdvanceState) -> float:
    """
    Scheduled cash-advance collection for this cutoff.

    A manual override always wins, including an override of 0. Otherwise an
    approved advance is collected when this cutoff is in the same half of
    the month it started in, or when it started in the first half and this
    is the second half. Never more than the remaining balance.
    """
    if advance.override is not None:
        return advance.override
    if not advance.approved or advance.per_cut_off <= 0:
        return 0.0

    same_half = advance.current_cut_off == advance.start_date_cut_off
    carried_forward = (
        advance.start_date_cut_off == CutoffHalf.FIRST
        and advance.current_cut_off == CutoffHalf.SECOND
    )
    if same_half or carried_forward:
        return min(advance.per_cut_off, advance.total_amount)
    return 0.0


def calculate_payroll(data: PayrollInput, rules: PayrollRules = None) -> PayrollOutput:
    """
    Price one employee's cutoff.

    No I/O and no hidden state: the same input always yields the same
    output. Freelancers bypass the rate system and are paid their manual
    net pay.

    Raises:
        InvalidCategory: the input's category has no pricing branch
    """
    rules = rules or DEFAULT_RULES

    if data.category == Category.FREELANCER:
        return _freelancer_output(data)

    try:
        base_pay = BASE_PAY[data.category]
    except KeyError:
        raise InvalidCategory(data.category) from None

    # 1. Base pay
    daily_rate, cutoff_pay = base_pay(data, rules)

    # 2. Official business
    if data.ob_pay_from_reqs is not None and data.ob_pay_from_reqs > 0:
        ob_pay = data.ob_pay_from_reqs
    else:
        ob_pay = data.ob_quantity * ob_unit_rate(data.category, data.ob_category, rules)

    # 3. Overtime and premiums
    ot_rate = daily_rate / rules.full_day_hours
    ot_pay = ot_rate * data.ot_hours
    night_diff_pay = ot_rate * rules.night_diff_multiplier * data.nd_hours
    rdot_pay = ot_rate * rules.rdot_multiplier * data.rdot_hours
    holiday30_pay = ot_rate * rules.holiday_30_multiplier * data.holiday30_hours
    holiday_double_pay = ot_rate * rules.holiday_double_multiplier * data.holiday_double_hours
    holiday_ot_double_pay = ot_rate * rules.holiday_ot_double_multiplier * data.holiday_ot_double_hours

    # 4. Gross
    gross_earnings = (
        cutoff_pay
        + ob_pay
        + ot_pay
        + night_diff_pay
        + rdot_pay
        + holiday30_pay
        + holiday_double_pay
        + holiday_ot_double_pay
    )

    # 5. Government contributions
    sss = rules.sss_deduction if data.benefits.sss else 0.0
    pagibig = rules.pagibig_deduction if data.benefits.pagibig else 0.0
    philhealth = rules.philhealth_deduction if data.benefits.philhealth else 0.0

    # 6. Tardiness
    tardiness_deduction = 0.0
    if data.tardiness_minutes > 0:
        tardiness_deduction = round_money(daily_rate / MINUTES_PER_DAY * data.tardiness_minutes)

    # 7. Cash advance
    advance_deduction = cash_advance_deduction(data.cash_advance)

    # 8. Totals
    total_deductions = sss + pagibig + philhealth + advance_deduction + tardiness_deduction
    net_pay = max(0.0, gross_earnings - total_deductions)

    logger.debug(
        "Priced %s cutoff: gross=%.2f deductions=%.2f net=%.2f",
        data.category.value, gross_earnings, total_deductions, net_pay,
    )

    return PayrollOutput(
        daily_rate=daily_rate,
        cutoff_pay=cutoff_pay,
        ob_pay=ob_pay,
        ot_rate=ot_rate,
        ot_pay=ot_pay,
        night_diff_pay=night_diff_pay,
        rdot_pay=rdot_pay,
        holiday30_pay=holiday30_pay,
        holiday_double_pay=holiday_double_pay,
        holiday_ot_double_pay=holiday_ot_double_pay,
        gross_earnings=gross_earnings,
        sss=sss,
        pagibig=pagibig,
        philhealth=philhealth,
        cash_advance_deduction=advance_deduction,
        tardiness_deduction=tardiness_deduction,
        total_deductions=total_deductions,
        net_pay=net_pay,
    )
