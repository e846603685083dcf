"""
Cutoff Service
Builds the selectable semi-monthly pay periods around a date
"""
import calendar
from datetime import date
from typing import List

from cutoff_payroll.models.cutoff import CutoffPeriod
from cutoff_payroll.utils.dates import month_add


def _month_abbr(month: int) -> str:
    return calendar.month_abbr[month]


def cutoffs_for_month(year: int, month: int) -> List[CutoffPeriod]:
    """The 11-25 period of a month and the 26-10 period that follows it"""
    first = date(year, month, 1)
    following = month_add(first, 1)

    mid = CutoffPeriod(
        label=f"{_month_abbr(month)} 11–25, {year}",
        start=date(year, month, 11),
        end=date(year, month, 25),
    )
    end = date(following.year, following.month, 10)
    turn = CutoffPeriod(
        label=f"{_month_abbr(month)} 26–{_month_abbr(end.month)} 10, {end.year}",
        start=date(year, month, 26),
        end=end,
    )
    return [mid, turn]


def cutoff_periods_around(day: date) -> List[CutoffPeriod]:
    """Periods for the previous, current and next month, ordered by start"""
    periods = {}
    for delta in (-1, 0, 1):
        month = month_add(day, delta)
        for period in cutoffs_for_month(month.year, month.month):
            periods[period.label] = period
    return sorted(periods.values(), key=lambda period: period.start)


def cutoff_for_date(day: date) -> CutoffPeriod:
    """The period that contains ``day``"""
    for period in cutoff_periods_around(day):
        if period.contains(day):
            return period
    raise ValueError(f"No cutoff period contains {day.isoformat()}")
