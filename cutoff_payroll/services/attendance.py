"""
Attendance Service
Credits punches and merges them with filed remote work / WFH / RDOT requests
"""
import logging
from collections import defaultdict
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from cutoff_payroll.models.attendance import (
    AttendancePolicy,
    AttendanceRow,
    DailyComputation,
    DailyMergeResult,
    MergedDay,
    PunchSummary,
)
from cutoff_payroll.models.request import FiledRequest, FiledRequestType, REMOTE_TYPES
from cutoff_payroll.utils.dates import at_clock, minute_of_day, parse_clock, to_local_naive
from cutoff_payroll.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_POLICY = AttendancePolicy()
NO_CREDIT = DailyComputation(hours=0.0, days=0.0)


def _fixed_schedule(fixed_out) -> Tuple[bool, Optional[time]]:
    """(is fixed-schedule, time-out cap). A set but unreadable value still marks the schedule."""
    if fixed_out is None:
        return False, None
    if isinstance(fixed_out, time):
        return True, fixed_out
    text = str(fixed_out).strip()
    return bool(text), parse_clock(text)


def _minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def compute_hours_and_days_for_one(
    time_in: Optional[datetime],
    time_out: Optional[datetime],
    fixed_out: Union[time, str, None] = None,
    policy: AttendancePolicy = DEFAULT_POLICY,
) -> DailyComputation:
    """
    Credit one punch pair.

    A lone punch (in without out, or out without in) is a half day.
    A time-in during the noon hour, or a clipped time-out at or before the
    half-day cutoff, is also a half day. Otherwise the minutes inside the
    shift window, less the lunch overlap, are credited up to a full day.
    Fixed-schedule employees (``fixed_out`` set) get a full day for any
    complete pair that survives those rules.
    """
    if (time_in is None) != (time_out is None):
        return policy.half_day
    if time_in is None:
        return NO_CREDIT

    time_in = to_local_naive(time_in)
    time_out = to_local_naive(time_out)
    is_fixed, fixed_clock = _fixed_schedule(fixed_out)

    in_minutes = minute_of_day(time_in)
    out_minutes = minute_of_day(time_out)
    if (
        in_minutes < minute_of_day(policy.earliest_time_in)
        or out_minutes < minute_of_day(policy.earliest_time_out)
        or out_minutes <= in_minutes
    ):
        return NO_CREDIT

    if time_in.hour == policy.lunch_start.hour:
        return policy.half_day

    effective_out = time_out
    if fixed_clock is not None:
        forced = at_clock(time_out, fixed_clock)
        if forced < effective_out:
            effective_out = forced

    start = max(time_in, at_clock(time_in, policy.shift_start))
    end = min(effective_out, at_clock(time_in, policy.shift_end))
    if end <= start:
        return NO_CREDIT

    if minute_of_day(end) <= minute_of_day(policy.half_day_latest_out):
        return policy.half_day

    minutes = _minutes_between(start, end)
    lunch_start = at_clock(start, policy.lunch_start)
    lunch_end = at_clock(start, policy.lunch_end)
    if end > lunch_start:
        overlap = _minutes_between(max(start, lunch_start), min(end, lunch_end))
        minutes -= max(0.0, overlap)
    minutes = max(0.0, minutes)

    hours = min(round_half_up(minutes / 60, 2), policy.full_day_hours)
    days = min(hours / policy.full_day_hours, 1.0)

    if is_fixed:
        return DailyComputation(hours=policy.full_day_hours, days=1.0)
    return DailyComputation(hours=hours, days=days)


def _as_rows(punches: Iterable) -> List[AttendanceRow]:
    rows = []
    for raw in punches or []:
        if isinstance(raw, AttendanceRow):
            rows.append(raw)
            continue
        try:
            rows.append(AttendanceRow.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping unreadable punch row %r: %s", raw, e)
    return rows


def _as_requests(requests: Iterable) -> List[FiledRequest]:
    parsed = []
    for raw in requests or []:
        if isinstance(raw, FiledRequest):
            parsed.append(raw)
            continue
        try:
            parsed.append(FiledRequest.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping unreadable filed request %r: %s", raw, e)
    return parsed


def _filed_hours(request: FiledRequest, fixed_out, policy) -> float:
    """Filed in/out are credited like punches; otherwise the filed hours count as-is"""
    if request.time_in is not None and request.time_out is not None:
        return compute_hours_and_days_for_one(request.time_in, request.time_out, fixed_out, policy).hours
    return request.hours


def compute_daily_with_filed(
    punches: Iterable,
    filed_requests: Iterable,
    fixed_out: Union[time, str, None] = None,
    policy: AttendancePolicy = DEFAULT_POLICY,
) -> DailyMergeResult:
    """
    Merge punches with filed REMOTEWORK / WFH / RDOT requests for one cutoff.

    Dates are merged in ascending order. Per date the punch credit is the
    baseline, remote/WFH hours are added on top and the sum is capped at a
    full day. RDOT hours are kept apart because they are paid at a premium.
    Records without a usable date contribute nothing.
    """
    punches_by_date = {}
    for row in _as_rows(punches):
        if row.date is None:
            logger.warning("Skipping punch row without a readable date: %r", row)
            continue
        # first row wins when a date repeats
        punches_by_date.setdefault(row.date, row)

    remote_by_date = defaultdict(list)
    rdot_by_date = defaultdict(list)
    for request in _as_requests(filed_requests):
        if request.type not in REMOTE_TYPES and request.type != FiledRequestType.RDOT:
            continue
        if request.date is None:
            logger.warning("Skipping %s request without a readable date", request.type.value)
            continue
        if request.type == FiledRequestType.RDOT:
            rdot_by_date[request.date].append(request)
        else:
            remote_by_date[request.date].append(request)

    all_dates = sorted(set(punches_by_date) | set(remote_by_date) | set(rdot_by_date))

    total_hours = 0.0
    total_days = 0.0
    rdot_hours = 0.0
    merged: List[MergedDay] = []

    for day in all_dates:
        daily_hours = 0.0
        daily_rdot = 0.0
        try:
            row = punches_by_date.get(day)
            if row is not None:
                daily_hours += compute_hours_and_days_for_one(row.time_in, row.time_out, fixed_out, policy).hours
            for request in remote_by_date.get(day, []):
                daily_hours += _filed_hours(request, fixed_out, policy)
            for request in rdot_by_date.get(day, []):
                daily_rdot += _filed_hours(request, fixed_out, policy)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping %s: could not credit attendance (%s)", day.isoformat(), e)
            continue

        daily_hours = min(daily_hours, policy.full_day_hours)

        total_hours += daily_hours
        total_days += round_half_up(daily_hours / policy.full_day_hours, 3)
        rdot_hours += daily_rdot
        merged.append(MergedDay(date=day, worked_hours=daily_hours, rdot_hours=daily_rdot))

    return DailyMergeResult(
        total_hours=total_hours,
        total_days=total_days,
        rdot_hours=rdot_hours,
        days=merged,
    )


def compute_tardiness_minutes(
    punches: Iterable,
    policy: AttendancePolicy = DEFAULT_POLICY,
) -> int:
    """Minutes late past shift start, counted only for arrivals before the grace end"""
    shift_start = minute_of_day(policy.shift_start)
    grace_end = minute_of_day(policy.tardiness_grace_end)
    tardy = 0
    for row in _as_rows(punches):
        if row.time_in is None:
            continue
        minutes = minute_of_day(row.time_in)
        if shift_start < minutes < grace_end:
            tardy += minutes - shift_start
    return tardy


def summarize_punches(
    punches: Iterable,
    fixed_out: Union[time, str, None] = None,
    policy: AttendancePolicy = DEFAULT_POLICY,
) -> PunchSummary:
    """
    Draft-review totals for a list of punches.

    Each row's day credit is rounded to a whole or half day (>= 0.75 is a
    day, >= 0.25 a half day); fixed-schedule rows count 1 when both punches
    exist.
    """
    is_fixed, _ = _fixed_schedule(fixed_out)
    rows = _as_rows(punches)
    hours = 0.0
    days = 0.0
    for row in rows:
        credit = compute_hours_and_days_for_one(row.time_in, row.time_out, fixed_out, policy)
        hours += credit.hours

        if is_fixed:
            daily = 1.0 if row.time_in is not None and row.time_out is not None else 0.0
        elif credit.days >= 0.75:
            daily = 1.0
        elif credit.days >= 0.25:
            daily = 0.5
        else:
            daily = 0.0
        days += daily

    return PunchSummary(
        hours_worked=round_half_up(hours, 2),
        days_worked=round_half_up(days, 3),
        tardiness_minutes=compute_tardiness_minutes(rows, policy),
    )


def eligible_requests(requests: Iterable, start: date, end: date) -> List[FiledRequest]:
    """Approved requests dated inside [start, end]; undated requests are kept"""
    eligible = []
    for request in _as_requests(requests):
        if not request.is_approved:
            continue
        if request.date is not None and not (start <= request.date <= end):
            continue
        eligible.append(request)
    return eligible
