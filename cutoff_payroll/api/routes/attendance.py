"""
Attendance Routes
Stateless crediting of punches and filed requests
"""
from datetime import date, datetime, time
from fastapi import APIRouter, Query
from typing import List, Optional, Union
from pydantic import BaseModel

from cutoff_payroll.models.attendance import (
    AttendanceRow,
    DailyComputation,
    DailyMergeResult,
    PunchSummary,
)
from cutoff_payroll.models.base import EngineModel
from cutoff_payroll.models.cutoff import CutoffPeriod
from cutoff_payroll.models.request import FiledRequest
from cutoff_payroll.services.attendance import (
    compute_daily_with_filed,
    compute_hours_and_days_for_one,
    summarize_punches,
)
from cutoff_payroll.services.cutoff import cutoff_periods_around

router = APIRouter()


class PunchPair(EngineModel):
    """Schema for crediting a single day"""
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    fixed_out: Optional[Union[time, str]] = None


class DailyMergeRequest(EngineModel):
    """Schema for merging punches with filed requests"""
    punches: List[AttendanceRow] = []
    requests: List[FiledRequest] = []
    fixed_out: Optional[Union[time, str]] = None


class PunchSummaryRequest(EngineModel):
    punches: List[AttendanceRow] = []
    fixed_out: Optional[Union[time, str]] = None


class CutoffListResponse(BaseModel):
    total: int
    periods: List[CutoffPeriod]


@router.post("/day", response_model=DailyComputation)
def credit_day(pair: PunchPair):
    """Credit one punch pair"""
    return compute_hours_and_days_for_one(pair.time_in, pair.time_out, pair.fixed_out)


@router.post("/daily", response_model=DailyMergeResult)
def merge_daily(request: DailyMergeRequest):
    """Merge a cutoff's punches with its filed remote work / WFH / RDOT"""
    return compute_daily_with_filed(request.punches, request.requests, request.fixed_out)


@router.post("/summary", response_model=PunchSummary)
def summarize(request: PunchSummaryRequest):
    """Draft-review hours, days and tardiness for a list of punches"""
    return summarize_punches(request.punches, request.fixed_out)


@router.get("/cutoffs", response_model=CutoffListResponse)
def list_cutoffs(day: Optional[date] = Query(None)):
    """Selectable cutoff periods around a date (today by default)"""
    periods = cutoff_periods_around(day or date.today())
    return CutoffListResponse(total=len(periods), periods=periods)
