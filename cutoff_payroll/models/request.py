"""
Request Model
Filed exception requests (OB, OT, leave, remote work, WFH, RDOT)
"""
import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import model_validator

from cutoff_payroll.models.base import EngineModel, pop_first
from cutoff_payroll.utils.dates import parse_date, parse_instant
from cutoff_payroll.utils.numbers import non_negative, to_number


class FiledRequestType(str, Enum):
    """Kinds of filed exception"""
    OB = "OB"
    OT = "OT"
    LEAVE = "LEAVE"
    REMOTEWORK = "REMOTEWORK"
    WFH = "WFH"
    RDOT = "RDOT"


class RequestStatus(str, Enum):
    """Request approval status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


REMOTE_TYPES = (FiledRequestType.REMOTEWORK, FiledRequestType.WFH)
MERGED_TYPES = REMOTE_TYPES + (FiledRequestType.RDOT,)


class FiledRequest(EngineModel):
    """
    One filed request as consumed by the engine.

    ``type`` is None when the stored type is not one the engine knows;
    such requests are carried but never merged or priced.
    """
    type: Optional[FiledRequestType] = FiledRequestType.OB
    status: RequestStatus = RequestStatus.PENDING
    date: Optional[dt.date] = None
    hours: float = 0.0
    category: Optional[str] = None
    employee_name: Optional[str] = None
    suggested_rate: Optional[float] = None
    time_in: Optional[dt.datetime] = None
    time_out: Optional[dt.datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)

        raw_type = data.get("type")
        if raw_type is None or raw_type == "":
            data["type"] = FiledRequestType.OB
        elif not isinstance(raw_type, FiledRequestType):
            text = str(raw_type).strip().upper()
            data["type"] = text if text in FiledRequestType.__members__ else None

        if isinstance(data.get("status"), str):
            data["status"] = data["status"].strip().lower()

        day = parse_date(data.get("date"))
        data["date"] = day
        data["hours"] = non_negative(data.get("hours"))

        # 0 / blank suggested rates mean "no suggestion"
        rate = pop_first(data, "suggested_rate", "suggestedRate")
        data["suggested_rate"] = to_number(rate) or None

        for field, alias, legacy in (("time_in", "timeIn", "in"), ("time_out", "timeOut", "out")):
            raw = pop_first(data, field, alias, legacy)
            data[field] = parse_instant(raw, on=day)
        return data

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    class Config:
        json_schema_extra = {
            "example": {
                "type": "WFH",
                "status": "approved",
                "date": "2026-01-14",
                "hours": 8,
                "employeeName": "Juan Dela Cruz",
                "timeIn": "08:00",
                "timeOut": "17:00",
            }
        }
