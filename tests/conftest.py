import pytest
from datetime import date, datetime

from cutoff_payroll.models.cutoff import CutoffPeriod
from cutoff_payroll.models.payroll import PayrollInput

WORKDAY = date(2026, 1, 13)


@pytest.fixture
def at():
    """at(8, 15) -> datetime on the reference workday; at(8, 15, day=...) for others"""
    def _at(hour, minute=0, day=WORKDAY):
        return datetime(day.year, day.month, day.day, hour, minute)
    return _at


@pytest.fixture
def punch():
    """Punch row dict in the biometric export's shape"""
    def _punch(day, time_in=None, time_out=None):
        row = {"date": day.strftime("%m/%d/%Y")}
        if time_in:
            row["timeIn"] = f"{day.isoformat()}T{time_in}:00"
        if time_out:
            row["timeOut"] = f"{day.isoformat()}T{time_out}:00"
        return row
    return _punch


@pytest.fixture
def make_input():
    def _make(**overrides):
        fields = {"category": "core", "monthly_salary": 20000, "worked_days": 10, "cutoff_working_days": 10}
        fields.update(overrides)
        return PayrollInput(**fields)
    return _make


@pytest.fixture
def january_mid_cutoff():
    # Jan 11 and Jan 25, 2026 are Sundays: 10 weekdays
    return CutoffPeriod(label="Jan 11–25, 2026", start=date(2026, 1, 11), end=date(2026, 1, 25))


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as test_client:
        yield test_client
