from datetime import date, time

import pytest

from cutoff_payroll.models.cutoff import CutoffHalf
from cutoff_payroll.models.draft import Commission, DraftLine, LinePreview, PreviewRequest
from cutoff_payroll.models.employee import EmployeeProfile
from cutoff_payroll.models.payroll import CashAdvanceEntry, Category, PayrollOutput
from cutoff_payroll.services.draft import (
    aggregate_cash_advances,
    build_payroll_input,
    compute_commission,
    normalize_category,
    preview_line,
    preview_totals,
)
from cutoff_payroll.services.payroll import calculate_payroll


@pytest.fixture
def full_week(punch):
    return [
        punch(date(2026, 1, 12), "08:00", "17:00"),
        punch(date(2026, 1, 13), "08:00", "17:00"),
        punch(date(2026, 1, 14), "08:00", "17:00"),
    ]


@pytest.fixture
def core_profile():
    return EmployeeProfile(name="Juan Dela Cruz", alias="juan", category="Core", monthly_salary=22000,
                           benefits={"sss": True})


# ---------- category normalisation ----------

@pytest.mark.parametrize("text,expected", [
    ("Core", Category.CORE),
    ("Core - Probationary", Category.CORE_PROBATIONARY),
    ("core_probationary", Category.CORE_PROBATIONARY),
    ("Intern (OJT)", Category.INTERN),
    ("FREELANCER", Category.FREELANCER),
    ("Owner", Category.OWNER),
    ("Part-time", Category.CORE),
    ("", Category.CORE),
    (None, Category.CORE),
])
def test_normalize_category(text, expected):
    assert normalize_category(text) == expected


# ---------- commissions ----------

def test_sales_commission_is_a_percentage():
    assert compute_commission(Commission(type="sales", amount=10000, percent=5)) == 500


def test_sales_commission_needs_amount_and_percent():
    assert compute_commission(Commission(type="sales", amount=10000, percent=0)) == 0
    assert compute_commission(Commission(type="sales", amount=0, percent=10)) == 0


def test_other_commission_is_flat():
    assert compute_commission(Commission(type="Bonus", amount=250.5)) == 250.5
    assert compute_commission(Commission(type="other", amount=-5)) == 0


# ---------- cash advances ----------

def test_aggregate_sums_entries_and_takes_latest_start():
    entries = [
        CashAdvanceEntry(total_amount=1000, per_cut_off=200, start_date_cut_off="first", approved=True),
        CashAdvanceEntry(total_amount=500, per_cut_off=100, start_date_cut_off="second", approved=True),
    ]

    state = aggregate_cash_advances(entries, CutoffHalf.FIRST)

    assert state.total_amount == 1500
    assert state.per_cut_off == 300
    assert state.start_date_cut_off == CutoffHalf.SECOND
    assert state.current_cut_off == CutoffHalf.FIRST
    assert state.approved is True
    assert state.override is None


def test_aggregate_without_entries_is_not_approved():
    state = aggregate_cash_advances([], CutoffHalf.SECOND)
    assert state.approved is False
    assert state.total_amount == 0


def test_manual_amount_replaces_schedule():
    entries = [CashAdvanceEntry(total_amount=3000, per_cut_off=500, approved=True)]

    state = aggregate_cash_advances(entries, CutoffHalf.SECOND, manual_amount=400)

    assert state.total_amount == 400
    assert state.per_cut_off == 400
    assert state.override == 400


# ---------- building calculator inputs ----------

def test_build_core_input_from_draft_line(full_week, core_profile, january_mid_cutoff):
    line = DraftLine(
        employee_id="E-001",
        time_in_out=full_week,
        adjustments={"OB": [{"client": "Acme"}], "OT": [{"hours": 1.5}]},
    )
    requests = [
        {"type": "OB", "status": "approved", "date": "2026-01-15", "suggestedRate": 2500},
        {"type": "OB", "status": "approved", "date": "2026-01-16"},
        {"type": "OB", "status": "pending", "date": "2026-01-16", "suggestedRate": 9000},
        {"type": "OT", "status": "approved", "date": "2026-01-13", "hours": 2},
        {"type": "OT", "status": "approved", "date": "2026-01-27", "hours": 4},
        {"type": "RDOT", "status": "approved", "date": "2026-01-17", "hours": 5},
        {"type": "WFH", "status": "approved", "date": "2026-01-15", "hours": 8},
    ]
    advances = [CashAdvanceEntry(total_amount=3000, per_cut_off=500, start_date_cut_off="first", approved=True)]

    data = build_payroll_input(line, core_profile, requests, advances, january_mid_cutoff)

    assert data.category == Category.CORE
    assert data.monthly_salary == 22000
    assert data.worked_days == 4.0
    assert data.cutoff_working_days == 10
    assert data.rdot_hours == 5.0
    assert data.ob_quantity == 3
    assert data.ob_pay_from_reqs == 4000
    assert data.ot_hours == 3.5
    assert data.tardiness_minutes == 0
    assert data.benefits.sss is True
    assert data.cash_advance.current_cut_off == CutoffHalf.SECOND

    out = calculate_payroll(data)

    assert out.daily_rate == 1100
    assert out.cutoff_pay == 4400
    assert out.ob_pay == 4000
    assert out.ot_pay == pytest.approx(481.25)
    assert out.rdot_pay == pytest.approx(893.75)
    assert out.gross_earnings == pytest.approx(9775)
    assert out.cash_advance_deduction == 500
    assert out.total_deductions == 925
    assert out.net_pay == pytest.approx(8850)


def test_tardiness_is_measured_from_draft_punches(punch, core_profile, january_mid_cutoff):
    line = DraftLine(employee_id="E-001", time_in_out=[
        punch(date(2026, 1, 12), "07:15", "17:00"),
        punch(date(2026, 1, 13), "07:40", "17:00"),
    ])
    data = build_payroll_input(line, core_profile, [], [], january_mid_cutoff)
    assert data.tardiness_minutes == 55


def test_draft_days_worked_overrides_attendance(full_week, core_profile, january_mid_cutoff):
    line = DraftLine(employee_id="E-001", time_in_out=full_week, days_worked=6)
    data = build_payroll_input(line, core_profile, [], [], january_mid_cutoff)
    assert data.worked_days == 6


def test_fixed_worked_days_override_attendance(full_week, january_mid_cutoff):
    profile = EmployeeProfile(name="Ana", category="Core", monthly_salary=22000, fixed_worked_days=11)
    line = DraftLine(employee_id="E-002", time_in_out=full_week)

    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)

    assert data.worked_days == 11
    assert data.fixed_worked_days == 11
    assert calculate_payroll(data).cutoff_pay == pytest.approx(11000)


def test_no_attendance_keeps_a_token_worked_day(core_profile, january_mid_cutoff):
    line = DraftLine(employee_id="E-001")
    data = build_payroll_input(line, core_profile, [], [], january_mid_cutoff)
    assert data.worked_days == pytest.approx(0.0001)


def test_per_day_rate_derives_monthly_salary(full_week, january_mid_cutoff):
    profile = EmployeeProfile(name="Ben", category="Core - Probationary", per_day_rate=500, monthly_salary=18000)
    line = DraftLine(employee_id="E-003", time_in_out=full_week)

    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)

    assert data.category == Category.CORE_PROBATIONARY
    assert data.monthly_salary == 22000
    assert calculate_payroll(data).cutoff_pay == 1500


def test_line_salary_used_when_profile_has_none(full_week, january_mid_cutoff):
    profile = EmployeeProfile(name="Cy", category="Core")
    line = DraftLine(employee_id="E-004", monthly_salary=30000, time_in_out=full_week)
    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)
    assert data.monthly_salary == 30000


def test_profile_ob_rate_replaces_default(january_mid_cutoff):
    profile = EmployeeProfile(name="Dee", category="Intern", rates={"ob": 700})
    requests = [
        {"type": "OB", "status": "approved", "date": "2026-01-12"},
        {"type": "OB", "status": "approved", "date": "2026-01-13", "suggestedRate": 0},
    ]
    data = build_payroll_input(DraftLine(employee_id="E-005"), profile, requests, [], january_mid_cutoff)
    assert data.ob_pay_from_reqs == 1400


def test_missing_profile_uses_line_category(full_week, january_mid_cutoff):
    line = DraftLine(employee_id="E-006", category="Intern", time_in_out=full_week)

    data = build_payroll_input(line, None, [], [], january_mid_cutoff)

    assert data.category == Category.INTERN
    assert calculate_payroll(data).cutoff_pay == 375


def test_fixed_schedule_profile_caps_time_out(punch, january_mid_cutoff):
    profile = EmployeeProfile(name="Eve", category="Intern", fixed_out="16:00")
    line = DraftLine(employee_id="E-007", time_in_out=[
        punch(date(2026, 1, 12), "07:30", "18:00"),
        punch(date(2026, 1, 13), "07:30", "13:00"),
    ])
    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)
    assert data.worked_days == 1.5


def test_freelancer_is_paid_adjustments_total(full_week, january_mid_cutoff):
    profile = EmployeeProfile(name="Fay", category="Freelancer", benefits={"sss": True})
    line = DraftLine(employee_id="E-008", time_in_out=full_week, adjustments_total=7000, manual_cash_advance=100)
    advances = [CashAdvanceEntry(total_amount=3000, per_cut_off=500, approved=True)]

    data = build_payroll_input(line, profile, [], advances, january_mid_cutoff)

    assert data.category == Category.FREELANCER
    assert data.manual_net_pay == 7000
    assert data.cash_advance.override is None
    out = calculate_payroll(data)
    assert out.net_pay == 7000
    assert out.total_deductions == 0


@pytest.mark.parametrize("manual,expected", [(None, 500), (0, 0), (750, 750)])
def test_manual_cash_advance(full_week, core_profile, january_mid_cutoff, manual, expected):
    line = DraftLine(employee_id="E-001", time_in_out=full_week, manual_cash_advance=manual)
    advances = [CashAdvanceEntry(total_amount=3000, per_cut_off=500, start_date_cut_off="second", approved=True)]

    data = build_payroll_input(line, core_profile, [], advances, january_mid_cutoff)

    assert calculate_payroll(data).cash_advance_deduction == expected


# ---------- previews ----------

def test_preview_keeps_only_the_employees_requests(full_week, core_profile, january_mid_cutoff):
    request = PreviewRequest(
        line=DraftLine(employee_id="E-001", time_in_out=full_week),
        profile=core_profile,
        requests=[
            {"type": "OT", "status": "approved", "date": "2026-01-13", "hours": 2, "employeeName": "Juan Dela Cruz"},
            {"type": "OT", "status": "approved", "date": "2026-01-14", "hours": 3, "employeeName": "Pedro Reyes"},
            {"type": "OT", "status": "approved", "date": "2026-01-15", "hours": 1, "employeeName": "juan"},
            {"type": "OT", "status": "approved", "date": "2026-01-16", "hours": 0.5},
        ],
        cutoff=january_mid_cutoff,
    )

    preview = preview_line(request)

    assert preview.employee_id == "E-001"
    assert preview.input.ot_hours == 3.5


def test_preview_totals_commissions(full_week, core_profile, january_mid_cutoff):
    line = DraftLine(
        employee_id="E-001",
        time_in_out=full_week,
        commissions=[
            {"client": "Acme", "type": "sales", "amount": 10000, "percent": 5},
            {"type": "other", "amount": 250},
        ],
    )

    preview = preview_line(PreviewRequest(line=line, profile=core_profile, cutoff=january_mid_cutoff))

    assert preview.commission_total == 750


def test_preview_totals_include_commissions(make_input):
    previews = [
        LinePreview(employee_id="a", input=make_input(),
                    output=PayrollOutput(gross_earnings=1000, net_pay=800), commission_total=50),
        LinePreview(employee_id="b", input=make_input(),
                    output=PayrollOutput(gross_earnings=2000, net_pay=1500)),
    ]

    totals = preview_totals(previews)

    assert totals.count == 2
    assert totals.gross == 3050
    assert totals.net == 2350


def test_preview_totals_of_empty_draft():
    totals = preview_totals([])
    assert (totals.count, totals.gross, totals.net) == (0, 0, 0)


def test_profile_keeps_unreadable_fixed_out(punch, january_mid_cutoff):
    profile = EmployeeProfile(name="Gus", category="Intern", fixed_out="per contract")
    assert profile.fixed_out == "per contract"
    assert EmployeeProfile(fixed_out="4:00 PM").fixed_out == time(16, 0)
    assert EmployeeProfile(fixed_out=" ").fixed_out is None

    line = DraftLine(employee_id="E-009", time_in_out=[punch(date(2026, 1, 12), "09:00", "15:00")])
    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)

    assert data.worked_days == 1.0


def test_negative_adjustments_total_pays_freelancer_nothing(january_mid_cutoff):
    profile = EmployeeProfile(name="Fay", category="Freelancer")
    line = DraftLine(employee_id="E-008", adjustments_total=-2000)

    data = build_payroll_input(line, profile, [], [], january_mid_cutoff)

    assert calculate_payroll(data).net_pay == 0
