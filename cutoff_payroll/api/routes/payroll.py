"""
Payroll Routes
Stateless payroll calculation and draft-line previews
"""
from fastapi import APIRouter
from typing import List
from pydantic import BaseModel

from cutoff_payroll.models.draft import DraftTotals, LinePreview, PreviewRequest
from cutoff_payroll.models.payroll import PayrollInput, PayrollOutput
from cutoff_payroll.services.draft import preview_line, preview_totals
from cutoff_payroll.services.payroll import calculate_payroll

router = APIRouter()


class BulkPreviewResponse(BaseModel):
    previews: List[LinePreview]
    totals: DraftTotals


@router.post("/calculate", response_model=PayrollOutput)
def calculate(data: PayrollInput):
    """Price one normalized payroll input"""
    return calculate_payroll(data)


@router.post("/preview", response_model=LinePreview)
def preview(request: PreviewRequest):
    """Build the payroll input for a draft line and price it"""
    return preview_line(request)


@router.post("/preview/bulk", response_model=BulkPreviewResponse)
def preview_bulk(requests: List[PreviewRequest]):
    """Price every line of a draft and total it"""
    previews = [preview_line(request) for request in requests]
    return BulkPreviewResponse(previews=previews, totals=preview_totals(previews))
