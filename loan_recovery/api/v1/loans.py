"""POST /v1/loans/{loan_id}/analyze and GET /v1/loans/{loan_id}/analysis"""

from fastapi import APIRouter, Depends, HTTPException

from loan_recovery.api.dependencies import get_dashboard
from loan_recovery.api.v1.dashboard import analysis_schema, status_response
from loan_recovery.api.v1.schemas import AnalysisSchema, AnalyzeResponse
from loan_recovery.dashboard.controller import Dashboard

router = APIRouter()


@router.post("/loans/{loan_id}/analyze", response_model=AnalyzeResponse)
async def analyze_loan(loan_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    """
    Run default prediction, then strategy recommendation, for one loan.

    Step failures do not fail the request: they show up as a missing result
    and in status.message.
    """
    state = await dashboard.analyze(loan_id)
    return AnalyzeResponse(analysis=analysis_schema(loan_id, state), status=status_response(dashboard))


@router.get("/loans/{loan_id}/analysis", response_model=AnalysisSchema)
def get_loan_analysis(loan_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    """Current analysis state for a loan in the snapshot"""
    if loan_id not in dashboard.fetcher.snapshot.loan_ids:
        raise HTTPException(status_code=404, detail="Loan not found")

    return analysis_schema(loan_id, dashboard.analysis(loan_id))
