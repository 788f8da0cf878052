"""GET /v1/dashboard, POST /v1/dashboard/refresh, POST /v1/dashboard/train"""

from fastapi import APIRouter, Depends

from loan_recovery.api.dependencies import get_dashboard
from loan_recovery.api.v1.schemas import (
    AnalysisSchema,
    BorrowerSchema,
    DashboardEntry,
    DashboardResponse,
    LoanSchema,
    PredictionSchema,
    StatusResponse,
    StrategySchema,
)
from loan_recovery.dashboard.controller import Dashboard
from loan_recovery.domain.formatting import borrower_display_name, format_probability, humanize_strategy
from loan_recovery.domain.models import AnalyzerState

router = APIRouter()


def analysis_schema(loan_id: str, state: AnalyzerState) -> AnalysisSchema:
    prediction = None
    if state.prediction is not None:
        prediction = PredictionSchema(
            probability_default=state.prediction.probability_default,
            probability_display=format_probability(state.prediction),
            label=state.prediction.label,
        )

    strategy = None
    if state.strategy is not None:
        strategy = StrategySchema(
            recommended_strategy=state.strategy.recommended_strategy,
            display_name=humanize_strategy(state.strategy.recommended_strategy),
            risk_level=state.strategy.risk_level,
            actions=list(state.strategy.actions),
        )

    return AnalysisSchema(
        loan_id=loan_id,
        phase=state.phase.value,
        loading=state.loading,
        prediction=prediction,
        strategy=strategy,
    )


def status_response(dashboard: Dashboard) -> StatusResponse:
    return StatusResponse(is_loading=dashboard.status.is_loading, message=dashboard.status.message)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard_state(dashboard: Dashboard = Depends(get_dashboard)):
    """
    Current joined view with per-loan analysis.

    Returns:
        Loans in fetch order, each with its borrower (null when unresolved)
    """
    entries = [
        DashboardEntry(
            loan=LoanSchema(**vars(entry.loan)),
            borrower=BorrowerSchema(**vars(entry.borrower)) if entry.borrower else None,
            borrower_name=borrower_display_name(entry.borrower),
            analysis=analysis_schema(entry.loan.id, dashboard.analysis(entry.loan.id)),
        )
        for entry in dashboard.view
    ]

    return DashboardResponse(
        is_loading=dashboard.status.is_loading,
        message=dashboard.status.message,
        entries=entries,
    )


@router.post("/dashboard/refresh", response_model=StatusResponse)
async def refresh_dashboard(dashboard: Dashboard = Depends(get_dashboard)):
    """Re-fetch borrowers and loans from the scoring service"""
    await dashboard.refresh()
    return status_response(dashboard)


@router.post("/dashboard/train", response_model=StatusResponse)
async def train_model(dashboard: Dashboard = Depends(get_dashboard)):
    """Retrain the remote default-prediction model"""
    await dashboard.train()
    return status_response(dashboard)
