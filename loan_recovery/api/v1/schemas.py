"""Pydantic schemas for API responses consumed by the rendering layer"""

from pydantic import BaseModel
from typing import List, Optional


class BorrowerSchema(BaseModel):
    """Borrower as shown on a loan card"""

    id: str
    full_name: Optional[str] = None
    credit_score: Optional[int] = None
    income: Optional[float] = None


class LoanSchema(BaseModel):
    """Loan attributes shown on a loan card"""

    id: str
    borrower_id: str
    loan_amount: Optional[float] = None
    term_months: Optional[int] = None
    interest_rate: Optional[float] = None
    num_late_payments: Optional[int] = None
    past_due_days: Optional[int] = None
    status: Optional[str] = None


class PredictionSchema(BaseModel):
    probability_default: float
    probability_display: str  # e.g. "42.0%"
    label: str


class StrategySchema(BaseModel):
    recommended_strategy: str
    display_name: str  # humanized, e.g. "Payment Plan"
    risk_level: str
    actions: List[str]


class AnalysisSchema(BaseModel):
    """Per-loan analysis state"""

    loan_id: str
    phase: str  # idle | running | done
    loading: bool
    prediction: Optional[PredictionSchema] = None
    strategy: Optional[StrategySchema] = None


class StatusResponse(BaseModel):
    """Shared loading flag and most recent message ("" when none)"""

    is_loading: bool
    message: str


class DashboardEntry(BaseModel):
    loan: LoanSchema
    borrower: Optional[BorrowerSchema] = None
    borrower_name: str
    analysis: AnalysisSchema


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    is_loading: bool
    message: str
    entries: List[DashboardEntry]


class AnalyzeResponse(BaseModel):
    """Response for POST /v1/loans/{loan_id}/analyze"""

    analysis: AnalysisSchema
    status: StatusResponse


class SystemCheckResponse(BaseModel):
    """Response for GET /v1/system-check"""

    backend_url: str
    reachable: bool
    detail: str
