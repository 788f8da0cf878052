"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Borrower:
    """Borrower record from the scoring service"""

    id: str
    full_name: Optional[str] = None
    credit_score: Optional[int] = None
    income: Optional[float] = None


@dataclass(frozen=True)
class Loan:
    """Loan record from the scoring service"""

    id: str
    borrower_id: str
    loan_amount: Optional[float] = None
    term_months: Optional[int] = None
    interest_rate: Optional[float] = None  # percent
    num_late_payments: Optional[int] = None
    past_due_days: Optional[int] = None
    status: Optional[str] = None  # opaque, e.g. "active", "delinquent"


@dataclass(frozen=True)
class JoinedEntry:
    """A loan paired with its resolved borrower (None when unresolved)"""

    loan: Loan
    borrower: Optional[Borrower]


@dataclass(frozen=True)
class PredictionResult:
    """Default-probability prediction for one loan"""

    probability_default: float  # in [0, 1]
    label: str


@dataclass(frozen=True)
class StrategyResult:
    """Recovery strategy recommendation for one loan"""

    recommended_strategy: str
    risk_level: str
    actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of a model retrain"""

    samples_used: int
    auc: Optional[float] = None


class AnalysisPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class AnalyzerState:
    """
    Per-loan analysis state.

    prediction and strategy are independently nullable: DONE with only a strategy
    means the prediction step failed, and vice versa.
    """

    phase: AnalysisPhase = AnalysisPhase.IDLE
    loading: bool = False
    prediction: Optional[PredictionResult] = None
    strategy: Optional[StrategyResult] = None


@dataclass(frozen=True)
class Snapshot:
    """Borrower and loan collections from one successful refresh"""

    borrowers: Tuple[Borrower, ...] = ()
    loans: Tuple[Loan, ...] = ()
    version: int = 0

    @property
    def loan_ids(self) -> frozenset:
        return frozenset(loan.id for loan in self.loans)
