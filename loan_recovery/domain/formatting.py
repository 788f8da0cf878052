"""User-facing message and display formatting"""

from typing import Optional

from loan_recovery.domain.exceptions import ScoringServiceError, TransportFailure
from loan_recovery.domain.models import Borrower, PredictionResult, StrategyResult, TrainingResult

TRAINING_FAILED = "Training failed"
PREDICTION_FAILED = "Prediction failed"
STRATEGY_FAILED = "Strategy failed"

UNKNOWN_BORROWER = "Unknown Borrower"


def format_error(error: Exception, default: Optional[str] = None) -> str:
    """
    Collapse any failure into a single "Error: <cause>" string.

    Cause precedence:
    1. detail supplied by the scoring service
    2. connection-level error text
    3. the operation's default, if given
    4. the exception's own description
    """
    cause = None
    if isinstance(error, ScoringServiceError):
        cause = error.detail
        if not cause and isinstance(error, TransportFailure):
            cause = str(error)
    if not cause:
        cause = default or str(error) or error.__class__.__name__
    return f"Error: {cause}"


def format_training_summary(result: TrainingResult) -> str:
    summary = f"Model trained on {result.samples_used} samples"
    if result.auc is not None:
        summary += f", AUC={result.auc:.3f}"
    return summary


def humanize_strategy(token: str) -> str:
    """'payment-plan' -> 'Payment Plan'"""
    return " ".join(word.capitalize() for word in token.replace("-", " ").split())


def format_probability(prediction: PredictionResult) -> str:
    return f"{prediction.probability_default * 100:.1f}%"


def borrower_display_name(borrower: Optional[Borrower]) -> str:
    if borrower is None or not borrower.full_name:
        return UNKNOWN_BORROWER
    return borrower.full_name
