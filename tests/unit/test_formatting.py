"""Unit tests for user-facing message formatting"""

from loan_recovery.domain.exceptions import MalformedResponse, RemoteRejection, TransportFailure
from loan_recovery.domain.formatting import (
    PREDICTION_FAILED,
    STRATEGY_FAILED,
    TRAINING_FAILED,
    borrower_display_name,
    format_error,
    format_probability,
    format_training_summary,
    humanize_strategy,
)
from loan_recovery.domain.models import Borrower, PredictionResult, TrainingResult


def test_format_error_prefers_server_detail():
    """Server-supplied detail wins over the operation default"""
    error = RemoteRejection(400, "Model not trained")
    assert format_error(error, PREDICTION_FAILED) == "Error: Model not trained"


def test_format_error_rejection_without_detail_uses_default():
    assert format_error(RemoteRejection(500), TRAINING_FAILED) == "Error: Training failed"


def test_format_error_malformed_uses_default():
    error = MalformedResponse("Invalid JSON from strategy: Expecting value")
    assert format_error(error, STRATEGY_FAILED) == "Error: Strategy failed"


def test_format_error_transport_uses_connection_text():
    error = TransportFailure("predict request failed: Connection refused")
    assert format_error(error, PREDICTION_FAILED) == "Error: predict request failed: Connection refused"


def test_format_error_without_default_uses_description():
    """Collection refresh has no default; the failure's own text is the cause"""
    message = format_error(RemoteRejection(503))
    assert message == "Error: Scoring service returned 503"


def test_training_summary_with_auc_three_decimals():
    summary = format_training_summary(TrainingResult(samples_used=120, auc=0.87312))
    assert summary == "Model trained on 120 samples, AUC=0.873"


def test_training_summary_without_auc():
    assert format_training_summary(TrainingResult(samples_used=5)) == "Model trained on 5 samples"


def test_training_summary_zero_auc_is_still_reported():
    summary = format_training_summary(TrainingResult(samples_used=5, auc=0.0))
    assert summary.endswith("AUC=0.000")


def test_humanize_strategy():
    assert humanize_strategy("payment-plan") == "Payment Plan"
    assert humanize_strategy("monitor") == "Monitor"


def test_format_probability_one_decimal_percent():
    assert format_probability(PredictionResult(probability_default=0.42, label="risky")) == "42.0%"


def test_borrower_display_name_fallback():
    assert borrower_display_name(None) == "Unknown Borrower"
    assert borrower_display_name(Borrower(id="b1")) == "Unknown Borrower"
    assert borrower_display_name(Borrower(id="b1", full_name="A")) == "A"
