"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from loan_recovery.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_refresh(snapshot_version: int, loan_count: int, borrower_count: int, duration_ms: float) -> None:
    """Log a completed collection refresh"""
    logging.info(
        "Refresh completed",
        extra={
            "step": "refresh_complete",
            "snapshot_version": snapshot_version,
            "loan_count": loan_count,
            "borrower_count": borrower_count,
            "duration_ms": duration_ms,
        },
    )


def log_training(samples_used: int, auc: Optional[float], duration_ms: float) -> None:
    logging.info(
        "Training completed",
        extra={
            "step": "train_complete",
            "samples_used": samples_used,
            "auc": auc,
            "duration_ms": duration_ms,
        },
    )


def log_analysis(loan_id: str, prediction_ok: bool, strategy_ok: bool, duration_ms: float) -> None:
    """Log per-step outcomes of one loan analysis"""
    logging.info(
        "Analysis completed",
        extra={
            "loan_id": loan_id,
            "step": "analysis_complete",
            "prediction_outcome": "success" if prediction_ok else "failure",
            "strategy_outcome": "success" if strategy_ok else "failure",
            "duration_ms": duration_ms,
        },
    )
