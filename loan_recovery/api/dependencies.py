"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request
from loan_recovery.dashboard.controller import Dashboard
from loan_recovery.infrastructure.clients.scoring import ScoringClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_scoring_client() -> ScoringClient:
    """Provide scoring service client instance"""
    return ScoringClient()


@lru_cache
def get_dashboard() -> Dashboard:
    """Provide the process-wide dashboard state container"""
    return Dashboard(get_scoring_client())
