"""Pytest fixtures for testing"""

import asyncio
import inspect
import pytest
import httpx
from typing import Any, Dict, List, Tuple
from fastapi.testclient import TestClient
from loan_recovery.api.main import create_app
from loan_recovery.api.dependencies import get_dashboard, get_scoring_client
from loan_recovery.dashboard.controller import Dashboard
from loan_recovery.infrastructure.clients.scoring import ScoringClient


BASE_URL = "http://scoring.test"


class FakeScoringService:
    """
    In-memory stand-in for the scoring service behind an httpx.MockTransport.

    Routes map (method, path) to an httpx.Response, an exception to raise, or a
    callable taking the request. Every request is logged as a ("start", path)
    and ("end", path) pair, with a suspension point in between so concurrent
    requests interleave.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.events: List[Tuple[str, str]] = []
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def on(self, method: str, path: str, outcome: Any) -> None:
        self.routes[(method, path)] = outcome

    def json(self, method: str, path: str, body: Any, status_code: int = 200) -> None:
        self.on(method, path, httpx.Response(status_code, json=body))

    def client(self) -> ScoringClient:
        return ScoringClient(base_url=BASE_URL, transport=self.transport)

    def paths(self) -> List[str]:
        return [path for kind, path in self.events if kind == "start"]

    def raw_paths(self) -> List[str]:
        return [request.url.raw_path.decode("ascii") for request in self.requests]

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(request)
        self.events.append(("start", path))
        await asyncio.sleep(0)
        try:
            outcome = self.routes.get((request.method, path))
            if outcome is None:
                return httpx.Response(404, json={"detail": "Not Found"})
            if isinstance(outcome, Exception):
                raise outcome
            if callable(outcome):
                outcome = outcome(request)
                if inspect.isawaitable(outcome):
                    outcome = await outcome
            # Fresh copy so the same route can be served more than once
            return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)
        finally:
            self.events.append(("end", path))


@pytest.fixture
def sample_borrowers() -> list[dict]:
    return [{"id": "b1", "full_name": "A", "credit_score": 700, "income": 50000}]


@pytest.fixture
def sample_loans() -> list[dict]:
    return [
        {
            "id": "l1",
            "borrower_id": "b1",
            "loan_amount": 10000,
            "term_months": 12,
            "interest_rate": 5,
            "num_late_payments": 1,
            "past_due_days": 10,
            "status": "active",
        }
    ]


@pytest.fixture
def sample_prediction() -> dict:
    return {"probability_default": 0.42, "label": "risky"}


@pytest.fixture
def sample_strategy() -> dict:
    return {
        "recommended_strategy": "payment-plan",
        "risk_level": "medium",
        "actions": ["Contact borrower", "Offer plan"],
    }


@pytest.fixture
def fake_service(sample_borrowers, sample_loans, sample_prediction, sample_strategy) -> FakeScoringService:
    """Scoring service where every endpoint succeeds for loan l1"""
    service = FakeScoringService()
    service.json("GET", "/borrowers", sample_borrowers)
    service.json("GET", "/loans", sample_loans)
    service.json("POST", "/train", {"samples_used": 120, "auc": 0.87312})
    service.json("GET", "/predict/l1", sample_prediction)
    service.json("GET", "/strategy/l1", sample_strategy)
    return service


@pytest.fixture
def dashboard(fake_service: FakeScoringService) -> Dashboard:
    return Dashboard(fake_service.client())


@pytest.fixture
def client(dashboard: Dashboard, fake_service: FakeScoringService) -> TestClient:
    """Create FastAPI test client wired to the fake scoring service"""
    app = create_app()
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    app.dependency_overrides[get_scoring_client] = fake_service.client
    return TestClient(app)
