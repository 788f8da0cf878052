"""Scoring service HTTP client for borrowers, loans, training and analysis"""

import time
from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from loan_recovery.config import settings
from loan_recovery.domain.exceptions import MalformedResponse, RemoteRejection, TransportFailure
from loan_recovery.domain.models import Borrower, Loan, PredictionResult, StrategyResult, TrainingResult
from loan_recovery.infrastructure.observability.metrics import remote_call_latency_histogram, remote_failure_counter


def _record_id(raw: dict) -> str:
    # Records come out of MongoDB as "_id"; plain "id" is accepted too
    value = raw["_id"] if "_id" in raw else raw["id"]
    return str(value)


def _optional_int(raw: dict, key: str) -> Optional[int]:
    value = raw.get(key)
    if value is None:
        return None
    # 12.0 is accepted as 12; 12.5, "12" and booleans are not
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return int(value)


def _optional_float(raw: dict, key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number, got {value!r}")
    return float(value)


def _optional_str(raw: dict, key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {value!r}")
    return value


def parse_borrower(raw: dict) -> Borrower:
    return Borrower(
        id=_record_id(raw),
        full_name=_optional_str(raw, "full_name"),
        credit_score=_optional_int(raw, "credit_score"),
        income=_optional_float(raw, "income"),
    )


def parse_loan(raw: dict) -> Loan:
    return Loan(
        id=_record_id(raw),
        borrower_id=str(raw["borrower_id"]),
        loan_amount=_optional_float(raw, "loan_amount"),
        term_months=_optional_int(raw, "term_months"),
        interest_rate=_optional_float(raw, "interest_rate"),
        num_late_payments=_optional_int(raw, "num_late_payments"),
        past_due_days=_optional_int(raw, "past_due_days"),
        status=_optional_str(raw, "status"),
    )


class ScoringClient:
    """Client for the remote loan scoring service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.backend_url
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    async def _request(self, operation: str, method: str, path: str) -> Any:
        """
        Issue one request and return the decoded JSON body.

        Raises:
            TransportFailure: Service unreachable or connection dropped
            RemoteRejection: Non-2xx status, carrying the body's "detail" if present
            MalformedResponse: 2xx body that is not JSON
        """
        start_time = time.time()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(method, f"{self.base_url}{path}")
            except (httpx.RequestError, httpx.InvalidURL) as e:
                remote_failure_counter.labels(operation=operation, kind="transport").inc()
                raise TransportFailure(f"{operation} request failed: {e}") from e
            finally:
                remote_call_latency_histogram.labels(operation=operation).observe(time.time() - start_time)

        if response.is_error:
            remote_failure_counter.labels(operation=operation, kind="rejected").inc()
            raise RemoteRejection(response.status_code, _extract_detail(response))

        try:
            return response.json()
        except ValueError as e:
            remote_failure_counter.labels(operation=operation, kind="malformed").inc()
            raise MalformedResponse(f"Invalid JSON from {operation}: {e}") from e

    async def list_borrowers(self) -> List[Borrower]:
        data = await self._request("borrowers", "GET", "/borrowers")
        try:
            return [parse_borrower(raw) for raw in data]
        except (KeyError, ValueError, TypeError) as e:
            raise MalformedResponse(f"Invalid borrower data: {e}") from e

    async def list_loans(self) -> List[Loan]:
        data = await self._request("loans", "GET", "/loans")
        try:
            return [parse_loan(raw) for raw in data]
        except (KeyError, ValueError, TypeError) as e:
            raise MalformedResponse(f"Invalid loan data: {e}") from e

    async def train(self) -> TrainingResult:
        data = await self._request("train", "POST", "/train")
        try:
            auc = data.get("auc")
            return TrainingResult(
                samples_used=int(data["samples_used"]),
                auc=float(auc) if auc is not None else None,
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise MalformedResponse(f"Invalid training result: {e}") from e

    async def predict(self, loan_id: str) -> PredictionResult:
        data = await self._request("predict", "GET", f"/predict/{quote(loan_id, safe='')}")
        try:
            return PredictionResult(
                probability_default=float(data["probability_default"]),
                label=str(data["label"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise MalformedResponse(f"Invalid prediction: {e}") from e

    async def strategy(self, loan_id: str) -> StrategyResult:
        data = await self._request("strategy", "GET", f"/strategy/{quote(loan_id, safe='')}")
        try:
            return StrategyResult(
                recommended_strategy=str(data["recommended_strategy"]),
                risk_level=str(data["risk_level"]),
                actions=tuple(str(action) for action in data["actions"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise MalformedResponse(f"Invalid strategy: {e}") from e

    async def ping(self) -> int:
        """Reachability probe; returns the status code of GET {base}/"""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/")
            except (httpx.RequestError, httpx.InvalidURL) as e:
                raise TransportFailure(f"ping request failed: {e}") from e
        return response.status_code


def _extract_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return None
