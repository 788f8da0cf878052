"""GET /v1/system-check - Scoring service reachability"""

from fastapi import APIRouter, Depends

from loan_recovery.api.dependencies import get_scoring_client
from loan_recovery.api.v1.schemas import SystemCheckResponse
from loan_recovery.domain.exceptions import TransportFailure
from loan_recovery.infrastructure.clients.scoring import ScoringClient

router = APIRouter()


@router.get("/system-check", response_model=SystemCheckResponse)
async def system_check(client: ScoringClient = Depends(get_scoring_client)):
    """Probe the configured scoring service base URL"""
    try:
        status_code = await client.ping()
    except TransportFailure as e:
        return SystemCheckResponse(backend_url=client.base_url, reachable=False, detail=str(e))

    return SystemCheckResponse(
        backend_url=client.base_url,
        reachable=True,
        detail=f"HTTP {status_code}",
    )
