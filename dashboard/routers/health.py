from fastapi import APIRouter

from core.clock import now_utc, to_iso8601
from dashboard.schemas import HealthResponse

router = APIRouter(tags=["System Health"])

SERVICE_NAME = "fx-sentiment-engine"

@router.get("/health", response_model=HealthResponse)
def get_health():
    """
    Liveness probe.
    """
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        timestamp=to_iso8601(now_utc()),
    )
