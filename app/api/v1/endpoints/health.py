"""Health check endpoints. No auth; used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.infrastructure.firebase.client import get_firestore_client
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Firestore client not initialized", "model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the Firestore client is initialized, 503 otherwise."""
    if get_firestore_client() is not None:
        return ReadinessResponse(firestore=True)
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", firestore=False).model_dump(),
    )
