# /health endpoint
# myflix/api/endpoints/health.py

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    database: bool = False
    bucket_ready: bool = False


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Perform a Health Check",
    response_description="Liveness plus the startup outcome of the database and bucket checks.",
)
async def health_check(request: Request):
    """
    Reports the state recorded at startup; performs no I/O so it stays fast
    for liveness probes.
    """
    state = request.app.state
    return HealthResponse(
        status="ok",
        database=getattr(state, "database_ready", False),
        bucket_ready=getattr(state, "bucket_ready", False),
    )
