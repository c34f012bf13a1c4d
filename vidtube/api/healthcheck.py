"""Health check endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from vidtube.models.schemas import ok
from vidtube.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

_start_time = datetime.now(UTC)


@router.get("")
async def healthcheck(request: Request) -> JSONResponse:
    """Liveness plus a database round trip, for monitoring and load balancers."""
    checks = {"database": "healthy"}
    try:
        await request.app.state.db.ping()
    except Exception as e:
        logger.error(f"Health check database ping failed: {e}")
        checks["database"] = "unhealthy"

    healthy = all(status == "healthy" for status in checks.values())
    payload = {
        "status": "OK" if healthy else "degraded",
        "uptimeSeconds": (datetime.now(UTC) - _start_time).total_seconds(),
        "checks": checks,
    }
    status_code = 200 if healthy else 503
    body = ok(payload, "Health check passed" if healthy else "Health check failed", status_code=status_code)
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True), status_code=status_code)
