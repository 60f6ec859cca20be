"""Health check endpoints."""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from employee_mgmt import __version__
from employee_mgmt.api.dependencies import Registry, get_database
from employee_mgmt.database import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

DatabaseHandle = Annotated[Database, Depends(get_database)]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    database: str
    database_url: str
    active_sessions: int


async def _database_status(database: Database) -> str:
    try:
        await database.ping()
    except SQLAlchemyError:
        logger.warning("Database health check failed on %s", database.display_url, exc_info=True)
        return "unhealthy"
    return "healthy"


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(database: DatabaseHandle, registry: Registry) -> HealthResponse:
    """Report database reachability, the masked connection URL and open logins."""
    db_status = await _database_status(database)
    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database=db_status,
        database_url=database.display_url,
        active_sessions=len(registry),
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check(database: DatabaseHandle) -> JSONResponse:
    """Ready once the database answers; 503 until then."""
    db_status = await _database_status(database)
    body = {"status": "ready" if db_status == "healthy" else "not_ready", "database": db_status}
    code = status.HTTP_200_OK if db_status == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body)


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
