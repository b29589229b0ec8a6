import time
from fastapi import APIRouter, Request
from ..models.response import HealthResponse
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

# Track application start time
start_time = time.time()

@router.get("/health", response_model=HealthResponse)
@router.head("/health")
async def health_check(request: Request):
    """Liveness plus whether the database pool is open"""
    db = getattr(request.app.state, 'db', None)
    response = HealthResponse(
        uptime=time.time() - start_time,
        database=bool(db is not None and db.initialized)
    )
    logger.debug(f"Health check response: {response.dict()}")
    return response
