# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Mounted at the root (not under /api) for load balancers:
# - /health: process is up, with environment and version
# - /health/ready: Supabase answers a one-row poets query
# - /health/live: liveness for container restarts
#
# Redis is reported by /health/ready but does not decide readiness; only the
# dictionary sync needs it, every read and write path works without it.
# =============================================================================

import logging
from datetime import datetime, timezone

import redis
from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"
PROBE_TIMEOUT_SECONDS = 2


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Result of each dependency probe: "healthy" or "unhealthy: <reason>"."""
    database: str = "unknown"
    broker: str = "unknown"


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unhealthy(error: Exception) -> str:
    return f"unhealthy: {str(error)[:50]}"


def probe_database() -> str:
    try:
        SupabaseClient.get_client().table("poets").select("id").limit(1).execute()
        return "healthy"
    except Exception as e:
        logger.warning(f"Database probe failed: {e}")
        return _unhealthy(e)


def probe_broker() -> str:
    try:
        connection = redis.Redis.from_url(
            settings.REDIS_URL,
            socket_connect_timeout=PROBE_TIMEOUT_SECONDS,
            socket_timeout=PROBE_TIMEOUT_SECONDS,
        )
        connection.ping()
        return "healthy"
    except Exception as e:
        logger.warning(f"Broker probe failed: {e}")
        return _unhealthy(e)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """Ready when the database answers, degraded otherwise."""
    checks = ChecksResponse(database=probe_database(), broker=probe_broker())
    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
