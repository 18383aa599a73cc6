"""
Health check and monitoring endpoints.
"""
import time
import logging
from fastapi import APIRouter, Depends
from app.core.dependencies import get_device_store
from app.core.settings import settings
from app.services.device_store import DeviceStore
from app.services.push_sender import _is_fcm_available

logger = logging.getLogger("app.health")
router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "version": "1.0.0"
    }

@router.get("/health/detailed")
def detailed_health_check(store: DeviceStore = Depends(get_device_store)):
    """Detailed health check with service status."""
    start_time = time.time()

    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "services": {}
    }

    # Check device store
    db_health = store.ping()
    health_status["services"]["database"] = db_health
    if db_health["status"] != "healthy":
        health_status["status"] = "degraded"

    # Check FCM
    if _is_fcm_available():
        health_status["services"]["push"] = {"status": "configured", "provider": "fcm"}
    else:
        health_status["services"]["push"] = {
            "status": "not_configured",
            "note": "Deliveries will fail until Firebase is initialized"
        }

    response_time = (time.time() - start_time) * 1000
    health_status["response_time_ms"] = round(response_time, 2)

    return health_status

@router.get("/ready")
def readiness_check(store: DeviceStore = Depends(get_device_store)):
    """Kubernetes-style readiness probe."""
    db_health = store.ping()
    if db_health["status"] != "healthy":
        logger.error(f"Readiness check failed: {db_health['database']}")
        return {"status": "not_ready", "reason": "database_unavailable"}
    return {"status": "ready"}

@router.get("/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"status": "alive", "timestamp": time.time()}
