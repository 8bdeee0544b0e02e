from fastapi import APIRouter, Request

from collabgate import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Gateway health check endpoint.

    Reports the collaboration configuration in effect. Does not call the
    collaboration agent.
    """
    settings = request.app.state.settings
    health_status = {
        "status": "healthy",
        "service": "collabgate",
        "version": __version__,
        "coco_agent_url": settings.COCO_AGENT_URL,
        "path_planner_url": settings.planner_url,
        "forward_mode": settings.FORWARD_MODE,
        "on_missing_destination": settings.ON_MISSING_DESTINATION,
        "local_service_url": settings.LOCAL_SERVICE_URL,
        "session_login_enabled": settings.login_enabled,
    }

    if not settings.COCO_AGENT_URL:
        health_status["status"] = "degraded"
        health_status["warning"] = "COCO_AGENT_URL not configured; every routed request will fail"

    return health_status
