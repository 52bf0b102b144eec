from flapboard.api.routes.alerts import router as alerts_router
from flapboard.api.routes.health import router as health_router

__all__ = ["alerts_router", "health_router"]
