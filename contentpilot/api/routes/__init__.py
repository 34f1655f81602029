"""API route modules."""

from contentpilot.api.routes.health import router as health_router
from contentpilot.api.routes.generate import router as generate_router

__all__ = [
    "health_router",
    "generate_router",
]
