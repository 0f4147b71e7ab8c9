"""
API routers.
"""

from .access import router as access_router
from .attribution import router as attribution_router
from .health import router as health_router
from .pages import router as pages_router
from .restrictions import router as restrictions_router

__all__ = [
    "access_router",
    "attribution_router",
    "health_router",
    "pages_router",
    "restrictions_router",
]
