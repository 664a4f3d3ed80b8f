"""
API V1 Endpoints Package
Exports routers used by main app
"""
from .applications import router as applications_router
from .internships import router as internships_router
from .reports import router as reports_router

__all__ = [
    "applications_router",
    "internships_router",
    "reports_router"
]
