"""
Routers Package

Contains FastAPI router modules for:
- Protected application endpoints
"""

from routers.app_router import app_router as app_router

__all__ = ["app_router"]
