"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer queries and use cases
    - All routers follow dependency injection pattern

Available Routers:
    - applications_router: Application listing endpoints
"""

from .applications import router as applications_router

__all__ = ["applications_router"]
