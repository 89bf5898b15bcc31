"""
Application Queries (CQRS read side)

Exports:
    - ListApplicationsQuery / ListApplicationsQueryHandler: Paginated listing
    - ApplicationListItem, ApplicationPage: Listing DTOs
"""

from src.application.queries.list_applications import (
    ApplicationListItem,
    ApplicationPage,
    ListApplicationsQuery,
    ListApplicationsQueryHandler,
)

__all__ = [
    "ListApplicationsQuery",
    "ListApplicationsQueryHandler",
    "ApplicationListItem",
    "ApplicationPage",
]
