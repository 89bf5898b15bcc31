"""
API Router for the Application Listing

Responsibility:
    HTTP interface for reading applications, oldest first, 15 per page,
    with an optional plan type filter.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (ListApplicationsQueryHandler)
    - Read-only operations (CQRS Query pattern)
    - No business logic - pure HTTP concerns

Contains:
    - GET /applications - Paginated application listing
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import ValidationError

from src.api.schemas.applications import (
    ApplicationListResponse,
    PaginationLinks,
    PaginationMeta,
)
from src.api.schemas.common import ErrorResponse
from src.application.queries.list_applications import (
    ListApplicationsQuery,
    ListApplicationsQueryHandler,
)
from src.domain.applications.value_objects.plan_type import PlanType
from src.infrastructure.persistence.repositories.application_repository import (
    RedisApplicationRepository,
)

# Configure logger
logger = logging.getLogger(__name__)


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================


router = APIRouter(
    prefix="/applications",
    tags=["applications"],
    responses={
        422: {
            "description": "Unprocessable Entity - Invalid plan_type or page",
        },
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def get_list_applications_handler() -> ListApplicationsQueryHandler:
    """
    Dependency injection for ListApplicationsQueryHandler.

    Returns:
        Handler backed by the Redis application repository
    """
    return ListApplicationsQueryHandler(RedisApplicationRepository())


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationListResponse,
    response_model_exclude_unset=True,
    summary="List applications",
    description=(
        "Lists applications oldest first, 15 per page. "
        "Filter by plan type with ?plan_type=nbn|opticomm|mobile. "
        "order_id is only included for complete applications."
    ),
)
def list_applications(
    request: Request,
    plan_type: Optional[str] = Query(
        default=None,
        description="Only applications on this plan type (nbn, opticomm, mobile); empty means all",
    ),
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    handler: ListApplicationsQueryHandler = Depends(get_list_applications_handler),
) -> ApplicationListResponse:
    """
    Paginated application listing.

    Raises:
        HTTPException 422: If plan_type is non-empty and not a known plan type

    Examples:
        >>> curl "http://localhost:8000/api/applications?plan_type=nbn&page=2"
    """
    try:
        query = ListApplicationsQuery(plan_type=plan_type, page=page)
    except ValidationError:
        logger.warning(f"Invalid plan_type filter: {plan_type!r}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ErrorResponse(
                code="INVALID_PLAN_TYPE",
                message=f"plan_type must be one of: {', '.join(t.value for t in PlanType)}",
                details={"plan_type": plan_type},
            ).model_dump(),
        )

    result = handler.handle(query)

    def page_url(number: Optional[int]) -> Optional[str]:
        if number is None:
            return None
        return str(request.url.include_query_params(page=number))

    logger.debug(
        f"Listed {len(result.items)} of {result.total} applications "
        f"(plan_type={getattr(query.plan_type, 'value', None)}, page={page})"
    )

    return ApplicationListResponse(
        data=result.items,
        links=PaginationLinks(
            first=page_url(1),
            last=page_url(result.last_page),
            prev=page_url(result.prev_page),
            next=page_url(result.next_page),
        ),
        meta=PaginationMeta(
            current_page=result.current_page,
            from_=result.from_item,
            last_page=result.last_page,
            per_page=result.per_page,
            to=result.to_item,
            total=result.total,
        ),
    )
