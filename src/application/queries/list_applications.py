"""
ListApplicationsQuery - CQRS Read Query

Query object and handler for the paginated application listing.
Part of CQRS pattern - separates read operations from write operations.

Responsibility:
    - Query: Data holder with optional plan type filter and page number
    - Handler: Reads one page from the repository and maps it to list items

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Query is simple DTO (Data Transfer Object)
    - Link URLs are built by the API Layer from the page numbers returned here
"""

import math
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.applications.entities.application import Application
from src.domain.applications.order_config import APPLICATIONS_PER_PAGE
from src.domain.applications.repositories.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType


class ListApplicationsQuery(BaseModel):
    """
    Query for one page of applications, oldest first.

    Attributes:
        plan_type: Optional plan type filter (empty string means no filter)
        page: 1-based page number
    """

    plan_type: Optional[PlanType] = Field(
        default=None, description="Only applications on this plan type"
    )
    page: int = Field(default=1, ge=1, description="Page number (1-based)")

    @field_validator("plan_type", mode="before")
    @classmethod
    def blank_plan_type_means_no_filter(cls, value: object) -> object:
        """An empty ?plan_type= lists every plan type."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ApplicationListItem(BaseModel):
    """
    One row of the listing.

    order_id is only set for COMPLETE applications; dump with
    exclude_unset=True to omit it for the others.
    """

    id: UUID
    customer_name: Optional[str]
    address: str
    plan_type: Optional[PlanType]
    plan_name: Optional[str]
    state: str
    plan_monthly_cost: Optional[str]
    order_id: Optional[str] = None

    @classmethod
    def from_application(cls, application: Application) -> "ApplicationListItem":
        plan = application.plan
        fields = {
            "id": application.id,
            "customer_name": application.customer.full_name if application.customer else None,
            "address": application.full_address,
            "plan_type": plan.type if plan else None,
            "plan_name": plan.name if plan else None,
            "state": application.state,
            "plan_monthly_cost": plan.formatted_monthly_cost if plan else None,
        }

        match application.status:
            case ApplicationStatus.COMPLETE:
                fields["order_id"] = application.order_id
            case ApplicationStatus.PRELIM | ApplicationStatus.ORDER | ApplicationStatus.ORDER_FAILED:
                pass

        return cls(**fields)


class ApplicationPage(BaseModel):
    """
    Result DTO returned by ListApplicationsQueryHandler.

    Attributes:
        items: Applications on the page
        total: Total applications matching the filter
        current_page: Requested page
        per_page: Page size
        last_page: Last page number (1 when there are no results)
        from_item: 1-based position of the first item (None on empty page)
        to_item: 1-based position of the last item (None on empty page)
    """

    items: list[ApplicationListItem]
    total: int = Field(ge=0)
    current_page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    last_page: int = Field(ge=1)
    from_item: Optional[int] = None
    to_item: Optional[int] = None

    @property
    def prev_page(self) -> Optional[int]:
        return self.current_page - 1 if self.current_page > 1 else None

    @property
    def next_page(self) -> Optional[int]:
        return self.current_page + 1 if self.current_page < self.last_page else None


class ListApplicationsQueryHandler:
    """
    Handler for the application listing.

    Usage:
        handler = ListApplicationsQueryHandler(repository)
        page = handler.handle(ListApplicationsQuery(plan_type=PlanType.NBN))
    """

    def __init__(
        self,
        repository: ApplicationRepositoryProtocol,
        per_page: int = APPLICATIONS_PER_PAGE,
    ) -> None:
        self.repository = repository
        self.per_page = per_page

    def handle(self, query: ListApplicationsQuery) -> ApplicationPage:
        """
        Read one page.

        Args:
            query: Filter and page number

        Returns:
            ApplicationPage with items ordered by created_at ascending
        """
        applications, total = self.repository.paginate(
            page=query.page, per_page=self.per_page, plan_type=query.plan_type
        )

        items = [ApplicationListItem.from_application(app) for app in applications]
        offset = (query.page - 1) * self.per_page

        return ApplicationPage(
            items=items,
            total=total,
            current_page=query.page,
            per_page=self.per_page,
            last_page=max(1, math.ceil(total / self.per_page)),
            from_item=offset + 1 if items else None,
            to_item=offset + len(items) if items else None,
        )
