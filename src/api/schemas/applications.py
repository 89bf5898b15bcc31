"""
Application Listing Schemas

HTTP representation of GET /api/applications: a data list plus pagination
links and meta.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.application.queries.list_applications import ApplicationListItem


class PaginationLinks(BaseModel):
    """Absolute URLs of neighbouring pages (None when there is no such page)."""

    first: str
    last: str
    prev: Optional[str]
    next: Optional[str]


class PaginationMeta(BaseModel):
    """
    Page position and totals.

    Attributes:
        current_page: Requested page
        from_: 1-based position of the first item (serialized as "from")
        last_page: Last page number
        per_page: Page size
        to: 1-based position of the last item
        total: Total matching applications
    """

    current_page: int
    from_: Optional[int] = Field(alias="from")
    last_page: int
    per_page: int
    to: Optional[int]
    total: int

    class Config:
        populate_by_name = True


class ApplicationListResponse(BaseModel):
    """
    Response model for GET /api/applications.

    Serialize with exclude_unset so order_id is only present for
    complete applications.
    """

    data: list[ApplicationListItem]
    links: PaginationLinks
    meta: PaginationMeta

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "data": [
                    {
                        "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                        "customer_name": "John Doe",
                        "address": "123 Main St, Unit 1, Melbourne, VIC, 3000",
                        "plan_type": "nbn",
                        "plan_name": "NBN 50",
                        "state": "VIC",
                        "plan_monthly_cost": "$59.99",
                        "order_id": "ORD-123456",
                    }
                ],
                "links": {
                    "first": "http://localhost:8000/api/applications?page=1",
                    "last": "http://localhost:8000/api/applications?page=1",
                    "prev": None,
                    "next": None,
                },
                "meta": {
                    "current_page": 1,
                    "from": 1,
                    "last_page": 1,
                    "per_page": 15,
                    "to": 1,
                    "total": 1,
                },
            }
        }
