"""
Tests for ListApplicationsQueryHandler.

Covers:
- Plan type filter
- Oldest-first ordering
- Item mapping (customer name, address, formatted cost)
- order_id only for complete applications
- Pagination numbers
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.application.queries.list_applications import (
    ListApplicationsQuery,
    ListApplicationsQueryHandler,
)
from src.domain.applications.entities.reference_data import Customer
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType


@pytest.fixture
def handler(repository):
    return ListApplicationsQueryHandler(repository)


def test_filter_by_plan_type(handler, create_application):
    nbn = create_application(plan_type=PlanType.NBN)
    create_application(plan_type=PlanType.MOBILE)

    page = handler.handle(ListApplicationsQuery(plan_type=PlanType.NBN))

    assert [item.id for item in page.items] == [nbn.id]
    assert page.items[0].plan_type is PlanType.NBN
    assert page.total == 1


def test_oldest_first(handler, create_application):
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    newest = create_application(created_at=now - timedelta(days=1))
    oldest = create_application(created_at=now - timedelta(days=3))

    page = handler.handle(ListApplicationsQuery())

    assert [item.id for item in page.items] == [oldest.id, newest.id]


def test_item_fields(handler, create_application):
    application = create_application(
        plan_name="NBN 50",
        monthly_cost=5999,
        status=ApplicationStatus.PRELIM,
        customer=Customer(first_name="John", last_name="Doe"),
    )

    item = handler.handle(ListApplicationsQuery()).items[0]

    assert item.model_dump(exclude_unset=True) == {
        "id": application.id,
        "customer_name": "John Doe",
        "address": "123 Main St, Unit 1, Melbourne, VIC, 3000",
        "plan_type": PlanType.NBN,
        "plan_name": "NBN 50",
        "state": "VIC",
        "plan_monthly_cost": "$59.99",
    }


def test_order_id_only_for_complete(handler, create_application):
    complete = create_application(status=ApplicationStatus.COMPLETE, order_id="ORD-12345")
    prelim = create_application(status=ApplicationStatus.PRELIM)

    items = {
        item.id: item.model_dump(exclude_unset=True)
        for item in handler.handle(ListApplicationsQuery()).items
    }

    assert items[complete.id]["order_id"] == "ORD-12345"
    assert "order_id" not in items[prelim.id]


def test_pagination(handler, create_application):
    applications = [create_application() for _ in range(20)]

    first = handler.handle(ListApplicationsQuery(page=1))
    second = handler.handle(ListApplicationsQuery(page=2))

    assert len(first.items) == 15
    assert (first.from_item, first.to_item) == (1, 15)
    assert first.last_page == 2
    assert first.prev_page is None
    assert first.next_page == 2

    assert [item.id for item in second.items] == [a.id for a in applications[15:]]
    assert (second.from_item, second.to_item) == (16, 20)
    assert second.prev_page == 1
    assert second.next_page is None
    assert second.total == 20


def test_empty_listing(handler):
    page = handler.handle(ListApplicationsQuery())

    assert page.items == []
    assert page.total == 0
    assert page.last_page == 1
    assert page.from_item is None
    assert page.to_item is None


def test_invalid_query_values_are_rejected():
    with pytest.raises(ValidationError):
        ListApplicationsQuery(plan_type="invalid")
    with pytest.raises(ValidationError):
        ListApplicationsQuery(page=0)


def test_blank_plan_type_means_no_filter(handler, create_application):
    create_application(plan_type=PlanType.NBN)
    create_application(plan_type=PlanType.OPTICOMM)

    query = ListApplicationsQuery(plan_type="")

    assert query.plan_type is None
    assert handler.handle(query).total == 2
