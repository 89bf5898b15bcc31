"""
Tests for GET /api/applications.

Covers:
- Plan type filter
- 422 on invalid plan_type / page (store not touched)
- Empty plan_type means no filter
- Response envelope: data, links, meta ("from" key)
- order_id only present for complete applications
- Formatted monthly cost
"""

from unittest.mock import MagicMock

from fastapi import status

from src.api.main import app
from src.api.routers.applications import get_list_applications_handler
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType


def test_filter_by_plan_type(client, create_application):
    nbn = create_application(plan_type=PlanType.NBN)
    create_application(plan_type=PlanType.OPTICOMM)
    create_application(plan_type=PlanType.MOBILE)

    response = client.get("/api/applications", params={"plan_type": "nbn"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert [item["id"] for item in data] == [str(nbn.id)]
    assert data[0]["plan_type"] == "nbn"


def test_invalid_plan_type_returns_422_without_reading_store(client):
    handler = MagicMock()
    app.dependency_overrides[get_list_applications_handler] = lambda: handler

    response = client.get("/api/applications", params={"plan_type": "invalid"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    handler.handle.assert_not_called()


def test_invalid_plan_type_error_body(client):
    response = client.get("/api/applications", params={"plan_type": "fibre"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = response.json()["detail"]
    assert detail["code"] == "INVALID_PLAN_TYPE"
    assert detail["details"] == {"plan_type": "fibre"}


def test_empty_plan_type_lists_every_plan_type(client, create_application):
    nbn = create_application(plan_type=PlanType.NBN)
    mobile = create_application(plan_type=PlanType.MOBILE)

    response = client.get("/api/applications?plan_type=")

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()["data"]] == [
        str(nbn.id),
        str(mobile.id),
    ]


def test_page_below_one_returns_422(client):
    response = client.get("/api/applications", params={"page": 0})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_response_envelope(client, create_application):
    for _ in range(16):
        create_application()

    response = client.get("/api/applications", params={"page": 2})

    body = response.json()
    assert len(body["data"]) == 1
    assert body["meta"] == {
        "current_page": 2,
        "from": 16,
        "last_page": 2,
        "per_page": 15,
        "to": 16,
        "total": 16,
    }
    assert body["links"]["first"].endswith("/api/applications?page=1")
    assert body["links"]["prev"].endswith("/api/applications?page=1")
    assert body["links"]["last"].endswith("/api/applications?page=2")
    assert body["links"]["next"] is None


def test_links_keep_plan_type_filter(client, create_application):
    create_application()

    response = client.get("/api/applications", params={"plan_type": "nbn"})

    links = response.json()["links"]
    assert "plan_type=nbn" in links["first"]
    assert "page=1" in links["first"]
    assert links["prev"] is None


def test_empty_listing(client):
    body = client.get("/api/applications").json()

    assert body["data"] == []
    assert body["meta"]["total"] == 0
    assert body["meta"]["from"] is None
    assert body["meta"]["to"] is None


def test_order_id_only_for_complete_applications(client, create_application):
    complete = create_application(
        status=ApplicationStatus.COMPLETE, order_id="ORD-123456"
    )
    failed = create_application(status=ApplicationStatus.ORDER_FAILED)

    data = {
        item["id"]: item for item in client.get("/api/applications").json()["data"]
    }

    assert data[str(complete.id)]["order_id"] == "ORD-123456"
    assert "order_id" not in data[str(failed.id)]


def test_item_fields(client, create_application):
    application = create_application(plan_name="NBN 25", monthly_cost=7950)

    item = client.get("/api/applications").json()["data"][0]

    assert item == {
        "id": str(application.id),
        "customer_name": "John Doe",
        "address": "123 Main St, Unit 1, Melbourne, VIC, 3000",
        "plan_type": "nbn",
        "plan_name": "NBN 25",
        "state": "VIC",
        "plan_monthly_cost": "$79.50",
    }
