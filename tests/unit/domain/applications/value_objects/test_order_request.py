"""
Tests for OrderRequest value object.

Covers:
- Payload fields built from an application
- address_2 None sent as null
- Missing plan rejected
"""

from dataclasses import replace

import pytest

from src.domain.applications.value_objects.order_request import OrderRequest
from src.domain.applications.value_objects.plan_type import PlanType
from src.domain.shared.exceptions import InvalidApplicationError


def test_payload_contains_address_and_plan_name(create_application):
    application = create_application(plan_type=PlanType.NBN, plan_name="NBN 100")

    payload = OrderRequest.from_application(application).to_payload()

    assert payload == {
        "address_1": "123 Main St",
        "address_2": "Unit 1",
        "city": "Melbourne",
        "state": "VIC",
        "postcode": "3000",
        "plan_name": "NBN 100",
    }


def test_missing_address_2_is_sent_as_none(create_application):
    application = create_application(address_2=None)

    payload = OrderRequest.from_application(application).to_payload()

    assert "address_2" in payload
    assert payload["address_2"] is None


def test_application_without_plan_is_rejected(create_application):
    application = replace(create_application(), plan=None)

    with pytest.raises(InvalidApplicationError) as exc_info:
        OrderRequest.from_application(application)

    assert exc_info.value.field_name == "plan"


def test_order_request_is_immutable(create_application):
    request = OrderRequest.from_application(create_application())

    with pytest.raises(AttributeError):
        request.plan_name = "Other"
