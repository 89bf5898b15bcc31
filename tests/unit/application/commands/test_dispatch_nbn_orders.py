"""
Tests for DispatchNbnOrdersCommandHandler.

Covers:
- Only NBN applications at ORDER are dispatched, once each
- Empty batch message
- Count message
- SelectionFault on store errors
- Queue errors propagate
"""

from unittest.mock import MagicMock

import pytest

from src.application.commands.dispatch_nbn_orders import (
    NOTHING_TO_DISPATCH_MESSAGE,
    DispatchNbnOrdersCommandHandler,
)
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType
from src.domain.shared.exceptions import SelectionFault


@pytest.fixture
def handler(repository, task_queue):
    return DispatchNbnOrdersCommandHandler(repository, task_queue)


def test_only_nbn_applications_at_order_are_dispatched(
    handler, task_queue, create_application
):
    """nbn/order, nbn/prelim, mobile/order -> one task, for the first."""
    eligible = create_application(plan_type=PlanType.NBN, status=ApplicationStatus.ORDER)
    create_application(plan_type=PlanType.NBN, status=ApplicationStatus.PRELIM)
    create_application(plan_type=PlanType.MOBILE, status=ApplicationStatus.ORDER)

    result = handler.handle()

    assert task_queue.submitted == [eligible.id]
    assert result.dispatched_count == 1
    assert result.application_ids == [eligible.id]
    assert result.message == "Dispatched 1 application(s) for NBN order processing."


def test_five_eligible_applications_dispatch_five_tasks(
    handler, task_queue, create_application
):
    applications = [create_application() for _ in range(5)]

    result = handler.handle()

    assert task_queue.submitted == [application.id for application in applications]
    assert result.dispatched_count == 5
    assert "Dispatched 5 application(s)" in result.message


def test_terminal_and_other_plan_types_are_never_dispatched(
    handler, task_queue, create_application
):
    create_application(status=ApplicationStatus.COMPLETE, order_id="ORD-1")
    create_application(status=ApplicationStatus.ORDER_FAILED)
    create_application(plan_type=PlanType.OPTICOMM, status=ApplicationStatus.ORDER)

    result = handler.handle()

    assert task_queue.submitted == []
    assert result.dispatched_count == 0


def test_no_eligible_applications_is_success(handler, task_queue):
    result = handler.handle()

    assert result.dispatched_count == 0
    assert result.application_ids == []
    assert result.message == NOTHING_TO_DISPATCH_MESSAGE
    assert task_queue.submitted == []


def test_store_error_raises_selection_fault(task_queue):
    repository = MagicMock()
    repository.find_eligible_for_order_submission.side_effect = ConnectionError("down")
    handler = DispatchNbnOrdersCommandHandler(repository, task_queue)

    with pytest.raises(SelectionFault) as exc_info:
        handler.handle()

    assert isinstance(exc_info.value.original_error, ConnectionError)
    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert task_queue.submitted == []


def test_queue_error_propagates(repository, create_application):
    create_application()
    create_application()
    queue = MagicMock()
    queue.submit.side_effect = ["task-1", RuntimeError("broker down")]
    handler = DispatchNbnOrdersCommandHandler(repository, queue)

    with pytest.raises(RuntimeError, match="broker down"):
        handler.handle()

    assert queue.submit.call_count == 2
