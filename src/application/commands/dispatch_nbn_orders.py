"""
DispatchNbnOrders - CQRS Write Command

Batch dispatcher for the NBN order pipeline: runs the eligibility selector
once and submits one independent order task per eligible application.

Responsibility:
    - Read the eligible batch (NBN plan, ORDER status)
    - Submit exactly one task per eligible application
    - Report the dispatched count and an operator message

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Invoked by the CLI (process-nbn-applications) and by the
      dispatch_nbn_orders Celery task (optionally on a beat schedule)
    - Fire-and-continue: no per-task result is awaited or stored
"""

import logging

from src.application.models import DispatchResult
from src.application.ports.task_queue import TaskQueueProtocol
from src.domain.applications.repositories.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.shared.exceptions import SelectionFault

logger = logging.getLogger(__name__)

NOTHING_TO_DISPATCH_MESSAGE = "No NBN applications to process."


def dispatched_message(count: int) -> str:
    """
    Operator message for a non-empty batch.

    Examples:
        >>> dispatched_message(5)
        'Dispatched 5 application(s) for NBN order processing.'
    """
    return f"Dispatched {count} application(s) for NBN order processing."


class DispatchNbnOrdersCommandHandler:
    """
    Handler for one dispatch cycle.

    Flow:
        1. repository.find_eligible_for_order_submission()
           (any store error -> SelectionFault, nothing dispatched)
        2. task_queue.submit(application.id) for every result, oldest first
        3. Return DispatchResult with count and message

    A queue error stops the cycle and propagates: tasks already submitted
    stay submitted, and the remaining applications are picked up by the next
    cycle because they are still at ORDER.

    Examples:
        >>> handler = DispatchNbnOrdersCommandHandler(repository, CeleryOrderSubmissionQueue())
        >>> result = handler.handle()
        >>> result.message
        'Dispatched 3 application(s) for NBN order processing.'
    """

    def __init__(
        self,
        repository: ApplicationRepositoryProtocol,
        task_queue: TaskQueueProtocol,
    ) -> None:
        self.repository = repository
        self.task_queue = task_queue

    def handle(self) -> DispatchResult:
        """
        Run one dispatch cycle.

        Returns:
            DispatchResult with dispatched count, ids and message

        Raises:
            SelectionFault: If the eligible batch cannot be read
            Exception: Queue submission errors propagate unchanged
        """
        try:
            applications = self.repository.find_eligible_for_order_submission()
        except Exception as e:
            logger.error(f"Failed to select NBN applications for ordering: {e}")
            raise SelectionFault(
                "Failed to select NBN applications for order submission",
                original_error=e,
            ) from e

        if not applications:
            logger.info(NOTHING_TO_DISPATCH_MESSAGE)
            return DispatchResult(
                dispatched_count=0, message=NOTHING_TO_DISPATCH_MESSAGE
            )

        dispatched_ids = []
        for application in applications:
            try:
                task_id = self.task_queue.submit(application.id)
            except Exception as e:
                logger.error(
                    f"Failed to queue order task for application {application.id} "
                    f"after {len(dispatched_ids)} dispatched: {e}"
                )
                raise

            logger.debug(
                f"Queued order task {task_id} for application {application.id}"
            )
            dispatched_ids.append(application.id)

        message = dispatched_message(len(dispatched_ids))
        logger.info(message)

        return DispatchResult(
            dispatched_count=len(dispatched_ids),
            application_ids=dispatched_ids,
            message=message,
        )
