"""
Celery Tasks for the NBN Order Pipeline

Responsibility:
    - submit_nbn_order: process one application through the B2B endpoint
    - dispatch_nbn_orders: run the batch dispatcher (CLI equivalent, beat target)
    - CeleryOrderSubmissionQueue: TaskQueueProtocol backed by submit_nbn_order

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Thin orchestrators: all decisions live in SubmitNbnOrderUseCase and
      DispatchNbnOrdersCommandHandler
    - acks_late + reject_on_worker_lost: a task killed mid-flight is
      redelivered; the use case skips applications no longer at ORDER
    - No automatic retry: a fault leaves the application ORDER_FAILED and is
      re-raised so it is recorded in the result backend
"""

import logging
from typing import Optional
from uuid import UUID

from celery import Task

from .celery_app import celery_app
from src.application.commands.dispatch_nbn_orders import (
    DispatchNbnOrdersCommandHandler,
)
from src.application.services.order_submission_service import SubmitNbnOrderUseCase
from src.domain.applications.order_config import OrderPipelineConfig
from src.infrastructure.b2b.nbn_b2b_client import NbnB2BClient
from src.infrastructure.persistence.repositories.application_repository import (
    RedisApplicationRepository,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


def build_submission_use_case(
    config: Optional[OrderPipelineConfig] = None,
) -> SubmitNbnOrderUseCase:
    """
    Wire the use case with Redis and the B2B HTTP client.

    Args:
        config: Pipeline configuration (default: OrderPipelineConfig.from_env(),
            read once and shared by the client and the use case)

    Raises:
        ValueError: If the environment holds an invalid pipeline setting
    """
    config = config or OrderPipelineConfig.from_env()
    return SubmitNbnOrderUseCase(
        RedisApplicationRepository(), NbnB2BClient(config=config), config=config
    )


def build_dispatch_handler() -> DispatchNbnOrdersCommandHandler:
    """Wire the dispatcher with Redis and the Celery queue."""
    return DispatchNbnOrdersCommandHandler(
        RedisApplicationRepository(), CeleryOrderSubmissionQueue()
    )


@celery_app.task(
    bind=True,
    name="submit_nbn_order",
    acks_late=True,
    reject_on_worker_lost=True,
    time_limit=120,  # hard limit, above the B2B timeout
    soft_time_limit=90,
)
def submit_nbn_order_task(self: Task, application_id: str) -> dict:
    """
    Submit one NBN application to the B2B order endpoint.

    Args:
        self: Celery task instance (bind=True gives access to self.request.id)
        application_id: Application UUID as string

    Returns:
        dict:
            {
                "status": str,          # "completed", "rejected" or "skipped"
                "application_id": str,
                "job_id": str,          # Celery task ID
            }

    Raises:
        TransportFault: Endpoint unreachable (application is ORDER_FAILED)
        MalformedResponse: 2xx without order_id (application is ORDER_FAILED)
        UpdateFault: Terminal status write lost
        ValueError: Invalid pipeline configuration (application is ORDER_FAILED)
        SoftTimeLimitExceeded: Task ran past soft_time_limit (application is
            ORDER_FAILED)
    """
    job_id = self.request.id
    logger.info(f"Job {job_id}: submitting NBN order for application {application_id}")

    try:
        use_case = build_submission_use_case()
    except ValueError as e:
        logger.critical(f"Job {job_id}: invalid order pipeline configuration: {e}")
        # Built-in defaults are only used to write ORDER_FAILED, never to call B2B
        build_submission_use_case(OrderPipelineConfig()).abandon(UUID(application_id), e)
        raise

    outcome = use_case.execute(UUID(application_id))

    logger.info(
        f"Job {job_id}: application {application_id} finished with {outcome.value}"
    )
    return {
        "status": outcome.value,
        "application_id": application_id,
        "job_id": job_id,
    }


@celery_app.task(bind=True, name="dispatch_nbn_orders")
def dispatch_nbn_orders_task(self: Task) -> dict:
    """
    Run one dispatch cycle.

    Returns:
        dict: DispatchResult as JSON-compatible dict
            (dispatched_count, application_ids, message)

    Raises:
        SelectionFault: If the eligible batch cannot be read
    """
    logger.info(f"Job {self.request.id}: dispatching NBN orders")
    result = build_dispatch_handler().handle()
    return result.model_dump(mode="json")


class CeleryOrderSubmissionQueue:
    """TaskQueueProtocol implementation that enqueues submit_nbn_order."""

    def submit(self, application_id: UUID) -> str:
        return submit_nbn_order_task.delay(str(application_id)).id
