"""
Submit NBN Order Use Case - Application Orchestration

Responsibility:
    Processes one application through the carrier's B2B order endpoint and
    reconciles the answer into application state.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain interfaces (repository, order gateway), not on Redis
      or HTTP directly
    - Called by the submit_nbn_order Celery task, one application per call
    - Status changes go through the Application entity, then are written in
      one atomic repository call

Outcome Table:
    2xx with order_id    -> COMPLETE + order_id, INFO log, returns COMPLETED
    non-2xx              -> ORDER_FAILED, ERROR log with body, returns REJECTED
    2xx, no order_id     -> ORDER_FAILED, ERROR log, MalformedResponse re-raised
    transport / other    -> ORDER_FAILED, ERROR log, fault re-raised
    not at ORDER / gone  -> nothing written, returns SKIPPED
"""

import logging
import time
from typing import Optional
from uuid import UUID

from src.application.models import OrderSubmissionOutcome
from src.domain.applications.entities.application import Application
from src.domain.applications.order_config import OrderPipelineConfig
from src.domain.applications.repositories.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.applications.services.order_gateway import OrderGatewayProtocol
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.order_request import OrderRequest
from src.domain.shared.exceptions import (
    ExternalRejection,
    MalformedResponse,
    UpdateFault,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


class SubmitNbnOrderUseCase:
    """
    Submits one NBN application to the B2B order endpoint.

    The application is re-read on every call. Anything no longer eligible
    (status changed, plan not NBN, record deleted) is skipped, so a redelivered
    or double-dispatched task never places a second order for a COMPLETE
    application.

    Terminal Write:
        The {status, order_id} write is retried with exponential backoff
        (config.update_retry_attempts, base config.update_retry_backoff_seconds).
        When every attempt fails it is logged at CRITICAL level and UpdateFault
        is raised, unless an order fault is already propagating: then the
        UpdateFault is logged and the original fault is re-raised.

    Examples:
        >>> use_case = SubmitNbnOrderUseCase(repository, NbnB2BClient())
        >>> use_case.execute(application_id)
        <OrderSubmissionOutcome.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        repository: ApplicationRepositoryProtocol,
        gateway: OrderGatewayProtocol,
        config: Optional[OrderPipelineConfig] = None,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            repository: Application store
            gateway: Order placement gateway (B2B client)
            config: Pipeline configuration (default: OrderPipelineConfig.from_env())
        """
        self.repository = repository
        self.gateway = gateway
        self.config = config or OrderPipelineConfig.from_env()

    def execute(self, application_id: UUID) -> OrderSubmissionOutcome:
        """
        Process one application.

        Args:
            application_id: Application to submit

        Returns:
            COMPLETED, REJECTED or SKIPPED

        Raises:
            TransportFault: Endpoint unreachable (application left ORDER_FAILED)
            MalformedResponse: 2xx without order_id (application left ORDER_FAILED)
            UpdateFault: Order placed but the COMPLETE write was lost
            Exception: Any unexpected fault (application left ORDER_FAILED)
        """
        application = self.repository.get_by_id(application_id)

        if application is None:
            logger.warning(f"NBN application {application_id} not found, skipping")
            return OrderSubmissionOutcome.SKIPPED

        if not application.is_eligible_for_order_submission():
            logger.info(
                f"NBN application {application_id} is no longer eligible "
                f"(status={application.status.value}, "
                f"plan_type={getattr(application.plan_type, 'value', None)}), skipping"
            )
            return OrderSubmissionOutcome.SKIPPED

        try:
            order_id = self.gateway.place_order(OrderRequest.from_application(application))

        except ExternalRejection as e:
            logger.error(
                f"NBN application {application_id} failed to process: "
                f"HTTP {e.status_code}, response: {e.response_body}"
            )
            self._persist_outcome(application, ApplicationStatus.ORDER_FAILED)
            return OrderSubmissionOutcome.REJECTED

        except MalformedResponse as e:
            logger.error(
                f"Malformed B2B response for NBN application {application_id}: "
                f"{e.message}, response: {e.response_body}"
            )
            self._record_failure_while_faulting(application)
            raise

        except Exception as e:
            logger.error(
                f"Exception processing NBN application {application_id}: "
                f"{type(e).__name__}: {e}"
            )
            self._record_failure_while_faulting(application)
            raise

        self._persist_outcome(application, ApplicationStatus.COMPLETE, order_id)
        logger.info(
            f"NBN application {application_id} processed successfully "
            f"(order_id={order_id})"
        )
        return OrderSubmissionOutcome.COMPLETED

    def abandon(self, application_id: UUID, error: Exception) -> None:
        """
        Mark an eligible application ORDER_FAILED without calling the gateway.

        Used when the order cannot even be attempted (e.g. the pipeline
        configuration is invalid), so the application does not stay at ORDER
        and get re-dispatched forever. Ineligible or missing applications
        are left untouched.

        Args:
            application_id: Application whose order cannot be attempted
            error: Reason, logged with the application id
        """
        application = self.repository.get_by_id(application_id)
        if application is None or not application.is_eligible_for_order_submission():
            return

        logger.error(
            f"NBN application {application_id} cannot be submitted: "
            f"{type(error).__name__}: {error}"
        )
        self._record_failure_while_faulting(application)

    def _record_failure_while_faulting(self, application: Application) -> None:
        """Write ORDER_FAILED; a lost write is logged, never raised."""
        try:
            self._persist_outcome(application, ApplicationStatus.ORDER_FAILED)
        except UpdateFault as update_error:
            logger.error(
                f"NBN application {application.id} could not be marked order_failed "
                f"while handling an order fault: {update_error}"
            )

    def _persist_outcome(
        self,
        application: Application,
        status: ApplicationStatus,
        order_id: Optional[str] = None,
    ) -> None:
        """
        Apply the terminal transition and write it to the store.

        Raises:
            UpdateFault: If every write attempt fails
        """
        if status is ApplicationStatus.COMPLETE:
            application.mark_complete(order_id)
        else:
            application.mark_order_failed()

        attempts = self.config.update_retry_attempts
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                self.repository.update_status(
                    application.id, application.status, application.order_id
                )
                return
            except Exception as e:
                last_error = e
                if attempt < attempts:
                    delay = self.config.update_retry_backoff_seconds * 2 ** (attempt - 1)
                    logger.warning(
                        f"Status write for application {application.id} failed "
                        f"(attempt {attempt}/{attempts}): {e}. Retrying in {delay}s..."
                    )
                    time.sleep(delay)

        logger.critical(
            f"Lost terminal status write for NBN application {application.id}: "
            f"status={status.value}, order_id={order_id}, "
            f"after {attempts} attempts. Last error: {last_error}"
        )
        raise UpdateFault(
            f"Could not persist status of application {application.id}",
            application_id=application.id,
            target_status=status.value,
            original_error=last_error,
        ) from last_error
