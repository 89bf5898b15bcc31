"""
Register Application Use Case

Creates an application for an existing customer and plan, then notifies the
registered ApplicationCreatedListener callables in order.

Notification is an explicit step of the use case: listeners run after the
save and a failing listener is logged without undoing the save.

Library entry point only: no HTTP route or CLI command calls it. Callers
that create applications (seeding, an admin tool) construct it directly.
"""

import logging
from typing import Callable, Optional, Sequence

from src.application.commands.register_application import RegisterApplicationCommand
from src.domain.applications.entities.application import Application
from src.domain.applications.repositories.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.shared.exceptions import CustomerNotFoundError, PlanNotFoundError

logger = logging.getLogger(__name__)

ApplicationCreatedListener = Callable[[Application], None]


def log_application_created(application: Application) -> None:
    """Default listener: one INFO line per new application."""
    plan_name = application.plan.name if application.plan else application.plan_id
    logger.info(
        f"Application {application.id} created for customer "
        f"{application.customer_id} on plan {plan_name} "
        f"(status={application.status.value})"
    )


class RegisterApplicationUseCase:
    """
    Registers a new application.

    Flow:
        1. Resolve Plan and Customer (PlanNotFoundError / CustomerNotFoundError)
        2. Build Application (status from command, default PRELIM)
        3. repository.save(application)
        4. Call each listener with the saved application

    Examples:
        >>> use_case = RegisterApplicationUseCase(repository)
        >>> application = use_case.execute(command)
        >>> application.status
        <ApplicationStatus.PRELIM: 'prelim'>
    """

    def __init__(
        self,
        repository: ApplicationRepositoryProtocol,
        listeners: Optional[Sequence[ApplicationCreatedListener]] = None,
    ) -> None:
        """
        Args:
            repository: Application store
            listeners: Created-listeners, called in order
                (default: [log_application_created])
        """
        self.repository = repository
        self.listeners: list[ApplicationCreatedListener] = (
            list(listeners) if listeners is not None else [log_application_created]
        )

    def execute(self, command: RegisterApplicationCommand) -> Application:
        """
        Register one application.

        Returns:
            Saved Application with plan and customer resolved

        Raises:
            PlanNotFoundError: If command.plan_id does not exist
            CustomerNotFoundError: If command.customer_id does not exist
            InvalidApplicationError: If the application data is invalid
        """
        plan = self.repository.get_plan(command.plan_id)
        if plan is None:
            raise PlanNotFoundError(command.plan_id)

        customer = self.repository.get_customer(command.customer_id)
        if customer is None:
            raise CustomerNotFoundError(command.customer_id)

        application = Application(
            customer_id=customer.id,
            plan_id=plan.id,
            address_1=command.address_1,
            address_2=command.address_2 or None,
            city=command.city,
            state=command.state,
            postcode=command.postcode,
            status=command.status,
            plan=plan,
            customer=customer,
        )
        self.repository.save(application)

        for listener in self.listeners:
            try:
                listener(application)
            except Exception as e:
                logger.error(
                    f"ApplicationCreated listener {getattr(listener, '__name__', listener)} "
                    f"failed for application {application.id}: {e}"
                )

        return application
