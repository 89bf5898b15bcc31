"""
ApplicationRepository Interface

Repository pattern interface for Application persistence.
Defines the contract the order pipeline and the listing query rely on.

Responsibility:
    - Define data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing (easy to replace with an in-memory double)

Architecture Notes:
    - Repository Pattern (Martin Fowler)
    - Protocol-based interface (structural typing)
    - Synchronous methods: called from Celery workers and the CLI
    - Implementation in Infrastructure layer (Redis)
"""

from typing import Optional, Protocol
from uuid import UUID

from ..entities.application import Application
from ..entities.reference_data import Customer, Plan
from ..value_objects.application_status import ApplicationStatus
from ..value_objects.plan_type import PlanType


class ApplicationRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for Application persistence.

    Store requirements:
        - Filter by plan type (joined through the plan)
        - Filter by status
        - Atomic single-record update of {status, order_id}
        - Paginated read ordered by creation time (oldest first)

    Usage:
        Repository is injected into Application Layer services:

        >>> class DispatchNbnOrdersHandler:
        ...     def __init__(self, repository: ApplicationRepositoryProtocol, queue):
        ...         self.repository = repository
        ...
        ...     def handle(self, command):
        ...         eligible = self.repository.find_eligible_for_order_submission()
    """

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    def save_plan(self, plan: Plan) -> None:
        """Store a plan (overwrites an existing plan with the same id)."""
        ...

    def get_plan(self, plan_id: UUID) -> Optional[Plan]:
        """Retrieve a plan by id, None if not found."""
        ...

    def save_customer(self, customer: Customer) -> None:
        """Store a customer (overwrites an existing customer with the same id)."""
        ...

    def get_customer(self, customer_id: UUID) -> Optional[Customer]:
        """Retrieve a customer by id, None if not found."""
        ...

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def save(self, application: Application) -> None:
        """
        Store a new application together with its indexes.

        Business Rules:
            - application.plan must be resolved (plan type is indexed)
            - All keys written atomically

        Args:
            application: Application entity to store

        Raises:
            InvalidApplicationError: If the plan is not resolved
        """
        ...

    def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """
        Retrieve an application by id with plan and customer resolved.

        Args:
            application_id: UUID of the application

        Returns:
            Application if found, None otherwise
        """
        ...

    def find_eligible_for_order_submission(self) -> list[Application]:
        """
        Eligibility selector for the order pipeline.

        Returns every application whose plan type is NBN and whose status is
        ORDER, with plans resolved. No pagination limit. Empty list when none
        match (normal condition).

        Raises:
            Store-specific errors if the store is unreachable
        """
        ...

    def find_by_plan_type_and_status(
        self, plan_type: PlanType, status: ApplicationStatus
    ) -> list[Application]:
        """Return all applications on plans of plan_type with the given status."""
        ...

    def update_status(
        self,
        application_id: UUID,
        status: ApplicationStatus,
        order_id: Optional[str] = None,
    ) -> None:
        """
        Atomically write status and order_id of one application.

        Readers never observe a half-updated record (e.g. COMPLETE without
        order_id). The status index moves in the same atomic write.

        Args:
            application_id: UUID of the application
            status: New status
            order_id: New order id (None clears it)

        Raises:
            ApplicationNotFoundError: If the application does not exist
            Store-specific errors if the write fails
        """
        ...

    def paginate(
        self,
        page: int,
        per_page: int,
        plan_type: Optional[PlanType] = None,
    ) -> tuple[list[Application], int]:
        """
        Read one page of applications, oldest first.

        Args:
            page: 1-based page number
            per_page: Page size
            plan_type: Optional plan type filter

        Returns:
            Tuple of (applications on the page with plan and customer
            resolved, total number of matching applications)
        """
        ...
