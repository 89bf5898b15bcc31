"""
Application Entity.

Core domain entity representing a customer's request for telecom service.
This entity has identity (UUID) and lifecycle (status transitions).

Unlike Value Objects, Entities are mutable and track their state over time.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from src.domain.applications.entities.reference_data import Customer, Plan
from src.domain.applications.order_config import ADDRESS_SEPARATOR
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType
from src.domain.shared.exceptions import (
    InvalidApplicationError,
    InvalidStatusTransitionError,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Application:
    """
    Mutable entity representing a service application with lifecycle tracking.

    This is a core domain entity that encapsulates:
    - Ownership (customer) and the selected plan
    - Service address
    - Status within the order lifecycle
    - External order id returned by the B2B endpoint

    The entity follows the ApplicationStatus state machine:
    PRELIM -> ORDER -> COMPLETE | ORDER_FAILED (ORDER_FAILED -> ORDER on re-submit)

    Invariant:
        order_id is set if and only if status is COMPLETE.

    Attributes:
        customer_id: Owning customer (non-null)
        plan_id: Selected plan (non-null)
        address_1: First address line (required)
        city: City (required)
        state: State code, e.g. "VIC" (required)
        postcode: Postcode (required)
        address_2: Second address line (optional)
        status: Current lifecycle status
        order_id: External order id (only for COMPLETE)
        id: Unique identifier (UUID4, auto-generated)
        created_at: Creation timestamp (UTC), orders listings oldest-first
        plan: Resolved Plan (optional, loaded by repository)
        customer: Resolved Customer (optional, loaded by repository)

    Examples:
        >>> app = Application(
        ...     customer_id=customer.id,
        ...     plan_id=plan.id,
        ...     address_1="123 Main St",
        ...     city="Melbourne",
        ...     state="VIC",
        ...     postcode="3000",
        ...     status=ApplicationStatus.ORDER,
        ...     plan=plan,
        ... )
        >>> app.is_eligible_for_order_submission()
        True
        >>> app.mark_complete("ORD-123456")
        >>> app.status
        <ApplicationStatus.COMPLETE: 'complete'>
    """

    # Required fields
    customer_id: UUID
    plan_id: UUID
    address_1: str
    city: str
    state: str
    postcode: str

    # Optional fields
    address_2: Optional[str] = None

    # Lifecycle
    status: ApplicationStatus = ApplicationStatus.PRELIM
    order_id: Optional[str] = None

    # Identity and timestamps (auto-generated)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)

    # Resolved relations (not persisted on the application record)
    plan: Optional[Plan] = field(default=None, compare=False, repr=False)
    customer: Optional[Customer] = field(default=None, compare=False, repr=False)

    REQUIRED_ADDRESS_FIELDS = ("address_1", "city", "state", "postcode")

    def __post_init__(self) -> None:
        """
        Validate entity after initialization.

        Raises:
            InvalidApplicationError: If a required address field is empty,
                the plan does not match plan_id, or the order_id invariant
                is violated
        """
        if not isinstance(self.status, ApplicationStatus):
            self.status = ApplicationStatus(self.status)

        for field_name in self.REQUIRED_ADDRESS_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidApplicationError(
                    f"{field_name} is required", field_name=field_name
                )

        if self.plan is not None and self.plan.id != self.plan_id:
            raise InvalidApplicationError(
                f"Resolved plan {self.plan.id} does not match plan_id {self.plan_id}",
                field_name="plan",
            )

        self._check_order_id_invariant(self.status, self.order_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def full_address(self) -> str:
        """
        Non-empty address parts joined with ", ".

        Examples:
            >>> app.full_address
            '123 Main St, Unit 1, Melbourne, VIC, 3000'
        """
        parts = [
            self.address_1,
            self.address_2,
            self.city,
            self.state,
            self.postcode,
        ]
        return ADDRESS_SEPARATOR.join(part for part in parts if part)

    @property
    def plan_type(self) -> Optional[PlanType]:
        return self.plan.type if self.plan else None

    def is_eligible_for_order_submission(self) -> bool:
        """
        Check if the order pipeline should submit this application.

        Eligible means: plan resolved, plan type is auto-submitted (NBN)
        and status is ORDER.
        """
        if self.plan is None or not self.plan.type.is_auto_submitted:
            return False
        return self.status is ApplicationStatus.ORDER

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def mark_complete(self, order_id: str) -> None:
        """
        Record a successful order placement.

        Transitions ORDER -> COMPLETE and stores the external order id.

        Args:
            order_id: Order id returned by the B2B endpoint (non-empty)

        Raises:
            InvalidApplicationError: If order_id is empty
            InvalidStatusTransitionError: If current status is not ORDER
        """
        if not order_id:
            raise InvalidApplicationError(
                "order_id is required to complete an application",
                field_name="order_id",
            )
        self._transition(ApplicationStatus.COMPLETE)
        self.order_id = order_id

    def mark_order_failed(self) -> None:
        """
        Record a failed order submission.

        Transitions ORDER -> ORDER_FAILED. order_id stays None.

        Raises:
            InvalidStatusTransitionError: If current status is not ORDER
        """
        self._transition(ApplicationStatus.ORDER_FAILED)
        self.order_id = None

    def submit_for_order(self) -> None:
        """
        Move the application into the order pipeline.

        Used by operators for the first submission (PRELIM -> ORDER) and for
        re-submission after a failure (ORDER_FAILED -> ORDER).

        Raises:
            InvalidStatusTransitionError: If current status is ORDER or COMPLETE
        """
        self._transition(ApplicationStatus.ORDER)
        self.order_id = None

    def _transition(self, target: ApplicationStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(
                f"Cannot move application {self.id} from "
                f"{self.status.value} to {target.value}",
                current_status=self.status.value,
                target_status=target.value,
            )
        self.status = target

    @staticmethod
    def _check_order_id_invariant(
        status: ApplicationStatus, order_id: Optional[str]
    ) -> None:
        if status.requires_order_id and not order_id:
            raise InvalidApplicationError(
                "order_id is required when status is complete", field_name="order_id"
            )
        if not status.requires_order_id and order_id is not None:
            raise InvalidApplicationError(
                f"order_id must be empty when status is {status.value}",
                field_name="order_id",
            )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the application record to a dict of primitives.

        Relations (plan, customer) are not included; they are stored under
        their own keys.

        Returns:
            Dictionary with all persisted fields, order_id and address_2
            as None when unset
        """
        return {
            "id": str(self.id),
            "customer_id": str(self.customer_id),
            "plan_id": str(self.plan_id),
            "address_1": self.address_1,
            "address_2": self.address_2,
            "city": self.city,
            "state": self.state,
            "postcode": self.postcode,
            "status": self.status.value,
            "order_id": self.order_id,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        plan: Optional[Plan] = None,
        customer: Optional[Customer] = None,
    ) -> "Application":
        """
        Rebuild an application from to_dict() output.

        Empty strings for address_2 and order_id are read as None (storage
        backends without a null value write "").

        Args:
            data: Serialized application
            plan: Resolved plan to attach (optional)
            customer: Resolved customer to attach (optional)

        Returns:
            Application entity

        Raises:
            InvalidApplicationError: If the stored record violates an invariant
            ValueError: If status or ids cannot be parsed
        """
        created_at = data["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            id=UUID(str(data["id"])),
            customer_id=UUID(str(data["customer_id"])),
            plan_id=UUID(str(data["plan_id"])),
            address_1=data["address_1"],
            address_2=data.get("address_2") or None,
            city=data["city"],
            state=data["state"],
            postcode=data["postcode"],
            status=ApplicationStatus(data["status"]),
            order_id=data.get("order_id") or None,
            created_at=created_at,
            plan=plan,
            customer=customer,
        )
