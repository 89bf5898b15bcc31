"""
Pytest Configuration and Shared Fixtures

Shared test doubles and factories used across the unit test suites.

Fixtures:
    - repository: In-memory ApplicationRepositoryProtocol implementation
    - task_queue: Recording TaskQueueProtocol implementation
    - create_application: Factory saving a plan, customer and application
    - pipeline_config: OrderPipelineConfig without retry delays

Architecture Notes:
    - No live Redis, broker or B2B endpoint is needed
    - The in-memory repository stores serialized records, so entity
      mutations are only visible after an explicit write, as with Redis

Usage:
    def test_something(repository, create_application):
        application = create_application(plan_type=PlanType.NBN)
        assert repository.get_by_id(application.id) is not None
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import pytest

from src.domain.applications.entities.application import Application
from src.domain.applications.entities.reference_data import Customer, Plan
from src.domain.applications.order_config import OrderPipelineConfig
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType
from src.domain.shared.exceptions import (
    ApplicationNotFoundError,
    InvalidApplicationError,
)

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


# ============================================================================
# TEST DOUBLES
# ============================================================================


class InMemoryApplicationRepository:
    """
    Dict-backed ApplicationRepositoryProtocol implementation.

    Attributes:
        update_failures: Number of upcoming update_status calls that raise
            ConnectionError before writes succeed again
        update_calls: (application_id, status, order_id) for every write attempt
    """

    def __init__(self) -> None:
        self.plans: dict[UUID, Plan] = {}
        self.customers: dict[UUID, Customer] = {}
        self.records: dict[UUID, dict] = {}
        self.update_failures = 0
        self.update_calls: list[tuple[UUID, ApplicationStatus, Optional[str]]] = []

    def save_plan(self, plan: Plan) -> None:
        self.plans[plan.id] = plan

    def get_plan(self, plan_id: UUID) -> Optional[Plan]:
        return self.plans.get(plan_id)

    def save_customer(self, customer: Customer) -> None:
        self.customers[customer.id] = customer

    def get_customer(self, customer_id: UUID) -> Optional[Customer]:
        return self.customers.get(customer_id)

    def save(self, application: Application) -> None:
        if application.plan is None:
            raise InvalidApplicationError("plan not resolved", field_name="plan")
        self.records[application.id] = application.to_dict()

    def get_by_id(self, application_id: UUID) -> Optional[Application]:
        record = self.records.get(application_id)
        return self._load(record) if record else None

    def find_eligible_for_order_submission(self) -> list[Application]:
        return self.find_by_plan_type_and_status(PlanType.NBN, ApplicationStatus.ORDER)

    def find_by_plan_type_and_status(
        self, plan_type: PlanType, status: ApplicationStatus
    ) -> list[Application]:
        return [
            application
            for application in self._all_oldest_first()
            if application.status is status and application.plan_type is plan_type
        ]

    def update_status(
        self,
        application_id: UUID,
        status: ApplicationStatus,
        order_id: Optional[str] = None,
    ) -> None:
        self.update_calls.append((application_id, status, order_id))
        if self.update_failures > 0:
            self.update_failures -= 1
            raise ConnectionError("store unavailable")
        if application_id not in self.records:
            raise ApplicationNotFoundError(application_id)
        self.records[application_id].update(status=status.value, order_id=order_id)

    def paginate(
        self, page: int, per_page: int, plan_type: Optional[PlanType] = None
    ) -> tuple[list[Application], int]:
        applications = [
            application
            for application in self._all_oldest_first()
            if plan_type is None or application.plan_type is plan_type
        ]
        start = (page - 1) * per_page
        return applications[start : start + per_page], len(applications)

    def _all_oldest_first(self) -> list[Application]:
        applications = [self._load(record) for record in self.records.values()]
        return sorted(applications, key=lambda application: application.created_at)

    def _load(self, record: dict) -> Application:
        return Application.from_dict(
            record,
            plan=self.plans.get(UUID(record["plan_id"])),
            customer=self.customers.get(UUID(record["customer_id"])),
        )


class RecordingTaskQueue:
    """TaskQueueProtocol implementation that records submitted ids."""

    def __init__(self) -> None:
        self.submitted: list[UUID] = []

    def submit(self, application_id: UUID) -> str:
        self.submitted.append(application_id)
        return f"task-{len(self.submitted)}"


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def repository() -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository()


@pytest.fixture
def task_queue() -> RecordingTaskQueue:
    return RecordingTaskQueue()


@pytest.fixture
def pipeline_config() -> OrderPipelineConfig:
    """Config with three write attempts and no backoff delay."""
    return OrderPipelineConfig(
        b2b_endpoint="https://b2b.example.test/orders",
        b2b_timeout_seconds=5.0,
        update_retry_attempts=3,
        update_retry_backoff_seconds=0.0,
    )


@pytest.fixture
def create_application(repository):
    """
    Factory that saves a plan, a customer and an application.

    Each call gets a created_at one minute after the previous one unless
    created_at is given, so creation order is listing order.
    """
    base_time = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
    counter = {"calls": 0}

    def _create(
        plan_type: PlanType = PlanType.NBN,
        status: ApplicationStatus = ApplicationStatus.ORDER,
        plan_name: Optional[str] = None,
        monthly_cost: int = 5999,
        order_id: Optional[str] = None,
        customer: Optional[Customer] = None,
        created_at: Optional[datetime] = None,
        **overrides,
    ) -> Application:
        counter["calls"] += 1

        plan = Plan(
            type=plan_type,
            name=plan_name or f"{plan_type.value.upper()} 50",
            monthly_cost=monthly_cost,
        )
        repository.save_plan(plan)

        customer = customer or Customer(first_name="John", last_name="Doe")
        repository.save_customer(customer)

        fields = {
            "customer_id": customer.id,
            "plan_id": plan.id,
            "address_1": "123 Main St",
            "address_2": "Unit 1",
            "city": "Melbourne",
            "state": "VIC",
            "postcode": "3000",
            "status": status,
            "order_id": order_id,
            "created_at": created_at
            or base_time + timedelta(minutes=counter["calls"]),
            "plan": plan,
            "customer": customer,
        }
        fields.update(overrides)

        application = Application(**fields)
        repository.save(application)
        return application

    return _create
