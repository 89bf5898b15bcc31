"""
Application Repository Implementation

Concrete implementation of ApplicationRepositoryProtocol from Domain Layer.
Uses Redis hashes for records and Redis sets / sorted sets as indexes.

Responsibility:
    - Implement Domain repository interface
    - Store/retrieve Application, Plan and Customer records
    - Maintain status, plan-type and creation-time indexes
    - Atomic terminal status writes (MULTI/EXEC)

Architecture Notes:
    - Infrastructure Layer (implements Domain interface)
    - Dependency Inversion: Domain defines interface, Infrastructure implements
    - Shared connection pool from src.infrastructure.persistence.redis
"""

import logging
from typing import Any, Iterable, Optional
from uuid import UUID

from redis import Redis
from redis.client import Pipeline

from src.domain.applications.entities.application import Application
from src.domain.applications.entities.reference_data import Customer, Plan
from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)
from src.domain.applications.value_objects.plan_type import PlanType
from src.domain.shared.exceptions import (
    ApplicationNotFoundError,
    InvalidApplicationError,
)
from src.infrastructure.persistence.redis.connection import get_redis_client

logger = logging.getLogger(__name__)


class RedisApplicationRepository:
    """
    Redis-based implementation of ApplicationRepositoryProtocol.

    Storage Layout:
        - "application:{uuid}" -> HASH with Application.to_dict() fields
          (None stored as "")
        - "plan:{uuid}" -> HASH with Plan.to_dict() fields
        - "customer:{uuid}" -> HASH with Customer.to_dict() fields
        - "applications:created" -> ZSET of application ids scored by
          created_at (epoch seconds), read oldest first
        - "applications:status:{status}" -> SET of application ids
        - "applications:plan_type:{type}" -> SET of application ids
          (every save moves the id to the current plan type and status sets)

    Atomicity:
        save() and update_status() each run as one MULTI/EXEC transaction,
        so a reader never sees status=complete without order_id, or a status
        index that disagrees with the record.

    Examples:
        >>> repo = RedisApplicationRepository()
        >>> repo.save_plan(plan)
        >>> repo.save_customer(customer)
        >>> repo.save(application)
        >>> eligible = repo.find_eligible_for_order_submission()
        >>> repo.update_status(app.id, ApplicationStatus.COMPLETE, "ORD-123456")
    """

    CREATED_INDEX_KEY = "applications:created"

    def __init__(self, redis: Optional[Redis] = None) -> None:
        """
        Initialize repository.

        Args:
            redis: Redis client (default: pooled client from get_redis_client(),
                connected on first use)
        """
        self._redis = redis

    @property
    def redis(self) -> Redis:
        """
        Redis client, connected lazily.

        Raises:
            RedisError: If no client was given and Redis is unreachable
        """
        if self._redis is None:
            self._redis = get_redis_client()
        return self._redis

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    @staticmethod
    def _application_key(application_id: UUID | str) -> str:
        return f"application:{application_id}"

    @staticmethod
    def _plan_key(plan_id: UUID | str) -> str:
        return f"plan:{plan_id}"

    @staticmethod
    def _customer_key(customer_id: UUID | str) -> str:
        return f"customer:{customer_id}"

    @staticmethod
    def _status_index_key(status: ApplicationStatus) -> str:
        return f"applications:status:{status.value}"

    @staticmethod
    def _plan_type_index_key(plan_type: PlanType) -> str:
        return f"applications:plan_type:{plan_type.value}"

    def _index_status(
        self, pipe: Pipeline, member: str, status: ApplicationStatus
    ) -> None:
        """Queue the moves that leave member in exactly one status set."""
        for other_status in ApplicationStatus:
            if other_status is not status:
                pipe.srem(self._status_index_key(other_status), member)
        pipe.sadd(self._status_index_key(status), member)

    @staticmethod
    def _encode(data: dict[str, Any]) -> dict[str, Any]:
        """Redis hashes have no null: None is written as an empty string."""
        return {key: "" if value is None else value for key, value in data.items()}

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    def save_plan(self, plan: Plan) -> None:
        self.redis.hset(self._plan_key(plan.id), mapping=self._encode(plan.to_dict()))

    def get_plan(self, plan_id: UUID) -> Optional[Plan]:
        data = self.redis.hgetall(self._plan_key(plan_id))
        return Plan.from_dict(data) if data else None

    def save_customer(self, customer: Customer) -> None:
        self.redis.hset(
            self._customer_key(customer.id), mapping=self._encode(customer.to_dict())
        )

    def get_customer(self, customer_id: UUID) -> Optional[Customer]:
        data = self.redis.hgetall(self._customer_key(customer_id))
        return Customer.from_dict(data) if data else None

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def save(self, application: Application) -> None:
        """
        Store an application and its index entries in one transaction.

        Raises:
            InvalidApplicationError: If application.plan is not resolved
            RedisError: If the transaction fails
        """
        if application.plan is None:
            raise InvalidApplicationError(
                f"Cannot index application {application.id}: plan not resolved",
                field_name="plan",
            )

        application_id = str(application.id)

        pipe = self.redis.pipeline()
        pipe.hset(
            self._application_key(application_id),
            mapping=self._encode(application.to_dict()),
        )
        pipe.zadd(
            self.CREATED_INDEX_KEY,
            {application_id: application.created_at.timestamp()},
        )
        self._index_status(pipe, application_id, application.status)
        for plan_type in PlanType:
            if plan_type is not application.plan.type:
                pipe.srem(self._plan_type_index_key(plan_type), application_id)
        pipe.sadd(self._plan_type_index_key(application.plan.type), application_id)
        pipe.execute()

        logger.debug(
            f"Application {application_id} saved "
            f"(status={application.status.value}, plan_type={application.plan.type.value})"
        )

    def get_by_id(self, application_id: UUID) -> Optional[Application]:
        applications = self._load_many([str(application_id)])
        return applications[0] if applications else None

    def find_eligible_for_order_submission(self) -> list[Application]:
        """
        Eligibility selector: NBN plans in ORDER status.

        SINTER gives an atomic snapshot of the candidate ids. Records are then
        re-read and filtered again, so an application that changed status
        between the two reads is dropped rather than dispatched.

        Returns:
            Eligible applications, oldest first (empty list if none)
        """
        return self.find_by_plan_type_and_status(PlanType.NBN, ApplicationStatus.ORDER)

    def find_by_plan_type_and_status(
        self, plan_type: PlanType, status: ApplicationStatus
    ) -> list[Application]:
        candidate_ids = self.redis.sinter(
            self._status_index_key(status), self._plan_type_index_key(plan_type)
        )
        if not candidate_ids:
            return []

        applications = [
            application
            for application in self._load_many(sorted(candidate_ids))
            if application.status is status and application.plan_type is plan_type
        ]
        applications.sort(key=lambda application: application.created_at)
        return applications

    def update_status(
        self,
        application_id: UUID,
        status: ApplicationStatus,
        order_id: Optional[str] = None,
    ) -> None:
        """
        Atomically write {status, order_id} and move the status index entry.

        Raises:
            ApplicationNotFoundError: If the application record does not exist
            RedisError: If the transaction fails
        """
        key = self._application_key(application_id)
        if not self.redis.exists(key):
            raise ApplicationNotFoundError(application_id)

        member = str(application_id)

        pipe = self.redis.pipeline()
        pipe.hset(key, mapping=self._encode({"status": status.value, "order_id": order_id}))
        self._index_status(pipe, member, status)
        pipe.execute()

        logger.debug(
            f"Application {application_id} status updated to {status.value} "
            f"(order_id={order_id})"
        )

    def paginate(
        self,
        page: int,
        per_page: int,
        plan_type: Optional[PlanType] = None,
    ) -> tuple[list[Application], int]:
        """
        Read one page of applications ordered by created_at ascending.

        Args:
            page: 1-based page number
            per_page: Page size
            plan_type: Optional plan type filter

        Returns:
            (applications on the page, total matching applications)
        """
        if page < 1 or per_page < 1:
            raise ValueError(f"page and per_page must be >= 1, got {page}, {per_page}")

        start = (page - 1) * per_page

        if plan_type is None:
            total = self.redis.zcard(self.CREATED_INDEX_KEY)
            page_ids = self.redis.zrange(
                self.CREATED_INDEX_KEY, start, start + per_page - 1
            )
        else:
            ordered_ids = self.redis.zrange(self.CREATED_INDEX_KEY, 0, -1)
            plan_type_ids = self.redis.smembers(self._plan_type_index_key(plan_type))
            matching_ids = [
                application_id
                for application_id in ordered_ids
                if application_id in plan_type_ids
            ]
            total = len(matching_ids)
            page_ids = matching_ids[start : start + per_page]

        return self._load_many(page_ids), total

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load_many(self, application_ids: Iterable[str]) -> list[Application]:
        """
        Load applications with plans and customers resolved, keeping input order.

        Uses two pipelined round trips: one for application hashes, one for
        the distinct plans and customers they reference. Ids without a
        record are skipped.
        """
        application_ids = list(application_ids)
        if not application_ids:
            return []

        pipe = self.redis.pipeline(transaction=False)
        for application_id in application_ids:
            pipe.hgetall(self._application_key(application_id))
        records = [record for record in pipe.execute() if record]
        if not records:
            return []

        plan_ids = sorted({record["plan_id"] for record in records})
        customer_ids = sorted({record["customer_id"] for record in records})

        pipe = self.redis.pipeline(transaction=False)
        for plan_id in plan_ids:
            pipe.hgetall(self._plan_key(plan_id))
        for customer_id in customer_ids:
            pipe.hgetall(self._customer_key(customer_id))
        related = pipe.execute()

        plans = {
            plan_id: Plan.from_dict(data)
            for plan_id, data in zip(plan_ids, related[: len(plan_ids)])
            if data
        }
        customers = {
            customer_id: Customer.from_dict(data)
            for customer_id, data in zip(customer_ids, related[len(plan_ids) :])
            if data
        }

        return [
            Application.from_dict(
                record,
                plan=plans.get(record["plan_id"]),
                customer=customers.get(record["customer_id"]),
            )
            for record in records
        ]
