"""
Shared Application Models

Responsibility:
    Contains shared models used across Application Layer.
    Prevents circular dependencies and code duplication.

Architecture Notes:
    - Part of Application Layer (Shared)
    - Used by Commands, Services and Tasks
    - Enums and common DTOs that don't belong to specific modules

Contains:
    - OrderSubmissionOutcome: Result of one order submission attempt
    - DispatchResult: Summary of one dispatcher run
"""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class OrderSubmissionOutcome(str, Enum):
    """
    Outcome of processing one application in the order task.

    Faults that propagate to the task runner (TransportFault,
    MalformedResponse, UpdateFault) have no outcome value: they are raised.

    Attributes:
        COMPLETED: Order accepted, application is COMPLETE with order_id
        REJECTED: Endpoint answered non-2xx, application is ORDER_FAILED
        SKIPPED: Application missing or no longer eligible, nothing done

    Usage:
        >>> outcome = OrderSubmissionOutcome.COMPLETED
        >>> outcome.value
        'completed'
    """

    COMPLETED = "completed"
    REJECTED = "rejected"
    SKIPPED = "skipped"


class DispatchResult(BaseModel):
    """
    Summary of one dispatcher run.

    Attributes:
        dispatched_count: Number of tasks submitted to the queue
        application_ids: Ids of the dispatched applications, in dispatch order
        message: Operator-facing summary line

    Example:
        >>> DispatchResult(
        ...     dispatched_count=2,
        ...     application_ids=[UUID(...), UUID(...)],
        ...     message="Dispatched 2 application(s) for NBN order processing.",
        ... )
    """

    dispatched_count: int = Field(ge=0, description="Number of tasks submitted")
    application_ids: list[UUID] = Field(
        default_factory=list, description="Dispatched application ids"
    )
    message: str = Field(description="Human-readable summary")

    class Config:
        """Pydantic configuration for DispatchResult."""

        json_schema_extra = {
            "example": {
                "dispatched_count": 2,
                "application_ids": [
                    "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                    "a3bb189e-8bf9-3888-9912-ace4e6543002",
                ],
                "message": "Dispatched 2 application(s) for NBN order processing.",
            }
        }
