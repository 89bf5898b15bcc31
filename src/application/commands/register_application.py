"""
RegisterApplicationCommand - CQRS Write Command

Data needed to register a new service application for a customer.
Validated by pydantic at the boundary; business validation happens in
RegisterApplicationUseCase and the Application entity.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.applications.value_objects.application_status import (
    ApplicationStatus,
)


class RegisterApplicationCommand(BaseModel):
    """
    Command to register a new application.

    Attributes:
        customer_id: Owning customer
        plan_id: Selected plan
        address_1: First address line
        address_2: Second address line (optional)
        city: City
        state: State code
        postcode: Postcode
        status: Initial status (default PRELIM)

    Examples:
        >>> command = RegisterApplicationCommand(
        ...     customer_id=customer.id,
        ...     plan_id=plan.id,
        ...     address_1="123 Main St",
        ...     city="Melbourne",
        ...     state="VIC",
        ...     postcode="3000",
        ... )
    """

    customer_id: UUID = Field(description="Owning customer")
    plan_id: UUID = Field(description="Selected plan")
    address_1: str = Field(min_length=1, description="First address line")
    address_2: Optional[str] = Field(default=None, description="Second address line")
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postcode: str = Field(min_length=1)
    status: ApplicationStatus = Field(
        default=ApplicationStatus.PRELIM,
        description="Initial status (prelim or order)",
    )

    @field_validator("status")
    @classmethod
    def validate_initial_status(cls, value: ApplicationStatus) -> ApplicationStatus:
        """
        New applications start at PRELIM or go straight to ORDER.

        Raises:
            ValueError: If status is COMPLETE or ORDER_FAILED
        """
        if value not in (ApplicationStatus.PRELIM, ApplicationStatus.ORDER):
            raise ValueError(
                f"Initial status must be prelim or order, got {value.value}"
            )
        return value

    class Config:
        """Pydantic configuration for RegisterApplicationCommand."""

        json_schema_extra = {
            "example": {
                "customer_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "plan_id": "a3bb189e-8bf9-3888-9912-ace4e6543002",
                "address_1": "123 Main St",
                "address_2": "Unit 5",
                "city": "Melbourne",
                "state": "VIC",
                "postcode": "3000",
                "status": "prelim",
            }
        }
