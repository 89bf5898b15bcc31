"""
Plan and Customer Entities.

Reference data an Application points to. Both are read-only from the order
pipeline's point of view.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from uuid import UUID, uuid4

from src.domain.applications.order_config import CURRENCY_SYMBOL
from src.domain.applications.value_objects.plan_type import PlanType


@dataclass(frozen=True)
class Plan:
    """
    Service offering selected by an application.

    Attributes:
        type: Plan category (nbn, opticomm, mobile)
        name: Human-readable plan name sent to the B2B endpoint (e.g. "NBN 100")
        monthly_cost: Monthly cost in cents (integer minor currency unit)
        id: Unique identifier

    Examples:
        >>> plan = Plan(type=PlanType.NBN, name="NBN 50", monthly_cost=5999)
        >>> plan.formatted_monthly_cost
        '$59.99'
    """

    type: PlanType
    name: str
    monthly_cost: int
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if not isinstance(self.type, PlanType):
            object.__setattr__(self, "type", PlanType(self.type))
        if self.monthly_cost < 0:
            raise ValueError(f"monthly_cost cannot be negative, got {self.monthly_cost}")

    @property
    def formatted_monthly_cost(self) -> str:
        """
        Monthly cost as a currency string.

        Cents are converted to dollars with two decimals and a thousands
        separator: 5999 -> "$59.99", 123450 -> "$1,234.50".
        """
        dollars = (Decimal(self.monthly_cost) / 100).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        return f"{CURRENCY_SYMBOL}{dollars:,.2f}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize plan to a flat dict of primitives."""
        return {
            "id": str(self.id),
            "type": self.type.value,
            "name": self.name,
            "monthly_cost": self.monthly_cost,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plan":
        """Rebuild a plan from to_dict() output (string values accepted)."""
        return cls(
            id=UUID(str(data["id"])),
            type=PlanType(data["type"]),
            name=data["name"],
            monthly_cost=int(data["monthly_cost"]),
        )


@dataclass(frozen=True)
class Customer:
    """
    Owner of an application.

    Examples:
        >>> Customer(first_name="John", last_name="Doe").full_name
        'John Doe'
    """

    first_name: str
    last_name: str
    id: UUID = field(default_factory=uuid4)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Customer":
        return cls(
            id=UUID(str(data["id"])),
            first_name=data["first_name"],
            last_name=data["last_name"],
        )
