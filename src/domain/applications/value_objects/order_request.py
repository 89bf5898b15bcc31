"""
OrderRequest Value Object.

Immutable payload sent to the carrier's B2B order endpoint for one
application. The plan name is captured at the time the request is built.
"""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Optional

from src.domain.shared.exceptions import InvalidApplicationError

if TYPE_CHECKING:
    from src.domain.applications.entities.application import Application


@dataclass(frozen=True)
class OrderRequest:
    """
    Order placement payload.

    Attributes:
        address_1: First address line
        address_2: Second address line (None is sent as JSON null)
        city: City
        state: State code
        postcode: Postcode
        plan_name: Name of the selected plan

    Examples:
        >>> request = OrderRequest.from_application(app)
        >>> request.to_payload()
        {'address_1': '123 Main St', 'address_2': 'Unit 5', 'city': 'Sydney',
         'state': 'NSW', 'postcode': '2000', 'plan_name': 'NBN 100'}
    """

    address_1: str
    address_2: Optional[str]
    city: str
    state: str
    postcode: str
    plan_name: str

    @classmethod
    def from_application(cls, application: "Application") -> "OrderRequest":
        """
        Build the payload for an application.

        Args:
            application: Application with its plan resolved

        Returns:
            OrderRequest for the application

        Raises:
            InvalidApplicationError: If the plan is not loaded on the application
        """
        if application.plan is None:
            raise InvalidApplicationError(
                f"Plan {application.plan_id} is not loaded for application {application.id}",
                field_name="plan",
            )

        return cls(
            address_1=application.address_1,
            address_2=application.address_2,
            city=application.city,
            state=application.state,
            postcode=application.postcode,
            plan_name=application.plan.name,
        )

    def to_payload(self) -> dict[str, Optional[str]]:
        """JSON body for the B2B endpoint."""
        return asdict(self)
