"""
OrderGateway Interface

Contract for the carrier's business-to-business order placement service.
Defined in the Domain Layer, implemented by the Infrastructure Layer
(HTTP client in src/infrastructure/b2b/).
"""

from typing import Protocol

from ..value_objects.order_request import OrderRequest


class OrderGatewayProtocol(Protocol):
    """
    Places one order with the external B2B endpoint.

    Error contract:
        - TransportFault: endpoint unreachable, timeout, not configured
        - ExternalRejection: endpoint answered with a non-2xx status
        - MalformedResponse: 2xx answer without a usable order_id

    Examples:
        >>> gateway: OrderGatewayProtocol = NbnB2BClient()
        >>> gateway.place_order(OrderRequest.from_application(app))
        'ORD-123456'
    """

    def place_order(self, request: OrderRequest) -> str:
        """
        Submit an order.

        Args:
            request: Payload built from one application

        Returns:
            External order id assigned by the carrier

        Raises:
            TransportFault, ExternalRejection, MalformedResponse
        """
        ...
