"""
NBN B2B Order Client

HTTP implementation of OrderGatewayProtocol. Posts an OrderRequest as JSON
to the carrier's B2B order endpoint and extracts the order id.

Responsibility:
    - One POST per call, bounded by a timeout
    - Classify failures as TransportFault, ExternalRejection or MalformedResponse
    - Return the order id on success

Architecture Notes:
    - Infrastructure Layer (implements Domain gateway interface)
    - No retries here: retry policy belongs to the caller
    - Endpoint and timeout come from NBN_B2B_ENDPOINT / NBN_B2B_TIMEOUT
"""

import logging
from typing import Optional

import requests

from src.domain.applications.order_config import OrderPipelineConfig
from src.domain.applications.value_objects.order_request import OrderRequest
from src.domain.shared.exceptions import (
    ExternalRejection,
    MalformedResponse,
    TransportFault,
)

logger = logging.getLogger(__name__)


class NbnB2BClient:
    """
    Client for the NBN B2B order endpoint.

    Success means an HTTP status in 200-299 and a JSON object body with a
    non-empty string "order_id".

    Examples:
        >>> client = NbnB2BClient(endpoint="https://b2b.example/orders", timeout=10)
        >>> client.place_order(OrderRequest.from_application(app))
        'ORD-123456'
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[OrderPipelineConfig] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            endpoint: Order endpoint URL (default: config.b2b_endpoint)
            timeout: Request timeout in seconds (default: config.b2b_timeout_seconds)
            config: Pipeline configuration; read from the environment only
                when it is not given and endpoint or timeout is missing

        Raises:
            ValueError: If NBN_B2B_TIMEOUT cannot be parsed
        """
        if config is None and (endpoint is None or timeout is None):
            config = OrderPipelineConfig.from_env()

        self.endpoint = endpoint or (config.b2b_endpoint if config else None)
        self.timeout = timeout if timeout is not None else config.b2b_timeout_seconds

    def place_order(self, request: OrderRequest) -> str:
        """
        Submit one order.

        Args:
            request: Order payload

        Returns:
            Order id assigned by the carrier

        Raises:
            TransportFault: Endpoint not configured, unreachable or timed out
            ExternalRejection: Endpoint answered with a non-2xx status
            MalformedResponse: 2xx answer without a usable order_id
        """
        if not self.endpoint:
            raise TransportFault("NBN B2B endpoint is not configured (NBN_B2B_ENDPOINT)")

        try:
            response = requests.post(
                self.endpoint,
                json=request.to_payload(),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise TransportFault(
                f"Timed out after {self.timeout}s calling {self.endpoint}"
            ) from e
        except requests.RequestException as e:
            raise TransportFault(
                f"Request to {self.endpoint} failed: {type(e).__name__}: {e}"
            ) from e

        if not 200 <= response.status_code < 300:
            raise ExternalRejection(
                f"B2B endpoint rejected order with HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponse(
                f"B2B endpoint returned non-JSON body (HTTP {response.status_code})",
                response_body=response.text,
            ) from e

        order_id = body.get("order_id") if isinstance(body, dict) else None
        if not isinstance(order_id, str) or not order_id:
            raise MalformedResponse(
                "B2B endpoint response has no order_id",
                response_body=response.text,
            )

        logger.debug(f"B2B endpoint accepted order {order_id}")
        return order_id
