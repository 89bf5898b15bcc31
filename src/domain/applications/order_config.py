"""
Order Pipeline Configuration

Configuration constants for the NBN order-submission pipeline and the
read-side application listing.

Business Context:
    Applications on NBN plans are submitted to the carrier's B2B ordering
    endpoint once they reach ORDER status. The endpoint is slow and can be
    unreachable, so every call is bounded by a timeout, and the terminal
    status write is retried because a lost write would leave the application
    stuck at ORDER forever.

Design Principles:
    - Configuration as code (not database)
    - Type-safe constants
    - Environment variables only override deployment-specific values
      (endpoint URL, timeout, retry attempts)
"""

import os
from dataclasses import dataclass
from typing import Final, Optional


# ============================================================================
# B2B ENDPOINT - deployment-specific values come from environment
# ============================================================================

# Environment variable holding the B2B order endpoint URL (required at call time)
B2B_ENDPOINT_ENV_VAR: Final[str] = "NBN_B2B_ENDPOINT"

# Environment variable holding the request timeout in seconds
B2B_TIMEOUT_ENV_VAR: Final[str] = "NBN_B2B_TIMEOUT"

# Default timeout for the outbound order call (seconds)
DEFAULT_B2B_TIMEOUT_SECONDS: Final[float] = 30.0


# ============================================================================
# TERMINAL STATUS WRITE - retry policy for UpdateFault
# ============================================================================

UPDATE_RETRY_ENV_VAR: Final[str] = "ORDER_UPDATE_RETRY_ATTEMPTS"

# Attempts before the write is declared lost
DEFAULT_UPDATE_RETRY_ATTEMPTS: Final[int] = 3

# Exponential backoff: 0.5s, 1s, 2s ...
UPDATE_RETRY_BACKOFF_BASE_SECONDS: Final[float] = 0.5


# ============================================================================
# LISTING
# ============================================================================

# Page size of GET /api/applications
APPLICATIONS_PER_PAGE: Final[int] = 15

# Prefix of formatted monthly cost ("$59.99")
CURRENCY_SYMBOL: Final[str] = "$"

# Separator used to join non-empty address parts
ADDRESS_SEPARATOR: Final[str] = ", "


@dataclass(frozen=True)
class OrderPipelineConfig:
    """
    Runtime configuration of the order submission pipeline.

    Attributes:
        b2b_endpoint: URL of the carrier's order endpoint (None if not configured)
        b2b_timeout_seconds: Timeout applied to every outbound order call
        update_retry_attempts: Attempts for the terminal status write
        update_retry_backoff_seconds: Base delay between write attempts

    Examples:
        >>> config = OrderPipelineConfig.from_env()
        >>> config.b2b_timeout_seconds
        30.0
    """

    b2b_endpoint: Optional[str] = None
    b2b_timeout_seconds: float = DEFAULT_B2B_TIMEOUT_SECONDS
    update_retry_attempts: int = DEFAULT_UPDATE_RETRY_ATTEMPTS
    update_retry_backoff_seconds: float = UPDATE_RETRY_BACKOFF_BASE_SECONDS

    def __post_init__(self) -> None:
        if self.b2b_timeout_seconds <= 0:
            raise ValueError(
                f"b2b_timeout_seconds must be positive, got {self.b2b_timeout_seconds}"
            )
        if self.update_retry_attempts < 1:
            raise ValueError(
                f"update_retry_attempts must be >= 1, got {self.update_retry_attempts}"
            )
        if self.update_retry_backoff_seconds < 0:
            raise ValueError(
                "update_retry_backoff_seconds cannot be negative, "
                f"got {self.update_retry_backoff_seconds}"
            )

    @classmethod
    def from_env(cls) -> "OrderPipelineConfig":
        """
        Build configuration from environment variables.

        Reads NBN_B2B_ENDPOINT, NBN_B2B_TIMEOUT and ORDER_UPDATE_RETRY_ATTEMPTS,
        falling back to module defaults when they are unset.

        Returns:
            OrderPipelineConfig instance

        Raises:
            ValueError: If a numeric variable cannot be parsed or is out of range
        """
        return cls(
            b2b_endpoint=os.getenv(B2B_ENDPOINT_ENV_VAR) or None,
            b2b_timeout_seconds=float(
                os.getenv(B2B_TIMEOUT_ENV_VAR, str(DEFAULT_B2B_TIMEOUT_SECONDS))
            ),
            update_retry_attempts=int(
                os.getenv(UPDATE_RETRY_ENV_VAR, str(DEFAULT_UPDATE_RETRY_ATTEMPTS))
            ),
        )
