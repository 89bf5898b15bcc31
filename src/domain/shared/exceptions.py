"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Order pipeline error taxonomy (selection, transport, rejection,
      malformed response, persistence of the terminal status)
    - Entity validation and lookup errors

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - API Layer converts these to HTTP status codes (see src/api/main.py)
    - Celery tasks let transport/malformed faults propagate to the worker
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    This exception serves as the root of the domain exception hierarchy.
    All domain-specific exceptions inherit from this class to enable
    type-safe error handling in Application and API layers.

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     # domain operation
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


# ============================================================================
# ENTITY ERRORS
# ============================================================================


class InvalidApplicationError(DomainException):
    """
    Raised when Application entity validation fails.

    This exception is raised when:
    - A required address field is empty
    - order_id is set while status is not COMPLETE (or missing while it is)
    - An order request cannot be built because the plan is not loaded

    Examples:
        >>> raise InvalidApplicationError("address_1 is required", field_name="address_1")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Initialize application validation error.

        Args:
            message: Error description
            field_name: Name of field that caused error (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class InvalidStatusTransitionError(DomainException):
    """
    Raised when an application status change is not allowed by the state machine.

    Examples:
        >>> raise InvalidStatusTransitionError(
        ...     "Cannot move application from complete to order",
        ...     current_status="complete",
        ...     target_status="order",
        ... )
    """

    def __init__(
        self,
        message: str,
        current_status: str | None = None,
        target_status: str | None = None,
    ) -> None:
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(message)


class ApplicationNotFoundError(DomainException):
    """Raised when an application id does not exist in the store."""

    def __init__(self, application_id: object) -> None:
        self.application_id = application_id
        super().__init__(f"Application {application_id} not found")


class PlanNotFoundError(DomainException):
    """Raised when a plan id does not exist in the store."""

    def __init__(self, plan_id: object) -> None:
        self.plan_id = plan_id
        super().__init__(f"Plan {plan_id} not found")


class CustomerNotFoundError(DomainException):
    """Raised when a customer id does not exist in the store."""

    def __init__(self, customer_id: object) -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


# ============================================================================
# ORDER PIPELINE ERRORS
# ============================================================================


class SelectionFault(DomainException):
    """
    Raised when the eligibility query against the store fails.

    Fatal to the dispatch cycle: nothing is dispatched and the error is
    surfaced to the operator (CLI exit code 1).

    Attributes:
        original_error: Exception raised by the store (optional)
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        self.original_error = original_error

        if original_error:
            message = (
                f"{message} | Original error: "
                f"{type(original_error).__name__}: {original_error}"
            )
        super().__init__(message)


class OrderSubmissionError(DomainException):
    """
    Base class for errors raised by the B2B order gateway.

    Attributes:
        application_id: Application the order was submitted for (optional)
    """

    def __init__(self, message: str, application_id: object | None = None) -> None:
        self.application_id = application_id
        super().__init__(message)


class TransportFault(OrderSubmissionError):
    """
    Raised when the B2B endpoint cannot be reached.

    Covers connection errors, timeouts, TLS failures and a missing
    endpoint configuration. Propagated to the task runner after the
    application is marked ORDER_FAILED.

    Examples:
        >>> raise TransportFault("Timed out after 30.0s calling https://b2b.example/orders")
    """


class ExternalRejection(OrderSubmissionError):
    """
    Raised when the B2B endpoint answers with a non-2xx status.

    The application is marked ORDER_FAILED and the raw body is logged.
    Not propagated to the task runner: the endpoint gave a definitive answer.

    Attributes:
        status_code: HTTP status code returned by the endpoint
        response_body: Raw response body, kept for diagnosis
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: str = "",
        application_id: object | None = None,
    ) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, application_id=application_id)


class MalformedResponse(OrderSubmissionError):
    """
    Raised when the B2B endpoint answers 2xx but without a usable order_id.

    Status handling matches ExternalRejection (ORDER_FAILED), but the error
    is logged separately and propagated like a transport fault.

    Attributes:
        response_body: Raw response body, kept for diagnosis
    """

    def __init__(
        self,
        message: str,
        response_body: str = "",
        application_id: object | None = None,
    ) -> None:
        self.response_body = response_body
        super().__init__(message, application_id=application_id)


class UpdateFault(DomainException):
    """
    Raised when the terminal status of an application cannot be persisted.

    Leaving an application at ORDER would silently stall the pipeline, so the
    write is retried and then logged at CRITICAL level before this is raised.

    Attributes:
        application_id: Application whose status write failed
        target_status: Status that could not be written
        original_error: Last exception raised by the store
    """

    def __init__(
        self,
        message: str,
        application_id: object | None = None,
        target_status: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.application_id = application_id
        self.target_status = target_status
        self.original_error = original_error

        detailed_parts = [message]
        if target_status:
            detailed_parts.append(f"Target status: {target_status}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))
