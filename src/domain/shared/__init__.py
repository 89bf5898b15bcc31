"""
Shared Domain Module

Shared domain concepts used across all subdomains.
Contains the domain exception hierarchy.
"""

from .exceptions import (
    ApplicationNotFoundError,
    CustomerNotFoundError,
    DomainException,
    ExternalRejection,
    InvalidApplicationError,
    InvalidStatusTransitionError,
    MalformedResponse,
    OrderSubmissionError,
    PlanNotFoundError,
    SelectionFault,
    TransportFault,
    UpdateFault,
)

__all__ = [
    "DomainException",
    "InvalidApplicationError",
    "InvalidStatusTransitionError",
    "ApplicationNotFoundError",
    "PlanNotFoundError",
    "CustomerNotFoundError",
    "SelectionFault",
    "OrderSubmissionError",
    "TransportFault",
    "ExternalRejection",
    "MalformedResponse",
    "UpdateFault",
]
