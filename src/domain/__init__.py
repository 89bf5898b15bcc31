"""
Domain Layer - Core Business Logic

Contains the business rules of the application order pipeline: entities,
value objects, the status state machine and the repository/gateway
interfaces. Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external dependencies
    - Domain-Driven Design: Entities, Value Objects, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - applications: Application lifecycle and NBN order submission contracts
    - shared: Cross-subdomain concepts (exceptions)

Usage:
    >>> from src.domain import Application, ApplicationStatus, DomainException
"""

from .applications import (
    Application,
    ApplicationRepositoryProtocol,
    ApplicationStatus,
    Customer,
    OrderGatewayProtocol,
    OrderRequest,
    Plan,
    PlanType,
)
from .shared import DomainException

__all__ = [
    "Application",
    "Plan",
    "Customer",
    "ApplicationStatus",
    "PlanType",
    "OrderRequest",
    "ApplicationRepositoryProtocol",
    "OrderGatewayProtocol",
    "DomainException",
]
