"""
Applications Subdomain

Service applications tracked from preliminary submission to order completion,
and the contracts of the NBN order pipeline.

Exports:
    Entities:
        - Application, Plan, Customer
    Value Objects:
        - ApplicationStatus, PlanType, OrderRequest
    Interfaces:
        - ApplicationRepositoryProtocol
        - OrderGatewayProtocol
"""

from .entities import Application, Customer, Plan
from .repositories import ApplicationRepositoryProtocol
from .services import OrderGatewayProtocol
from .value_objects import ApplicationStatus, OrderRequest, PlanType

__all__ = [
    "Application",
    "Plan",
    "Customer",
    "ApplicationStatus",
    "PlanType",
    "OrderRequest",
    "ApplicationRepositoryProtocol",
    "OrderGatewayProtocol",
]
