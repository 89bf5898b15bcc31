"""
Application Value Objects

Immutable values used by the Application entity and the order pipeline.
"""

from .application_status import ALLOWED_TRANSITIONS, ApplicationStatus
from .order_request import OrderRequest
from .plan_type import PlanType

__all__ = [
    "ApplicationStatus",
    "ALLOWED_TRANSITIONS",
    "PlanType",
    "OrderRequest",
]
