"""
Application Services (Use Cases)

Responsibility:
    Orchestration services that coordinate domain entities, repositories
    and gateways.

Contains:
    - SubmitNbnOrderUseCase: One application through the B2B order endpoint
    - RegisterApplicationUseCase: Create an application and notify listeners

Does NOT contain:
    - Domain business logic (use Domain entities/value objects)
    - Direct infrastructure calls (use dependency injection)
"""

from src.application.services.application_registration_service import (
    ApplicationCreatedListener,
    RegisterApplicationUseCase,
    log_application_created,
)
from src.application.services.order_submission_service import SubmitNbnOrderUseCase

__all__ = [
    "SubmitNbnOrderUseCase",
    "RegisterApplicationUseCase",
    "ApplicationCreatedListener",
    "log_application_created",
]
