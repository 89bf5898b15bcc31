"""
Application Layer Package

Responsibility:
    Coordinates use cases, manages asynchronous task processing with Celery,
    and implements CQRS pattern.

Architecture Notes:
    - Orchestration layer between API and Domain
    - Contains Commands (write), Queries (read), and Use Cases
    - Celery tasks for per-application order submission and dispatch
    - Shared models (enums, DTOs)

Contains:
    - commands/: CQRS write operations (dispatch, registration)
    - queries/: CQRS read operations (listing)
    - services/: Use Cases (order submission, registration)
    - ports/: Protocols implemented outside the layer (task queue)
    - tasks/: Celery async tasks
    - models: Shared Application Layer models

Does NOT contain:
    - Domain business rules (in Domain Layer)
    - HTTP handling (in API Layer)
    - Infrastructure details (in Infrastructure Layer)
"""

# Re-export commonly used models for convenience
from src.application.models import DispatchResult, OrderSubmissionOutcome

__all__ = [
    "DispatchResult",
    "OrderSubmissionOutcome",
]
