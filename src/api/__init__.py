"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for reading applications, plus the CLI trigger for the
    NBN dispatch cycle. No business logic.

Contains:
    - FastAPI router (applications)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)
    - process-nbn-applications CLI

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Order submission (belongs to Application layer)
    - Redis operations (belongs to Infrastructure layer)
"""
