"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain Layer.
Handles all external dependencies: Redis and the carrier's B2B endpoint.

Architecture:
    - Implements Domain repository and gateway interfaces (Dependency Inversion)
    - Depends on external libraries (redis, requests)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: Redis connection and repository implementations
    - b2b: NBN B2B order endpoint client

Exports:
    From persistence:
        - RedisApplicationRepository: Redis-based application store

    From b2b:
        - NbnB2BClient: Order placement over HTTP (implements OrderGatewayProtocol)

Usage:
    >>> from src.infrastructure import NbnB2BClient, RedisApplicationRepository
    >>>
    >>> # Or import from specific submodules
    >>> from src.infrastructure.persistence.redis import get_redis_client
"""

# Persistence
from .persistence import RedisApplicationRepository

# B2B
from .b2b import NbnB2BClient

__all__ = [
    # Persistence
    "RedisApplicationRepository",
    # B2B
    "NbnB2BClient",
]
