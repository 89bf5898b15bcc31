"""
Repository Implementations

Exports:
    - RedisApplicationRepository: Redis-based application store
"""

from .application_repository import RedisApplicationRepository

__all__ = ["RedisApplicationRepository"]
