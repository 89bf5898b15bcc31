"""
Application Repository Interfaces
"""

from .application_repository import ApplicationRepositoryProtocol

__all__ = ["ApplicationRepositoryProtocol"]
