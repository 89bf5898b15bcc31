"""
B2B Infrastructure Module

Exports:
    - NbnB2BClient: HTTP client for the NBN B2B order endpoint
"""

from .nbn_b2b_client import NbnB2BClient

__all__ = ["NbnB2BClient"]
