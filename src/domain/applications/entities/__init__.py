"""
Application Entities

Exports:
    - Application: Core entity tracked through the order lifecycle
    - Plan: Selected service offering (read-only)
    - Customer: Application owner (read-only)
"""

from .application import Application
from .reference_data import Customer, Plan

__all__ = ["Application", "Plan", "Customer"]
