"""
Celery Tasks

Responsibility:
    Asynchronous task definitions for the NBN order pipeline.

Contains:
    - celery_app.py - Celery configuration (broker, backend, beat schedule)
    - order_tasks.py - submit_nbn_order and dispatch_nbn_orders tasks

Does NOT contain:
    - Business logic (delegates to Application services and commands)
"""

from .celery_app import celery_app, health_check
from .order_tasks import (
    CeleryOrderSubmissionQueue,
    dispatch_nbn_orders_task,
    submit_nbn_order_task,
)

__all__ = [
    "celery_app",
    "health_check",
    "submit_nbn_order_task",
    "dispatch_nbn_orders_task",
    "CeleryOrderSubmissionQueue",
]
