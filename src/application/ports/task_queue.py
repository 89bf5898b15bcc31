"""
Task Queue Port

Protocol for submitting per-application order tasks to a background queue.
Implemented by the Celery adapter in src.application.tasks.
"""

from typing import Protocol
from uuid import UUID


class TaskQueueProtocol(Protocol):
    """
    Background queue accepting one order submission task per application.

    Examples:
        >>> task_id = queue.submit(application.id)
    """

    def submit(self, application_id: UUID) -> str:
        """
        Enqueue an order submission task.

        Args:
            application_id: Application to submit

        Returns:
            Queue-assigned task id

        Raises:
            Exception: Broker errors propagate unchanged
        """
        ...
