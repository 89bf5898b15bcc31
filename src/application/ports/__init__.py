"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure and task modules implement these protocols.
"""

from src.application.ports.task_queue import TaskQueueProtocol

__all__ = ["TaskQueueProtocol"]
