"""
Application Commands (CQRS write side)

Exports:
    - DispatchNbnOrdersCommandHandler: Batch dispatcher for NBN orders
    - RegisterApplicationCommand: Data for registering an application
"""

from src.application.commands.dispatch_nbn_orders import (
    NOTHING_TO_DISPATCH_MESSAGE,
    DispatchNbnOrdersCommandHandler,
    dispatched_message,
)
from src.application.commands.register_application import RegisterApplicationCommand

__all__ = [
    "DispatchNbnOrdersCommandHandler",
    "NOTHING_TO_DISPATCH_MESSAGE",
    "dispatched_message",
    "RegisterApplicationCommand",
]
