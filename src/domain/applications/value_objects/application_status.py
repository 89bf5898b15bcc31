"""
ApplicationStatus Value Object.

Closed enumeration of application lifecycle states plus the transition
table that the Application entity enforces.

State Machine:
    PRELIM -> ORDER            (external: operator submits the application)
    ORDER -> COMPLETE          (order pipeline: B2B endpoint accepted the order)
    ORDER -> ORDER_FAILED      (order pipeline: rejection or processing fault)
    ORDER_FAILED -> ORDER      (external: operator re-submits)

    COMPLETE has no outgoing transition.
"""

from enum import Enum
from typing import Final


class ApplicationStatus(str, Enum):
    """
    Lifecycle states of an Application.

    States:
        PRELIM: Preliminary application, not yet eligible for ordering
        ORDER: Ready for order submission (pipeline input)
        COMPLETE: Order placed, order_id recorded
        ORDER_FAILED: Order submission failed (rejected or faulted)

    Usage:
        >>> status = ApplicationStatus("order")
        >>> status.can_transition_to(ApplicationStatus.COMPLETE)
        True
        >>> status.is_terminal
        False
    """

    PRELIM = "prelim"
    ORDER = "order"
    COMPLETE = "complete"
    ORDER_FAILED = "order_failed"

    def can_transition_to(self, target: "ApplicationStatus") -> bool:
        """
        Check if moving from this status to target is allowed.

        Args:
            target: Desired next status

        Returns:
            True if the transition is in the state machine, False otherwise
        """
        return target in ALLOWED_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        """True for states the order pipeline leaves an application in."""
        match self:
            case ApplicationStatus.COMPLETE | ApplicationStatus.ORDER_FAILED:
                return True
            case ApplicationStatus.PRELIM | ApplicationStatus.ORDER:
                return False

    @property
    def requires_order_id(self) -> bool:
        """True if an application in this status must carry an order_id."""
        match self:
            case ApplicationStatus.COMPLETE:
                return True
            case (
                ApplicationStatus.PRELIM
                | ApplicationStatus.ORDER
                | ApplicationStatus.ORDER_FAILED
            ):
                return False


ALLOWED_TRANSITIONS: Final[dict[ApplicationStatus, frozenset[ApplicationStatus]]] = {
    ApplicationStatus.PRELIM: frozenset({ApplicationStatus.ORDER}),
    ApplicationStatus.ORDER: frozenset(
        {ApplicationStatus.COMPLETE, ApplicationStatus.ORDER_FAILED}
    ),
    ApplicationStatus.COMPLETE: frozenset(),
    ApplicationStatus.ORDER_FAILED: frozenset({ApplicationStatus.ORDER}),
}
