"""
PlanType Value Object.

Service offering categories. Only NBN plans go through the automated
order-submission pipeline.
"""

from enum import Enum


class PlanType(str, Enum):
    """
    Type of telecommunications plan.

    Attributes:
        NBN: National Broadband Network plan (auto-submitted to the B2B endpoint)
        OPTICOMM: Opticomm fibre plan
        MOBILE: Mobile plan
    """

    NBN = "nbn"
    OPTICOMM = "opticomm"
    MOBILE = "mobile"

    @property
    def is_auto_submitted(self) -> bool:
        """True if applications on this plan type are submitted by the order pipeline."""
        match self:
            case PlanType.NBN:
                return True
            case PlanType.OPTICOMM | PlanType.MOBILE:
                return False
