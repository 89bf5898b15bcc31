"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Attributes:
        code: Machine-readable error code (e.g., "APPLICATION_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details (exception type, debug info)
    """

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "code": "APPLICATION_NOT_FOUND",
                "message": "ApplicationNotFoundError: Application a3bb189e-8bf9-3888-9912-ace4e6543002 not found",
                "details": {"exception_type": "ApplicationNotFoundError"},
            }
        }
