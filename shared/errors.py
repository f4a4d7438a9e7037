"""
Shared error handling for the Payment Access Layer.
"""

from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorCategory(str, Enum):
    """Transport-level error categories."""
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    INTERNAL_SERVER_ERROR = "internal_server_error"

    @property
    def status_code(self) -> int:
        return _CATEGORY_STATUS[self]


_CATEGORY_STATUS = {
    ErrorCategory.BAD_REQUEST: 400,
    ErrorCategory.FORBIDDEN: 403,
    ErrorCategory.INTERNAL_SERVER_ERROR: 500,
}


class AccessLayerException(Exception):
    """Base exception for Access Layer services."""

    category: ErrorCategory = ErrorCategory.INTERNAL_SERVER_ERROR

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.category.status_code

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )

