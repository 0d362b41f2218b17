"""
Transport Result

Standardized outcome of one REST call. The gateway never raises for HTTP
or network problems; it returns one of these and lets the caller decide.
"""

from dataclasses import dataclass
from typing import Any, Optional

from restaurant_client.core.exceptions import TransportError


@dataclass
class TransportResult:
    """
    Result of a gateway request.

    Attributes:
        success: True for a 2xx response that decoded cleanly
        data: Unwrapped payload (the `data` member of the envelope)
        status_code: HTTP status, None when no response arrived
        error: Human-readable failure description
        response_time_ms: Wall time spent on the call
    """
    success: bool
    data: Any = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    response_time_ms: float = 0.0

    def unwrap(self) -> Any:
        """
        Return the payload or raise.

        Raises:
            TransportError: the call did not succeed
        """
        if not self.success:
            raise TransportError(self.error or "Request failed", self.status_code)
        return self.data

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "data": self.data,
            "status_code": self.status_code,
            "error": self.error,
            "response_time_ms": self.response_time_ms,
        }
