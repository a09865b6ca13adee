"""Custom exception hierarchy for better error handling."""
from fastapi import HTTPException, status


class LexioException(Exception):
    """Base exception for all application errors."""
    pass


class ServiceNotConfiguredException(LexioException):
    """Raised when a request needs a collaborator that cannot be built from settings."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Service not configured: {reason}")

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(self)
        )
