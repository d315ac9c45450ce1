import logging
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ValidationError(BaseAppException):
    """Raised when input is malformed or out of range"""
    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class NotFoundError(BaseAppException):
    """Raised when a referenced row is absent or not owned by the caller"""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class ConflictError(BaseAppException):
    """Raised on a uniqueness violation that an upsert does not absorb"""
    def __init__(self, message: str = "Already exists"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class InvalidCredentialsError(BaseAppException):
    """Raised when credentials are invalid"""
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)

class UpstreamError(BaseAppException):
    """Raised when the external movie catalog fails"""
    def __init__(self, message: str = "External catalog request failed", status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(message, status_code)


def handle_exception(e: Exception) -> HTTPException:
    """Convert domain exceptions to HTTP responses."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, BaseAppException):
        return HTTPException(status_code=e.status_code, detail=e.message)
    logger.exception(f"Unhandled error: {str(e)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred",
    )
