from fastapi import HTTPException, status


class UnauthorizedError(HTTPException):
    """Raised when no provider token accompanies the request."""

    def __init__(self, message: str = "Provider access token required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )
