"""Named errors raised by the services.

Each one is an ``HTTPException`` so that anything not handled by a page
handler still reaches the client as a ``{"detail": ...}`` response.
"""

from fastapi import HTTPException, status


class InvalidCategory(HTTPException):
    """Raised when a category path segment does not name a known file category."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown file category: {category}",
        )


class FetchFailure(HTTPException):
    """Raised when a file listing query fails."""

    def __init__(self, detail: str = "Failed to fetch files"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class OTPIssuanceFailed(HTTPException):
    def __init__(self, detail: str = "Failed to send an OTP"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class OTPVerificationFailed(HTTPException):
    def __init__(self, detail: str = "Invalid or expired OTP"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class MissingAccountId(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Account ID is required")


class UserNotFound(HTTPException):
    def __init__(self, detail: str = "User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
