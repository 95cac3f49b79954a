"""Custom exceptions for the DevCommunity application."""

from fastapi import HTTPException, status


class ApiEndpointNotFoundException(HTTPException):
    """Exception for every `/api/*` route other than the health check.

    Data lives in the key-value store, not behind an HTTP API.

    Response Body:
        {
            "message": "API endpoint not found. This application now uses client-side storage."
        }
    """

    def __init__(self, detail: str = "API endpoint not found. This application now uses client-side storage."):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


__all__ = [
    "ApiEndpointNotFoundException",
]
