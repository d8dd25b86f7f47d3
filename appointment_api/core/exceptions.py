"""
Application error type.

Every failure raised by the service layer is an ``AppError`` carrying the
HTTP status code and the message returned to the client. The exception
handler in ``main.py`` turns it into a JSON response.
"""

from http import HTTPStatus

from fastapi import status


class AppError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def error(self) -> str:
        """HTTP reason phrase for the status code."""
        return HTTPStatus(self.status_code).phrase

    def __repr__(self):
        return f"<AppError(status_code={self.status_code}, message='{self.message}')>"

    @classmethod
    def bad_request(cls, message: str = "Bad request") -> "AppError":
        return cls(status.HTTP_400_BAD_REQUEST, message)

    @classmethod
    def unauthorized(cls, message: str = "Could not validate credentials") -> "AppError":
        return cls(status.HTTP_401_UNAUTHORIZED, message)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> "AppError":
        return cls(status.HTTP_404_NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str = "Resource already exists") -> "AppError":
        return cls(status.HTTP_409_CONFLICT, message)

    @classmethod
    def validation(cls, message: str = "Invalid request data") -> "AppError":
        return cls(HTTPStatus.UNPROCESSABLE_ENTITY.value, message)

    @classmethod
    def too_many_requests(cls, message: str = "Too many requests. Please try again later.") -> "AppError":
        return cls(status.HTTP_429_TOO_MANY_REQUESTS, message)

    @classmethod
    def internal(cls, message: str = "An unexpected error occurred") -> "AppError":
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
