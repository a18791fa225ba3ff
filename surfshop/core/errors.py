"""Error taxonomy shared by the services and the HTTP boundary.

Services raise these; :mod:`surfshop.api.errors` turns them into
``{"error": message}`` responses with the matching status code.
"""

from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Unauthorized(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class SlotConflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "This time slot is already booked") -> None:
        super().__init__(message)


class AccountExists(ServiceError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class UpstreamUnavailable(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


__all__ = [
    "ServiceError",
    "ValidationError",
    "Unauthenticated",
    "Unauthorized",
    "NotFound",
    "SlotConflict",
    "AccountExists",
    "UpstreamUnavailable",
]
