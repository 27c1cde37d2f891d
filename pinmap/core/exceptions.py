"""
Service-level errors.

Services raise these; the API layer turns them into HTTP responses using
``status_code``. They subclass ValueError so callers that only care about
"the request was refused" can keep catching ValueError.
"""
from fastapi import status


class ServiceError(ValueError):
    """Base class for expected, caller-facing failures"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """Resource or grant does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ServiceError):
    """Caller is authenticated but not allowed to do this"""
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ServiceError):
    """Duplicate friendship request"""
    status_code = status.HTTP_409_CONFLICT


class InvalidStateError(ServiceError):
    """Friendship is not in the status the transition expects"""
    status_code = status.HTTP_409_CONFLICT


class ValidationFailedError(ServiceError):
    """Malformed or inconsistent input"""
    status_code = status.HTTP_400_BAD_REQUEST
