"""
Domain exceptions

Every handler failure falls into one of a few flat categories; each carries the
HTTP status it is rendered with.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse


class LaundryError(Exception):
    """Base exception for Laundry Service errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(LaundryError):
    """Input rejected before touching storage"""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationRequired(LaundryError):
    """Missing or invalid session"""
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(LaundryError):
    """Caller lacks the required role or ownership"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(LaundryError):
    """Requested row does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class StateConflict(LaundryError):
    """Row is not in the state the operation expects"""
    status_code = status.HTTP_409_CONFLICT


class DownstreamError(LaundryError):
    """Webhook, email or storage call failed"""
    status_code = status.HTTP_502_BAD_GATEWAY


async def laundry_error_handler(request: Request, exc: LaundryError) -> JSONResponse:
    """Render a domain error as an error payload"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
