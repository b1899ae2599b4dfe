"""Global error handling middleware for consistent error responses."""

import logging
import time
import traceback
from typing import Any, Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.store import StoreUnavailableError
from src.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors.

    Use this class to raise application-specific errors that should
    be returned to the client with a specific status code and message.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category/type for client handling.
            details: Optional additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: list[dict[str, Any]] | None = None,
        error_type: str = "not_found",
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type=error_type,
            details=details,
        )


class ValidationError(APIError):
    """Request validation error."""

    def __init__(
        self,
        message: str = "Validation error",
        details: list[dict[str, Any]] | None = None,
        error_type: str = "validation_error",
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class AuthorizationError(APIError):
    """Authorization failure error."""

    def __init__(
        self,
        message: str = "Access denied",
        details: list[dict[str, Any]] | None = None,
        error_type: str = "authorization_error",
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_type=error_type,
            details=details,
        )


class ConflictError(APIError):
    """Resource already exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        error_type: str = "conflict",
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_type=error_type,
        )


class RateLimitError(APIError):
    """Rate limit exceeded error."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int = 60,
        limit: int = 0,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_type="rate_limit_exceeded",
            details=details,
        )
        self.retry_after = retry_after
        self.limit = limit


class StorageUnavailableError(APIError):
    """Persistence layer failed; the whole request may be retried."""

    def __init__(self, message: str = "Storage temporarily unavailable") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_type="storage_unavailable",
        )


# Matching and messaging errors


class SelfLikeError(ValidationError):
    """A profile tried to like itself."""

    def __init__(self) -> None:
        super().__init__(
            message="You cannot like your own profile",
            error_type="self_like",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class DuplicateLikeError(ConflictError):
    """The (from, to) like is already recorded."""

    def __init__(self, existing_like: dict[str, Any] | None = None) -> None:
        super().__init__(message="Already liked this profile", error_type="duplicate_like")
        self.existing_like = existing_like


class ProfileNotFoundError(NotFoundError):
    """A referenced duo profile does not exist."""

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(message=message, error_type="profile_not_found")


class ProfileRequiredError(ValidationError):
    """The caller has not created a duo profile yet."""

    def __init__(self) -> None:
        super().__init__(
            message="User must have a profile",
            error_type="profile_required",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class MatchNotFoundError(NotFoundError):
    """Match id does not resolve to a match."""

    def __init__(self) -> None:
        super().__init__(message="Match not found", error_type="match_not_found")


class NotAParticipantError(AuthorizationError):
    """Caller's profile is not one of the match's two profiles."""

    def __init__(self) -> None:
        super().__init__(
            message="Not authorized to access this match",
            error_type="not_a_participant",
        )


class EmptyContentError(ValidationError):
    """Message content is blank after trimming."""

    def __init__(self) -> None:
        super().__init__(message="Message content is required", error_type="empty_content")


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    details: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        error_type: Error category for client handling.
        message: Human-readable error description.
        status_code: HTTP status code.
        details: Optional error details.
        request_id: Optional request ID for tracing.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse.from_exception(
        error_type=error_type,
        message=message,
        details=details,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


def _public_error(error: APIError) -> APIError:
    """Return the error as it should be shown to the client.

    With conceal_match_membership on, a non-participant cannot tell a
    foreign match from one that does not exist.
    """
    if isinstance(error, NotAParticipantError) and get_settings().conceal_match_membership:
        return MatchNotFoundError()
    return error


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Middleware to catch and format all exceptions.

    Ensures consistent error response format across the application.
    Logs full stack traces for debugging while returning safe messages to clients.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    request_id = request.headers.get("X-Request-ID")

    try:
        response = await call_next(request)
        return response

    except RateLimitError as e:
        logger.warning(
            "Rate limit exceeded: %s",
            e.message,
            extra={"request_id": request_id, "retry_after": e.retry_after},
        )
        response = create_error_response(
            error_type=e.error_type,
            message=e.message,
            status_code=e.status_code,
            details=e.details,
            request_id=request_id,
        )
        response.headers["Retry-After"] = str(e.retry_after)
        response.headers["X-RateLimit-Limit"] = str(e.limit)
        response.headers["X-RateLimit-Remaining"] = "0"
        response.headers["X-RateLimit-Reset"] = str(int(time.time()) + e.retry_after)
        return response

    except APIError as e:
        logger.warning(
            "API error: %s - %s",
            e.error_type,
            e.message,
            extra={"request_id": request_id, "status_code": e.status_code},
        )
        public = _public_error(e)
        return create_error_response(
            error_type=public.error_type,
            message=public.message,
            status_code=public.status_code,
            details=public.details,
            request_id=request_id,
        )

    except StoreUnavailableError as e:
        logger.error("Storage failure: %s", e, extra={"request_id": request_id})
        public = StorageUnavailableError()
        return create_error_response(
            error_type=public.error_type,
            message=public.message,
            status_code=public.status_code,
            request_id=request_id,
        )

    except HTTPException as e:
        logger.warning(
            "HTTP exception: %s - %s",
            e.status_code,
            e.detail,
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="http_error",
            message=str(e.detail),
            status_code=e.status_code,
            request_id=request_id,
        )

    except Exception as e:
        logger.error(
            "Unhandled exception: %s\n%s",
            str(e),
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="internal_error",
            message="An unexpected error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id=request_id,
        )
