"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Validation errors (400/422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TOKEN_SIGNING_ERROR = "TOKEN_SIGNING_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class InvalidTokenError(AuthenticationError):
    """Token signature, structure or claims are invalid."""

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(message=message, error_code=ErrorCode.INVALID_TOKEN)


class TokenExpiredError(AuthenticationError):
    """Token was valid once but its expiry has passed."""

    def __init__(self, message: str = "Token has expired.") -> None:
        super().__init__(message=message, error_code=ErrorCode.TOKEN_EXPIRED)


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair does not match a user."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials.",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class SigningError(AppException):
    """Token could not be signed."""

    def __init__(self, message: str = "Unable to sign token.") -> None:
        super().__init__(
            error_code=ErrorCode.TOKEN_SIGNING_ERROR,
            message=message,
            status_code=500,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "User not authorized.") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class EmailAlreadyRegisteredError(AppException):
    """A user with this email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_EMAIL,
            message="User already exists.",
            status_code=409,
            details={"email": email},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user.",
            status_code=404,
            details={"user_id": user_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment not found: {comment_id}",
            status_code=404,
            details={"comment_id": comment_id},
        )


class GitHubProfileNotFoundError(AppException):
    """Upstream GitHub lookup did not return repositories."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            message="No Github profile found",
            status_code=404,
            details={"username": username},
        )
