"""Exception hierarchy and HTTP error mapping for gdrivecli."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveCliError(Exception):
    """
    Base exception for gdrivecli.

    Attributes:
        details: Optional structured information (e.g., path, HTTP status).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# ----------------------------
# User input / local errors
# ----------------------------
class InvalidArgumentError(GDriveCliError):
    """Raised when a caller-supplied argument is invalid."""


class LocalFileNotFoundError(GDriveCliError):
    """Raised when the local file to upload does not exist."""


class LocalIOError(GDriveCliError):
    """Raised when a local file cannot be read or written."""


class UnknownFileTypeError(GDriveCliError):
    """Raised when a search type alias is not recognized."""


class UnknownExportFormatError(GDriveCliError):
    """Raised when an export format alias is not recognized."""


class InvalidDateFormatError(GDriveCliError):
    """Raised when a date filter cannot be parsed."""


class InvalidSizeFormatError(GDriveCliError):
    """Raised when a size filter such as '10MB' cannot be parsed."""


class UnsupportedDownloadError(GDriveCliError):
    """Raised when an item has no downloadable content (e.g., a folder)."""


class ConfigError(GDriveCliError):
    """Raised when the profile configuration is missing or malformed."""


# ----------------------------
# Path resolution errors
# ----------------------------
class FolderNotFoundError(GDriveCliError):
    """Raised when a virtual folder path cannot be resolved."""


class TargetFolderNotFoundError(GDriveCliError):
    """Raised when the upload target folder cannot be resolved."""


class RemoteFileNotFoundError(GDriveCliError):
    """Raised when no file with the requested name exists in a folder."""


# ----------------------------
# Auth / remote errors
# ----------------------------
class AuthError(GDriveCliError):
    """Raised when no usable OAuth token exists or OAuth fails."""


class RemoteServiceError(GDriveCliError):
    """Raised for Drive API or transport failures (catch-all)."""


class BadRequestError(RemoteServiceError):
    """Raised when Drive rejects the request arguments (HTTP 400)."""


class PermissionError(RemoteServiceError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class QuotaExceededError(RemoteServiceError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NotFoundError(RemoteServiceError):
    """Raised when a Drive resource is not found by ID (HTTP 404)."""


class ConflictError(RemoteServiceError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteServiceError):
    """Raised when rate-limited (HTTP 429)."""


class NetworkError(RemoteServiceError):
    """Raised when network/timeout issues prevent the request."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivecli exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveCliError:
    """
    Map an HTTP error to a gdrivecli exception.

    Policy:
        - 400 -> BadRequestError
        - 401 -> AuthError
        - 403 -> PermissionError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise (5xx, unknown) -> RemoteServiceError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return BadRequestError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return RemoteServiceError(message, details=details, cause=cause)
