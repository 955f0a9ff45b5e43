"""Public error exports for gdrivecli."""

from __future__ import annotations

from .exceptions import (
    AuthError,
    BadRequestError,
    ConfigError,
    ConflictError,
    FolderNotFoundError,
    GDriveCliError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidDateFormatError,
    InvalidSizeFormatError,
    LocalFileNotFoundError,
    LocalIOError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteFileNotFoundError,
    RemoteServiceError,
    TargetFolderNotFoundError,
    UnknownExportFormatError,
    UnknownFileTypeError,
    UnsupportedDownloadError,
    map_http_error,
)

__all__ = [
    "GDriveCliError",
    "InvalidArgumentError",
    "LocalFileNotFoundError",
    "LocalIOError",
    "UnknownFileTypeError",
    "UnknownExportFormatError",
    "InvalidDateFormatError",
    "InvalidSizeFormatError",
    "UnsupportedDownloadError",
    "ConfigError",
    "FolderNotFoundError",
    "TargetFolderNotFoundError",
    "RemoteFileNotFoundError",
    "AuthError",
    "RemoteServiceError",
    "BadRequestError",
    "PermissionError",
    "QuotaExceededError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "HttpErrorInfo",
    "map_http_error",
]
