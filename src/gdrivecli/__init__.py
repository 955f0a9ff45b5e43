"""gdrivecli public API."""

from __future__ import annotations

from gdrivecli.auth import AuthInfo, AuthStatus, OAuthClient
from gdrivecli.config import ProfileRegistry, Settings, load_settings
from gdrivecli.errors import (
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
from gdrivecli.manager import GoogleDriveManager
from gdrivecli.models import DownloadResult, RemoteEntry, SearchFilters
from gdrivecli.query import build_query
from gdrivecli.resolver import resolve_folder, split_path
from gdrivecli.search import search
from gdrivecli.session import get_authorized_client

__all__ = [
    # High-level
    "GoogleDriveManager",
    "get_authorized_client",
    "resolve_folder",
    "split_path",
    "build_query",
    "search",
    # Auth / config
    "AuthInfo",
    "AuthStatus",
    "OAuthClient",
    "Settings",
    "ProfileRegistry",
    "load_settings",
    # Models
    "RemoteEntry",
    "SearchFilters",
    "DownloadResult",
    # Errors
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
