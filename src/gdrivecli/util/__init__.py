from .mime import (
    EXPORT_FORMATS,
    FOLDER_MIME,
    NATIVE_EXPORT_DEFAULTS,
    TYPE_ALIASES,
    guess_content_type,
    is_folder,
    is_google_app,
    is_native_document,
    kind_of,
)
from .size import format_size, parse_size
from .time import normalize_dt, parse_rfc3339, parse_user_date, to_rfc3339

__all__ = [
    "FOLDER_MIME",
    "EXPORT_FORMATS",
    "NATIVE_EXPORT_DEFAULTS",
    "TYPE_ALIASES",
    "is_folder",
    "is_google_app",
    "is_native_document",
    "kind_of",
    "guess_content_type",
    "parse_size",
    "format_size",
    "parse_rfc3339",
    "parse_user_date",
    "to_rfc3339",
    "normalize_dt",
]
