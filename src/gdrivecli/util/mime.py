from __future__ import annotations

import mimetypes
from dataclasses import dataclass

FOLDER_MIME: str = "application/vnd.google-apps.folder"
GOOGLE_APP_PREFIX: str = "application/vnd.google-apps."
OCTET_STREAM: str = "application/octet-stream"

DOCUMENT_MIME: str = "application/vnd.google-apps.document"
SPREADSHEET_MIME: str = "application/vnd.google-apps.spreadsheet"
PRESENTATION_MIME: str = "application/vnd.google-apps.presentation"

DOCX_MIME: str = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PPTX_MIME: str = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


@dataclass(frozen=True)
class ExportDefault:
    """Default interchange format for a native Google document type."""

    mime_type: str
    extension: str


NATIVE_EXPORT_DEFAULTS: dict[str, ExportDefault] = {
    DOCUMENT_MIME: ExportDefault(DOCX_MIME, ".docx"),
    SPREADSHEET_MIME: ExportDefault(XLSX_MIME, ".xlsx"),
    PRESENTATION_MIME: ExportDefault(PPTX_MIME, ".pptx"),
}

# Aliases accepted by `file export --format`.
EXPORT_FORMATS: dict[str, str] = {
    "pdf": "application/pdf",
    "txt": "text/plain",
    "html": "text/html",
    "md": "text/markdown",
    "csv": "text/csv",
    "docx": DOCX_MIME,
    "xlsx": XLSX_MIME,
    "pptx": PPTX_MIME,
}

EXPORT_EXTENSIONS: dict[str, str] = {
    mime: f".{alias}" for alias, mime in EXPORT_FORMATS.items()
}

# Aliases accepted by `file search --type`. A trailing "/" means "any subtype".
TYPE_ALIASES: dict[str, str] = {
    "folder": FOLDER_MIME,
    "document": DOCUMENT_MIME,
    "doc": DOCUMENT_MIME,
    "spreadsheet": SPREADSHEET_MIME,
    "sheet": SPREADSHEET_MIME,
    "presentation": PRESENTATION_MIME,
    "slides": PRESENTATION_MIME,
    "pdf": "application/pdf",
    "text": "text/plain",
    "zip": "application/zip",
    "image": "image/",
    "video": "video/",
    "audio": "audio/",
}

_KINDS: dict[str, str] = {
    FOLDER_MIME: "folder",
    DOCUMENT_MIME: "document",
    SPREADSHEET_MIME: "spreadsheet",
    PRESENTATION_MIME: "presentation",
}


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Returns True if the MIME type is a Google 'apps' type (folders included)."""
    return mime_type.startswith(GOOGLE_APP_PREFIX)


def is_native_document(mime_type: str) -> bool:
    """
    Returns True for Google apps types that hold no byte content of their own.

    These must be exported to obtain downloadable bytes. Folders are excluded.
    """
    return is_google_app(mime_type) and not is_folder(mime_type)


def kind_of(mime_type: str) -> str:
    """Classify a MIME type as folder/document/spreadsheet/presentation/native/file."""
    if mime_type in _KINDS:
        return _KINDS[mime_type]
    if is_native_document(mime_type):
        return "native"
    return "file"


def guess_content_type(path: str) -> str:
    """Infer a content type from a file name, falling back to octet-stream."""
    guessed, _ = mimetypes.guess_type(path)
    return guessed or OCTET_STREAM
