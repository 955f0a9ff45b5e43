"""GoogleDriveManager: path-addressed file operations on Drive."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from gdrivecli.auth import AuthInfo
from gdrivecli.controller import GoogleDriveController
from gdrivecli.errors import (
    FolderNotFoundError,
    InvalidArgumentError,
    LocalFileNotFoundError,
    RemoteFileNotFoundError,
    TargetFolderNotFoundError,
    UnknownExportFormatError,
    UnsupportedDownloadError,
)
from gdrivecli.models import DownloadResult, RemoteEntry, SearchFilters
from gdrivecli.resolver import resolve_folder, split_leaf, split_path
from gdrivecli.search import search as run_search
from gdrivecli.util.mime import (
    EXPORT_EXTENSIONS,
    EXPORT_FORMATS,
    NATIVE_EXPORT_DEFAULTS,
    guess_content_type,
)

logger = logging.getLogger(__name__)


class GoogleDriveManager:
    """High-level file operations addressed by slash-delimited Drive paths."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._controller = GoogleDriveController(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
        )

    @classmethod
    def from_controller(cls, controller: GoogleDriveController) -> "GoogleDriveManager":
        """Create manager with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        return obj

    def resolve(self, path: str) -> Optional[str]:
        """Resolve a folder path to its ID, or None if it does not exist."""
        return resolve_folder(self._controller, path)

    def upload(self, local_path: str, target_path: str = "") -> RemoteEntry:
        """
        Upload a local file into the folder at `target_path` (root by default).

        Raises:
            LocalFileNotFoundError: if `local_path` is not an existing file.
            TargetFolderNotFoundError: if the target folder does not exist.
        """
        require_local_file(local_path)

        folder_id = self.resolve(target_path)
        if folder_id is None:
            raise TargetFolderNotFoundError(
                f"Target folder not found: {target_path}",
                details={"path": target_path},
            )

        name = os.path.basename(local_path)
        entry = self._controller.upload_file(
            local_path,
            folder_id,
            name=name,
            mime_type=guess_content_type(local_path),
        )
        logger.info("uploaded %s as %s (%s)", local_path, entry.name, entry.file_id)
        return entry

    def list_folder(self, path: str = "") -> list[RemoteEntry]:
        """
        List the direct children of the folder at `path`, by name.

        Raises:
            FolderNotFoundError: if the folder does not exist.
        """
        folder_id = self.resolve(path)
        if folder_id is None:
            raise FolderNotFoundError(
                f"Folder not found: {path}",
                details={"path": path},
            )
        return self._controller.list_children(folder_id, order_by="name")

    def download_by_path(self, drive_path: str, local_path: str) -> DownloadResult:
        """
        Download the file at `drive_path` (e.g. "Work/Reports/Q1.pdf").

        If the folder holds several files with that name, the first one
        returned by Drive is downloaded. An existing destination is overwritten.

        Raises:
            InvalidArgumentError: if `drive_path` names no file.
            FolderNotFoundError: if the parent folder does not exist.
            RemoteFileNotFoundError: if the folder has no child with that name.
            UnsupportedDownloadError: if the match is a folder.
        """
        parent_segments, leaf = split_leaf(drive_path)
        if leaf is None:
            raise InvalidArgumentError(
                "A file path is required (e.g. 'Folder/file.txt')",
                details={"path": drive_path},
            )

        folder_id = resolve_folder(self._controller, parent_segments)
        if folder_id is None:
            folder_path = "/".join(parent_segments)
            raise FolderNotFoundError(
                f"Folder not found: {folder_path}",
                details={"path": folder_path},
            )

        entry = self._controller.find_child(folder_id, leaf)
        if entry is None:
            raise RemoteFileNotFoundError(
                f"File not found: {drive_path}",
                details={"path": drive_path},
            )

        return self._download_entry(entry, local_path, export_format=None)

    def download_by_id(
        self,
        file_id: str,
        local_path: str,
        export_format: Optional[str] = None,
    ) -> DownloadResult:
        """
        Download a file by ID, exporting native Google documents.

        Native documents are exported as `export_format` if given, otherwise
        as their default interchange format (docx/xlsx/pptx). For regular
        files `export_format` is ignored and a warning is attached.

        Raises:
            UnknownExportFormatError: unsupported `export_format` (before any request).
            NotFoundError: if the ID does not exist.
            UnsupportedDownloadError: if the ID is a folder.
        """
        if export_format is not None:
            export_mime_for(export_format)

        entry = self._controller.get(file_id)
        return self._download_entry(entry, local_path, export_format=export_format)

    def search(self, filters: SearchFilters) -> list[RemoteEntry]:
        return run_search(self._controller, filters)

    # ----------------------------
    # Internals
    # ----------------------------
    def _download_entry(
        self,
        entry: RemoteEntry,
        local_path: str,
        *,
        export_format: Optional[str],
    ) -> DownloadResult:
        if entry.is_folder:
            raise UnsupportedDownloadError(
                f"'{entry.name}' is a folder and cannot be downloaded",
                details={"file_id": entry.file_id},
            )

        if entry.is_native:
            export_mime = _export_mime_for_entry(entry, export_format)
            dest = _destination(local_path, entry.name, EXPORT_EXTENSIONS.get(export_mime, ""))
            self._controller.export_media(entry.file_id, export_mime, dest)
            logger.info("exported %s as %s to %s", entry.file_id, export_mime, dest)
            return DownloadResult(
                entry=entry,
                local_path=dest,
                exported=True,
                export_mime_type=export_mime,
            )

        warnings: list[str] = []
        if export_format is not None:
            warnings.append(
                f"--format {export_format} ignored: '{entry.name}' is not a Google document"
            )

        dest = _destination(local_path, entry.name, "")
        self._controller.download_media(entry.file_id, dest)
        logger.info("downloaded %s to %s", entry.file_id, dest)
        return DownloadResult(entry=entry, local_path=dest, warnings=warnings)


def require_local_file(local_path: str) -> None:
    if not os.path.isfile(local_path):
        raise LocalFileNotFoundError(
            f"Local file not found: {local_path}",
            details={"local_path": local_path},
        )


def export_mime_for(export_format: str) -> str:
    """Map an export alias (pdf, docx, ...) to its MIME type."""
    mime = EXPORT_FORMATS.get(export_format.strip().lower())
    if mime is None:
        supported = ", ".join(EXPORT_FORMATS)
        raise UnknownExportFormatError(
            f"Unknown export format: {export_format}. Supported formats: {supported}",
            details={"format": export_format, "supported": list(EXPORT_FORMATS)},
        )
    return mime


def _export_mime_for_entry(entry: RemoteEntry, export_format: Optional[str]) -> str:
    if export_format is not None:
        return export_mime_for(export_format)

    default = NATIVE_EXPORT_DEFAULTS.get(entry.mime_type)
    if default is None:
        supported = ", ".join(EXPORT_FORMATS)
        raise UnknownExportFormatError(
            f"No default export format for {entry.mime_type}; "
            f"pass --format ({supported})",
            details={"mime_type": entry.mime_type, "file_id": entry.file_id},
        )
    return default.mime_type


def _destination(local_path: str, remote_name: str, extension: str) -> str:
    """Place the file inside `local_path` when it is an existing directory."""
    if not os.path.isdir(local_path):
        return local_path

    name = os.path.basename(remote_name) or "download"
    if extension and not name.lower().endswith(extension):
        name += extension
    return os.path.join(local_path, name)


def describe_path(path: str) -> str:
    """Display form of a virtual path ("root" for the empty path)."""
    segments = split_path(path)
    return "/".join(segments) if segments else "root"
