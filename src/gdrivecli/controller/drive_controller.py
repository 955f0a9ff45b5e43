"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from typing import Any, Callable, Optional, Sequence, TypeVar

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload, MediaIoBaseDownload

from gdrivecli.auth import AuthInfo, OAuthClient
from gdrivecli.errors import (
    GDriveCliError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalIOError,
    NetworkError,
    RemoteServiceError,
    map_http_error,
)
from gdrivecli.models import RemoteEntry
from gdrivecli.query import child_query
from gdrivecli.util.mime import OCTET_STREAM
from gdrivecli.util.time import parse_rfc3339

from .fields import FILE_FIELDS, LIST_FIELDS

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROOT_ID: str = "root"
MAX_PAGE_SIZE: int = 100
DOWNLOAD_CHUNK_SIZE: int = 10 * 1024 * 1024


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Every request is attempted once; failures surface immediately.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> RemoteEntry:
        logger.debug("files.get fileId=%s", file_id)
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry(data)

    def list_page(
        self,
        query: str,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        order_by: Optional[str] = None,
    ) -> tuple[list[RemoteEntry], Optional[str]]:
        """
        Run one `files.list` call.

        Returns:
            (entries, next_page_token); the token is None on the last page.
        """
        kwargs: dict[str, Any] = {"q": query, "fields": LIST_FIELDS}
        if page_size is not None:
            kwargs["pageSize"] = min(page_size, MAX_PAGE_SIZE)
        if page_token:
            kwargs["pageToken"] = page_token
        if order_by:
            kwargs["orderBy"] = order_by

        logger.debug("files.list q=%r pageSize=%s orderBy=%s", query,
                     kwargs.get("pageSize"), order_by)
        req = self._service.files().list(**kwargs, **self._common_list_kwargs())
        data = self._execute(req.execute)

        entries = [_file_dict_to_entry(f) for f in data.get("files", [])]
        next_token = data.get("nextPageToken") or None
        return entries, next_token

    def find_child(
        self,
        parent_id: str,
        name: str,
        *,
        folder_only: bool = False,
    ) -> Optional[RemoteEntry]:
        """
        Return the first non-trashed child of `parent_id` named exactly `name`.

        Drive does not enforce unique names; when several children match, the
        first one in the service's default ordering is returned.
        """
        q = child_query(parent_id, name=name, folder_only=folder_only)
        entries, _ = self.list_page(q)
        return entries[0] if entries else None

    def list_children(
        self,
        parent_id: str,
        *,
        order_by: Optional[str] = "name",
    ) -> list[RemoteEntry]:
        """List all non-trashed direct children of `parent_id`, across pages."""
        q = child_query(parent_id)
        results: list[RemoteEntry] = []
        page_token: Optional[str] = None

        while True:
            entries, page_token = self.list_page(
                q,
                page_size=MAX_PAGE_SIZE,
                page_token=page_token,
                order_by=order_by,
            )
            results.extend(entries)
            if not page_token:
                break

        return results

    def upload_file(
        self,
        local_path: str,
        parent_id: str,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> RemoteEntry:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        filename = name if name is not None else os.path.basename(local_path)
        try:
            media = MediaFileUpload(
                local_path,
                mimetype=mime_type or OCTET_STREAM,
                resumable=False,
            )
        except OSError as exc:
            raise _local_io_error("Cannot read local file", local_path, exc) from exc
        body = {"name": filename, "parents": [parent_id]}

        logger.debug("files.create name=%r parent=%s", filename, parent_id)
        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry(data)

    def download_media(self, file_id: str, local_path: str) -> None:
        """Stream the binary content of `file_id` into `local_path`."""
        logger.debug("files.get_media fileId=%s -> %s", file_id, local_path)
        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )
        self._stream_to_file(req, local_path)

    def export_media(self, file_id: str, mime_type: str, local_path: str) -> None:
        """Export a native Google document as `mime_type` into `local_path`."""
        logger.debug("files.export fileId=%s mimeType=%s -> %s",
                     file_id, mime_type, local_path)
        req = self._service.files().export_media(fileId=file_id, mimeType=mime_type)
        self._stream_to_file(req, local_path)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _stream_to_file(self, request: Any, local_path: str) -> None:
        """
        Download `request` into a temporary file next to `local_path`, then
        rename it into place. The temporary file is removed on failure.
        """
        parent_dir = os.path.dirname(os.path.abspath(local_path))
        try:
            os.makedirs(parent_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".gdrive-", suffix=".part", dir=parent_dir)
        except OSError as exc:
            raise _local_io_error("Cannot write to", local_path, exc) from exc

        try:
            with os.fdopen(fd, "wb") as f:
                sink = _LocalSink(f, local_path)
                downloader = MediaIoBaseDownload(sink, request, chunksize=DOWNLOAD_CHUNK_SIZE)
                done = False
                while not done:
                    status, done = self._execute(downloader.next_chunk)
                    if status is not None:
                        logger.debug("download progress %d%%", int(status.progress() * 100))
            # mkstemp creates 0600; give the result the mode a plain open() would.
            os.chmod(tmp_path, _target_mode(local_path))
            os.replace(tmp_path, local_path)
        except OSError as exc:
            _discard(tmp_path)
            raise _local_io_error("Cannot write to", local_path, exc) from exc
        except Exception:
            _discard(tmp_path)
            raise

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except GDriveCliError:
            raise
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return RemoteServiceError("Drive API error", cause=exc)


class _LocalSink:
    """File wrapper handed to MediaIoBaseDownload; write failures are local, not network."""

    def __init__(self, f: Any, local_path: str) -> None:
        self._f = f
        self._local_path = local_path

    def write(self, data: bytes) -> int:
        try:
            return self._f.write(data)
        except OSError as exc:
            raise _local_io_error("Cannot write to", self._local_path, exc) from exc


def _local_io_error(prefix: str, local_path: str, exc: OSError) -> LocalIOError:
    reason = exc.strerror or str(exc)
    return LocalIOError(
        f"{prefix} {local_path}: {reason}",
        details={"local_path": local_path, "errno": exc.errno},
        cause=exc,
    )


def _target_mode(local_path: str) -> int:
    """Mode of the file being replaced, else 0o666 masked by the umask."""
    try:
        return stat.S_IMODE(os.stat(local_path).st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _discard(tmp_path: str) -> None:
    try:
        os.remove(tmp_path)
    except FileNotFoundError:
        pass


def _file_dict_to_entry(data: dict[str, Any]) -> RemoteEntry:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    modified_time = None
    if isinstance(data.get("modifiedTime"), str):
        try:
            modified_time = parse_rfc3339(data["modifiedTime"])
        except ValueError:
            modified_time = None

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    owners = [
        o["emailAddress"]
        for o in data.get("owners", []) or []
        if isinstance(o, dict) and isinstance(o.get("emailAddress"), str)
    ]

    link = data.get("webViewLink")
    return RemoteEntry(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else [],
        size=size,
        modified_time=modified_time,
        web_view_link=link if isinstance(link, str) else None,
        trashed=bool(data.get("trashed", False)),
        starred=bool(data.get("starred", False)),
        owners=owners,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
