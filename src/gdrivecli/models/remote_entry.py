"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from gdrivecli.util.mime import is_folder, is_native_document, kind_of
from gdrivecli.util.time import to_rfc3339


@dataclass(slots=True)
class RemoteEntry:
    """
    A file or folder as reported by Drive.

    Notes:
        - `file_id` is server-assigned and never changes; `name` is only
          unique within a parent (and not even there: Drive allows duplicates).
        - `size` is None for folders and native Google documents.
    """

    file_id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)

    size: Optional[int] = None
    modified_time: Optional[datetime] = None
    web_view_link: Optional[str] = None
    trashed: bool = False
    starred: bool = False
    owners: list[str] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return kind_of(self.mime_type)

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)

    @property
    def is_native(self) -> bool:
        return is_native_document(self.mime_type)

    def to_dict(self) -> dict[str, Any]:
        """Drive-style (camelCase) representation used for JSON output."""
        return {
            "id": self.file_id,
            "name": self.name,
            "mimeType": self.mime_type,
            "size": self.size,
            "modifiedTime": (
                to_rfc3339(self.modified_time, timespec="milliseconds")
                if self.modified_time is not None
                else None
            ),
            "webViewLink": self.web_view_link,
            "parents": list(self.parents),
        }
