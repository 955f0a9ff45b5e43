"""Result models for file operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .remote_entry import RemoteEntry


@dataclass(slots=True)
class DownloadResult:
    """Outcome of a download or export."""

    entry: RemoteEntry
    local_path: str
    exported: bool = False
    export_mime_type: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.entry.name,
            "id": self.entry.file_id,
            "mimeType": self.entry.mime_type,
            "localPath": self.local_path,
            "exported": self.exported,
            "exportMimeType": self.export_mime_type,
        }
