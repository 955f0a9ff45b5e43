"""Virtual path -> Drive folder ID resolution."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from gdrivecli.models import RemoteEntry

logger = logging.getLogger(__name__)

ROOT_ID: str = "root"


class ChildLookup(Protocol):
    def find_child(
        self,
        parent_id: str,
        name: str,
        *,
        folder_only: bool = False,
    ) -> Optional[RemoteEntry]: ...


def split_path(path: Optional[str]) -> list[str]:
    """Split a slash-delimited path into its non-empty segments."""
    if not path:
        return []
    return [segment for segment in path.split("/") if segment]


def split_leaf(path: Optional[str]) -> tuple[list[str], Optional[str]]:
    """Split a path into (parent segments, leaf name). Leaf is None for an empty path."""
    segments = split_path(path)
    if not segments:
        return [], None
    return segments[:-1], segments[-1]


def resolve_folder(client: ChildLookup, path: Optional[str] | list[str]) -> Optional[str]:
    """
    Resolve a virtual folder path to a Drive folder ID.

    Walks the segments in order from the root, one lookup per segment, and
    stops at the first segment with no matching folder. The empty path (or a
    bare "/") is the root and needs no lookup.

    When a folder holds several subfolders with the same name, the first one
    returned by Drive wins.

    Returns:
        The folder ID, or None if some segment does not exist.
    """
    segments = path if isinstance(path, list) else split_path(path)

    current = ROOT_ID
    for segment in segments:
        child = client.find_child(current, segment, folder_only=True)
        if child is None:
            logger.debug("path segment %r not found under %s", segment, current)
            return None
        current = child.file_id

    return current
