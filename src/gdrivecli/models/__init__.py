"""Public model exports for gdrivecli."""

from __future__ import annotations

from .filters import DEFAULT_ORDER_BY, DEFAULT_SEARCH_LIMIT, SearchFilters
from .remote_entry import RemoteEntry
from .results import DownloadResult

__all__ = [
    "RemoteEntry",
    "SearchFilters",
    "DownloadResult",
    "DEFAULT_SEARCH_LIMIT",
    "DEFAULT_ORDER_BY",
]
