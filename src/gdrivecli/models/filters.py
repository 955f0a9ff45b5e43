"""Search filter options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_SEARCH_LIMIT: int = 50
DEFAULT_ORDER_BY: str = "modifiedTime desc"


@dataclass(slots=True)
class SearchFilters:
    """
    Filter options for `search`.

    Every field except `trashed`, `limit` and `order_by` is optional; an unset
    field adds no clause to the query. `min_size`/`max_size` are human-readable
    strings ("10MB") applied client-side after paging.
    """

    name: Optional[str] = None
    full_text: Optional[str] = None
    mime_type: Optional[str] = None
    parent: Optional[str] = None
    after: Optional[str] = None
    before: Optional[str] = None
    owner: Optional[str] = None
    starred: Optional[bool] = None
    shared_with_me: Optional[bool] = None
    trashed: bool = False
    min_size: Optional[str] = None
    max_size: Optional[str] = None
    limit: int = DEFAULT_SEARCH_LIMIT
    order_by: str = DEFAULT_ORDER_BY
