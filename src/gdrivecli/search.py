"""Paged search with client-side size filtering."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from gdrivecli.errors import InvalidArgumentError
from gdrivecli.models import RemoteEntry, SearchFilters
from gdrivecli.query import build_query
from gdrivecli.util.size import parse_size

logger = logging.getLogger(__name__)

PAGE_SIZE_CAP: int = 100


class PagedLister(Protocol):
    def list_page(
        self,
        query: str,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        order_by: Optional[str] = None,
    ) -> tuple[list[RemoteEntry], Optional[str]]: ...


def filter_by_size(
    entries: list[RemoteEntry],
    *,
    min_bytes: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> list[RemoteEntry]:
    """Keep entries whose size is within [min_bytes, max_bytes]; no size counts as 0."""
    kept = []
    for entry in entries:
        size = entry.size or 0
        if min_bytes is not None and size < min_bytes:
            continue
        if max_bytes is not None and size > max_bytes:
            continue
        kept.append(entry)
    return kept


def validate_filters(filters: SearchFilters) -> tuple[str, Optional[int], Optional[int]]:
    """
    Check `filters` without touching Drive.

    Returns:
        (query, min_bytes, max_bytes)

    Raises:
        InvalidArgumentError, InvalidSizeFormatError, UnknownFileTypeError,
        InvalidDateFormatError.
    """
    if filters.limit < 1:
        raise InvalidArgumentError(
            "limit must be a positive integer",
            details={"limit": filters.limit},
        )

    min_bytes = parse_size(filters.min_size) if filters.min_size else None
    max_bytes = parse_size(filters.max_size) if filters.max_size else None
    return build_query(filters), min_bytes, max_bytes


def search(client: PagedLister, filters: SearchFilters) -> list[RemoteEntry]:
    """
    Run a filtered search, paging until `filters.limit` entries are collected
    or Drive runs out of results.

    Size bounds are applied after paging, so a strict size filter can return
    fewer than `limit` entries even when more matches exist further on.
    Server order is preserved.

    Raises:
        InvalidArgumentError, InvalidSizeFormatError, UnknownFileTypeError,
        InvalidDateFormatError: before any request is made.
    """
    query, min_bytes, max_bytes = validate_filters(filters)
    logger.debug("search q=%r limit=%d", query, filters.limit)

    results: list[RemoteEntry] = []
    page_token: Optional[str] = None

    while True:
        page_size = min(filters.limit - len(results), PAGE_SIZE_CAP)
        entries, page_token = client.list_page(
            query,
            page_size=page_size,
            page_token=page_token,
            order_by=filters.order_by,
        )
        results.extend(entries)
        if not page_token or len(results) >= filters.limit:
            break

    if min_bytes is not None or max_bytes is not None:
        results = filter_by_size(results, min_bytes=min_bytes, max_bytes=max_bytes)

    logger.info("search returned %d entries", min(len(results), filters.limit))
    return results[: filters.limit]
