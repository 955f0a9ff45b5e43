"""Drive `files.list` query construction.

Everything here is pure: filters are validated and turned into the Drive
query language before any request is issued. Size bounds are not part of the
query language and are handled in `gdrivecli.search`.
"""

from __future__ import annotations

from typing import Optional

from gdrivecli.errors import InvalidDateFormatError, UnknownFileTypeError
from gdrivecli.models import SearchFilters
from gdrivecli.util.mime import FOLDER_MIME, TYPE_ALIASES
from gdrivecli.util.time import parse_user_date, to_rfc3339


def escape_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _quote(value: str) -> str:
    return f"'{escape_literal(value)}'"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def child_query(
    parent_id: str,
    *,
    name: Optional[str] = None,
    folder_only: bool = False,
) -> str:
    """Query for non-trashed direct children of `parent_id`, optionally by exact name."""
    clauses = [f"{_quote(parent_id)} in parents", "trashed = false"]
    if name is not None:
        clauses.append(f"name = {_quote(name)}")
    if folder_only:
        clauses.append(f"mimeType = '{FOLDER_MIME}'")
    return " and ".join(clauses)


def mime_type_clause(type_filter: str) -> str:
    """
    Resolve a type alias (or raw MIME type) into a mimeType clause.

    Raises:
        UnknownFileTypeError: if the value is neither a known alias nor a MIME type.
    """
    key = type_filter.strip().lower()
    if key in TYPE_ALIASES:
        mime = TYPE_ALIASES[key]
    elif "/" in type_filter:
        mime = type_filter.strip()
    else:
        valid = ", ".join(sorted(TYPE_ALIASES))
        raise UnknownFileTypeError(
            f"Unknown file type: {type_filter}. Valid types: {valid}",
            details={"type": type_filter, "valid": sorted(TYPE_ALIASES)},
        )

    if mime.endswith("/"):
        return f"mimeType contains {_quote(mime)}"
    return f"mimeType = {_quote(mime)}"


def date_literal(value: str, *, option: str) -> str:
    """Parse a user date and render it as a quoted RFC3339 literal."""
    try:
        dt = parse_user_date(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateFormatError(
            f"Invalid date format for {option}: {value!r} (use YYYY-MM-DD or ISO 8601)",
            details={"option": option, "value": value},
            cause=exc,
        ) from exc
    return _quote(to_rfc3339(dt, timespec="seconds"))


def build_query(filters: SearchFilters) -> str:
    """
    Build the Drive query string for `filters`.

    The trashed clause is always present, first. Unset filters add nothing.

    Raises:
        UnknownFileTypeError: for an unknown type alias.
        InvalidDateFormatError: for an unparsable `after`/`before`.
    """
    clauses = [f"trashed = {_bool(filters.trashed)}"]

    if filters.name:
        clauses.append(f"name contains {_quote(filters.name)}")
    if filters.full_text:
        clauses.append(f"fullText contains {_quote(filters.full_text)}")
    if filters.mime_type:
        clauses.append(mime_type_clause(filters.mime_type))
    if filters.parent:
        clauses.append(f"{_quote(filters.parent)} in parents")
    if filters.after:
        clauses.append(f"modifiedTime > {date_literal(filters.after, option='after')}")
    if filters.before:
        clauses.append(f"modifiedTime < {date_literal(filters.before, option='before')}")
    if filters.owner:
        clauses.append(f"{_quote(filters.owner)} in owners")
    if filters.starred is not None:
        clauses.append(f"starred = {_bool(filters.starred)}")
    if filters.shared_with_me is not None:
        clauses.append(f"sharedWithMe = {_bool(filters.shared_with_me)}")

    return " and ".join(clauses)
