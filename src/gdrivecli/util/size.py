"""Human-readable byte sizes ("10MB", "1.5 GB")."""

from __future__ import annotations

import re
from typing import Optional

from gdrivecli.errors import InvalidSizeFormatError

_UNITS: dict[str, int] = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
    "TB": 1024**4,
}

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGT]?B)?\s*$", re.IGNORECASE)


def parse_size(value: str) -> int:
    """
    Parse a size string into bytes.

    A bare number is bytes. Units are binary (1KB == 1024) and case-insensitive.

    Raises:
        InvalidSizeFormatError: if the string is not a number with an optional unit.
    """
    if not isinstance(value, str):
        raise InvalidSizeFormatError(f"Invalid size format: {value!r}")

    match = _SIZE_RE.match(value)
    if match is None:
        raise InvalidSizeFormatError(
            f"Invalid size format: {value!r} (use e.g. 500KB, 10MB, 1GB)",
            details={"value": value},
        )

    number, unit = match.groups()
    multiplier = _UNITS[(unit or "B").upper()]
    return int(float(number) * multiplier)


def format_size(size: Optional[int]) -> str:
    if not size:
        return "N/A"

    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} TB"
