"""
HTTP Range header parsing.
Supports the single-range form bytes=<start>-<end>, either bound optional.
"""

import re
from dataclasses import dataclass
from typing import Optional

RANGE_PATTERN = re.compile(r"^bytes=(\d*)-(\d*)$", re.ASCII)


class RangeNotSatisfiable(Exception):
    """Raised when a Range header is malformed or lies outside the file."""

    def __init__(self, size: int, reason: str = "Range not satisfiable"):
        super().__init__(reason)
        self.size = size

    @property
    def content_range(self) -> str:
        """Content-Range value for the 416 response."""
        return f"bytes */{self.size}"


@dataclass(frozen=True)
class ByteRange:
    """Inclusive [start, end] byte offsets into a file."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        return f"bytes {self.start}-{self.end}/{size}"


def parse_range_header(header: str, size: int) -> ByteRange:
    """
    Parse a Range header against a file of known size.

    An omitted start means 0 and an omitted end means the last byte, so
    "bytes=-" selects the whole file. An end past the file is clamped.

    Args:
        header: Raw Range header value
        size: File size in bytes

    Returns:
        ByteRange with end < size

    Raises:
        RangeNotSatisfiable: If the header is malformed, start > end,
            or start >= size

    Examples:
        >>> parse_range_header("bytes=0-499", 1000)
        ByteRange(start=0, end=499)

        >>> parse_range_header("bytes=999-", 1000)
        ByteRange(start=999, end=999)

        >>> parse_range_header("bytes=500-5000", 1000)
        ByteRange(start=500, end=999)
    """
    match = RANGE_PATTERN.match(header.strip())
    if not match:
        raise RangeNotSatisfiable(size, f"Malformed range: {header!r}")

    start_raw, end_raw = match.groups()
    start = _parse_bound(start_raw, default=0)
    end = _parse_bound(end_raw, default=size - 1)

    if start is None or end is None or start < 0 or end < 0 or start > end:
        raise RangeNotSatisfiable(size, f"Invalid range: {header!r}")

    if start >= size:
        raise RangeNotSatisfiable(size, f"Range starts beyond end of file: {header!r}")

    return ByteRange(start=start, end=min(end, size - 1))


def _parse_bound(raw: str, default: int) -> Optional[int]:
    if not raw:
        return default
    try:
        return int(raw, 10)
    except ValueError:
        return None
