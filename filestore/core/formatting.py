"""Display helpers for stored file metadata."""

import mimetypes
import posixpath

_SIZE_SYMBOLS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def human_size(num_bytes: int) -> str:
    """Format a byte count JEDEC style: base 1024, at most two decimals.

    >>> human_size(24)
    '24 B'
    >>> human_size(1536)
    '1.5 KB'
    """
    if num_bytes < 0:
        raise ValueError("Byte count cannot be negative")

    value = float(num_bytes)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_SYMBOLS) - 1:
        value /= 1024
        exponent += 1

    rounded = round(value, 2)
    # 1023.999 KB rounds up to a full unit
    if rounded >= 1024 and exponent < len(_SIZE_SYMBOLS) - 1:
        rounded = round(rounded / 1024, 2)
        exponent += 1

    text = f"{rounded:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_SYMBOLS[exponent]}"


def guess_mime(name: str) -> str | None:
    """MIME type for *name*, looked up by its extension only."""
    _, ext = posixpath.splitext(name)
    if not ext:
        return None
    mime, _ = mimetypes.guess_type(f"file{ext.lower()}", strict=False)
    return mime
