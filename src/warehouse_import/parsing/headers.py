from __future__ import annotations

import re


_BOM = "\ufeff"
_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """Strip a leading byte-order mark and surrounding whitespace. Keeps casing for display."""
    if header.startswith(_BOM):
        header = header[1:]
    return header.strip()


def normalize_header_key(header: str) -> str:
    """
    Lookup key for a header: `normalize_header`, all whitespace removed, lower-cased.

    `"Min Temp"`, `"MinTemp"` and `"mintemp"` all give `"mintemp"`.
    """
    return _WHITESPACE.sub("", normalize_header(header)).lower()
