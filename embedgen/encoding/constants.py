"""Shared constants for literal encoding and decoding."""

from __future__ import annotations

STYLE_STRING = "string"
STYLE_ARRAY = "array"
STYLES: tuple[str, ...] = (STYLE_STRING, STYLE_ARRAY)

DEFAULT_WRAP_WIDTH = 120
DEFAULT_ROW_SIZE = 20
READ_CHUNK_SIZE = 64 * 1024

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


__all__ = [
    "DEFAULT_ROW_SIZE",
    "DEFAULT_WRAP_WIDTH",
    "HEX_DIGITS",
    "READ_CHUNK_SIZE",
    "STYLES",
    "STYLE_ARRAY",
    "STYLE_STRING",
]
