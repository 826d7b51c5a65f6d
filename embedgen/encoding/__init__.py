"""Byte-literal encoding and decoding."""

from .constants import DEFAULT_ROW_SIZE, DEFAULT_WRAP_WIDTH, STYLE_ARRAY, STYLE_STRING, STYLES
from .decoder import decode_literal
from .literal import (
    EncodedLiteral,
    LiteralEncoder,
    encode_bytes,
    encode_stream,
    escape_byte,
    iter_literal_lines,
)

__all__ = [
    "DEFAULT_ROW_SIZE",
    "DEFAULT_WRAP_WIDTH",
    "STYLES",
    "STYLE_ARRAY",
    "STYLE_STRING",
    "EncodedLiteral",
    "LiteralEncoder",
    "decode_literal",
    "encode_bytes",
    "encode_stream",
    "escape_byte",
    "iter_literal_lines",
]
