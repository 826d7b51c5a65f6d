"""Incremental encoder turning raw bytes into wrapped C++ literal text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterator, List, Optional, Tuple

from .constants import (
    DEFAULT_ROW_SIZE,
    DEFAULT_WRAP_WIDTH,
    HEX_DIGITS,
    READ_CHUNK_SIZE,
    STYLE_ARRAY,
    STYLE_STRING,
    STYLES,
)

EMPTY_STRING_LITERAL = '""'


def escape_byte(byte: int) -> str:
    """Return the string-literal rendering of a single byte value.

    Cases are checked in order: quote, newline, carriage return, tab,
    backslash, printable ASCII, then a two-digit lowercase hex escape.
    """
    if byte == 0x22:
        return '\\"'
    if byte == 0x0A:
        return "\\n"
    if byte == 0x0D:
        return "\\r"
    if byte == 0x09:
        return "\\t"
    if byte == 0x5C:
        return "\\\\"
    if 0x20 <= byte <= 0x7E:
        return chr(byte)
    return f"\\x{byte:02x}"


_ESCAPES: Tuple[str, ...] = tuple(escape_byte(value) for value in range(256))


@dataclass(frozen=True)
class EncodedLiteral:
    """Literal text for one file along with the number of bytes it decodes to."""

    style: str
    decoded_length: int
    lines: Tuple[str, ...]


class LiteralEncoder:
    """Consumes bytes in stream order and yields finished physical lines.

    Only the line currently being built is kept in memory, so inputs of any
    size can be encoded chunk by chunk.
    """

    def __init__(
        self,
        style: str = STYLE_STRING,
        *,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        row_size: int = DEFAULT_ROW_SIZE,
    ) -> None:
        if style not in STYLES:
            raise ValueError(f"Unknown literal style '{style}' (expected one of {', '.join(STYLES)})")
        if wrap_width < 1:
            raise ValueError("wrap_width must be a positive integer")
        if row_size < 1:
            raise ValueError("row_size must be a positive integer")
        self.style = style
        self.wrap_width = wrap_width
        self.row_size = row_size
        self._parts: List[str] = []
        self._width = 0
        self._open = False
        self._after_hex = False
        self._after_question = False
        self._count = 0
        self._finished = False

    @property
    def decoded_length(self) -> int:
        """Number of bytes consumed so far."""
        return self._count

    def feed(self, chunk: bytes) -> List[str]:
        """Encode ``chunk`` and return every line completed by it."""
        if self._finished:
            raise RuntimeError("LiteralEncoder.feed() called after finish()")
        lines: List[str] = []
        if self.style == STYLE_ARRAY:
            for byte in chunk:
                self._feed_array(byte, lines)
        else:
            for byte in chunk:
                self._feed_string(byte, lines)
        self._count += len(chunk)
        return lines

    def finish(self) -> List[str]:
        """Close any open segment and return the remaining lines."""
        if self._finished:
            return []
        self._finished = True
        if self._open:
            return [self._close()]
        if self.style == STYLE_STRING and self._count == 0:
            return [EMPTY_STRING_LITERAL]
        return []

    # ------------------------------------------------------------------
    # Internal helpers

    def _feed_string(self, byte: int, lines: List[str]) -> None:
        escape = _ESCAPES[byte]
        self._open = True
        if len(escape) == 1:
            if escape == "?" and self._after_question:
                # "??" followed by some punctuation is a trigraph before C++17.
                escape = "\\?"
            elif self._after_hex and escape in HEX_DIGITS:
                # Split the literal so the hex escape cannot absorb this digit.
                self._parts.append('""')
                self._width += 2
        self._parts.append(escape)
        self._width += len(escape)
        self._after_hex = len(escape) == 4
        self._after_question = escape in ("?", "\\?")

        if byte == 0x0A or self._width >= self.wrap_width:
            lines.append(self._close())

    def _feed_array(self, byte: int, lines: List[str]) -> None:
        self._open = True
        self._parts.append(f"0x{byte:02x},")
        if len(self._parts) >= self.row_size:
            lines.append(self._close())

    def _close(self) -> str:
        if self.style == STYLE_ARRAY:
            line = " ".join(self._parts)
        else:
            line = '"' + "".join(self._parts) + '"'
        self._parts = []
        self._width = 0
        self._open = False
        self._after_hex = False
        self._after_question = False
        return line


def encode_bytes(
    data: bytes,
    style: str = STYLE_STRING,
    *,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    row_size: int = DEFAULT_ROW_SIZE,
) -> EncodedLiteral:
    """Encode an in-memory byte string."""
    encoder = LiteralEncoder(style, wrap_width=wrap_width, row_size=row_size)
    lines = encoder.feed(data)
    lines.extend(encoder.finish())
    return EncodedLiteral(style=style, decoded_length=encoder.decoded_length, lines=tuple(lines))


def iter_literal_lines(
    handle: BinaryIO,
    encoder: LiteralEncoder,
    *,
    chunk_size: int = READ_CHUNK_SIZE,
    on_chunk: Optional[Callable[[bytes], None]] = None,
) -> Iterator[str]:
    """Yield literal lines while reading ``handle`` to exhaustion.

    ``on_chunk`` sees every raw chunk before it is encoded.
    """
    for chunk in iter(lambda: handle.read(chunk_size), b""):
        if on_chunk is not None:
            on_chunk(chunk)
        yield from encoder.feed(chunk)
    yield from encoder.finish()


def encode_stream(
    handle: BinaryIO,
    style: str = STYLE_STRING,
    *,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    row_size: int = DEFAULT_ROW_SIZE,
    chunk_size: int = READ_CHUNK_SIZE,
) -> EncodedLiteral:
    """Encode everything readable from a binary file handle."""
    encoder = LiteralEncoder(style, wrap_width=wrap_width, row_size=row_size)
    lines = tuple(iter_literal_lines(handle, encoder, chunk_size=chunk_size))
    return EncodedLiteral(style=style, decoded_length=encoder.decoded_length, lines=lines)


__all__ = [
    "EMPTY_STRING_LITERAL",
    "EncodedLiteral",
    "LiteralEncoder",
    "encode_bytes",
    "encode_stream",
    "escape_byte",
    "iter_literal_lines",
]
