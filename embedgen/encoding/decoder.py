"""Decoding of generated literal text back into bytes.

The decoder follows C++ semantics for the subset of the grammar the encoder
produces: adjacent string literals are concatenated after escape processing
and a hex escape consumes every hex digit that follows it. Anything outside
that subset, including a raw ``??`` pair, is rejected.
"""

from __future__ import annotations

import re
from typing import Iterable

from ..errors import LiteralDecodeError
from .constants import HEX_DIGITS, STYLE_ARRAY, STYLE_STRING

_SIMPLE_ESCAPES = {
    '"': 0x22,
    "\\": 0x5C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "?": 0x3F,
}

_ARRAY_TOKEN = re.compile(r"0x[0-9a-fA-F]{2}")


def decode_literal(lines: Iterable[str], style: str = STYLE_STRING) -> bytes:
    """Return the bytes represented by ``lines`` in the given style."""
    if style == STYLE_STRING:
        return _decode_string_lines(lines)
    if style == STYLE_ARRAY:
        return _decode_array_lines(lines)
    raise ValueError(f"Unknown literal style '{style}'")


def _decode_string_lines(lines: Iterable[str]) -> bytes:
    output = bytearray()
    for number, line in enumerate(lines, start=1):
        _decode_string_line(line, number, output)
    return bytes(output)


def _decode_string_line(line: str, number: int, output: bytearray) -> None:
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char in " \t":
            index += 1
            continue
        if char != '"':
            raise LiteralDecodeError(f"line {number}: expected '\"' at column {index + 1}")
        index = _decode_segment(line, index + 1, number, output)


def _decode_segment(line: str, index: int, number: int, output: bytearray) -> int:
    length = len(line)
    previous_raw = ""
    while index < length:
        char = line[index]
        if char == '"':
            return index + 1
        if char == "\\":
            if index + 1 >= length:
                raise LiteralDecodeError(f"line {number}: dangling backslash")
            marker = line[index + 1]
            if marker == "x":
                end = index + 2
                while end < length and line[end] in HEX_DIGITS:
                    end += 1
                digits = line[index + 2 : end]
                if not digits:
                    raise LiteralDecodeError(f"line {number}: empty hex escape")
                value = int(digits, 16)
                if value > 0xFF:
                    raise LiteralDecodeError(
                        f"line {number}: hex escape \\x{digits} is out of range"
                    )
                output.append(value)
                index = end
            elif marker in _SIMPLE_ESCAPES:
                output.append(_SIMPLE_ESCAPES[marker])
                index += 2
            else:
                raise LiteralDecodeError(f"line {number}: unsupported escape \\{marker}")
            previous_raw = line[index - 1]
            continue
        code = ord(char)
        if code < 0x20 or code > 0x7E:
            raise LiteralDecodeError(f"line {number}: unescaped character {char!r}")
        if char == "?" and previous_raw == "?":
            raise LiteralDecodeError(f"line {number}: possible trigraph '??'")
        output.append(code)
        previous_raw = char
        index += 1
    raise LiteralDecodeError(f"line {number}: unterminated string literal")


def _decode_array_lines(lines: Iterable[str]) -> bytes:
    output = bytearray()
    for number, line in enumerate(lines, start=1):
        tokens = [token.strip() for token in line.split(",")]
        if tokens and tokens[-1] == "":
            tokens.pop()
        for token in tokens:
            if not _ARRAY_TOKEN.fullmatch(token):
                raise LiteralDecodeError(f"line {number}: invalid byte constant {token!r}")
            output.append(int(token, 16))
    return bytes(output)


__all__ = ["decode_literal"]
