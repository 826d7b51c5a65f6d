"""Tests for embedgen.encoding.literal."""

from __future__ import annotations

import io

import pytest

from embedgen.encoding import (
    STYLE_ARRAY,
    STYLE_STRING,
    LiteralEncoder,
    encode_bytes,
    encode_stream,
    escape_byte,
)


def test_escape_byte_table_is_exhaustive_with_fixed_widths() -> None:
    specials = {0x22: '\\"', 0x0A: "\\n", 0x0D: "\\r", 0x09: "\\t", 0x5C: "\\\\"}
    for value in range(256):
        escape = escape_byte(value)
        if value in specials:
            assert escape == specials[value]
            assert len(escape) == 2
        elif 0x20 <= value <= 0x7E:
            assert escape == chr(value)
        else:
            assert escape == f"\\x{value:02x}"
            assert len(escape) == 4
        assert len(escape) in (1, 2, 4)


def test_hex_escape_is_lowercase_and_zero_padded() -> None:
    assert escape_byte(0x00) == "\\x00"
    assert escape_byte(0x0B) == "\\x0b"
    assert escape_byte(0xFF) == "\\xff"
    assert escape_byte(0x7F) == "\\x7f"


def test_empty_input_yields_single_empty_literal() -> None:
    literal = encode_bytes(b"")
    assert literal.lines == ('""',)
    assert literal.decoded_length == 0


def test_newline_closes_segment_without_trailing_empty_segment() -> None:
    assert encode_bytes(b"ab\ncd").lines == ('"ab\\n"', '"cd"')
    assert encode_bytes(b"ab\n").lines == ('"ab\\n"',)
    assert encode_bytes(b"\n\n").lines == ('"\\n"', '"\\n"')


def test_quote_carriage_return_tab_and_backslash_are_escaped() -> None:
    literal = encode_bytes(b'say "hi"\r\t\\')
    assert literal.lines == ('"say \\"hi\\"\\r\\t\\\\"',)


def test_wrap_at_threshold() -> None:
    literal = encode_bytes(b"a" * 200)
    assert literal.lines == ('"' + "a" * 120 + '"', '"' + "a" * 80 + '"')


def test_wrap_counts_escape_widths() -> None:
    literal = encode_bytes(b"\x01" * 40)
    assert literal.lines[0] == '"' + "\\x01" * 30 + '"'
    assert literal.lines[1] == '"' + "\\x01" * 10 + '"'


def test_wrap_happens_after_the_escape_that_reaches_threshold() -> None:
    literal = encode_bytes(b"a" * 119 + b"\x01" + b"z")
    assert literal.lines == ('"' + "a" * 119 + '\\x01"', '"z"')


def test_custom_wrap_width() -> None:
    literal = encode_bytes(b"abcdefg", wrap_width=3)
    assert literal.lines == ('"abc"', '"def"', '"g"')


def test_hex_digit_after_hex_escape_splits_literal() -> None:
    assert encode_bytes(b"\x01A").lines == ('"\\x01""A"',)
    assert encode_bytes(b"\x01f9").lines == ('"\\x01""f9"',)
    assert encode_bytes(b"\x01G").lines == ('"\\x01G"',)


def test_repeated_question_marks_cannot_form_trigraphs() -> None:
    assert encode_bytes(b"??=").lines == ('"?\\?="',)
    assert encode_bytes(b"???").lines == ('"?\\?\\?"',)
    assert encode_bytes(b"?a?").lines == ('"?a?"',)


def test_decoded_length_counts_bytes_not_characters() -> None:
    data = bytes(range(256))
    literal = encode_bytes(data)
    assert literal.decoded_length == 256
    assert sum(len(line) for line in literal.lines) > 256


def test_encoding_is_deterministic() -> None:
    data = bytes(range(256)) * 3 + b"\n\r\t\"" * 10
    assert encode_bytes(data) == encode_bytes(data)


def test_every_string_line_is_a_closed_literal() -> None:
    data = bytes(range(256)) * 4
    for line in encode_bytes(data).lines:
        assert line.startswith('"')
        assert line.endswith('"')


def test_stream_encoding_matches_in_memory_encoding_for_any_chunking() -> None:
    data = (bytes(range(256)) + b"line\nnext \x01A ??? \\ \"q\"") * 5
    expected = encode_bytes(data)
    for chunk_size in (1, 3, 7, 64, 4096):
        streamed = encode_stream(io.BytesIO(data), chunk_size=chunk_size)
        assert streamed == expected


def test_encoder_keeps_only_current_line_pending() -> None:
    encoder = LiteralEncoder(STYLE_STRING, wrap_width=10)
    lines = encoder.feed(b"x" * 35)
    assert lines == ['"' + "x" * 10 + '"'] * 3
    assert encoder.decoded_length == 35
    assert encoder.finish() == ['"xxxxx"']
    assert encoder.finish() == []


def test_encoder_rejects_feed_after_finish() -> None:
    encoder = LiteralEncoder()
    encoder.finish()
    with pytest.raises(RuntimeError):
        encoder.feed(b"a")


def test_encoder_validates_parameters() -> None:
    with pytest.raises(ValueError):
        LiteralEncoder("base64")
    with pytest.raises(ValueError):
        LiteralEncoder(wrap_width=0)
    with pytest.raises(ValueError):
        LiteralEncoder(STYLE_ARRAY, row_size=0)


def test_array_style_groups_constants_in_rows() -> None:
    literal = encode_bytes(bytes(range(7)), STYLE_ARRAY, row_size=5)
    assert literal.lines == (
        "0x00, 0x01, 0x02, 0x03, 0x04,",
        "0x05, 0x06,",
    )
    assert literal.decoded_length == 7


def test_array_style_treats_printable_bytes_like_any_other() -> None:
    literal = encode_bytes(b'A"\n', STYLE_ARRAY)
    assert literal.lines == ("0x41, 0x22, 0x0a,",)


def test_array_style_empty_input_has_no_lines() -> None:
    literal = encode_bytes(b"", STYLE_ARRAY)
    assert literal.lines == ()
    assert literal.decoded_length == 0


def test_array_style_default_row_size() -> None:
    literal = encode_bytes(bytes(45), STYLE_ARRAY)
    assert [line.count("0x") for line in literal.lines] == [20, 20, 5]
