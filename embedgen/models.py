"""Core data models shared across embedgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .encoding import STYLE_STRING, EncodedLiteral, LiteralEncoder, iter_literal_lines
from .encoding.constants import DEFAULT_ROW_SIZE, DEFAULT_WRAP_WIDTH, READ_CHUNK_SIZE
from .errors import FileReadError
from .identifiers import derive_identifier


@dataclass(frozen=True)
class InputFile:
    """A discovered file and the names it is embedded under."""

    path: Path
    display_name: str
    identifier: str

    @classmethod
    def from_path(cls, path: Path | str, display_name: str | None = None) -> "InputFile":
        path = Path(path)
        name = display_name if display_name is not None else path.name
        return cls(path=path, display_name=name, identifier=derive_identifier(name))

    def with_identifier(self, identifier: str) -> "InputFile":
        return InputFile(path=self.path, display_name=self.display_name, identifier=identifier)


@dataclass(frozen=True)
class EncodingOptions:
    """Literal style settings applied to every file of one run."""

    style: str = STYLE_STRING
    wrap_width: int = DEFAULT_WRAP_WIDTH
    row_size: int = DEFAULT_ROW_SIZE


@dataclass
class FileRecord:
    """Pairs an input file with its content and encoded literal.

    The file is read once, on first use, in chunks of ``chunk_size`` bytes
    that are encoded as they arrive. Content and literal are cached on the
    record afterwards.
    """

    source: InputFile
    options: EncodingOptions = field(default_factory=EncodingOptions)
    chunk_size: int = field(default=READ_CHUNK_SIZE, repr=False)
    _content: Optional[bytes] = field(default=None, init=False, repr=False)
    _literal: Optional[EncodedLiteral] = field(default=None, init=False, repr=False)

    @property
    def display_name(self) -> str:
        return self.source.display_name

    @property
    def identifier(self) -> str:
        return self.source.identifier

    @property
    def path(self) -> Path:
        return self.source.path

    def read_bytes(self) -> bytes:
        """Return the file content, reading it from disk on first call."""
        if self._content is None:
            self._load()
        return self._content

    def encoded(self) -> EncodedLiteral:
        """Return the encoded literal, reading the file on first call."""
        if self._literal is None:
            self._load()
        return self._literal

    def _load(self) -> None:
        options = self.options
        encoder = LiteralEncoder(
            options.style, wrap_width=options.wrap_width, row_size=options.row_size
        )
        chunks: List[bytes] = []
        try:
            with self.source.path.open("rb") as handle:
                lines = tuple(
                    iter_literal_lines(
                        handle, encoder, chunk_size=self.chunk_size, on_chunk=chunks.append
                    )
                )
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise FileReadError(self.source.path.as_posix(), reason) from exc
        self._content = b"".join(chunks)
        self._literal = EncodedLiteral(
            style=options.style, decoded_length=encoder.decoded_length, lines=lines
        )

    def renamed(self, identifier: str) -> "FileRecord":
        """Return a record for the same file under another identifier."""
        record = FileRecord(
            source=self.source.with_identifier(identifier),
            options=self.options,
            chunk_size=self.chunk_size,
        )
        record._content = self._content
        record._literal = self._literal
        return record


__all__ = ["EncodedLiteral", "EncodingOptions", "FileRecord", "InputFile"]
