"""Assembly of file records into one name-indexed registry."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .errors import DuplicateNameError, EmbeddedFileNotFoundError
from .identifiers import disambiguate
from .logging import get_logger
from .models import FileRecord

ON_DUPLICATE_OVERWRITE = "overwrite"
ON_DUPLICATE_ERROR = "error"
DUPLICATE_POLICIES: tuple[str, ...] = (ON_DUPLICATE_OVERWRITE, ON_DUPLICATE_ERROR)

_LOGGER = get_logger("registry")


@dataclass(frozen=True)
class Registry:
    """Immutable, ordered collection of embedded files.

    ``records`` keeps discovery order; ``files`` maps display names to
    content and is built once when the registry is assembled.
    """

    records: Tuple[FileRecord, ...]
    files: Mapping[str, bytes]
    namespace: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.records)

    def must_get(self, name: str) -> bytes:
        """Return the content embedded under ``name``."""
        try:
            return self.files[name]
        except KeyError:
            raise EmbeddedFileNotFoundError(name) from None

    def get(self, identifier: str) -> bytes:
        """Return the content of the file addressed by ``identifier``."""
        for record in self.records:
            if record.identifier == identifier:
                return record.read_bytes()
        raise EmbeddedFileNotFoundError(identifier)


def assemble(
    records: Iterable[FileRecord],
    *,
    namespace: Optional[str] = None,
    on_duplicate: str = ON_DUPLICATE_OVERWRITE,
) -> Registry:
    """Build a registry from records in discovery order.

    Every record is read and encoded here, so failures surface before any
    output is written.
    """
    if on_duplicate not in DUPLICATE_POLICIES:
        raise ValueError(
            f"Unknown duplicate policy '{on_duplicate}' (expected one of {', '.join(DUPLICATE_POLICIES)})"
        )

    ordered = list(records)
    identifiers = disambiguate(record.identifier for record in ordered)
    unique: list[FileRecord] = []
    for record, identifier in zip(ordered, identifiers):
        if identifier != record.identifier:
            _LOGGER.warning(
                "Identifier %s already used; embedding %s as %s",
                record.identifier,
                record.path.as_posix(),
                identifier,
            )
            record = record.renamed(identifier)
        unique.append(record)

    files: Dict[str, bytes] = {}
    owners: Dict[str, FileRecord] = {}
    for record in unique:
        content = record.read_bytes()
        record.encoded()
        previous = owners.get(record.display_name)
        if previous is not None:
            if on_duplicate == ON_DUPLICATE_ERROR:
                raise DuplicateNameError(
                    record.display_name,
                    previous.path.as_posix(),
                    record.path.as_posix(),
                )
            _LOGGER.warning(
                "Duplicate file name %s: %s replaces %s in the lookup table",
                record.display_name,
                record.path.as_posix(),
                previous.path.as_posix(),
            )
        owners[record.display_name] = record
        files[record.display_name] = content

    return Registry(
        records=tuple(unique),
        files=MappingProxyType(files),
        namespace=namespace or None,
    )


__all__ = [
    "DUPLICATE_POLICIES",
    "ON_DUPLICATE_ERROR",
    "ON_DUPLICATE_OVERWRITE",
    "Registry",
    "assemble",
]
