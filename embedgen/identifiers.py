"""Derivation of C-family identifiers from embedded file names."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Set

IDENTIFIER_PREFIX = "file_"

_VALID_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _is_ascii_alnum(char: str) -> bool:
    return ("0" <= char <= "9") or ("A" <= char <= "Z") or ("a" <= char <= "z")


def derive_identifier(file_name: str) -> str:
    """Return the symbol name used for ``file_name`` in generated code.

    Every character that is not an ASCII letter or digit becomes a single
    underscore, so the result keeps the length and order of the name.
    """
    return IDENTIFIER_PREFIX + "".join(
        char if _is_ascii_alnum(char) else "_" for char in file_name
    )


def is_valid_identifier(text: str) -> bool:
    """Return True when ``text`` is usable as a C/C++ identifier."""
    return _VALID_IDENTIFIER.fullmatch(text) is not None


def disambiguate(identifiers: Iterable[str]) -> List[str]:
    """Return identifiers made unique, keeping the first occurrence unchanged.

    Later duplicates receive ``_2``, ``_3``... suffixes in discovery order,
    skipping any candidate that is already in use.
    """
    ordered = list(identifiers)
    taken: Set[str] = set(ordered)
    seen: Set[str] = set()
    counters: Dict[str, int] = {}
    result: List[str] = []
    for identifier in ordered:
        if identifier not in seen:
            seen.add(identifier)
            result.append(identifier)
            continue
        counter = counters.get(identifier, 1)
        while True:
            counter += 1
            candidate = f"{identifier}_{counter}"
            if candidate not in taken:
                break
        counters[identifier] = counter
        taken.add(candidate)
        seen.add(candidate)
        result.append(candidate)
    return result


__all__ = [
    "IDENTIFIER_PREFIX",
    "derive_identifier",
    "disambiguate",
    "is_valid_identifier",
]
