"""Renders the declaration and definition documents for a registry."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from jinja2 import Environment, FileSystemLoader

from ..encoding import STYLE_ARRAY, STYLE_STRING, EncodedLiteral, encode_bytes
from ..identifiers import is_valid_identifier
from ..registry import Registry
from .constants import HEADER_TEMPLATE, INCLUDE_GUARD_PREFIX, SOURCE_TEMPLATE, WARNING_BANNER

_GUARD_UNSAFE = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class RenderedEntry:
    """Per-file values consumed by the templates."""

    display_name: str
    identifier: str
    literal: EncodedLiteral
    data_expression: str


def c_literal(text: str) -> str:
    """Return ``text`` as a single-line, quoted C++ string literal (UTF-8)."""
    encoded = encode_bytes(text.encode("utf-8"), STYLE_STRING, wrap_width=sys.maxsize)
    return "".join(encoded.lines)


def include_guard(namespace: Optional[str], base_name: str) -> str:
    """Return the include guard macro for a header."""
    parts = [INCLUDE_GUARD_PREFIX]
    if namespace:
        parts.append(namespace)
    parts.append(base_name)
    parts.append("H")
    return _GUARD_UNSAFE.sub("_", "_".join(parts)).upper()


def validate_namespace(namespace: Optional[str]) -> Optional[str]:
    """Return ``namespace`` when it names a (possibly nested) C++ namespace."""
    if not namespace:
        return None
    if not all(is_valid_identifier(part) for part in namespace.split("::")):
        raise ValueError(f"Invalid C++ namespace name: '{namespace}'")
    return namespace


def namespace_parts(namespace: Optional[str]) -> List[str]:
    """Split a validated namespace into the names opened one by one.

    ``a::b {`` definitions need C++17, so nested scopes are emitted as
    separate blocks.
    """
    namespace = validate_namespace(namespace)
    return namespace.split("::") if namespace else []


class DocumentRenderer:
    """Fills the bundled Jinja templates with registry contents."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["c_literal"] = c_literal

    def render_header(self, registry: Registry, base_name: str) -> Iterator[str]:
        """Yield the declaration document piece by piece."""
        template = self._env.get_template(HEADER_TEMPLATE)
        namespace = validate_namespace(registry.namespace)
        return template.generate(
            banner=WARNING_BANNER,
            include_guard=include_guard(namespace, base_name),
            namespace_parts=namespace_parts(namespace),
            entries=self._entries(registry),
        )

    def render_source(self, registry: Registry, header_name: str) -> Iterator[str]:
        """Yield the definition document piece by piece."""
        template = self._env.get_template(SOURCE_TEMPLATE)
        return template.generate(
            banner=WARNING_BANNER,
            header_name=header_name,
            namespace_parts=namespace_parts(registry.namespace),
            entries=self._entries(registry),
        )

    @staticmethod
    def _entries(registry: Registry) -> List[RenderedEntry]:
        entries: List[RenderedEntry] = []
        for record in registry:
            literal = record.encoded()
            data_name = f"data_{record.identifier}"
            if literal.style == STYLE_ARRAY:
                data_expression = f"reinterpret_cast<const char *>({data_name})"
            else:
                data_expression = data_name
            entries.append(
                RenderedEntry(
                    display_name=record.display_name,
                    identifier=record.identifier,
                    literal=literal,
                    data_expression=data_expression,
                )
            )
        return entries


__all__ = [
    "DocumentRenderer",
    "RenderedEntry",
    "c_literal",
    "include_guard",
    "namespace_parts",
    "validate_namespace",
]
