"""Rendering of generated C++ documents."""

from .emitter import (
    DocumentRenderer,
    c_literal,
    include_guard,
    namespace_parts,
    validate_namespace,
)

__all__ = [
    "DocumentRenderer",
    "c_literal",
    "include_guard",
    "namespace_parts",
    "validate_namespace",
]
