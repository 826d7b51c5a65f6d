"""Shared constants for generated C++ documents."""

from __future__ import annotations

WARNING_BANNER = (
    "// This file was generated by embedgen\n"
    "// WARNING: any change you make will be lost!"
)

HEADER_TEMPLATE = "header.h.j2"
SOURCE_TEMPLATE = "source.cpp.j2"

HEADER_SUFFIX = ".h"
SOURCE_SUFFIX = ".cpp"

INCLUDE_GUARD_PREFIX = "GENERATED_EMBEDGEN"


__all__ = [
    "HEADER_SUFFIX",
    "HEADER_TEMPLATE",
    "INCLUDE_GUARD_PREFIX",
    "SOURCE_SUFFIX",
    "SOURCE_TEMPLATE",
    "WARNING_BANNER",
]
