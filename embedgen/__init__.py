"""embedgen: embed binary files into generated C++ source code."""

from .encoding import decode_literal, encode_bytes
from .generator import GenerationResult, GenerationSettings, Generator
from .identifiers import derive_identifier
from .models import FileRecord, InputFile
from .registry import Registry, assemble

__version__ = "1.0.0"

__all__ = [
    "FileRecord",
    "GenerationResult",
    "GenerationSettings",
    "Generator",
    "InputFile",
    "Registry",
    "assemble",
    "decode_literal",
    "derive_identifier",
    "encode_bytes",
]
