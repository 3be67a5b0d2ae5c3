"""pngchunk.core — Foundation layer.

Contains the type code, the chunk container, error kinds, env loading,
logging setup and the report builder.
This module has NO dependencies on pngchunk.commands or pngchunk.registry.
Only stdlib is allowed here.
"""

from pngchunk.core.chunk import Chunk
from pngchunk.core.errors import (
    ChecksumMismatch,
    ChunkError,
    EncodingError,
    InvalidCharacter,
    InvalidLength,
    LengthMismatch,
    TooShort,
)
from pngchunk.core.type_code import TypeCode

__all__ = [
    'Chunk',
    'ChecksumMismatch',
    'ChunkError',
    'EncodingError',
    'InvalidCharacter',
    'InvalidLength',
    'LengthMismatch',
    'TooShort',
    'TypeCode',
]
