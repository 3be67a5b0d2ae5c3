"""Build, parse and validate PNG-style chunk frames."""

from pngchunk.core import (
    ChecksumMismatch,
    Chunk,
    ChunkError,
    EncodingError,
    InvalidCharacter,
    InvalidLength,
    LengthMismatch,
    TooShort,
    TypeCode,
)

__all__ = [
    'ChecksumMismatch',
    'Chunk',
    'ChunkError',
    'EncodingError',
    'InvalidCharacter',
    'InvalidLength',
    'LengthMismatch',
    'TooShort',
    'TypeCode',
]
