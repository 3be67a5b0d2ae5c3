"""Error kinds raised by the type code and chunk codec.

Every error derives from ChunkError (a ValueError), so callers can catch
the whole family or a single kind.
"""


class ChunkError(ValueError):
    """Base class for all type code and chunk failures."""

    kind = 'ChunkError'


class InvalidLength(ChunkError):
    """Type code input is not exactly 4 bytes."""

    kind = 'InvalidLength'


class InvalidCharacter(ChunkError):
    """Type code text contains a byte outside A-Z / a-z."""

    kind = 'InvalidCharacter'


class EncodingError(ChunkError):
    """Bytes could not be rendered as UTF-8 text."""

    kind = 'EncodingError'


class TooShort(ChunkError):
    """Buffer is shorter than the 12-byte minimum frame."""

    kind = 'TooShort'


class LengthMismatch(ChunkError):
    """Declared length field disagrees with the buffer size."""

    kind = 'LengthMismatch'


class ChecksumMismatch(ChunkError):
    """Stored CRC-32 does not match the one computed over type + payload."""

    kind = 'ChecksumMismatch'

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f'checksum mismatch: stored {expected}, computed {actual}')
