"""Chunk container: length + type code + payload + CRC-32.

Wire layout (all integers big-endian):

    offset  size  field
    0       4     length    payload byte count
    4       4     type      4 raw bytes
    8       N     payload   N = length, may be 0
    8+N     4     crc       CRC-32 (IEEE) over bytes [4, 8+N)

A frame is always 12 + N bytes. No padding, no version field.
"""

from __future__ import annotations

import logging
import struct
import zlib

from pngchunk.core.errors import ChecksumMismatch, EncodingError, InvalidLength, LengthMismatch, TooShort
from pngchunk.core.type_code import TYPE_CODE_SIZE, TypeCode

logger = logging.getLogger(__name__)

_U32 = struct.Struct('>I')

LENGTH_SIZE = 4
CRC_SIZE = 4
# length + type + crc, i.e. the frame of an empty payload
OVERHEAD = LENGTH_SIZE + TYPE_CODE_SIZE + CRC_SIZE
MAX_LENGTH = 0xFFFFFFFF


def crc32(data: bytes) -> int:
    """CRC-32 with the IEEE polynomial, as used by zlib and PNG."""
    return zlib.crc32(data) & 0xFFFFFFFF


class Chunk:
    """An immutable (type, payload) record with a derived length and checksum."""

    __slots__ = ('_chunk_type', '_data', '_crc')

    def __init__(self, chunk_type: TypeCode, data: bytes = b''):
        data = bytes(data)
        if len(data) > MAX_LENGTH:
            raise InvalidLength(f'payload of {len(data)} bytes does not fit the 32-bit length field')
        self._chunk_type = chunk_type
        self._data = data
        self._crc = crc32(chunk_type.bytes + data)

    @classmethod
    def from_bytes(cls, buffer: bytes) -> Chunk:
        """Parse a complete frame. The buffer must hold exactly one chunk.

        Raises TooShort, LengthMismatch or ChecksumMismatch (checked in that
        order) for malformed input.
        """
        buffer = bytes(buffer)
        if len(buffer) < OVERHEAD:
            logger.debug('rejected %d-byte buffer: shorter than %d', len(buffer), OVERHEAD)
            raise TooShort(f'chunk needs at least {OVERHEAD} bytes, got {len(buffer)}')

        (declared_length,) = _U32.unpack_from(buffer, 0)
        if len(buffer) - declared_length != OVERHEAD:
            logger.debug('rejected buffer: length field %d, buffer %d bytes', declared_length, len(buffer))
            raise LengthMismatch(
                f'length field says {declared_length} payload bytes, '
                f'buffer holds {len(buffer) - OVERHEAD}'
            )

        type_end = LENGTH_SIZE + TYPE_CODE_SIZE
        chunk_type = TypeCode.from_bytes(buffer[LENGTH_SIZE:type_end])
        data_end = type_end + declared_length
        data = buffer[type_end:data_end]
        (stored_crc,) = _U32.unpack_from(buffer, data_end)

        computed = crc32(buffer[LENGTH_SIZE:data_end])
        if computed != stored_crc:
            logger.debug('rejected chunk %r: stored crc %d, computed %d', chunk_type, stored_crc, computed)
            raise ChecksumMismatch(expected=stored_crc, actual=computed)

        chunk = cls(chunk_type, data)
        logger.debug('parsed chunk %r (%d bytes)', chunk_type, declared_length)
        return chunk

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def chunk_type(self) -> TypeCode:
        return self._chunk_type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def crc(self) -> int:
        return self._crc

    def data_as_text(self) -> str:
        """Decode the payload as UTF-8. Raises EncodingError for binary payloads."""
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(f'payload of {self._chunk_type!r} is not valid UTF-8') from e

    def to_bytes(self) -> bytes:
        """Serialize to the 12 + N byte wire frame."""
        return b''.join(
            (
                _U32.pack(self.length),
                self._chunk_type.bytes,
                self._data,
                _U32.pack(self._crc),
            )
        )

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._chunk_type == other._chunk_type and self._data == other._data and self._crc == other._crc

    def __hash__(self) -> int:
        return hash((self._chunk_type, self._data))

    def __repr__(self) -> str:
        return f'Chunk({self._chunk_type!r}, length={self.length}, crc={self._crc})'

    def __str__(self) -> str:
        try:
            name = self._chunk_type.to_text()
        except EncodingError:
            name = self._chunk_type.bytes.hex()
        return f'{name} length={self.length} crc={self._crc:#010x}'
