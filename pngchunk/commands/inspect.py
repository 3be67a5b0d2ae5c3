"""Parse a chunk frame from a file and report its fields.

Reads the frame starting at --offset (default 0). When --size is not
given, the frame size is 12 plus the length field found at the offset,
so a single chunk can be pulled out of a larger file, e.g. the IHDR
chunk of a PNG sits at offset 8 (right after the signature).

The frame is validated in order: at least 12 bytes (TooShort), length
field consistent with the frame size (LengthMismatch), stored CRC-32
equal to the computed one (ChecksumMismatch). Any failure exits 1.

Output: type, property flags, payload length, CRC, and the payload as
text when it is valid UTF-8 (hex otherwise).

Example:
    pngchunk inspect frame.bin
    pngchunk inspect image.png --offset 8
    pngchunk --json inspect image.png --offset 8 --size 25
"""

import argparse
import logging
import struct
from pathlib import Path

from pngchunk.core.chunk import LENGTH_SIZE, OVERHEAD, Chunk
from pngchunk.core.errors import ChunkError, EncodingError
from pngchunk.core.types import Command, Report

logger = logging.getLogger(__name__)

command = Command(
    name='inspect',
    help='Parse and validate a chunk frame from a file. Report type, flags, length and CRC.',
)

# Payloads longer than this are shortened in the report
PREVIEW_BYTES = 64


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f'must be 0 or more, got {number}')
    return number


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('file', help='File holding the frame')
    parser.add_argument('--offset', type=_non_negative, default=0, metavar='N', help='Byte offset of the frame')
    parser.add_argument('--size', type=_non_negative, default=None, metavar='N', help='Frame size in bytes')


def read_frame(buffer: bytes, offset: int = 0, size: int | None = None) -> bytes:
    """Slice one frame out of buffer.

    Without an explicit size, the length field at offset decides how many
    bytes belong to the frame. Short buffers are returned as-is so that
    parsing reports the precise error.
    """
    if offset < 0 or (size is not None and size < 0):
        raise ValueError(f'offset and size must not be negative: offset={offset}, size={size}')
    if size is not None:
        return buffer[offset : offset + size]
    header = buffer[offset : offset + LENGTH_SIZE]
    if len(header) < LENGTH_SIZE:
        return buffer[offset:]
    (length,) = struct.unpack('>I', header)
    return buffer[offset : offset + OVERHEAD + length]


def _preview(chunk: Chunk) -> dict[str, str]:
    try:
        text = chunk.data_as_text()
    except EncodingError:
        suffix = '…' if chunk.length > PREVIEW_BYTES else ''
        return {'hex': chunk.data[:PREVIEW_BYTES].hex() + suffix}
    suffix = '…' if len(text) > PREVIEW_BYTES else ''
    return {'text': text[:PREVIEW_BYTES] + suffix}


@command.run
def run(args, report: Report) -> None:
    path = Path(args.file)
    report.source = str(path)
    name = f'offset {args.offset}'

    if not path.is_file():
        report.record_fail(name, 'FileNotFound', f'file not found: {path}')
        return

    buffer = path.read_bytes()
    frame = read_frame(buffer, args.offset, args.size)
    logger.debug('read %d byte frame from %s at offset %d', len(frame), path, args.offset)

    try:
        chunk = Chunk.from_bytes(frame)
    except ChunkError as e:
        report.record_fail(name, e.kind, str(e))
        return

    try:
        type_text = chunk.chunk_type.to_text()
    except EncodingError:
        type_text = chunk.chunk_type.bytes.hex()

    report.add(
        name,
        {
            'type': type_text,
            'flags': chunk.chunk_type.flags(),
            'length': chunk.length,
            'crc': chunk.crc,
            **_preview(chunk),
        },
    )
    report.record_pass(name)
