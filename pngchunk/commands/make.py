"""Build a chunk frame from a type code and a payload.

The payload is the UTF-8 encoding of MESSAGE, or raw bytes given as
hex with --hex. The frame (length, type, payload, CRC-32) is written
to --output, or printed as hex when no output file is given.

TYPE must be 4 ASCII letters. Letter case sets the property bits:
lowercase first letter = ancillary, lowercase second = private,
third letter must be uppercase, lowercase fourth = safe to copy.

Example:
    pngchunk make RuSt 'This is where your secret message will be!'
    pngchunk make ruSt --hex 00ff10 -o frame.bin
"""

import logging
from pathlib import Path

from pngchunk.core.chunk import Chunk
from pngchunk.core.errors import ChunkError
from pngchunk.core.type_code import TypeCode
from pngchunk.core.types import Command, Report

logger = logging.getLogger(__name__)

command = Command(
    name='make',
    help='Build a chunk frame from a type code and a message. Write it to a file or print as hex.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('type', help='4-letter type code, e.g. RuSt')
    parser.add_argument('message', nargs='?', default='', help='Payload text (UTF-8)')
    parser.add_argument('-x', '--hex', metavar='HEX', help='Payload as hex bytes instead of MESSAGE')
    parser.add_argument('-o', '--output', metavar='FILE', help='Write the frame to FILE')


@command.run
def run(args, report: Report) -> None:
    name = args.type
    try:
        chunk_type = TypeCode.from_text(args.type)
    except ChunkError as e:
        report.record_fail(name, e.kind, str(e))
        return

    if args.hex is not None:
        try:
            payload = bytes.fromhex(args.hex)
        except ValueError as e:
            report.record_fail(name, 'InvalidHex', str(e))
            return
    else:
        payload = args.message.encode('utf-8')

    chunk = Chunk(chunk_type, payload)
    frame = chunk.to_bytes()
    logger.info('built %s chunk, %d byte frame', chunk_type, len(frame))

    data = {
        'type': str(chunk_type),
        'flags': chunk_type.flags(),
        'length': chunk.length,
        'crc': chunk.crc,
    }
    if args.output:
        try:
            Path(args.output).write_bytes(frame)
        except OSError as e:
            report.record_fail(name, 'WriteError', str(e))
            return
        data['file'] = args.output
    else:
        data['frame'] = frame.hex()
    report.add(name, data)
    report.record_pass(name)
