"""Report the property bits and validity of one or more type codes.

For each TEXT, prints critical/ancillary, public/private, the reserved
bit and safe-to-copy, decoded from the case of each letter. A code with
a non-letter character or a set reserved bit (lowercase third letter)
counts as a failure and makes the command exit 1.

Example:
    pngchunk type IHDR tEXt RuSt
    pngchunk --json type Rust
"""

from pngchunk.core.errors import ChunkError
from pngchunk.core.type_code import TypeCode
from pngchunk.core.types import Command, Report

command = Command(
    name='type',
    help='Decode the property bits of type codes and check their validity.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('codes', nargs='+', metavar='TEXT', help='4-letter type code(s)')


@command.run
def run(args, report: Report) -> None:
    # Repeated codes are reported once
    for text in dict.fromkeys(args.codes):
        try:
            code = TypeCode.from_text(text)
        except ChunkError as e:
            report.record_fail(text, e.kind, str(e))
            continue

        report.add(text, {'bytes': list(code.bytes), 'flags': code.flags()})
        if code.is_valid():
            report.record_pass(text)
        else:
            report.record_fail(text, 'ReservedBit', f'reserved bit is set in {text!r}')
