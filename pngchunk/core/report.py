"""Report builder — text and JSON output for pngchunk results."""

import json
from typing import Any

from pngchunk.core.types import Report

_FLAG_LABELS = {
    'critical': ('critical', 'ancillary'),
    'public': ('public', 'private'),
    'reserved_bit_valid': ('reserved bit clear', 'reserved bit SET'),
    'safe_to_copy': ('safe to copy', 'unsafe to copy'),
}


def _format_flags(flags: dict[str, bool]) -> str:
    parts = [_FLAG_LABELS[k][0 if v else 1] for k, v in flags.items() if k in _FLAG_LABELS]
    return ', '.join(parts)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'pngchunk {report.command}'
    if report.source:
        header += f': {report.source}'
    lines.append(header)
    lines.append('')

    for name, data in report.items.items():
        mark = '✓' if data.get('ok', True) else '✗'
        lines.append(f'── {name} {mark}')
        for key, value in data.items():
            if key == 'ok':
                continue
            if key == 'flags':
                validity = 'valid' if value.get('valid') else 'INVALID'
                lines.append(f'  flags: {_format_flags(value)} ({validity})')
            elif key == 'error':
                lines.append(f'  error: {value["kind"]}: {value["message"]}')
            elif key == 'crc':
                lines.append(f'  crc: {value} ({value:#010x})')
            else:
                lines.append(f'  {key}: {value}')
        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(f'OK {report.pass_count}/{total}  FAIL {report.fail_count}/{total}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'command': report.command}
    if report.source:
        obj['source'] = report.source

    obj['items'] = [{'name': name, **data} for name, data in report.items.items()]
    obj['summary'] = {
        'total': report.pass_count + report.fail_count,
        'ok': report.pass_count,
        'fail': report.fail_count,
    }
    return json.dumps(obj, indent=2)
