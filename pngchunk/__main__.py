"""pngchunk — Build, inspect and validate PNG-style chunk frames.

Usage: pngchunk [--json] [--log-level LEVEL] <command> [options]

Commands are auto-discovered from pngchunk/commands/.
Each command module's docstring is its documentation.
Run `pngchunk help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, pngchunk looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.

  PNGCHUNK_LOG_LEVEL   log level for stderr diagnostics (default WARNING)
  PNGCHUNK_OUTPUT      text or json (default text; --json wins)
"""

import argparse
import logging
import sys

from pngchunk import registry
from pngchunk.core import env
from pngchunk.core.log import setup_logging
from pngchunk.core.report import format_json, format_text
from pngchunk.core.types import Report

logger = logging.getLogger(__name__)


def _short_help(name: str) -> str:
    mod = registry.module_for(name)
    doc = (mod.__doc__ or '').strip()
    return doc.splitlines()[0] if doc else registry.get(name).help


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        "  pngchunk make RuSt 'This is where your secret message will be!'\n"
        '  pngchunk make ruSt --hex 00ff10 -o frame.bin\n'
        '  pngchunk inspect frame.bin\n'
        '  pngchunk inspect image.png --offset 8\n'
        '  pngchunk --json type IHDR tEXt Rust\n'
        '  pngchunk help inspect\n'
    )
    parser = argparse.ArgumentParser(
        prog='pngchunk',
        description='Build, inspect and validate PNG-style chunk frames.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument('-l', '--log-level', default=None, metavar='LEVEL', help='DEBUG, INFO, WARNING or ERROR')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name))
        cmd.configure(p)

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name in sorted(commands):
            print(f'  {name:<10} {_short_help(name)}')
        print('\nRun: pngchunk help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (registry.module_for(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else — OS env vars always win
    env_path = env.load_env(env_file=args.env_file)
    setup_logging(args.log_level or env.log_level())
    if env_path:
        logger.info('loaded %s', env_path)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    report = Report(command=args.command)
    registry.get(args.command).execute(args, report)

    if args.json or env.output_format() == 'json':
        print(format_json(report))
    else:
        print(format_text(report))

    for name, data in report.items.items():
        error = data.get('error')
        if error:
            print(f'pngchunk: {name}: {error["kind"]}: {error["message"]}', file=sys.stderr)

    if report.failed:
        sys.exit(1)


if __name__ == '__main__':
    main()
