"""Settings for the pngchunk command line, from the environment or a .env file.

A variable already set in the environment always wins. Otherwise the
value comes from the file given with --env-file, or from the first .env
found walking up from the current directory; the walk stops at the
directory holding .git.

Recognised variables:
  PNGCHUNK_LOG_LEVEL   DEBUG, INFO, WARNING (default), ERROR
  PNGCHUNK_OUTPUT      text (default) or json
"""

import os
from pathlib import Path

LOG_LEVEL_VAR = 'PNGCHUNK_LOG_LEVEL'
OUTPUT_VAR = 'PNGCHUNK_OUTPUT'

DEFAULT_LOG_LEVEL = 'WARNING'
OUTPUT_FORMATS = ('text', 'json')


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    parsed = _parse_dotenv(path)
    for key, value in parsed.items():
        if key not in os.environ:
            os.environ[key] = value

    return path


def log_level() -> str:
    return os.environ.get(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def output_format() -> str:
    """Configured output format. Unknown values fall back to text."""
    value = os.environ.get(OUTPUT_VAR, 'text').strip().lower()
    return value if value in OUTPUT_FORMATS else 'text'
