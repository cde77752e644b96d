"""Environment/.env configuration for margin-tool.

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised keys:
  MARGIN_TOOL_STRICT           1/true/yes/on — raise on malformed margin values
  MARGIN_TOOL_BLANK_THRESHOLD  max per-channel std for a margin band to count as blank
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BLANK_THRESHOLD = 8.0

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class Settings:
    strict: bool = False
    blank_threshold: float = DEFAULT_BLANK_THRESHOLD


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
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
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
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

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value
    return path


def load_settings() -> Settings:
    """Build Settings from os.environ. Call load_env() first to pick up .env files."""
    strict = os.environ.get('MARGIN_TOOL_STRICT', '').strip().lower() in _TRUTHY
    raw_threshold = os.environ.get('MARGIN_TOOL_BLANK_THRESHOLD', '').strip()
    try:
        threshold = float(raw_threshold) if raw_threshold else DEFAULT_BLANK_THRESHOLD
    except ValueError:
        raise ValueError(f'MARGIN_TOOL_BLANK_THRESHOLD must be a number, got {raw_threshold!r}') from None
    return Settings(strict=strict, blank_threshold=threshold)
