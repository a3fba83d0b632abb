from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from lish.debug_utils.pprint import DEFAULT_OPTIONS, load_options_from_json

_DEFAULT_PRELUDE = Path('~/.lishrc')
_DEFAULT_HISTORY = Path('~/.lish_history')
_DEFAULT_LOG_LEVEL = 'WARNING'


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var, '').strip()
    return Path(raw or default).expanduser()


def get_prelude_path() -> Path:
    return path_from_env('LISH_PRELUDE_PATH', _DEFAULT_PRELUDE)


def get_history_file() -> Path:
    return path_from_env('LISH_HISTORY_FILE', _DEFAULT_HISTORY)


def get_log_level(override: Optional[str] = None) -> int:
    """Numeric logging level from `override` or LISH_LOG_LEVEL; unknown names fall back to WARNING."""
    name = (override or os.environ.get('LISH_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_pprint_options() -> dict:
    """REPL printer options, overridable with a JSON object in LISH_PPRINT_OPTIONS."""
    raw = os.environ.get('LISH_PPRINT_OPTIONS')
    if not raw:
        return DEFAULT_OPTIONS
    return load_options_from_json(raw)


def read_prelude() -> Optional[str]:
    path = get_prelude_path()
    return path.read_text() if path.is_file() else None
