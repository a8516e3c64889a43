from __future__ import annotations
import os
from pathlib import Path


# Defaults
_DEFAULT_HISTORY_FILE = Path.home() / '.wisp-history'
_DEFAULT_HISTORY_SIZE = 4096
_DEFAULT_PROMPT = 'λ > '


def get_history_file() -> Path:
    # A single path; separators such as ':' are part of the file name.
    return Path(os.environ.get('WISP_HISTORY_FILE') or _DEFAULT_HISTORY_FILE).expanduser()


def get_history_size() -> int:
    raw = os.environ.get('WISP_HISTORY_SIZE', '').strip()
    try:
        return int(raw) if raw else _DEFAULT_HISTORY_SIZE
    except ValueError:
        return _DEFAULT_HISTORY_SIZE


def get_prompt() -> str:
    return os.environ.get('WISP_PROMPT') or _DEFAULT_PROMPT
