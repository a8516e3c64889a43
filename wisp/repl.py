"""Interactive read-eval-print loop on top of the Interpreter."""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from wisp import config
from wisp.errors import WispError
from wisp.interpreter import Interpreter

QUIT_WORDS = frozenset(("quit", "q", "exit"))


def _load_history():
    try:
        import readline
    except ImportError:
        return None
    path = config.get_history_file()
    if path.exists():
        try:
            readline.read_history_file(str(path))
        except OSError as ex:
            print(f"could not read history {path}: {ex}", file=sys.stderr)
    return readline


def _save_history(readline) -> None:
    if readline is None:
        return
    path = config.get_history_file()
    readline.set_history_length(config.get_history_size())
    try:
        readline.write_history_file(str(path))
    except OSError as ex:
        print(f"could not write history {path}: {ex}", file=sys.stderr)


def repl(
    interp: Optional[Interpreter] = None,
    input_fn: Optional[Callable[[str], str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    history: bool = True,
) -> int:
    """Run the loop until EOF or a quit word. Returns the exit status."""
    interp = interp if interp is not None else Interpreter()
    input_fn = input_fn or input
    out = out or sys.stdout
    err = err or sys.stderr
    readline = _load_history() if history else None
    prompt = config.get_prompt()
    try:
        while True:
            try:
                line = input_fn(prompt)
            except EOFError:
                print(file=out)
                break
            except KeyboardInterrupt:
                print("^C", file=err)
                continue

            stripped = line.strip()
            if stripped in QUIT_WORDS:
                break
            if not stripped:
                continue

            try:
                for result in interp.eval(line):
                    print(f"=> {result.debug()}", file=out)
            except WispError as ex:
                print(ex, file=err)
    finally:
        _save_history(readline)
    return 0
