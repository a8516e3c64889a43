import pytest

from wisp.interpreter import Interpreter
from wisp.types.environment import Environment
from wisp.types.value import Value


def add_builtin(args):
    total = args[0] if args else Value.i64(0)
    for arg in args[1:]:
        total = total + arg
    return total


@pytest.fixture
def env():
    """Fresh root environment with a single builtin bound."""
    e = Environment()
    e.define("+", Value.builtin("+", add_builtin))
    return e


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture(autouse=True)
def _isolated_history(tmp_path, monkeypatch):
    # Keep REPL tests away from the user's real history file
    monkeypatch.setenv("WISP_HISTORY_FILE", str(tmp_path / "history"))
