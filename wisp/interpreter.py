from __future__ import annotations
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from wisp.reader.parser import Reader
from wisp.types.environment import Environment
from wisp.types.value import Value

EvalFn = Callable[[Value, Environment], Value]


def echo(form: Value, env: Environment) -> Value:
    """Default evaluator: hand the form back unevaluated."""
    return form


class Interpreter:
    """
    Orchestrates reading Wisp code and handing each top-level form to a
    pluggable evaluator. Keeps one Environment alive across calls.
    """

    def __init__(
        self,
        eval_fn: Optional[EvalFn] = None,
        env: Optional[Environment] = None,
        cmd_args: Optional[Iterable[str]] = None,
    ):
        self.eval_fn: EvalFn = eval_fn if eval_fn is not None else echo
        self.env: Environment = env if env is not None else Environment()
        if cmd_args is not None:
            self.env.define("cmd-args", Value.list(Value.string(a) for a in cmd_args))

    def eval(self, code: str) -> list[Value]:
        """Read every form in `code` and evaluate them in order.

        Reading happens up front, so a syntax error anywhere means nothing runs.
        """
        forms = Reader(code).read_all()
        return [self.eval_fn(form, self.env) for form in forms]

    def eval_file(self, path: Union[str, Path]) -> list[Value]:
        return self.eval(Path(path).read_text(encoding="utf-8"))
