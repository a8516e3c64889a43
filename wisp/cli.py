"""Command-line entry point.

    wisp                      start the REPL
    wisp FILE [ARGS...]       run a file
    wisp -c CODE [ARGS...]    run an inline program
    wisp -l FILE [--atoms]    lint a file
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from wisp import __version__
from wisp.errors import WispError
from wisp.interpreter import Interpreter
from wisp.linter import lint_report
from wisp.repl import repl


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wisp",
        description="Read and run Wisp programs.",
        epilog="If no arguments are provided, it launches a REPL.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-c", dest="code", metavar="CODE", help="run CODE as a program")
    mode.add_argument("-l", dest="lint", metavar="FILE", help="lint FILE without running it")
    parser.add_argument("--atoms", action="store_true", help="with -l, list the atoms FILE uses")
    parser.add_argument("file", nargs="?", help="program file to run")
    parser.add_argument("args", nargs="*", help="arguments bound to cmd-args")
    return parser


def _run(interp: Interpreter, code: Optional[str], path: Optional[str]) -> int:
    try:
        results = interp.eval(code) if path is None else interp.eval_file(path)
    except WispError as ex:
        print(ex, file=sys.stderr)
        return 1
    except OSError as ex:
        print(f"error: cannot read {path}: {ex.strerror}", file=sys.stderr)
        return 1
    for result in results:
        print(result.debug())
    return 0


def _lint(path: str, show_atoms: bool) -> int:
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except OSError as ex:
        print(f"error: cannot read {path}: {ex.strerror}", file=sys.stderr)
        return 1
    report = lint_report(source, path)
    for diagnostic in report.diagnostics:
        print(diagnostic)
    if show_atoms:
        for name in report.used_atoms():
            print(name)
    return 1 if report.has_errors else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.lint is not None:
        return _lint(args.lint, args.atoms)

    if args.code is not None:
        # With -c there is no program file, so every positional is an argument.
        extra = ([args.file] if args.file is not None else []) + list(args.args)
        return _run(Interpreter(cmd_args=extra), args.code, None)

    if args.file is not None:
        interp = Interpreter(cmd_args=[args.file, *args.args])
        return _run(interp, None, args.file)

    return repl(Interpreter(cmd_args=[]))


if __name__ == "__main__":
    sys.exit(main())
