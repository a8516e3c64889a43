"""
Static checks for Wisp source without evaluating it.

The linter runs the reader over the whole buffer and reports:
- errors: anything the reader rejects (unterminated lists and strings,
  unexpected characters, out-of-range integer literals)
- warnings: `@` directive markers, which read as nil and are usually a typo

Diagnostics carry 1-based line/column positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from wisp.errors import MalformedProgram, line_and_column
from wisp.reader.parser import Reader
from wisp.types.value import Value

ERROR = "error"
WARNING = "warning"


@dataclass
class Diagnostic:
    path: str
    line: int
    column: int
    severity: str  # "error" | "warning"
    message: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: {self.severity}: {self.message}"


@dataclass
class LintReport:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    forms: List[Value] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == ERROR for d in self.diagnostics)

    def used_atoms(self) -> List[str]:
        """Sorted, de-duplicated atom names referenced by the forms read."""
        names = set()
        for form in self.forms:
            names.update(form.used_atoms())
        return sorted(names)


def lint_report(source: str, path: str = "<string>") -> LintReport:
    report = LintReport()
    reader = Reader(source)
    try:
        while not reader.at_end():
            report.forms.append(reader.read_one())
    except MalformedProgram as err:
        # The reader cannot resynchronise, so the first error ends the pass.
        line, column = err.line or 1, err.column or 1
        report.diagnostics.append(Diagnostic(path, line, column, ERROR, err.message))

    for offset in reader.directives:
        line, column = line_and_column(source, offset)
        report.diagnostics.append(
            Diagnostic(path, line, column, WARNING, "directive marker '@' reads as nil")
        )
    report.diagnostics.sort(key=lambda d: (d.line, d.column))
    return report


def lint(source: str, path: str = "<string>") -> List[Diagnostic]:
    """Return every diagnostic for `source`, ordered by position."""
    return lint_report(source, path).diagnostics
