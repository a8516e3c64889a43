from wisp.linter import ERROR, WARNING, Diagnostic, lint, lint_report


def test_clean_program_has_no_diagnostics():
    assert lint("(define x 1)\n(print x) ; ok\n") == []


def test_unterminated_list_is_an_error():
    diagnostics = lint("(ok)\n(define x\n  1", path="prog.wsp")
    assert diagnostics == [Diagnostic("prog.wsp", 2, 1, ERROR, "unterminated list")]
    assert str(diagnostics[0]) == "prog.wsp:2:1: error: unterminated list"


def test_unexpected_character():
    [diagnostic] = lint("(a b))")
    assert diagnostic.severity == ERROR
    assert (diagnostic.line, diagnostic.column) == (1, 6)
    assert "unexpected character" in diagnostic.message


def test_directive_markers_are_warnings():
    diagnostics = lint("(a\n   @ b)\n@c")
    assert [(d.line, d.column, d.severity) for d in diagnostics] == [
        (2, 4, WARNING),
        (3, 1, WARNING),
    ]


def test_diagnostics_are_sorted_by_position():
    diagnostics = lint('@ x\n"open')
    assert [(d.line, d.severity) for d in diagnostics] == [(1, WARNING), (2, ERROR)]


def test_report_collects_forms_and_atoms():
    report = lint_report("(define x '(a b x)) \"str\" 42")
    assert not report.has_errors
    assert len(report.forms) == 3
    assert report.used_atoms() == ["a", "b", "define", "x"]


def test_report_keeps_forms_read_before_an_error():
    report = lint_report("(a) (b")
    assert report.has_errors
    assert [f.debug() for f in report.forms] == ["(a)"]


def test_module_is_documented():
    import wisp.linter

    assert wisp.linter.__doc__ is not None
    assert "Static checks" in wisp.linter.__doc__
