import io

from wisp.interpreter import Interpreter
from wisp.repl import repl


def feed(*lines):
    """An input() stand-in that replays `lines`, then signals EOF."""
    pending = list(lines)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        if not pending:
            raise EOFError
        line = pending.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    fake_input.prompts = prompts
    return fake_input


def run(*lines, interp=None):
    out, err = io.StringIO(), io.StringIO()
    status = repl(interp, input_fn=feed(*lines), out=out, err=err, history=False)
    return status, out.getvalue(), err.getvalue()


def test_echoes_debug_forms():
    status, out, err = run('(+ 1 2.5) "s"', "'(a b)")
    assert status == 0
    assert out.splitlines() == ['=> (+ 1 2.5)', '=> "s"', "=> '(a b)", ""]
    assert err == ""


def test_errors_are_reported_and_loop_continues():
    status, out, err = run("(1 2", "42")
    assert status == 0
    assert "MalformedProgram: unterminated list" in err
    assert "=> 42" in out


def test_blank_lines_and_comments_print_nothing():
    _, out, _ = run("   ", "; just a comment")
    assert "=>" not in out


def test_quit_words_stop_the_loop():
    for word in ("quit", "q", "exit", "  exit  "):
        _, out, _ = run(word, "1")
        assert "=> 1" not in out


def test_keyboard_interrupt_keeps_going():
    _, out, err = run(KeyboardInterrupt(), "7")
    assert "^C" in err
    assert "=> 7" in out


def test_prompt_from_environment(monkeypatch):
    monkeypatch.setenv("WISP_PROMPT", "wisp> ")
    fake = feed("1")
    repl(Interpreter(), input_fn=fake, out=io.StringIO(), err=io.StringIO(), history=False)
    assert fake.prompts[0] == "wisp> "


def test_default_prompt(monkeypatch):
    monkeypatch.delenv("WISP_PROMPT", raising=False)
    fake = feed()
    repl(Interpreter(), input_fn=fake, out=io.StringIO(), err=io.StringIO(), history=False)
    assert fake.prompts == ["λ > "]


def test_deeply_nested_input_is_reported_and_loop_continues():
    status, out, err = run("(" * 600 + ")" * 600, "1")
    assert status == 0
    assert "MalformedProgram: nesting too deep" in err
    assert "=> 1" in out
