"""Tests for the monkey command-line entry point."""

import io
from pathlib import Path

import pytest

from monkey.cli import main, repl


@pytest.fixture
def program(tmp_path: Path):
    def write(source: str) -> str:
        path = tmp_path / "prog.monkey"
        path.write_text(source)
        return str(path)

    return write


def test_runs_file(program, capsys):
    rc = main([program('let greet = fn(n) { "hi " + n }; puts(greet("you"));')])
    out = capsys.readouterr()
    assert rc == 0
    assert out.out == '"hi you"\n'
    assert out.err == ""


def test_parse_error_exit_code(program, capsys):
    rc = main([program("let = 1;")])
    err = capsys.readouterr().err
    assert rc == 1
    assert err == "monkey: parse error: expected identifier, got '=' at line 1 col 5\n"


def test_runtime_error_exit_code(program, capsys):
    rc = main([program("1 + true")])
    err = capsys.readouterr().err
    assert rc == 1
    assert err == "monkey: runtime error: type mismatch: INTEGER + BOOLEAN\n"


def test_deep_nesting_is_a_parse_error(program, capsys):
    rc = main([program("(" * 600 + "1" + ")" * 600)])
    err = capsys.readouterr().err
    assert rc == 1
    assert err.startswith("monkey: parse error: maximum nesting depth exceeded")


def test_missing_file(tmp_path, capsys):
    rc = main([str(tmp_path / "nope.monkey")])
    assert rc == 1
    assert "No such file or directory" in capsys.readouterr().err


def test_invalid_utf8(tmp_path, capsys):
    path = tmp_path / "bad.monkey"
    path.write_bytes(b"\xff\xfe")
    rc = main([str(path)])
    assert rc == 1
    assert "invalid utf-8" in capsys.readouterr().err


def test_unknown_flag(capsys):
    assert main(["--nope"]) == 2
    assert "unknown flag '--nope'" in capsys.readouterr().err


def test_extra_argument(program, capsys):
    path = program("1")
    assert main([path, path]) == 2
    assert "unexpected argument" in capsys.readouterr().err


def test_help(capsys):
    assert main(["--help"]) == 0
    assert capsys.readouterr().out.startswith("monkey [OPTIONS] [FILE]")


def test_fmt(program, capsys):
    rc = main(["--fmt", program("let add=fn(a,b){a+b};add(1,2)")])
    assert rc == 0
    assert capsys.readouterr().out == (
        "let add = fn(a, b) {\n    a + b;\n};\nadd(1, 2);\n"
    )


def test_fmt_requires_file(capsys):
    assert main(["--fmt"]) == 2
    assert "requires a file" in capsys.readouterr().err


def test_conflicting_modes(program, capsys):
    assert main(["--fmt", "--ast", program("1")]) == 2


def test_ast(program, capsys):
    rc = main(["--ast", program("let x = 1 + 2 * 3; x")])
    assert rc == 0
    assert capsys.readouterr().out == "let x = (1 + (2 * 3));\nx\n"


def test_tokens(program, capsys):
    rc = main(["--tokens", program("let x")])
    assert rc == 0
    assert capsys.readouterr().out == (
        "let 'let' 1:1\nIDENT 'x' 1:5\nEOF '' 1:6\n"
    )


def test_reads_program_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("puts(1 + 1)"))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "2\n"


def test_repl_session():
    stdin = io.StringIO("let a = 5;\na * 2\n.quit\n")
    stdout = io.StringIO()
    stderr = io.StringIO()
    assert repl(stdin, stdout, stderr) == 0
    assert stdout.getvalue() == (
        "Welcome to Monkey\n>>> null\n>>> 10\n>>> Bye!\n"
    )
    assert stderr.getvalue() == ""


def test_repl_reports_errors_and_continues():
    stdin = io.StringIO("foo\nlet = 1\n1 + 1\n.quit\n")
    stdout = io.StringIO()
    stderr = io.StringIO()
    assert repl(stdin, stdout, stderr) == 0
    assert stderr.getvalue() == (
        "error: identifier not found: foo\n"
        "error: expected identifier, got '=' at line 1 col 5\n"
    )
    assert "2\n" in stdout.getvalue()


def test_repl_puts_goes_to_stdout():
    stdin = io.StringIO('puts("x")\n.quit\n')
    stdout = io.StringIO()
    repl(stdin, stdout, io.StringIO())
    assert stdout.getvalue() == 'Welcome to Monkey\n>>> "x"\nnull\n>>> Bye!\n'


def test_repl_ends_at_eof():
    stdout = io.StringIO()
    assert repl(io.StringIO("1\n"), stdout, io.StringIO()) == 0
    assert stdout.getvalue() == "Welcome to Monkey\n>>> 1\n>>> \n"


def test_repl_skips_blank_lines():
    stdout = io.StringIO()
    repl(io.StringIO("\n.quit\n"), stdout, io.StringIO())
    assert stdout.getvalue() == "Welcome to Monkey\n>>> >>> Bye!\n"


def test_main_without_file_starts_repl(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(".quit\n"))
    assert main([]) == 0
    assert capsys.readouterr().out.endswith("Bye!\n")
