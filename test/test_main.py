"""
Command line and REPL tests for Monkey
"""

import pytest
from main import create_arg_parser, handle_input, main, run_script_file, VERSION


class TestReplInput:
  """Test handling of single REPL lines"""

  def test_prints_value(self, parser, interpreter, capsys):
    assert handle_input("1 + 2 * 3", parser, interpreter)
    assert capsys.readouterr().out == "7\n"

  def test_let_prints_nothing_and_persists(self, parser, interpreter, capsys):
    handle_input("let x = 5;", parser, interpreter)
    assert capsys.readouterr().out == ""
    handle_input("x * 2", parser, interpreter)
    assert capsys.readouterr().out == "10\n"

  def test_runtime_error_keeps_session(self, parser, interpreter, capsys):
    handle_input("let a = 1;", parser, interpreter)
    assert handle_input("a + true", parser, interpreter)
    assert capsys.readouterr().out == "ERROR: type mismatch: INTEGER + BOOLEAN\n"
    handle_input("a", parser, interpreter)
    assert capsys.readouterr().out == "1\n"

  def test_parse_error_keeps_session(self, parser, interpreter, capsys):
    assert handle_input("let = 5; let x 10;", parser, interpreter)
    out = capsys.readouterr().out
    assert out.startswith("Parse error: ")
    assert "expected next token to be IDENT, got ASSIGN instead" in out
    assert "expected next token to be ASSIGN, got INT instead" in out

  def test_function_value(self, parser, interpreter, capsys):
    handle_input("fn(a) { a }", parser, interpreter)
    assert capsys.readouterr().out == "fn(a) { a; }\n"

  def test_exit(self, parser, interpreter):
    assert handle_input("exit", parser, interpreter) is False
    assert handle_input("  exit  ", parser, interpreter) is False

  def test_blank_line(self, parser, interpreter, capsys):
    assert handle_input("   ", parser, interpreter)
    assert capsys.readouterr().out == ""

  def test_tokens_command(self, parser, interpreter, capsys):
    handle_input(":tokens let x", parser, interpreter)
    assert capsys.readouterr().out.split() == ["LET(let)", "IDENT(x)", "EOF()"]

  def test_parse_command(self, parser, interpreter, capsys):
    handle_input(":parse 1 + 2", parser, interpreter)
    out = capsys.readouterr().out
    assert out.startswith("Program\n")
    assert "InfixExpression(operator='+')" in out

  def test_env_command(self, parser, interpreter, capsys):
    handle_input(":env", parser, interpreter)
    assert "(no user-defined bindings)" in capsys.readouterr().out
    handle_input("let answer = 42;", parser, interpreter)
    handle_input(":env", parser, interpreter)
    assert "answer = 42" in capsys.readouterr().out

  def test_help_command(self, parser, interpreter, capsys):
    handle_input(":help", parser, interpreter)
    assert ":tokens" in capsys.readouterr().out


class TestScriptRunner:
  """Test running script files"""

  def write(self, tmp_path, source):
    script = tmp_path / "script.mk"
    script.write_text(source, encoding="utf-8")
    return str(script)

  def test_prints_final_value(self, tmp_path, capsys):
    path = self.write(tmp_path, "let double = fn(x) { x * 2 };\ndouble(21);\n")
    run_script_file(path)
    assert capsys.readouterr().out == "42\n"

  def test_trailing_let_prints_nothing(self, tmp_path, capsys):
    run_script_file(self.write(tmp_path, "let a = 1;"))
    assert capsys.readouterr().out == ""

  def test_runtime_error_exits(self, tmp_path, capsys):
    path = self.write(tmp_path, "let a = 1;\na + true;")
    with pytest.raises(SystemExit) as exc_info:
      run_script_file(path)
    assert exc_info.value.code == 1
    assert "Error: type mismatch: INTEGER + BOOLEAN" in capsys.readouterr().out

  def test_parse_error_exits(self, tmp_path, capsys):
    path = self.write(tmp_path, "let x 1;")
    with pytest.raises(SystemExit) as exc_info:
      run_script_file(path)
    assert exc_info.value.code == 1
    assert "expected next token to be ASSIGN" in capsys.readouterr().out

  def test_missing_script(self, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
      run_script_file(str(tmp_path / "missing.mk"))
    assert exc_info.value.code == 1
    assert "not found" in capsys.readouterr().out


class TestCommandLine:
  """Test argument handling of the entry point"""

  def test_arg_parser_flags(self):
    args = create_arg_parser().parse_args(["--tokens", "--debug", "prog.mk"])
    assert args.script == "prog.mk"
    assert args.tokens and args.debug
    assert not args.parse and not args.interactive

  def test_version(self, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main(["--version"])
    assert exc_info.value.code == 0
    assert VERSION in capsys.readouterr().out

  def test_runs_script(self, tmp_path, capsys):
    script = tmp_path / "prog.mk"
    script.write_text("if (1 < 2) { 10 } else { 20 }", encoding="utf-8")
    main([str(script)])
    assert capsys.readouterr().out == "10\n"

  def test_tokens_flag(self, tmp_path, capsys):
    script = tmp_path / "prog.mk"
    script.write_text("x;", encoding="utf-8")
    main(["--tokens", str(script)])
    out = capsys.readouterr().out
    assert out.startswith("3 tokens:")
    assert "1:1\tIDENT(x)" in out

  def test_parse_flag(self, tmp_path, capsys):
    script = tmp_path / "prog.mk"
    script.write_text("let y = -1;", encoding="utf-8")
    main(["--parse", str(script)])
    out = capsys.readouterr().out
    assert "Parsed 1 top-level statements:" in out
    assert "Source form: let y = (-1);" in out

  def test_nonexistent_script(self, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main([str(tmp_path / "nope.mk")])
    assert exc_info.value.code == 1
    assert "does not exist" in capsys.readouterr().out

  def test_interactive_session(self, monkeypatch, capsys):
    lines = iter(["let a = 6;", "a * 7", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    monkeypatch.setattr("main.setup_readline", lambda: None)
    main(["-i"])
    out = capsys.readouterr().out
    assert "Interactive Mode" in out
    assert "42\n" in out

  def test_interactive_session_ends_on_eof(self, monkeypatch, capsys):
    def fake_input(prompt=""):
      raise EOFError
    monkeypatch.setattr("builtins.input", fake_input)
    monkeypatch.setattr("main.setup_readline", lambda: None)
    main(["-i"])
    assert "Goodbye!" in capsys.readouterr().out
