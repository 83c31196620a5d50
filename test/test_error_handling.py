"""
Diagnostic record and formatting tests for Monkey
"""

from error_handling import (
  MonkeyParseError, MonkeyRuntimeError, enhance_parse_errors,
  format_parse_error, generate_suggestions, get_context_lines,
  make_parse_error,
)


class TestParseErrorRecords:
  """Test building and formatting of parse error records"""

  def test_make_parse_error_defaults(self):
    error = make_parse_error("bad", 3, 7)
    assert error == {
      'message': "bad",
      'line': 3,
      'column': 7,
      'expected': None,
      'got': None,
      'context': None,
      'suggestions': [],
    }

  def test_format_parse_error(self):
    error = make_parse_error("bad", 2, 4, context="   2: oops", suggestions=["fix it"])
    text = format_parse_error(error)
    assert text.startswith("Parse error at line 2, column 4:\n  bad\n")
    assert "   2: oops" in text
    assert "    - fix it" in text

  def test_context_lines_mark_column(self):
    source = "let a = 1;\nlet = 2;\nlet b = 3;"
    context = get_context_lines(source, 2, 5)
    lines = context.split('\n')
    assert lines[0] == "   1: let a = 1;"
    assert lines[1] == "   2: let = 2;"
    assert lines[2] == "          ^ Error here"
    assert lines[3] == "   3: let b = 3;"

  def test_suggestions(self):
    assert generate_suggestions(make_parse_error("m", 1, 1, expected="RPAREN", got="EOF"))
    assert generate_suggestions(make_parse_error("m", 1, 1, expected="RBRACE", got="EOF"))
    assert generate_suggestions(make_parse_error("m", 1, 1, got="ASSIGN"))
    assert generate_suggestions(make_parse_error("m", 1, 1, got="ILLEGAL"))
    assert generate_suggestions(make_parse_error("m", 1, 1, expected="SEMICOLON", got="INT")) == []

  def test_enhance_does_not_mutate(self):
    original = [make_parse_error("m", 1, 1, expected="IDENT", got="ASSIGN")]
    enhanced = enhance_parse_errors(original, "let = 1;")
    assert original[0]['context'] is None
    assert enhanced[0]['context'].startswith("   1: let = 1;")
    assert enhanced[0]['suggestions']


class TestExceptions:
  """Test the exception classes"""

  def test_parse_error_lists_every_diagnostic(self):
    exc = MonkeyParseError([
      make_parse_error("first", 1, 1),
      make_parse_error("second", 2, 3),
    ])
    assert exc.messages == ["first", "second"]
    text = str(exc)
    assert "line 1, column 1" in text
    assert "line 2, column 3" in text

  def test_runtime_error_message(self):
    exc = MonkeyRuntimeError("identifier not found: x")
    assert exc.message == "identifier not found: x"
    assert str(exc) == "identifier not found: x"
