"""
Tokenizer tests for Monkey
"""

import pytest
from lexing import (
  MonkeyTokenizer, lookup_ident,
  ILLEGAL, EOF, IDENT, INT, ASSIGN, PLUS, MINUS, BANG, ASTERISK, SLASH,
  LT, GT, EQ, NOT_EQ, COMMA, SEMICOLON, LPAREN, RPAREN, LBRACE, RBRACE,
  FUNCTION, LET, TRUE, FALSE, IF, ELSE, RETURN,
)


class TestTokenCategories:
  """Test that source text maps onto the right token categories"""

  @pytest.fixture
  def tokenizer(self):
    return MonkeyTokenizer()

  def types(self, tokenizer, text):
    return [token.type for token in tokenizer.tokenize(text)]

  def test_let_statement(self, tokenizer):
    tokens = tokenizer.tokenize("let five = 5;")
    assert [(t.type, t.literal) for t in tokens] == [
      (LET, "let"), (IDENT, "five"), (ASSIGN, "="), (INT, "5"),
      (SEMICOLON, ";"), (EOF, ""),
    ]

  def test_operators(self, tokenizer):
    assert self.types(tokenizer, "+ - * / < > ! =") == [
      PLUS, MINUS, ASTERISK, SLASH, LT, GT, BANG, ASSIGN, EOF
    ]

  def test_two_character_operators_win(self, tokenizer):
    assert self.types(tokenizer, "a == b != !c") == [
      IDENT, EQ, IDENT, NOT_EQ, BANG, IDENT, EOF
    ]

  def test_delimiters(self, tokenizer):
    assert self.types(tokenizer, "(){},;") == [
      LPAREN, RPAREN, LBRACE, RBRACE, COMMA, SEMICOLON, EOF
    ]

  def test_keywords(self, tokenizer):
    assert self.types(tokenizer, "fn let true false if else return") == [
      FUNCTION, LET, TRUE, FALSE, IF, ELSE, RETURN, EOF
    ]

  def test_keyword_prefix_is_identifier(self, tokenizer):
    tokens = tokenizer.tokenize("lettuce iffy fnord")
    assert [t.type for t in tokens] == [IDENT, IDENT, IDENT, EOF]
    assert tokens[0].literal == "lettuce"

  def test_keywords_next_to_punctuation(self, tokenizer):
    assert self.types(tokenizer, "fn(x){return x}") == [
      FUNCTION, LPAREN, IDENT, RPAREN, LBRACE, RETURN, IDENT, RBRACE, EOF
    ]

  def test_identifiers_with_digits_and_underscores(self, tokenizer):
    tokens = tokenizer.tokenize("x1 _tmp add_two")
    assert [t.literal for t in tokens[:-1]] == ["x1", "_tmp", "add_two"]
    assert all(t.type == IDENT for t in tokens[:-1])

  def test_illegal_character(self, tokenizer):
    assert self.types(tokenizer, "5 @ 5") == [INT, ILLEGAL, INT, EOF]

  def test_empty_input_is_just_eof(self, tokenizer):
    assert self.types(tokenizer, "") == [EOF]
    assert self.types(tokenizer, "  \n\t ") == [EOF]

  def test_lookup_ident(self):
    assert lookup_ident("fn") == FUNCTION
    assert lookup_ident("return") == RETURN
    assert lookup_ident("value") == IDENT


class TestTokenSpans:
  """Test line and column information"""

  def test_columns_on_one_line(self):
    tokens = MonkeyTokenizer().tokenize("let x = 5;")
    assert [t.span.start_col for t in tokens] == [1, 5, 7, 9, 10, 11]
    assert all(t.span.start_line == 1 for t in tokens)

  def test_lines_and_columns_across_lines(self):
    tokens = MonkeyTokenizer().tokenize("let a = 1;\n  a + 1")
    a_ref = tokens[5]
    assert a_ref.type == IDENT
    assert (a_ref.span.start_line, a_ref.span.start_col) == (2, 3)

  def test_span_text_and_end(self):
    tokens = MonkeyTokenizer("prog.mk").tokenize("return 12345;")
    number = tokens[1]
    assert number.span.text == "12345"
    assert number.span.filename == "prog.mk"
    assert (number.span.start_col, number.span.end_col) == (8, 13)

  def test_iter_tokens_is_lazy(self):
    stream = MonkeyTokenizer().iter_tokens("1 + 2")
    first = next(stream)
    assert (first.type, first.literal) == (INT, "1")
    assert [t.type for t in stream] == [PLUS, INT, EOF]

  def test_token_str(self):
    token = MonkeyTokenizer().tokenize("foo")[0]
    assert str(token) == "IDENT(foo)"
