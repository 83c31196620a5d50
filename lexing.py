"""
Monkey Token Source
Scanner turning raw source text into a lazy stream of tokens with source spans
"""

from typing import Iterator, List
from dataclasses import dataclass

from pyparsing import Regex, col, lineno, one_of


# Token categories
ILLEGAL = "ILLEGAL"
EOF = "EOF"

IDENT = "IDENT"
INT = "INT"

ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
GT = "GT"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"

FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"


KEYWORDS = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

SYMBOLS = {
    "==": EQ,
    "!=": NOT_EQ,
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
}

@dataclass(frozen=True)
class SourceSpan:
    """Source location information for tokens and diagnostics"""
    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    text: str = ""

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_col}"
        return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


@dataclass(frozen=True)
class Token:
    """Monkey token with source information"""
    type: str
    literal: str
    span: SourceSpan

    def __str__(self) -> str:
        return f"{self.type}({self.literal})"


def lookup_ident(word: str) -> str:
    """Map a word to its keyword category, or IDENT"""
    return KEYWORDS.get(word, IDENT)


class MonkeyTokenizer:
    """Monkey scanner built from pyparsing elements

    The scanner never fails: characters that cannot start any token come out
    as ILLEGAL tokens and are reported by the parser.
    """

    def __init__(self, filename: str = "<input>"):
        self.filename = filename
        self._setup_token_patterns()

    def _setup_token_patterns(self):
        """Setup all token patterns for Monkey, highest priority first"""

        def tagged(category):
            return lambda t: (category, t[0])

        # Whole words only, so "lettuce" stays one identifier
        word = Regex(r"[A-Za-z_][A-Za-z0-9_]*").set_parse_action(
            lambda t: (lookup_ident(t[0]), t[0])
        )
        integer = Regex(r"[0-9]+").set_parse_action(tagged(INT))

        # one_of matches longest first, so == and != win over = and !
        symbol = one_of(list(SYMBOLS)).set_parse_action(lambda t: (SYMBOLS[t[0]], t[0]))

        illegal = Regex(r"\S").set_parse_action(tagged(ILLEGAL))

        self.token_expr = word | integer | symbol | illegal

    def _make_span(self, text: str, start: int, end: int) -> SourceSpan:
        start_line, start_col = lineno(start, text), col(start, text)
        if end > start:
            end_line, end_col = lineno(end - 1, text), col(end - 1, text) + 1
        else:
            end_line, end_col = start_line, start_col
        return SourceSpan(
            self.filename, start_line, start_col, end_line, end_col, text[start:end]
        )

    def iter_tokens(self, text: str) -> Iterator[Token]:
        """Lazily yield the tokens of text, ending with a single EOF token"""
        for result, start, end in self.token_expr.scan_string(text):
            category, literal = result[0]
            yield Token(category, literal, self._make_span(text, start, end))

        yield Token(EOF, "", self._make_span(text, len(text), len(text)))

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize Monkey source code"""
        return list(self.iter_tokens(text))
