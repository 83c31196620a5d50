"""
Monkey Programming Language Parser
Operator-precedence (Pratt) parser turning a token stream into an AST.
Syntax faults are collected across the whole input rather than stopping at
the first one.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple
from enum import IntEnum

from lexing import (
    MonkeyTokenizer, SourceSpan, Token,
    EOF, IDENT, INT, ASSIGN, PLUS, MINUS, BANG, ASTERISK, SLASH,
    LT, GT, EQ, NOT_EQ, COMMA, SEMICOLON, LPAREN, RPAREN, LBRACE, RBRACE,
    FUNCTION, LET, TRUE, FALSE, IF, ELSE, RETURN,
)
from syntax_tree import (
    BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FunctionLiteral, Identifier, IfExpression,
    InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, Program,
    ReturnStatement, Statement,
)
from error_handling import MonkeyParseError, make_parse_error, enhance_parse_errors
from utilities import INT64_MAX


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)


PRECEDENCES: Dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    ASTERISK: Precedence.PRODUCT,
    SLASH: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
}


PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class _StatementAbort(Exception):
    """Unwinds out of a statement after its fault has been recorded"""


class PrattParser:
    """Parser over any iterable of tokens

    Statement parsers leave the current token on the last token they consumed;
    the statement loops advance past it.
    """

    def __init__(self, tokens: Iterable[Token], debug: bool = False):
        self.debug = debug
        self.errors: List[Dict] = []
        self._tokens = iter(tokens)
        self._trace_depth = 0

        self.cur_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None

        self.prefix_parse_fns: Dict[str, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[str, InfixParseFn] = {}

        self._register_prefix(IDENT, self.parse_identifier)
        self._register_prefix(INT, self.parse_integer_literal)
        self._register_prefix(TRUE, self.parse_boolean)
        self._register_prefix(FALSE, self.parse_boolean)
        self._register_prefix(BANG, self.parse_prefix_expression)
        self._register_prefix(MINUS, self.parse_prefix_expression)
        self._register_prefix(LPAREN, self.parse_grouped_expression)
        self._register_prefix(IF, self.parse_if_expression)
        self._register_prefix(FUNCTION, self.parse_function_literal)

        for token_type in (PLUS, MINUS, ASTERISK, SLASH, EQ, NOT_EQ, LT, GT):
            self._register_infix(token_type, self.parse_infix_expression)
        self._register_infix(LPAREN, self.parse_call_expression)

        # Fill cur_token and peek_token
        self._next_token()
        self._next_token()

    def _register_prefix(self, token_type: str, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[token_type] = fn

    def _register_infix(self, token_type: str, fn: InfixParseFn) -> None:
        self.infix_parse_fns[token_type] = fn

    # ------------------------------------------------------------------
    # Token handling
    # ------------------------------------------------------------------

    def _pull_token(self) -> Token:
        token = next(self._tokens, None)
        if token is not None:
            return token
        # Source exhausted without EOF (or after it): keep answering EOF
        if self.peek_token is not None:
            span = self.peek_token.span
        else:
            span = SourceSpan("<input>", 1, 1, 1, 1)
        return Token(EOF, "", span)

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self._pull_token()

    def _cur_token_is(self, token_type: str) -> bool:
        return self.cur_token.type == token_type

    def _peek_token_is(self, token_type: str) -> bool:
        return self.peek_token.type == token_type

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _fail(self, message: str, token: Token, expected: Optional[str] = None) -> None:
        self.errors.append(make_parse_error(
            message,
            token.span.start_line,
            token.span.start_col,
            expected=expected,
            got=token.type,
        ))
        raise _StatementAbort()

    def _expect_peek(self, token_type: str) -> None:
        if self._peek_token_is(token_type):
            self._next_token()
            return
        self._fail(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead",
            self.peek_token,
            expected=token_type,
        )

    def _recover(self) -> bool:
        """Skip the remainder of a faulty statement.

        Stops on the ';' ending it, just before a 'let' or 'return' starting
        the next statement, or on a '}' closing the enclosing block, in which
        case True is returned and the block loop treats it as its end.
        """
        depth = 0
        while not self._cur_token_is(EOF):
            if self._cur_token_is(LBRACE):
                depth += 1
            elif self._cur_token_is(RBRACE):
                if depth == 0:
                    return True
                depth -= 1
            elif self._cur_token_is(SEMICOLON) and depth == 0:
                return False
            if depth == 0 and (self._peek_token_is(LET) or self._peek_token_is(RETURN)):
                return False
            self._next_token()
        return False

    def _trace(self, message: str) -> None:
        if self.debug:
            print("  " * self._trace_depth + message)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse the whole token stream; raises MonkeyParseError on any fault"""
        statements: List[Statement] = []

        while not self._cur_token_is(EOF):
            try:
                statements.append(self.parse_statement())
            except _StatementAbort:
                self._recover()
            self._next_token()

        if self.errors:
            raise MonkeyParseError(self.errors)
        return Program(tuple(statements))

    def parse_single_expression(self) -> Expression:
        """Parse input holding exactly one expression (optional trailing ';')"""
        expression = None
        try:
            expression = self.parse_expression(Precedence.LOWEST)
            if self._peek_token_is(SEMICOLON):
                self._next_token()
            if not self._peek_token_is(EOF):
                self._fail(
                    f"expected next token to be {EOF}, got {self.peek_token.type} instead",
                    self.peek_token,
                    expected=EOF,
                )
        except _StatementAbort:
            pass

        if self.errors:
            raise MonkeyParseError(self.errors)
        return expression

    def parse_statement(self) -> Statement:
        if self._cur_token_is(LET):
            return self.parse_let_statement()
        if self._cur_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        self._expect_peek(IDENT)
        name = self.cur_token.literal

        self._expect_peek(ASSIGN)
        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self._peek_token_is(SEMICOLON):
            self._next_token()
        return LetStatement(name, value)

    def parse_return_statement(self) -> ReturnStatement:
        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self._peek_token_is(SEMICOLON):
            self._next_token()
        return ReturnStatement(value)

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression(Precedence.LOWEST)

        if self._peek_token_is(SEMICOLON):
            self._next_token()
        return ExpressionStatement(expression)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements after '{' up to and including the matching '}'"""
        statements: List[Statement] = []
        self._next_token()

        while not self._cur_token_is(RBRACE) and not self._cur_token_is(EOF):
            try:
                statements.append(self.parse_statement())
            except _StatementAbort:
                if self._recover():
                    break
            self._next_token()

        if not self._cur_token_is(RBRACE):
            self._fail(
                f"expected next token to be {RBRACE}, got {self.cur_token.type} instead",
                self.cur_token,
                expected=RBRACE,
            )
        return BlockStatement(tuple(statements))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> Expression:
        self._trace(f"BEGIN parse_expression({precedence.name}) at {self.cur_token}")
        self._trace_depth += 1
        try:
            prefix = self.prefix_parse_fns.get(self.cur_token.type)
            if prefix is None:
                self._fail(
                    f"no prefix parse function for {self.cur_token.type} found",
                    self.cur_token,
                )
            left = prefix()

            while not self._peek_token_is(SEMICOLON) and precedence < self._peek_precedence():
                infix = self.infix_parse_fns.get(self.peek_token.type)
                if infix is None:
                    return left
                self._next_token()
                left = infix(left)

            return left
        finally:
            self._trace_depth -= 1
            self._trace(f"END parse_expression({precedence.name})")

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token.literal)

    def parse_integer_literal(self) -> IntegerLiteral:
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT64_MAX:
            self._fail(f"could not parse {literal} as integer", self.cur_token)
        return IntegerLiteral(value)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self._cur_token_is(TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        operator = self.cur_token.literal
        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        operator = self.cur_token.literal
        precedence = self._cur_precedence()
        self._next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Expression:
        self._next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self._expect_peek(RPAREN)
        return expression

    def parse_if_expression(self) -> IfExpression:
        self._expect_peek(LPAREN)
        self._next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self._expect_peek(RPAREN)

        self._expect_peek(LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self._peek_token_is(ELSE):
            self._next_token()
            self._expect_peek(LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        self._expect_peek(LPAREN)
        parameters = self.parse_function_parameters()

        self._expect_peek(LBRACE)
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body)

    def parse_function_parameters(self) -> Tuple[str, ...]:
        if self._peek_token_is(RPAREN):
            self._next_token()
            return ()

        self._expect_peek(IDENT)
        identifiers = [self.cur_token.literal]

        while self._peek_token_is(COMMA):
            self._next_token()
            self._expect_peek(IDENT)
            identifiers.append(self.cur_token.literal)

        self._expect_peek(RPAREN)
        return tuple(identifiers)

    def parse_call_expression(self, function: Expression) -> CallExpression:
        arguments = self.parse_expression_list(RPAREN)
        return CallExpression(function, arguments)

    def parse_expression_list(self, end: str) -> Tuple[Expression, ...]:
        if self._peek_token_is(end):
            self._next_token()
            return ()

        self._next_token()
        items = [self.parse_expression(Precedence.LOWEST)]

        while self._peek_token_is(COMMA):
            self._next_token()
            self._next_token()
            items.append(self.parse_expression(Precedence.LOWEST))

        self._expect_peek(end)
        return tuple(items)


class MonkeyParser:
    """Main Monkey parser combining tokenizer and Pratt parser"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse_tokens(self, tokens: Iterable[Token]) -> Program:
        """Parse an already tokenized program"""
        return PrattParser(tokens, self.debug).parse_program()

    def parse_string(self, text: str, filename: str = "<input>") -> Program:
        """Parse Monkey source code from string"""
        tokenizer = MonkeyTokenizer(filename)
        parser = PrattParser(tokenizer.iter_tokens(text), self.debug)
        try:
            return parser.parse_program()
        except MonkeyParseError as e:
            raise MonkeyParseError(enhance_parse_errors(e.errors, text)) from e

    def parse_file(self, filepath: str) -> Program:
        """Parse a Monkey source file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_string(content, filepath)

    def parse_expression(self, text: str, filename: str = "<input>") -> Expression:
        """Parse a single Monkey expression"""
        tokenizer = MonkeyTokenizer(filename)
        parser = PrattParser(tokenizer.iter_tokens(text), self.debug)
        try:
            return parser.parse_single_expression()
        except MonkeyParseError as e:
            raise MonkeyParseError(enhance_parse_errors(e.errors, text)) from e

    def tokenize(self, text: str, filename: str = "<input>") -> List[Token]:
        """Tokenize Monkey source code"""
        return MonkeyTokenizer(filename).tokenize(text)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> MonkeyParser:
    """Create a Monkey parser"""
    return MonkeyParser(debug=debug)


def create_debug_parser() -> MonkeyParser:
    """Create a Monkey parser with debug enabled"""
    return MonkeyParser(debug=True)
