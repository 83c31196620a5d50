"""
Error handling for the Monkey parser and interpreter
Syntax diagnostics are plain dictionaries built and formatted by pure functions;
the exception classes carry them across the host boundary.
"""

from typing import List, Optional, Dict

import lexing


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_parse_error(
    message: str,
    line: int,
    column: int,
    expected: Optional[str] = None,
    got: Optional[str] = None,
    context: Optional[str] = None,
    suggestions: Optional[List[str]] = None
) -> Dict:
    """Create an immutable parse error structure"""
    return {
        'message': message,
        'line': line,
        'column': column,
        'expected': expected,
        'got': got,
        'context': context,
        'suggestions': suggestions or []
    }


def format_parse_error(error: Dict) -> str:
    """Format parse error as string"""
    error_msg = f"Parse error at line {error['line']}, column {error['column']}:\n"
    error_msg += f"  {error['message']}\n"

    if error['context']:
        error_msg += f"{error['context']}\n"

    if error['suggestions']:
        error_msg += "  Suggestions:\n"
        for suggestion in error['suggestions']:
            error_msg += f"    - {suggestion}\n"

    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 1) -> str:
    """Get context lines around the error"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)


def generate_suggestions(error: Dict) -> List[str]:
    """Generate helpful suggestions based on the error"""
    suggestions = []
    expected = error['expected']
    got = error['got']

    if expected == lexing.RPAREN:
        suggestions.append("Check for an unclosed '(' in the condition, parameter or argument list")

    if expected == lexing.RBRACE or (expected == lexing.LBRACE and got == lexing.EOF):
        suggestions.append("Blocks must be wrapped in '{' and '}'")

    if expected == lexing.IDENT and got is not None:
        suggestions.append("'let' and parameter lists need a name (letters, digits, '_')")

    if got == lexing.ASSIGN and expected is None:
        suggestions.append("Use '==' to compare values; '=' is only valid in 'let'")

    if got == lexing.ILLEGAL:
        suggestions.append("Remove characters that are not part of the language")

    return suggestions


def enhance_parse_errors(errors: List[Dict], source_text: str) -> List[Dict]:
    """Return copies of errors with source context and suggestions attached"""
    enhanced = []
    for error in errors:
        enhanced.append({
            **error,
            'context': get_context_lines(source_text, error['line'], error['column']),
            'suggestions': generate_suggestions(error)
        })
    return enhanced


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class MonkeyParseError(Exception):
    """Raised when a parse recorded one or more syntax diagnostics"""

    def __init__(self, errors: List[Dict]):
        self.errors = errors
        super().__init__(errors[0]['message'] if errors else "parse error")

    @property
    def messages(self) -> List[str]:
        return [error['message'] for error in self.errors]

    def __str__(self) -> str:
        return "\n".join(format_parse_error(error) for error in self.errors).rstrip()


class MonkeyRuntimeError(Exception):
    """Runtime error surfaced at the host boundary"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
