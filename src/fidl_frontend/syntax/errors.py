"""
FIDL Syntax Diagnostics
=======================

This module holds the diagnostic sink the parser reports into, and the
renderer for the parser's one kind of diagnostic.

The parser has a single error kind, the unexpected token. Its diagnostic
names the offending token text, its 1-based line number, and the whole
source line:

    found unexpected token: {
    on line #1:

    library foo; struct { int32 x; };

A parse reports at most one such diagnostic; see
fidl_frontend.syntax.parser for the containment rules.
"""

import logging
from typing import List

from fidl_frontend.errors import (
    FidlError,
    FidlSyntaxError,
    FidlParseError,
    UnexpectedTokenError,
)
from fidl_frontend.syntax.lexer import Token

logger = logging.getLogger(__name__)

__all__ = [
    "FidlError",
    "FidlSyntaxError",
    "FidlParseError",
    "UnexpectedTokenError",
    "ErrorReporter",
    "format_unexpected_token",
]


def format_unexpected_token(token: Token) -> str:
    """
    Render the diagnostic for a token the grammar could not accept.

    Args:
        token: The offending token

    Returns:
        The diagnostic text, ending in a newline
    """
    location = token.location
    return (
        f"found unexpected token: {token.text}\n"
        f"on line #{location.line}:\n\n"
        f"{location.source_line()}\n"
    )


# =============================================================================
# Diagnostic Sink
# =============================================================================

class ErrorReporter:
    """
    Collects diagnostics reported during parsing.

    One reporter is handed to each Parser. The parser reports at most
    one error into it; the reporter itself does not enforce that, so a
    driver may share one reporter across several files.

    Example:
        reporter = ErrorReporter()
        file = Parser(Lexer(text, "foo.fidl"), reporter).parse_file()
        if file is None:
            print(reporter.report())
    """

    def __init__(self):
        self.errors: List[str] = []

    def report_error(self, message: str) -> None:
        """Add a diagnostic."""
        logger.debug(f"Reported error: {message.splitlines()[0] if message else ''}")
        self.errors.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been reported."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of reported errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors for display."""
        return "\n".join(self.errors)

    def clear(self) -> None:
        """Discard all reported errors."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a FidlParseError if any errors were reported."""
        if self.has_errors():
            raise FidlParseError(self.report())
