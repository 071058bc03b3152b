"""
FIDL Frontend Error Hierarchy
=============================

This module defines the exception hierarchy for the FIDL frontend, along
with the source file and source location types every diagnostic refers to.
All exceptions inherit from FidlError, allowing callers to catch all
frontend errors with a single except clause if desired.

Exception Hierarchy
-------------------
FidlError (base)
└── FidlSyntaxError - lexer and parser syntax errors
    ├── UnexpectedTokenError - token the grammar could not accept
    └── FidlParseError - aggregate report of a failed parse

Error Message Format
--------------------
Errors that carry a location follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)

The parser's own diagnostic (the one delivered through the ErrorReporter)
uses the fixed "found unexpected token" format instead; see
fidl_frontend.syntax.errors.format_unexpected_token.
"""

from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class FidlError(Exception):
    """
    Base exception for all FIDL frontend errors.

    Callers can catch every frontend error with a single except clause:

        try:
            library = parse_source(text, "foo.fidl")
        except FidlError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Tracking
# =============================================================================

class SourceFile:
    """
    The full text of one input file.

    Locations keep a reference to their SourceFile so that a diagnostic can
    recover the complete line a token sits on.

    Attributes:
        filename: Name of the file (or "<input>" for string input)
        data: The complete source text
    """

    def __init__(self, filename: str, data: str):
        self.filename = filename
        self.data = data
        self._lines: Optional[list[str]] = None

    def lines(self) -> list[str]:
        """
        Return the source split into lines, without terminators.

        Only '\\n' ends a line, matching the lexer's line count; a '\\r'
        before it is dropped.
        """
        if self._lines is None:
            self._lines = [
                line[:-1] if line.endswith("\r") else line
                for line in self.data.split("\n")
            ]
        return self._lines

    def line_text(self, line: int) -> str:
        """
        Return the text of a 1-based line number.

        Lines past the end of the file (the END_OF_FILE token of a file
        ending in a newline lives there) come back as an empty string.
        """
        lines = self.lines()
        if 0 < line <= len(lines):
            return lines[line - 1]
        return ""

    def __repr__(self) -> str:
        return f"SourceFile({self.filename!r}, {len(self.data)} chars)"


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    The immutable (frozen) design ensures locations cannot be accidentally
    modified once a token has been produced.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        source_file: The file the location points into (not compared)
    """
    filename: str
    line: int
    column: int
    source_file: Optional[SourceFile] = field(
        default=None, compare=False, repr=False
    )

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    def source_line(self) -> str:
        """Return the full text of the line this location is on."""
        if self.source_file is None:
            return ""
        return self.source_file.line_text(self.line)


# =============================================================================
# Syntax Exceptions
# =============================================================================

class FidlSyntaxError(FidlError):
    """
    Syntax error in FIDL source.

    This class provides the common message formatting: location prefix,
    source context with a caret pointer, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            foo.fidl:3:8: error: unexpected token '{'
                struct { int32 x; };
                       ^
            hint: expected identifier
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedTokenError(FidlSyntaxError):
    """
    Unexpected token during parsing.

    Raised at API boundaries when a parse failed on a token that doesn't
    match any grammar rule available at that point.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class FidlParseError(FidlSyntaxError):
    """
    A parse that failed, carrying the diagnostic report.

    The message is already the formatted report produced by the
    ErrorReporter and is passed through without another prefix.
    """

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted report."""
        return self.message
