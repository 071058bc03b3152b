"""
FIDL Frontend Driver
====================

This module provides the file-level interface to the FIDL parser. It
reads source files, runs a fresh Lexer and Parser over each one and
collects the outcome:

    Source → Lex → Parse → ParseResult

Usage
-----
Command line:
    $ fidlparse foo.fidl bar.fidl

Programmatic:
    >>> from fidl_frontend import FidlFrontend
    >>> result = FidlFrontend().parse_source('library foo;', "foo.fidl")
    >>> result.ok
    True

Error Handling
--------------
A failed parse does not raise. The ParseResult carries the diagnostic
text in ``errors`` and ``ast`` is None; call raise_for_errors() to turn
a failure into a FidlParseError.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from fidl_frontend.syntax.ast import File
from fidl_frontend.syntax.errors import ErrorReporter, FidlParseError
from fidl_frontend.syntax.lexer import Lexer
from fidl_frontend.syntax.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Frontend configuration options.

    Attributes:
        encoding: Text encoding used to read source files
        fail_fast: Stop at the first file that fails to parse. When False
                   every file is parsed and each result reports on its own.
    """
    encoding: str = "utf-8"
    fail_fast: bool = True


@dataclass
class ParseResult:
    """
    Result of parsing one file.

    Attributes:
        filename: Source filename
        ast: The File AST (None if the parse failed)
        token_count: Number of tokens the lexer produced
        errors: Diagnostic messages (at most one per parse)
    """
    filename: str = ""
    ast: Optional[File] = None
    token_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.ast is not None and not self.errors

    def raise_for_errors(self) -> None:
        """Raise a FidlParseError if this parse failed."""
        if not self.ok:
            raise FidlParseError("\n".join(self.errors))


class FidlFrontend:
    """
    Parses FIDL source files into ASTs.

    Example:
        frontend = FidlFrontend()
        for result in frontend.parse_files(["a.fidl", "b.fidl"]):
            print(result.filename, result.ok)

    Attributes:
        options: Frontend configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        """
        Initialize the frontend.

        Args:
            options: Frontend configuration (uses defaults if None)
        """
        self.options = options or FrontendOptions()

    def parse_source(self, source: str, filename: str = "<input>") -> ParseResult:
        """
        Parse FIDL source text.

        Args:
            source: FIDL source text
            filename: Source filename for diagnostics

        Returns:
            ParseResult with the AST or the diagnostic
        """
        reporter = ErrorReporter()
        lexer = Lexer(source, filename)
        parser = Parser(lexer, reporter)

        ast = parser.parse_file()

        result = ParseResult(
            filename=filename,
            ast=ast,
            token_count=lexer.token_count,
            errors=list(reporter.errors),
        )
        if result.ok:
            logger.debug(f"{filename}: {result.token_count} tokens")
        return result

    def parse_file(self, filepath: str) -> ParseResult:
        """
        Parse a FIDL source file.

        Args:
            filepath: Path to the .fidl file

        Returns:
            ParseResult with the AST or the diagnostic

        Raises:
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.parse_source(source, str(filepath))

    def parse_files(self, filepaths: Iterable[str]) -> list[ParseResult]:
        """
        Parse several files, each with its own Parser and ErrorReporter.

        With fail_fast set, parsing stops after the first failed file and
        the returned list ends with that file's result.

        Args:
            filepaths: Paths to the .fidl files, in order

        Returns:
            One ParseResult per file parsed
        """
        results = []
        for filepath in filepaths:
            result = self.parse_file(filepath)
            results.append(result)
            if not result.ok and self.options.fail_fast:
                logger.debug(f"Stopping after failure in {filepath}")
                break
        return results
