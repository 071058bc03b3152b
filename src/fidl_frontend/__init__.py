"""
FIDL Frontend - Parser for the FIDL Interface Definition Language
=================================================================

This package provides the syntactic front end of a FIDL compiler. FIDL
files declare a library, the libraries it uses, and the constants, enums,
interfaces, structs and unions it defines. The frontend turns that text
into a typed abstract syntax tree for later compiler stages.

Main Components
---------------
- **syntax.lexer**: Token source (Lexer, TokenKind, Token)
- **syntax.parser**: Recursive descent parser producing a File AST
- **syntax.ast**: AST node types, ASTVisitor and ASTPrinter
- **syntax.frontend**: Multi-file driver (FidlFrontend)
- **cli**: The ``fidlparse`` command

Quick Start
-----------
Parse text:
    >>> from fidl_frontend import parse_source
    >>> file = parse_source('library foo; enum E : uint8 { A = 1; };')
    >>> file.enum_declaration_list[0].identifier.name
    'E'

Parse files:
    >>> from fidl_frontend import FidlFrontend
    >>> for result in FidlFrontend().parse_files(["foo.fidl"]):
    ...     result.raise_for_errors()

Or use the command-line tool:
    $ fidlparse --ast foo.fidl

Version History
---------------
1.0.0 - Initial release with lexer, parser, AST printer and fidlparse
"""

# =============================================================================
# Version Information
# =============================================================================

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from fidl_frontend.errors import (
    FidlError,
    FidlSyntaxError,
    FidlParseError,
    UnexpectedTokenError,
    SourceFile,
    SourceLocation,
)
from fidl_frontend.syntax import (
    Lexer,
    Token,
    TokenKind,
    ErrorReporter,
    ASTPrinter,
    ASTVisitor,
    File,
    Parser,
    ParseState,
    parse_source,
    FidlFrontend,
    FrontendOptions,
    ParseResult,
)

__all__ = [
    # Version info
    "__version__",
    # Errors
    "FidlError",
    "FidlSyntaxError",
    "FidlParseError",
    "UnexpectedTokenError",
    "SourceFile",
    "SourceLocation",
    # Syntax
    "Lexer",
    "Token",
    "TokenKind",
    "ErrorReporter",
    "ASTPrinter",
    "ASTVisitor",
    "File",
    "Parser",
    "ParseState",
    "parse_source",
    # Driver
    "FidlFrontend",
    "FrontendOptions",
    "ParseResult",
]
