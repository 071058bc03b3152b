"""
FIDL Syntax Layer
=================

This module implements the syntactic front end for FIDL, the interface
definition language: it turns .fidl source text into an abstract syntax
tree and performs no semantic checks.

- A lexer producing classified tokens on demand
- A recursive descent parser with one token of lookahead
- Frozen dataclass AST nodes, a visitor and an outline printer
- A diagnostic sink receiving at most one error per parse

Pipeline
--------
    FIDL Source → Lexer → Parser → File AST

Usage
-----
>>> from fidl_frontend.syntax import parse_source
>>> file = parse_source('library fuchsia.io; struct S { int32 x; };')
>>> file.library_name.name
'fuchsia.io'
"""

from fidl_frontend.syntax.lexer import Lexer, Token, TokenKind
from fidl_frontend.syntax.errors import (
    ErrorReporter,
    FidlSyntaxError,
    FidlParseError,
    UnexpectedTokenError,
    format_unexpected_token,
)
from fidl_frontend.syntax.ast import ASTPrinter, ASTVisitor, File
from fidl_frontend.syntax.parser import ParseState, Parser, parse_source
from fidl_frontend.syntax.frontend import FidlFrontend, FrontendOptions, ParseResult

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    # Diagnostics
    "ErrorReporter",
    "FidlSyntaxError",
    "FidlParseError",
    "UnexpectedTokenError",
    "format_unexpected_token",
    # AST
    "ASTPrinter",
    "ASTVisitor",
    "File",
    # Parser
    "ParseState",
    "Parser",
    "parse_source",
    # Driver
    "FidlFrontend",
    "FrontendOptions",
    "ParseResult",
]
