"""
FIDL Lexer (Tokenizer)
======================

This module implements the token source for the FIDL parser. It converts
source text into classified tokens, one at a time, on demand.

Token Categories
----------------
- Keywords: library, using, as, const, enum, interface, struct, union,
  the type words (array, vector, string, handle, request), the primitive
  type words (bool, status, int8 ... float64), the handle subtype words
  (process, thread, vmo, channel, event, ...) and true/false/default
- Identifiers: declaration, member and library names
- Numeric literals: 42, -1, 0x7F, 1.5e3
- String literals: "double quoted" (raw text is kept, quotes included)
- Punctuation: ( ) [ ] { } < > . , ; : ? = ->

Comments
--------
- Single-line: // comment

Malformed input (an unknown character, an unterminated string, a bare '-')
does not raise. The lexer returns a NOT_A_TOKEN token instead and the parser
reports it like any other unexpected token, so a malformed file always
produces exactly one diagnostic.

Example Usage
-------------
>>> from fidl_frontend.syntax.lexer import Lexer
>>> lexer = Lexer('library foo;', "foo.fidl")
>>> for token in lexer.tokenize():
...     print(token)
Token(LIBRARY, 'library', 1:1)
Token(IDENTIFIER, 'foo', 1:9)
Token(SEMICOLON, ';', 1:12)
Token(END_OF_FILE, 1:13)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from fidl_frontend.errors import SourceFile, SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the FIDL language.

    Keywords are reserved and get one kind each so the parser can dispatch
    on a single comparison.
    """

    # === Structural Tokens ===
    NOT_A_TOKEN = auto()    # Malformed input
    END_OF_FILE = auto()

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    NUMERIC_LITERAL = auto()
    STRING_LITERAL = auto()

    # === Punctuation ===
    LEFT_PAREN = auto()     # (
    RIGHT_PAREN = auto()    # )
    LEFT_SQUARE = auto()    # [
    RIGHT_SQUARE = auto()   # ]
    LEFT_CURLY = auto()     # {
    RIGHT_CURLY = auto()    # }
    LEFT_ANGLE = auto()     # <
    RIGHT_ANGLE = auto()    # >
    DOT = auto()            # .
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;
    COLON = auto()          # :
    QUESTION = auto()       # ?
    EQUAL = auto()          # =
    ARROW = auto()          # ->

    # === Keywords - Library Structure ===
    AS = auto()
    LIBRARY = auto()
    USING = auto()

    # === Keywords - Type Constructors ===
    ARRAY = auto()
    HANDLE = auto()
    REQUEST = auto()
    STRING = auto()
    VECTOR = auto()

    # === Keywords - Handle Subtypes ===
    PROCESS = auto()
    THREAD = auto()
    VMO = auto()
    CHANNEL = auto()
    EVENT = auto()          # also introduces an event method
    PORT = auto()
    INTERRUPT = auto()
    IOMAP = auto()
    PCI = auto()
    LOG = auto()
    SOCKET = auto()
    RESOURCE = auto()
    EVENTPAIR = auto()
    JOB = auto()
    VMAR = auto()
    FIFO = auto()
    HYPERVISOR = auto()
    GUEST = auto()
    TIMER = auto()

    # === Keywords - Primitive Types ===
    BOOL = auto()
    STATUS = auto()
    INT8 = auto()
    INT16 = auto()
    INT32 = auto()
    INT64 = auto()
    UINT8 = auto()
    UINT16 = auto()
    UINT32 = auto()
    UINT64 = auto()
    FLOAT32 = auto()
    FLOAT64 = auto()

    # === Keywords - Declarations ===
    CONST = auto()
    ENUM = auto()
    INTERFACE = auto()
    STRUCT = auto()
    UNION = auto()

    # === Keywords - Literals ===
    TRUE = auto()
    FALSE = auto()
    DEFAULT = auto()


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenKind] = {
    "as": TokenKind.AS,
    "library": TokenKind.LIBRARY,
    "using": TokenKind.USING,

    "array": TokenKind.ARRAY,
    "handle": TokenKind.HANDLE,
    "request": TokenKind.REQUEST,
    "string": TokenKind.STRING,
    "vector": TokenKind.VECTOR,

    "process": TokenKind.PROCESS,
    "thread": TokenKind.THREAD,
    "vmo": TokenKind.VMO,
    "channel": TokenKind.CHANNEL,
    "event": TokenKind.EVENT,
    "port": TokenKind.PORT,
    "interrupt": TokenKind.INTERRUPT,
    "iomap": TokenKind.IOMAP,
    "pci": TokenKind.PCI,
    "log": TokenKind.LOG,
    "socket": TokenKind.SOCKET,
    "resource": TokenKind.RESOURCE,
    "eventpair": TokenKind.EVENTPAIR,
    "job": TokenKind.JOB,
    "vmar": TokenKind.VMAR,
    "fifo": TokenKind.FIFO,
    "hypervisor": TokenKind.HYPERVISOR,
    "guest": TokenKind.GUEST,
    "timer": TokenKind.TIMER,

    "bool": TokenKind.BOOL,
    "status": TokenKind.STATUS,
    "int8": TokenKind.INT8,
    "int16": TokenKind.INT16,
    "int32": TokenKind.INT32,
    "int64": TokenKind.INT64,
    "uint8": TokenKind.UINT8,
    "uint16": TokenKind.UINT16,
    "uint32": TokenKind.UINT32,
    "uint64": TokenKind.UINT64,
    "float32": TokenKind.FLOAT32,
    "float64": TokenKind.FLOAT64,

    "const": TokenKind.CONST,
    "enum": TokenKind.ENUM,
    "interface": TokenKind.INTERFACE,
    "struct": TokenKind.STRUCT,
    "union": TokenKind.UNION,

    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "default": TokenKind.DEFAULT,
}


# =============================================================================
# Token Kind Classification
# =============================================================================
# The parser decides whether another list element follows by testing the
# lookahead kind against these sets.

PRIMITIVE_TYPE_KINDS = frozenset({
    TokenKind.BOOL,
    TokenKind.STATUS,
    TokenKind.INT8,
    TokenKind.INT16,
    TokenKind.INT32,
    TokenKind.INT64,
    TokenKind.UINT8,
    TokenKind.UINT16,
    TokenKind.UINT32,
    TokenKind.UINT64,
    TokenKind.FLOAT32,
    TokenKind.FLOAT64,
})

TYPE_START_KINDS = PRIMITIVE_TYPE_KINDS | frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.ARRAY,
    TokenKind.VECTOR,
    TokenKind.STRING,
    TokenKind.HANDLE,
    TokenKind.REQUEST,
})

LITERAL_START_KINDS = frozenset({
    TokenKind.DEFAULT,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.NUMERIC_LITERAL,
    TokenKind.STRING_LITERAL,
})

HANDLE_SUBTYPE_KINDS = frozenset({
    TokenKind.PROCESS,
    TokenKind.THREAD,
    TokenKind.VMO,
    TokenKind.CHANNEL,
    TokenKind.EVENT,
    TokenKind.PORT,
    TokenKind.INTERRUPT,
    TokenKind.IOMAP,
    TokenKind.PCI,
    TokenKind.LOG,
    TokenKind.SOCKET,
    TokenKind.RESOURCE,
    TokenKind.EVENTPAIR,
    TokenKind.JOB,
    TokenKind.VMAR,
    TokenKind.FIFO,
    TokenKind.HYPERVISOR,
    TokenKind.GUEST,
    TokenKind.TIMER,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from FIDL source.

    Tokens are immutable and copied by value into the AST wherever a
    name or literal is kept.

    Attributes:
        kind: The TokenKind classification
        text: The raw source text (quotes included for string literals,
              empty for END_OF_FILE)
        location: Where the token starts
    """
    kind: TokenKind
    text: str
    location: SourceLocation

    def __repr__(self) -> str:
        """Format token for debugging output."""
        where = f"{self.location.line}:{self.location.column}"
        if self.text:
            return f"Token({self.kind.name}, {self.text!r}, {where})"
        return f"Token({self.kind.name}, {where})"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes FIDL source text.

    The lexer is pulled by the parser one token at a time through lex().
    Once the input is exhausted every further call returns END_OF_FILE.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source_file: The SourceFile being tokenized
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Characters that can continue a numeric literal (hex, fractions, exponents)
    NUMERIC_CHARS = string.ascii_letters + string.digits + "._"

    PUNCTUATION = {
        "(": TokenKind.LEFT_PAREN,
        ")": TokenKind.RIGHT_PAREN,
        "[": TokenKind.LEFT_SQUARE,
        "]": TokenKind.RIGHT_SQUARE,
        "{": TokenKind.LEFT_CURLY,
        "}": TokenKind.RIGHT_CURLY,
        "<": TokenKind.LEFT_ANGLE,
        ">": TokenKind.RIGHT_ANGLE,
        ".": TokenKind.DOT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        ":": TokenKind.COLON,
        "?": TokenKind.QUESTION,
        "=": TokenKind.EQUAL,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source text.

        Args:
            source: The FIDL source to tokenize
            filename: Name of the source file (for diagnostics)
        """
        self.source_file = SourceFile(filename, source)
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

        # Start of the token being scanned
        self._start = 0
        self._start_line = 1
        self._start_column = 1

        self.token_count = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate every token in the source, ending with END_OF_FILE.

        Yields:
            Token objects for each lexical element
        """
        while True:
            token = self.lex()
            yield token
            if token.kind == TokenKind.END_OF_FILE:
                return

    def lex(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()
        self._mark_start()

        if self._at_end():
            return self._finish(TokenKind.END_OF_FILE)

        token = self._scan_token()
        self.token_count += 1
        return token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    @staticmethod
    def _is_digit(char: str) -> bool:
        """ASCII digits only; other Unicode digits are not numeric literal starts."""
        return char != "" and char in string.digits

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _mark_start(self) -> None:
        self._start = self._pos
        self._start_line = self._line
        self._start_column = self._column

    def _finish(self, kind: TokenKind) -> Token:
        """Create a token spanning from the marked start to the current position."""
        location = SourceLocation(
            self.filename,
            self._start_line,
            self._start_column,
            self.source_file,
        )
        return Token(kind, self.source[self._start:self._pos], location)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and // comments."""
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier()

        if self._is_digit(char):
            return self._scan_numeric_literal()

        if char == '"':
            return self._scan_string_literal()

        if char == "-":
            self._advance()
            if self._peek() == ">":
                self._advance()
                return self._finish(TokenKind.ARROW)
            if self._is_digit(self._peek()):
                return self._scan_numeric_literal()
            return self._finish(TokenKind.NOT_A_TOKEN)

        self._advance()
        if char in self.PUNCTUATION:
            return self._finish(self.PUNCTUATION[char])

        return self._finish(TokenKind.NOT_A_TOKEN)

    def _scan_identifier(self) -> Token:
        """Scan an identifier or keyword."""
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[self._start:self._pos]
        return self._finish(KEYWORDS.get(name, TokenKind.IDENTIFIER))

    def _scan_numeric_literal(self) -> Token:
        """
        Scan a numeric literal.

        The body is kept as raw text; interpreting hex, fractions and
        exponents belongs to semantic analysis.
        """
        while self._peek() and self._peek() in self.NUMERIC_CHARS:
            self._advance()
        return self._finish(TokenKind.NUMERIC_LITERAL)

    def _scan_string_literal(self) -> Token:
        """
        Scan a double-quoted string literal.

        Escape sequences are skipped over, not decoded. A newline or end of
        input before the closing quote makes the whole run a NOT_A_TOKEN.
        """
        self._advance()  # consume opening "

        while not self._at_end():
            char = self._peek()

            if char == '"':
                self._advance()  # consume closing "
                return self._finish(TokenKind.STRING_LITERAL)

            if char == "\n":
                break

            if char == "\\":
                self._advance()
                if self._peek() == "\n":
                    break
            self._advance()

        return self._finish(TokenKind.NOT_A_TOKEN)


# =============================================================================
# Kind Descriptions
# =============================================================================

_KIND_SPELLINGS: dict[TokenKind, str] = {
    **{kind: word for word, kind in KEYWORDS.items()},
    **{kind: char for char, kind in Lexer.PUNCTUATION.items()},
    TokenKind.ARROW: "->",
}


def describe_kind(kind: TokenKind) -> str:
    """
    Describe a token kind for messages.

    Keywords and punctuation are quoted as spelled in source
    (``'struct'``, ``';'``); other kinds use their lowercased name
    (``identifier``, ``end of file``).
    """
    spelling = _KIND_SPELLINGS.get(kind)
    if spelling is not None:
        return f"'{spelling}'"
    return kind.name.lower().replace("_", " ")
