"""
FIDL Recursive Descent Parser
=============================

This module implements the recursive descent parser for FIDL. It pulls
tokens from a token source and builds the AST defined in
fidl_frontend.syntax.ast.

Grammar (EBNF)
--------------
file                  ::= 'library' compound_identifier ';'
                          (using ';')*
                          ((const_declaration | enum_declaration
                            | interface_declaration | struct_declaration
                            | union_declaration) ';')*
                          EOF
using                 ::= 'using' compound_identifier ('as' IDENTIFIER)?
compound_identifier   ::= IDENTIFIER ('.' IDENTIFIER)*
constant              ::= compound_identifier | literal
literal               ::= STRING | NUMERIC | 'true' | 'false' | 'default'

type                  ::= primitive_type | array_type | vector_type
                        | string_type | handle_type | request_type
                        | compound_identifier '?'?
array_type            ::= 'array' '<' type '>' ':' constant
vector_type           ::= 'vector' '<' type '>' (':' constant)? '?'?
string_type           ::= 'string' (':' constant)? '?'?
handle_type           ::= 'handle' ('<' handle_subtype '>')? '?'?
request_type          ::= 'request' '<' compound_identifier '>' '?'?

const_declaration     ::= 'const' type IDENTIFIER '=' constant
enum_declaration      ::= 'enum' IDENTIFIER (':' primitive_type)?
                          '{' (enum_member ';')* '}'
enum_member           ::= IDENTIFIER ('=' (compound_identifier | NUMERIC))?
interface_declaration ::= 'interface' IDENTIFIER
                          (':' compound_identifier (',' compound_identifier)*)?
                          '{' ((const_declaration | enum_declaration
                                | interface_method) ';')* '}'
interface_method      ::= NUMERIC ':'
                          ( 'event' IDENTIFIER '(' parameter_list ')'
                          | IDENTIFIER '(' parameter_list ')'
                            ('->' '(' parameter_list ')')? )
parameter_list        ::= (type IDENTIFIER (',' type IDENTIFIER)*)?
struct_declaration    ::= 'struct' IDENTIFIER
                          '{' ((const_declaration | enum_declaration
                                | type IDENTIFIER ('=' constant)?) ';')* '}'
union_declaration     ::= 'union' IDENTIFIER
                          '{' ((const_declaration | enum_declaration
                                | type IDENTIFIER) ';')* '}'

One token of lookahead always decides which production to enter; the
parser never backtracks.

Failure Containment
-------------------
Grammar mismatches are not raised as exceptions. The first mismatch
reports one diagnostic through the ErrorReporter and marks the ParseState
unhealthy; fail() then returns None. Every production checks ``ok`` after
each sub-production and relays None upward, so later failures during the
unwind are silent and no partially built node escapes. There is no error
recovery: a failed parse yields no AST at all.

Example Usage
-------------
>>> from fidl_frontend.syntax.lexer import Lexer
>>> from fidl_frontend.syntax.errors import ErrorReporter
>>> from fidl_frontend.syntax.parser import Parser
>>> reporter = ErrorReporter()
>>> parser = Parser(Lexer('library foo; struct S { int32 x; };'), reporter)
>>> file = parser.parse_file()
>>> file.struct_declaration_list[0].identifier.name
'S'
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fidl_frontend.syntax.lexer import (
    Lexer,
    Token,
    TokenKind,
    PRIMITIVE_TYPE_KINDS,
    TYPE_START_KINDS,
    LITERAL_START_KINDS,
    HANDLE_SUBTYPE_KINDS,
    describe_kind,
)
from fidl_frontend.syntax.ast import (
    Nullability,
    PrimitiveTypeKind,
    HandleSubtype,
    Identifier,
    CompoundIdentifier,
    Literal,
    StringLiteral,
    NumericLiteral,
    TrueLiteral,
    FalseLiteral,
    DefaultLiteral,
    Constant,
    IdentifierConstant,
    LiteralConstant,
    Type,
    PrimitiveType,
    ArrayType,
    VectorType,
    StringType,
    HandleType,
    RequestType,
    IdentifierType,
    Using,
    ConstDeclaration,
    EnumMemberValue,
    EnumMemberValueIdentifier,
    EnumMemberValueNumeric,
    EnumMember,
    EnumDeclaration,
    Parameter,
    ParameterList,
    InterfaceMemberMethod,
    InterfaceDeclaration,
    StructMember,
    StructDeclaration,
    UnionMember,
    UnionDeclaration,
    File,
)
from fidl_frontend.syntax.errors import (
    ErrorReporter,
    UnexpectedTokenError,
    format_unexpected_token,
)

logger = logging.getLogger(__name__)


# Token kinds map one-to-one onto the AST enums by name.
_PRIMITIVE_TYPES: dict[TokenKind, PrimitiveTypeKind] = {
    kind: PrimitiveTypeKind[kind.name] for kind in PRIMITIVE_TYPE_KINDS
}

_HANDLE_SUBTYPES: dict[TokenKind, HandleSubtype] = {
    kind: HandleSubtype[kind.name] for kind in HANDLE_SUBTYPE_KINDS
}

# Single-kind start sets for list dispatch
_USING_START = frozenset({TokenKind.USING})
_CONST_START = frozenset({TokenKind.CONST})
_ENUM_START = frozenset({TokenKind.ENUM})
_INTERFACE_START = frozenset({TokenKind.INTERFACE})
_STRUCT_START = frozenset({TokenKind.STRUCT})
_UNION_START = frozenset({TokenKind.UNION})
_METHOD_START = frozenset({TokenKind.NUMERIC_LITERAL})
_ENUM_MEMBER_START = frozenset({TokenKind.IDENTIFIER})

# (start kinds, member production, destination list)
MemberAlternative = tuple[frozenset, Callable[[], object], list]


@dataclass
class ParseState:
    """
    Per-parse health state.

    Attributes:
        error_reporter: Where the diagnostic goes
        ok: False once a diagnostic has been reported; never reset
        failed_token: The token the diagnostic names, once failed
        expected: What the grammar wanted instead, once failed
    """
    error_reporter: ErrorReporter
    ok: bool = True
    failed_token: Optional[Token] = None
    expected: Optional[str] = None


class Parser:
    """
    Recursive descent parser for FIDL.

    A Parser handles exactly one parse. Construct a fresh one, with a fresh
    token source, for every file.

    Attributes:
        state: The ParseState for this parse
    """

    def __init__(self, token_source, error_reporter: ErrorReporter):
        """
        Initialize the parser.

        Args:
            token_source: Any object with a ``lex()`` method returning the
                          next Token (normally a Lexer)
            error_reporter: Sink for the diagnostic, if one is produced
        """
        self._token_source = token_source
        self.state = ParseState(error_reporter)

        # The one token of lookahead
        self._last_token: Token = token_source.lex()

    @property
    def ok(self) -> bool:
        """True until the first diagnostic is reported."""
        return self.state.ok

    def parse_file(self) -> Optional[File]:
        """
        Parse a complete file.

        Returns:
            The File AST, or None if the parse failed (the diagnostic is
            in the error reporter)
        """
        filename = self._last_token.location.filename
        logger.debug(f"Parsing {filename}")

        file = self._parse_file()
        if not self.ok:
            logger.debug(f"Parse of {filename} failed at {self.state.failed_token!r}")
            return None

        logger.debug(
            f"Parsed {filename}: library {file.library_name.name}, "
            f"{file.declaration_count()} declarations"
        )
        return file

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def peek(self) -> TokenKind:
        """Return the kind of the next unconsumed token."""
        return self._last_token.kind

    def consume(self) -> Token:
        """Return the next token and advance past it."""
        token = self._last_token
        self._last_token = self._token_source.lex()
        return token

    def consume_expecting(self, kind: TokenKind) -> Optional[Token]:
        """
        Consume the next token, failing if it is not of the given kind.

        Returns:
            The consumed token, or None on mismatch
        """
        token = self.consume()
        if token.kind != kind:
            return self.fail(token, describe_kind(kind))
        return token

    def maybe_consume(self, kind: TokenKind) -> bool:
        """Consume the next token only if it is of the given kind."""
        if self.peek() == kind:
            self.consume()
            return True
        return False

    def fail(
        self, token: Optional[Token] = None, expected: Optional[str] = None
    ) -> None:
        """
        Report an unexpected token, once.

        The first call renders the diagnostic and marks the parse unhealthy;
        later calls do nothing. Always returns None so productions can write
        ``return self.fail()``.

        Args:
            token: The offending token (defaults to the lookahead token)
            expected: Description of what would have been accepted
        """
        if self.state.ok:
            if token is None:
                token = self._last_token
            self.state.error_reporter.report_error(format_unexpected_token(token))
            self.state.ok = False
            self.state.failed_token = token
            self.state.expected = expected
        return None

    # =========================================================================
    # Names
    # =========================================================================

    def _parse_identifier(self) -> Optional[Identifier]:
        token = self.consume_expecting(TokenKind.IDENTIFIER)
        if not self.ok:
            return self.fail()
        return Identifier(token)

    def _parse_compound_identifier(self) -> Optional[CompoundIdentifier]:
        components = []

        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()
        components.append(identifier)

        while self.maybe_consume(TokenKind.DOT):
            identifier = self._parse_identifier()
            if not self.ok:
                return self.fail()
            components.append(identifier)

        return CompoundIdentifier(tuple(components))

    # =========================================================================
    # Literals and Constants
    # =========================================================================

    def _parse_string_literal(self) -> Optional[StringLiteral]:
        token = self.consume_expecting(TokenKind.STRING_LITERAL)
        if not self.ok:
            return self.fail()
        return StringLiteral(token)

    def _parse_numeric_literal(self) -> Optional[NumericLiteral]:
        token = self.consume_expecting(TokenKind.NUMERIC_LITERAL)
        if not self.ok:
            return self.fail()
        return NumericLiteral(token)

    def _parse_literal(self) -> Optional[Literal]:
        kind = self.peek()

        if kind == TokenKind.STRING_LITERAL:
            return self._parse_string_literal()
        if kind == TokenKind.NUMERIC_LITERAL:
            return self._parse_numeric_literal()

        if kind == TokenKind.TRUE:
            self.consume()
            return TrueLiteral()
        if kind == TokenKind.FALSE:
            self.consume()
            return FalseLiteral()
        if kind == TokenKind.DEFAULT:
            self.consume()
            return DefaultLiteral()

        return self.fail(expected="a literal")

    def _parse_constant(self) -> Optional[Constant]:
        kind = self.peek()

        if kind == TokenKind.IDENTIFIER:
            identifier = self._parse_compound_identifier()
            if not self.ok:
                return self.fail()
            return IdentifierConstant(identifier)

        if kind in LITERAL_START_KINDS:
            literal = self._parse_literal()
            if not self.ok:
                return self.fail()
            return LiteralConstant(literal)

        return self.fail(expected="a constant")

    # =========================================================================
    # Types
    # =========================================================================

    def _parse_nullability(self) -> Nullability:
        """A trailing '?' makes the preceding type nullable."""
        if self.maybe_consume(TokenKind.QUESTION):
            return Nullability.NULLABLE
        return Nullability.NONNULLABLE

    def _parse_maybe_element_count(self) -> Optional[Constant]:
        """Parse an optional ':' bound. Callers must check ``ok``."""
        if not self.maybe_consume(TokenKind.COLON):
            return None
        return self._parse_constant()

    def _parse_primitive_type(self) -> Optional[PrimitiveType]:
        type_kind = _PRIMITIVE_TYPES.get(self.peek())
        if type_kind is None:
            return self.fail(expected="a primitive type")
        self.consume()
        return PrimitiveType(type_kind)

    def _parse_array_type(self) -> Optional[ArrayType]:
        self.consume_expecting(TokenKind.ARRAY)
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.LEFT_ANGLE)
        if not self.ok:
            return self.fail()
        element_type = self._parse_type()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.RIGHT_ANGLE)
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.COLON)
        if not self.ok:
            return self.fail()
        element_count = self._parse_constant()
        if not self.ok:
            return self.fail()

        return ArrayType(element_type, element_count)

    def _parse_vector_type(self) -> Optional[VectorType]:
        self.consume_expecting(TokenKind.VECTOR)
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.LEFT_ANGLE)
        if not self.ok:
            return self.fail()
        element_type = self._parse_type()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.RIGHT_ANGLE)
        if not self.ok:
            return self.fail()
        maybe_element_count = self._parse_maybe_element_count()
        if not self.ok:
            return self.fail()
        nullability = self._parse_nullability()

        return VectorType(element_type, maybe_element_count, nullability)

    def _parse_string_type(self) -> Optional[StringType]:
        self.consume_expecting(TokenKind.STRING)
        if not self.ok:
            return self.fail()
        maybe_element_count = self._parse_maybe_element_count()
        if not self.ok:
            return self.fail()
        nullability = self._parse_nullability()

        return StringType(maybe_element_count, nullability)

    def _parse_handle_type(self) -> Optional[HandleType]:
        self.consume_expecting(TokenKind.HANDLE)
        if not self.ok:
            return self.fail()

        subtype = HandleSubtype.HANDLE
        if self.maybe_consume(TokenKind.LEFT_ANGLE):
            subtype = _HANDLE_SUBTYPES.get(self.peek())
            if subtype is None:
                return self.fail(expected="a handle subtype")
            self.consume()
            self.consume_expecting(TokenKind.RIGHT_ANGLE)
            if not self.ok:
                return self.fail()

        nullability = self._parse_nullability()
        return HandleType(subtype, nullability)

    def _parse_request_type(self) -> Optional[RequestType]:
        self.consume_expecting(TokenKind.REQUEST)
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.LEFT_ANGLE)
        if not self.ok:
            return self.fail()
        identifier = self._parse_compound_identifier()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.RIGHT_ANGLE)
        if not self.ok:
            return self.fail()
        nullability = self._parse_nullability()

        return RequestType(identifier, nullability)

    def _parse_identifier_type(self) -> Optional[IdentifierType]:
        identifier = self._parse_compound_identifier()
        if not self.ok:
            return self.fail()
        nullability = self._parse_nullability()

        return IdentifierType(identifier, nullability)

    def _parse_type(self) -> Optional[Type]:
        kind = self.peek()

        if kind == TokenKind.IDENTIFIER:
            type_ = self._parse_identifier_type()
        elif kind == TokenKind.ARRAY:
            type_ = self._parse_array_type()
        elif kind == TokenKind.VECTOR:
            type_ = self._parse_vector_type()
        elif kind == TokenKind.STRING:
            type_ = self._parse_string_type()
        elif kind == TokenKind.HANDLE:
            type_ = self._parse_handle_type()
        elif kind == TokenKind.REQUEST:
            type_ = self._parse_request_type()
        elif kind in PRIMITIVE_TYPE_KINDS:
            type_ = self._parse_primitive_type()
        else:
            return self.fail(expected="a type")

        if not self.ok:
            return self.fail()
        return type_

    # =========================================================================
    # Member Lists
    # =========================================================================

    def _parse_member_list(self, alternatives: list[MemberAlternative]) -> bool:
        """
        Parse ``(member ';')*``.

        The lookahead kind picks the alternative whose start set contains
        it; each parsed member must be followed by ';'. Any other kind ends
        the list without consuming anything.

        Returns:
            True while the parse is still healthy
        """
        while True:
            kind = self.peek()
            for start_kinds, parse_member, members in alternatives:
                if kind in start_kinds:
                    break
            else:
                return True

            member = parse_member()
            if not self.ok:
                return False
            members.append(member)

            self.consume_expecting(TokenKind.SEMICOLON)
            if not self.ok:
                return False

    def _parse_braced_member_list(self, alternatives: list[MemberAlternative]) -> bool:
        """
        Parse ``'{' (member ';')* '}'``.

        A token that starts no member must be the closing brace.
        """
        self.consume_expecting(TokenKind.LEFT_CURLY)
        if not self.ok:
            return False
        if not self._parse_member_list(alternatives):
            return False
        self.consume_expecting(TokenKind.RIGHT_CURLY)
        return self.ok

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_using(self) -> Optional[Using]:
        self.consume_expecting(TokenKind.USING)
        if not self.ok:
            return self.fail()
        using_path = self._parse_compound_identifier()
        if not self.ok:
            return self.fail()

        maybe_alias = None
        if self.maybe_consume(TokenKind.AS):
            maybe_alias = self._parse_identifier()
            if not self.ok:
                return self.fail()

        return Using(using_path, maybe_alias)

    def _parse_const_declaration(self) -> Optional[ConstDeclaration]:
        self.consume_expecting(TokenKind.CONST)
        if not self.ok:
            return self.fail()
        type_ = self._parse_type()
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.EQUAL)
        if not self.ok:
            return self.fail()
        constant = self._parse_constant()
        if not self.ok:
            return self.fail()

        return ConstDeclaration(type_, identifier, constant)

    def _parse_enum_member_value(self) -> Optional[EnumMemberValue]:
        kind = self.peek()

        if kind == TokenKind.IDENTIFIER:
            identifier = self._parse_compound_identifier()
            if not self.ok:
                return self.fail()
            return EnumMemberValueIdentifier(identifier)

        if kind == TokenKind.NUMERIC_LITERAL:
            literal = self._parse_numeric_literal()
            if not self.ok:
                return self.fail()
            return EnumMemberValueNumeric(literal)

        return self.fail(expected="an identifier or numeric literal")

    def _parse_enum_member(self) -> Optional[EnumMember]:
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        maybe_value = None
        if self.maybe_consume(TokenKind.EQUAL):
            maybe_value = self._parse_enum_member_value()
            if not self.ok:
                return self.fail()

        return EnumMember(identifier, maybe_value)

    def _parse_enum_declaration(self) -> Optional[EnumDeclaration]:
        members: list[EnumMember] = []

        self.consume_expecting(TokenKind.ENUM)
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        maybe_subtype = None
        if self.maybe_consume(TokenKind.COLON):
            maybe_subtype = self._parse_primitive_type()
            if not self.ok:
                return self.fail()

        if not self._parse_braced_member_list([
            (_ENUM_MEMBER_START, self._parse_enum_member, members),
        ]):
            return self.fail()

        return EnumDeclaration(identifier, maybe_subtype, tuple(members))

    def _parse_parameter(self) -> Optional[Parameter]:
        type_ = self._parse_type()
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        return Parameter(type_, identifier)

    def _parse_parameter_list(self) -> Optional[ParameterList]:
        """Parse the comma-separated parameters between parentheses (may be empty)."""
        parameters: list[Parameter] = []

        if self.peek() in TYPE_START_KINDS:
            parameter = self._parse_parameter()
            if not self.ok:
                return self.fail()
            parameters.append(parameter)

            while self.maybe_consume(TokenKind.COMMA):
                # A comma must be followed by another parameter
                if self.peek() not in TYPE_START_KINDS:
                    return self.fail(expected="a type")
                parameter = self._parse_parameter()
                if not self.ok:
                    return self.fail()
                parameters.append(parameter)

        return ParameterList(tuple(parameters))

    def _parse_parenthesized_parameters(self) -> Optional[ParameterList]:
        self.consume_expecting(TokenKind.LEFT_PAREN)
        if not self.ok:
            return self.fail()
        parameter_list = self._parse_parameter_list()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.RIGHT_PAREN)
        if not self.ok:
            return self.fail()
        return parameter_list

    def _parse_interface_member_method(self) -> Optional[InterfaceMemberMethod]:
        ordinal = self._parse_numeric_literal()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.COLON)
        if not self.ok:
            return self.fail()

        maybe_request = None
        maybe_response = None

        if self.maybe_consume(TokenKind.EVENT):
            # Events carry only the "response" list: server to client
            identifier = self._parse_identifier()
            if not self.ok:
                return self.fail()
            maybe_response = self._parse_parenthesized_parameters()
            if not self.ok:
                return self.fail()
        else:
            identifier = self._parse_identifier()
            if not self.ok:
                return self.fail()
            maybe_request = self._parse_parenthesized_parameters()
            if not self.ok:
                return self.fail()
            if self.maybe_consume(TokenKind.ARROW):
                maybe_response = self._parse_parenthesized_parameters()
                if not self.ok:
                    return self.fail()

        return InterfaceMemberMethod(ordinal, identifier, maybe_request, maybe_response)

    def _parse_interface_declaration(self) -> Optional[InterfaceDeclaration]:
        superinterfaces: list[CompoundIdentifier] = []
        const_members: list[ConstDeclaration] = []
        enum_members: list[EnumDeclaration] = []
        method_members: list[InterfaceMemberMethod] = []

        self.consume_expecting(TokenKind.INTERFACE)
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        if self.maybe_consume(TokenKind.COLON):
            while True:
                superinterface = self._parse_compound_identifier()
                if not self.ok:
                    return self.fail()
                superinterfaces.append(superinterface)
                if not self.maybe_consume(TokenKind.COMMA):
                    break

        if not self._parse_braced_member_list([
            (_CONST_START, self._parse_const_declaration, const_members),
            (_ENUM_START, self._parse_enum_declaration, enum_members),
            (_METHOD_START, self._parse_interface_member_method, method_members),
        ]):
            return self.fail()

        return InterfaceDeclaration(
            identifier,
            tuple(superinterfaces),
            tuple(const_members),
            tuple(enum_members),
            tuple(method_members),
        )

    def _parse_struct_member(self) -> Optional[StructMember]:
        type_ = self._parse_type()
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        maybe_default_value = None
        if self.maybe_consume(TokenKind.EQUAL):
            maybe_default_value = self._parse_constant()
            if not self.ok:
                return self.fail()

        return StructMember(type_, identifier, maybe_default_value)

    def _parse_struct_declaration(self) -> Optional[StructDeclaration]:
        const_members: list[ConstDeclaration] = []
        enum_members: list[EnumDeclaration] = []
        members: list[StructMember] = []

        self.consume_expecting(TokenKind.STRUCT)
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        if not self._parse_braced_member_list([
            (_CONST_START, self._parse_const_declaration, const_members),
            (_ENUM_START, self._parse_enum_declaration, enum_members),
            (TYPE_START_KINDS, self._parse_struct_member, members),
        ]):
            return self.fail()

        return StructDeclaration(
            identifier, tuple(const_members), tuple(enum_members), tuple(members)
        )

    def _parse_union_member(self) -> Optional[UnionMember]:
        type_ = self._parse_type()
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        return UnionMember(type_, identifier)

    def _parse_union_declaration(self) -> Optional[UnionDeclaration]:
        const_members: list[ConstDeclaration] = []
        enum_members: list[EnumDeclaration] = []
        members: list[UnionMember] = []

        self.consume_expecting(TokenKind.UNION)
        if not self.ok:
            return self.fail()
        identifier = self._parse_identifier()
        if not self.ok:
            return self.fail()

        if not self._parse_braced_member_list([
            (_CONST_START, self._parse_const_declaration, const_members),
            (_ENUM_START, self._parse_enum_declaration, enum_members),
            (TYPE_START_KINDS, self._parse_union_member, members),
        ]):
            return self.fail()

        return UnionDeclaration(
            identifier, tuple(const_members), tuple(enum_members), tuple(members)
        )

    # =========================================================================
    # File
    # =========================================================================

    def _parse_file(self) -> Optional[File]:
        using_list: list[Using] = []
        const_declaration_list: list[ConstDeclaration] = []
        enum_declaration_list: list[EnumDeclaration] = []
        interface_declaration_list: list[InterfaceDeclaration] = []
        struct_declaration_list: list[StructDeclaration] = []
        union_declaration_list: list[UnionDeclaration] = []

        self.consume_expecting(TokenKind.LIBRARY)
        if not self.ok:
            return self.fail()
        library_name = self._parse_compound_identifier()
        if not self.ok:
            return self.fail()
        self.consume_expecting(TokenKind.SEMICOLON)
        if not self.ok:
            return self.fail()

        if not self._parse_member_list([
            (_USING_START, self._parse_using, using_list),
        ]):
            return self.fail()

        if not self._parse_member_list([
            (_CONST_START, self._parse_const_declaration, const_declaration_list),
            (_ENUM_START, self._parse_enum_declaration, enum_declaration_list),
            (_INTERFACE_START, self._parse_interface_declaration, interface_declaration_list),
            (_STRUCT_START, self._parse_struct_declaration, struct_declaration_list),
            (_UNION_START, self._parse_union_declaration, union_declaration_list),
        ]):
            return self.fail()

        # Anything left over (including a late 'using') is unexpected here
        self.consume_expecting(TokenKind.END_OF_FILE)
        if not self.ok:
            return self.fail()

        return File(
            library_name,
            tuple(using_list),
            tuple(const_declaration_list),
            tuple(enum_declaration_list),
            tuple(interface_declaration_list),
            tuple(struct_declaration_list),
            tuple(union_declaration_list),
        )


def parse_source(
    source: str,
    filename: str = "<input>",
    error_reporter: Optional[ErrorReporter] = None,
) -> File:
    """
    Parse FIDL source text into an AST.

    This is a convenience function that combines lexing and parsing.

    Args:
        source: The FIDL source text
        filename: Source filename for diagnostics
        error_reporter: Receives the diagnostic on failure (a private
                        reporter is used when omitted)

    Returns:
        The root File node

    Raises:
        UnexpectedTokenError: If parsing fails
    """
    reporter = error_reporter if error_reporter is not None else ErrorReporter()
    parser = Parser(Lexer(source, filename), reporter)
    file = parser.parse_file()
    if file is None:
        token = parser.state.failed_token
        raise UnexpectedTokenError(
            token.text or token.kind.name,
            expected=parser.state.expected,
            location=token.location,
            source_line=token.location.source_line(),
        )
    return file
