"""
FIDL Abstract Syntax Tree (AST) Definitions
===========================================

This module defines the AST node types produced by the FIDL parser.
The AST captures every declaration and type form of the language as
written, ready for semantic analysis (name resolution, layout, code
generation) in later stages.

Node Families
-------------
- Names: Identifier, CompoundIdentifier
- Literal = StringLiteral | NumericLiteral | TrueLiteral | FalseLiteral
            | DefaultLiteral
- Constant = IdentifierConstant | LiteralConstant
- Type = PrimitiveType | ArrayType | VectorType | StringType | HandleType
         | RequestType | IdentifierType
- EnumMemberValue = EnumMemberValueIdentifier | EnumMemberValueNumeric
- Declarations: Using, ConstDeclaration, EnumMember, EnumDeclaration,
  Parameter, ParameterList, InterfaceMemberMethod, InterfaceDeclaration,
  StructMember, StructDeclaration, UnionMember, UnionDeclaration
- File - root node, one per parsed file

Design Notes
------------
- All nodes are frozen dataclasses; nothing is mutated after construction
- Every list-valued field is a tuple, never None (possibly empty)
- The tree is strictly owned top-down: no parent pointers, no sharing
  except Token values, which are immutable
- The grammar categories are Union aliases rather than a class hierarchy;
  consumers branch on the concrete class
"""

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Optional, Union

from fidl_frontend.syntax.lexer import Token


# =============================================================================
# Enumerations
# =============================================================================

class Nullability(Enum):
    """Whether a type admits an absent value (trailing '?')."""
    NONNULLABLE = auto()
    NULLABLE = auto()


class PrimitiveTypeKind(Enum):
    """The built-in scalar types."""
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


class HandleSubtype(Enum):
    """Kernel object kinds a handle can be restricted to."""
    HANDLE = auto()     # generic, no <...> clause
    PROCESS = auto()
    THREAD = auto()
    VMO = auto()
    CHANNEL = auto()
    EVENT = auto()
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


# =============================================================================
# Names
# =============================================================================

@dataclass(frozen=True)
class Identifier:
    """A single name token."""
    token: Token

    @property
    def name(self) -> str:
        return self.token.text


@dataclass(frozen=True)
class CompoundIdentifier:
    """
    A dotted, namespace-qualified name such as ``fuchsia.io.File``.

    Attributes:
        components: The identifiers in source order (at least one)
    """
    components: tuple[Identifier, ...]

    @property
    def name(self) -> str:
        return ".".join(component.name for component in self.components)


# =============================================================================
# Literals and Constants
# =============================================================================

@dataclass(frozen=True)
class StringLiteral:
    """A string literal; ``token.text`` keeps the surrounding quotes."""
    token: Token

    @property
    def value(self) -> str:
        return self.token.text


@dataclass(frozen=True)
class NumericLiteral:
    """A numeric literal, kept as raw text."""
    token: Token

    @property
    def value(self) -> str:
        return self.token.text


@dataclass(frozen=True)
class TrueLiteral:
    pass


@dataclass(frozen=True)
class FalseLiteral:
    pass


@dataclass(frozen=True)
class DefaultLiteral:
    pass


Literal = Union[StringLiteral, NumericLiteral, TrueLiteral, FalseLiteral, DefaultLiteral]


@dataclass(frozen=True)
class IdentifierConstant:
    """A constant given by name, resolved during semantic analysis."""
    identifier: CompoundIdentifier


@dataclass(frozen=True)
class LiteralConstant:
    """A constant given by a literal value."""
    literal: Literal


Constant = Union[IdentifierConstant, LiteralConstant]


# =============================================================================
# Types
# =============================================================================

@dataclass(frozen=True)
class PrimitiveType:
    kind: PrimitiveTypeKind


@dataclass(frozen=True)
class ArrayType:
    """
    Fixed-size array: ``array<T>:N``.

    Attributes:
        element_type: The element type
        element_count: The mandatory size constant
    """
    element_type: "Type"
    element_count: Constant


@dataclass(frozen=True)
class VectorType:
    """
    Variable-size vector: ``vector<T>``, ``vector<T>:N``, with optional '?'.

    Attributes:
        element_type: The element type
        maybe_element_count: Upper bound, or None when unbounded
        nullability: NULLABLE when written with a trailing '?'
    """
    element_type: "Type"
    maybe_element_count: Optional[Constant] = None
    nullability: Nullability = Nullability.NONNULLABLE


@dataclass(frozen=True)
class StringType:
    """``string``, ``string:N``, with optional '?'."""
    maybe_element_count: Optional[Constant] = None
    nullability: Nullability = Nullability.NONNULLABLE


@dataclass(frozen=True)
class HandleType:
    """``handle`` or ``handle<subtype>``, with optional '?'."""
    subtype: HandleSubtype = HandleSubtype.HANDLE
    nullability: Nullability = Nullability.NONNULLABLE


@dataclass(frozen=True)
class RequestType:
    """``request<Interface>``: the server end of a channel, with optional '?'."""
    identifier: CompoundIdentifier
    nullability: Nullability = Nullability.NONNULLABLE


@dataclass(frozen=True)
class IdentifierType:
    """A named type (struct, union, enum, interface ...), with optional '?'."""
    identifier: CompoundIdentifier
    nullability: Nullability = Nullability.NONNULLABLE


Type = Union[
    PrimitiveType,
    ArrayType,
    VectorType,
    StringType,
    HandleType,
    RequestType,
    IdentifierType,
]


# =============================================================================
# Declarations
# =============================================================================

@dataclass(frozen=True)
class Using:
    """``using fuchsia.io as io``: an import with an optional alias."""
    using_path: CompoundIdentifier
    maybe_alias: Optional[Identifier] = None


@dataclass(frozen=True)
class ConstDeclaration:
    type: Type
    identifier: Identifier
    constant: Constant


@dataclass(frozen=True)
class EnumMemberValueIdentifier:
    identifier: CompoundIdentifier


@dataclass(frozen=True)
class EnumMemberValueNumeric:
    literal: NumericLiteral


EnumMemberValue = Union[EnumMemberValueIdentifier, EnumMemberValueNumeric]


@dataclass(frozen=True)
class EnumMember:
    """
    One enum member. A member written without ``= value`` keeps
    ``maybe_value`` as None; numbering is left to semantic analysis.
    """
    identifier: Identifier
    maybe_value: Optional[EnumMemberValue] = None


@dataclass(frozen=True)
class EnumDeclaration:
    """
    Attributes:
        identifier: The enum name
        maybe_subtype: Underlying primitive type, if given after ':'
        members: Members in source order (duplicates are not checked here)
    """
    identifier: Identifier
    maybe_subtype: Optional[PrimitiveType] = None
    members: tuple[EnumMember, ...] = ()


@dataclass(frozen=True)
class Parameter:
    type: Type
    identifier: Identifier


@dataclass(frozen=True)
class ParameterList:
    parameter_list: tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class InterfaceMemberMethod:
    """
    One interface method.

    Method shapes:
        - two-way ``1: Foo(a) -> (b)``: both parameter lists set
        - one-way ``1: Foo(a)``: response is None
        - event ``1: event Foo(b)``: request is None, response set

    Attributes:
        ordinal: The numeric tag identifying the method on the wire
        identifier: The method name
        maybe_request: Request parameters (None for events)
        maybe_response: Response parameters (None for one-way methods)
    """
    ordinal: NumericLiteral
    identifier: Identifier
    maybe_request: Optional[ParameterList] = None
    maybe_response: Optional[ParameterList] = None

    @property
    def is_event(self) -> bool:
        return self.maybe_request is None and self.maybe_response is not None


@dataclass(frozen=True)
class InterfaceDeclaration:
    identifier: Identifier
    superinterfaces: tuple[CompoundIdentifier, ...] = ()
    const_members: tuple[ConstDeclaration, ...] = ()
    enum_members: tuple[EnumDeclaration, ...] = ()
    method_members: tuple[InterfaceMemberMethod, ...] = ()


@dataclass(frozen=True)
class StructMember:
    type: Type
    identifier: Identifier
    maybe_default_value: Optional[Constant] = None


@dataclass(frozen=True)
class StructDeclaration:
    identifier: Identifier
    const_members: tuple[ConstDeclaration, ...] = ()
    enum_members: tuple[EnumDeclaration, ...] = ()
    members: tuple[StructMember, ...] = ()


@dataclass(frozen=True)
class UnionMember:
    type: Type
    identifier: Identifier


@dataclass(frozen=True)
class UnionDeclaration:
    identifier: Identifier
    const_members: tuple[ConstDeclaration, ...] = ()
    enum_members: tuple[EnumDeclaration, ...] = ()
    members: tuple[UnionMember, ...] = ()


# =============================================================================
# File Root Node
# =============================================================================

@dataclass(frozen=True)
class File:
    """
    Root node of the AST representing one parsed .fidl file.

    Declarations are grouped by kind into independent lists, each in
    source order. The interleaving across kinds is not kept.

    Attributes:
        library_name: The name from the ``library`` header
        using_list: Imports, in source order
        const_declaration_list, enum_declaration_list,
        interface_declaration_list, struct_declaration_list,
        union_declaration_list: Top-level declarations by kind
    """
    library_name: CompoundIdentifier
    using_list: tuple[Using, ...] = ()
    const_declaration_list: tuple[ConstDeclaration, ...] = ()
    enum_declaration_list: tuple[EnumDeclaration, ...] = ()
    interface_declaration_list: tuple[InterfaceDeclaration, ...] = ()
    struct_declaration_list: tuple[StructDeclaration, ...] = ()
    union_declaration_list: tuple[UnionDeclaration, ...] = ()

    def declaration_count(self) -> int:
        """Return the number of top-level declarations of every kind."""
        return (
            len(self.const_declaration_list)
            + len(self.enum_declaration_list)
            + len(self.interface_declaration_list)
            + len(self.struct_declaration_list)
            + len(self.union_declaration_list)
        )


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; everything else is walked by generic_visit.

    Usage:
        class StructCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_StructDeclaration(self, node):
                self.count += 1
                self.generic_visit(node)

        counter = StructCounter()
        counter.visit(file)
    """

    def visit(self, node: Any) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by node type)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Any) -> None:
        """Visit every child node, in field order."""
        for node_field in fields(node):
            value = getattr(node, node_field.name)
            if isinstance(value, tuple):
                for item in value:
                    if _is_node(item):
                        self.visit(item)
            elif _is_node(value):
                self.visit(value)


def _is_node(value: Any) -> bool:
    # Token is a dataclass too, but it is a leaf value, not a node.
    return (
        hasattr(value, "__dataclass_fields__")
        and not isinstance(value, (type, Token))
    )


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented outline of a File. Types and constants are
    written back in source-like notation.

    Usage:
        printer = ASTPrinter()
        output = printer.print(file)
        print(output)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Any) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _visit_all(self, nodes: tuple) -> None:
        self._indent()
        for node in nodes:
            self.visit(node)
        self._dedent()

    def visit_File(self, node: File):
        self._emit(f"Library: {node.library_name.name}")
        self._visit_all(node.using_list)
        self._visit_all(node.const_declaration_list)
        self._visit_all(node.enum_declaration_list)
        self._visit_all(node.interface_declaration_list)
        self._visit_all(node.struct_declaration_list)
        self._visit_all(node.union_declaration_list)

    def visit_Using(self, node: Using):
        alias = f" as {node.maybe_alias.name}" if node.maybe_alias else ""
        self._emit(f"Using: {node.using_path.name}{alias}")

    def visit_ConstDeclaration(self, node: ConstDeclaration):
        self._emit(
            f"Const: {type_str(node.type)} {node.identifier.name}"
            f" = {constant_str(node.constant)}"
        )

    def visit_EnumDeclaration(self, node: EnumDeclaration):
        subtype = f" : {type_str(node.maybe_subtype)}" if node.maybe_subtype else ""
        self._emit(f"Enum: {node.identifier.name}{subtype}")
        self._visit_all(node.members)

    def visit_EnumMember(self, node: EnumMember):
        value = node.maybe_value
        if isinstance(value, EnumMemberValueIdentifier):
            self._emit(f"{node.identifier.name} = {value.identifier.name}")
        elif isinstance(value, EnumMemberValueNumeric):
            self._emit(f"{node.identifier.name} = {value.literal.value}")
        else:
            self._emit(node.identifier.name)

    def visit_InterfaceDeclaration(self, node: InterfaceDeclaration):
        supers = ""
        if node.superinterfaces:
            supers = " : " + ", ".join(s.name for s in node.superinterfaces)
        self._emit(f"Interface: {node.identifier.name}{supers}")
        self._visit_all(node.const_members)
        self._visit_all(node.enum_members)
        self._visit_all(node.method_members)

    def visit_InterfaceMemberMethod(self, node: InterfaceMemberMethod):
        name = node.identifier.name
        ordinal = node.ordinal.value
        if node.is_event:
            self._emit(f"Event {ordinal}: {name}({_params_str(node.maybe_response)})")
            return
        text = f"Method {ordinal}: {name}({_params_str(node.maybe_request)})"
        if node.maybe_response is not None:
            text += f" -> ({_params_str(node.maybe_response)})"
        self._emit(text)

    def visit_StructDeclaration(self, node: StructDeclaration):
        self._emit(f"Struct: {node.identifier.name}")
        self._visit_all(node.const_members)
        self._visit_all(node.enum_members)
        self._visit_all(node.members)

    def visit_StructMember(self, node: StructMember):
        default = ""
        if node.maybe_default_value is not None:
            default = f" = {constant_str(node.maybe_default_value)}"
        self._emit(f"{type_str(node.type)} {node.identifier.name}{default}")

    def visit_UnionDeclaration(self, node: UnionDeclaration):
        self._emit(f"Union: {node.identifier.name}")
        self._visit_all(node.const_members)
        self._visit_all(node.enum_members)
        self._visit_all(node.members)

    def visit_UnionMember(self, node: UnionMember):
        self._emit(f"{type_str(node.type)} {node.identifier.name}")


def _params_str(params: Optional[ParameterList]) -> str:
    if params is None:
        return ""
    return ", ".join(
        f"{type_str(p.type)} {p.identifier.name}" for p in params.parameter_list
    )


def _nullable_suffix(nullability: Nullability) -> str:
    return "?" if nullability == Nullability.NULLABLE else ""


def literal_str(literal: Literal) -> str:
    """Render a literal as it appears in source."""
    if isinstance(literal, (StringLiteral, NumericLiteral)):
        return literal.value
    if isinstance(literal, TrueLiteral):
        return "true"
    if isinstance(literal, FalseLiteral):
        return "false"
    if isinstance(literal, DefaultLiteral):
        return "default"
    return f"<{type(literal).__name__}>"


def constant_str(constant: Constant) -> str:
    """Render a constant as it appears in source."""
    if isinstance(constant, IdentifierConstant):
        return constant.identifier.name
    if isinstance(constant, LiteralConstant):
        return literal_str(constant.literal)
    return f"<{type(constant).__name__}>"


def type_str(type_: Type) -> str:
    """Render a type in source notation, e.g. ``vector<int32>:10?``."""
    if isinstance(type_, PrimitiveType):
        return type_.kind.name.lower()
    if isinstance(type_, ArrayType):
        return f"array<{type_str(type_.element_type)}>:{constant_str(type_.element_count)}"
    if isinstance(type_, VectorType):
        text = f"vector<{type_str(type_.element_type)}>"
        if type_.maybe_element_count is not None:
            text += f":{constant_str(type_.maybe_element_count)}"
        return text + _nullable_suffix(type_.nullability)
    if isinstance(type_, StringType):
        text = "string"
        if type_.maybe_element_count is not None:
            text += f":{constant_str(type_.maybe_element_count)}"
        return text + _nullable_suffix(type_.nullability)
    if isinstance(type_, HandleType):
        text = "handle"
        if type_.subtype != HandleSubtype.HANDLE:
            text += f"<{type_.subtype.name.lower()}>"
        return text + _nullable_suffix(type_.nullability)
    if isinstance(type_, RequestType):
        return f"request<{type_.identifier.name}>" + _nullable_suffix(type_.nullability)
    if isinstance(type_, IdentifierType):
        return type_.identifier.name + _nullable_suffix(type_.nullability)
    return f"<{type(type_).__name__}>"
