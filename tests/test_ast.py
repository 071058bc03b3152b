# =============================================================================
# test_ast.py - AST, Visitor and Printer Tests
# =============================================================================
# Tests for the FIDL AST node types, the ASTVisitor base class and the
# ASTPrinter outline used by `fidlparse --ast`.
# =============================================================================

from dataclasses import FrozenInstanceError

import pytest
from fidl_frontend.syntax.parser import parse_source
from fidl_frontend.syntax.ast import (
    ASTPrinter,
    ASTVisitor,
    Nullability,
    PrimitiveTypeKind,
    HandleSubtype,
    TrueLiteral,
    FalseLiteral,
    DefaultLiteral,
    LiteralConstant,
    PrimitiveType,
    VectorType,
    StringType,
    HandleType,
    InterfaceMemberMethod,
    ParameterList,
    literal_str,
    type_str,
)


# =============================================================================
# Node Tests
# =============================================================================

class TestNodes:
    """Test node construction and helpers."""

    def test_enum_sizes(self):
        assert len(PrimitiveTypeKind) == 12
        assert len(HandleSubtype) == 20
        assert list(HandleSubtype)[0] == HandleSubtype.HANDLE

    def test_nodes_are_frozen(self):
        node = PrimitiveType(PrimitiveTypeKind.INT32)
        with pytest.raises(FrozenInstanceError):
            node.kind = PrimitiveTypeKind.INT64

    def test_optional_fields_default_to_none(self):
        vector = VectorType(PrimitiveType(PrimitiveTypeKind.BOOL))
        assert vector.maybe_element_count is None
        assert vector.nullability == Nullability.NONNULLABLE

    def test_compound_identifier_name(self):
        file = parse_source("library a.b.c;")
        assert file.library_name.name == "a.b.c"

    def test_is_event(self):
        file = parse_source(
            "library foo; interface I { 1: A(); 2: B() -> (); 3: event C(); };"
        )
        methods = file.interface_declaration_list[0].method_members
        assert [m.is_event for m in methods] == [False, False, True]

    def test_event_shape(self):
        file = parse_source("library foo; interface I { 1: event C(); };")
        method = file.interface_declaration_list[0].method_members[0]
        assert method == InterfaceMemberMethod(
            method.ordinal, method.identifier, None, ParameterList()
        )

    def test_declaration_count(self):
        file = parse_source(
            "library foo; using x; const bool B = true; enum E {};"
            " interface I {}; struct S {}; union U {};"
        )
        assert file.declaration_count() == 5


# =============================================================================
# Rendering Helper Tests
# =============================================================================

class TestRendering:
    """Test source-notation rendering of types and literals."""

    def test_literal_keywords(self):
        assert literal_str(TrueLiteral()) == "true"
        assert literal_str(FalseLiteral()) == "false"
        assert literal_str(DefaultLiteral()) == "default"

    def test_plain_types(self):
        assert type_str(PrimitiveType(PrimitiveTypeKind.UINT64)) == "uint64"
        assert type_str(StringType()) == "string"
        assert type_str(HandleType()) == "handle"

    def test_decorated_types(self):
        assert type_str(HandleType(HandleSubtype.VMO, Nullability.NULLABLE)) == "handle<vmo>?"
        assert type_str(StringType(LiteralConstant(DefaultLiteral()))) == "string:default"

    @pytest.mark.parametrize("text", [
        "vector<int32>:10?",
        "array<array<uint8>:4>:N",
        "request<fuchsia.io.File>?",
        "other.Point?",
        "string:MAX",
        "vector<handle<channel>>",
    ])
    def test_parsed_types_render_back(self, text):
        file = parse_source(f"library foo; struct S {{ {text} m; }};")
        assert type_str(file.struct_declaration_list[0].members[0].type) == text


# =============================================================================
# Visitor Tests
# =============================================================================

class TestVisitor:
    """Test dispatch and generic traversal."""

    def test_dispatch_and_walk(self):
        """generic_visit reaches nested declarations."""

        class EnumCounter(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_EnumDeclaration(self, node):
                self.names.append(node.identifier.name)
                self.generic_visit(node)

        file = parse_source(
            "library foo; enum A { X; };"
            " struct S { enum B { Y; }; int32 x; };"
            " interface I { enum C { Z; }; };"
        )
        counter = EnumCounter()
        counter.visit(file)
        assert sorted(counter.names) == ["A", "B", "C"]

    def test_identifiers_visited_in_order(self):

        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Identifier(self, node):
                self.names.append(node.name)

        file = parse_source("library foo.bar; struct S { int32 x; int32 y; };")
        collector = NameCollector()
        collector.visit(file)
        assert collector.names == ["foo", "bar", "S", "x", "y"]


# =============================================================================
# Printer Tests
# =============================================================================

class TestPrinter:
    """Test the outline printer."""

    def test_full_outline(self):
        file = parse_source(
            "library foo;"
            " using bar as b;"
            " const int32 X = 1;"
            " enum E : uint8 { A = 1; B; };"
            " interface I : base.Base {"
            "   1: Foo(int32 a) -> (bool ok);"
            "   2: event OnBar(string s);"
            "   3: Baz();"
            " };"
            " struct S { vector<int32>:10? v = default; };"
            " union U { handle<vmo>? h; };"
        )
        expected = "\n".join([
            "Library: foo",
            "  Using: bar as b",
            "  Const: int32 X = 1",
            "  Enum: E : uint8",
            "    A = 1",
            "    B",
            "  Interface: I : base.Base",
            "    Method 1: Foo(int32 a) -> (bool ok)",
            "    Event 2: OnBar(string s)",
            "    Method 3: Baz()",
            "  Struct: S",
            "    vector<int32>:10? v = default",
            "  Union: U",
            "    handle<vmo>? h",
        ])
        assert ASTPrinter().print(file) == expected

    def test_printer_is_reusable(self):
        printer = ASTPrinter()
        first = printer.print(parse_source("library a;"))
        second = printer.print(parse_source("library b;"))
        assert first == "Library: a"
        assert second == "Library: b"

    def test_enum_value_by_name(self):
        file = parse_source("library foo; enum E { A = other.B; };")
        assert "    A = other.B" in ASTPrinter().print(file).splitlines()
