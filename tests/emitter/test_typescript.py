# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for TypeScript rendering."""

import pytest

from apishape.config import parse_config
from apishape.emitter import EmitError, EmitOptions, emit, emit_endpoint_index, render_document, render_type
from apishape.model import (
    AnyType,
    BoxedPrimitiveType,
    ContainerType,
    EnumType,
    Extraction,
    Field,
    MappedType,
    MappingType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    ResolvedEndpoint,
    TextType,
    TypeDef,
    TypeGraph,
    UnionType,
    UnresolvedType,
)

# ###############
# Test Helpers
# ###############

_NO_COMMENTS = EmitOptions(include_ref_comments=False)


def _graph(*types: TypeDef) -> TypeGraph:
    return TypeGraph(types={t.name: t for t in types})


def _order() -> TypeDef:
    return TypeDef(
        name="Order",
        identity="com.example.Order",
        fields=[
            Field(name="id", type=PrimitiveType(primitive=PrimitiveKind.INT)),
            Field(name="note", type=TextType(), optional=True, nullable=True, default_value="n/a"),
            Field(name="tags", type=ContainerType(element=TextType(), ordered=False, unique=True)),
        ],
        referenced_by=["com.example.OrderApi.get", "com.example.OrderApi.create"],
    )


# ###############
# Tests
# ###############


class TestRenderType:
    @pytest.mark.parametrize(
        "kind, expected",
        [
            (PrimitiveKind.BOOLEAN, "boolean"),
            (PrimitiveKind.INT, "number"),
            (PrimitiveKind.DOUBLE, "number"),
            (PrimitiveKind.CHAR, "string"),
        ],
    )
    def test_primitives(self, kind: PrimitiveKind, expected: str) -> None:
        assert render_type(PrimitiveType(primitive=kind)) == expected
        assert render_type(BoxedPrimitiveType(primitive=kind)) == expected

    def test_scalars(self) -> None:
        assert render_type(TextType()) == "string"
        assert render_type(AnyType()) == "any"
        assert render_type(MappedType(target="Date")) == "Date"
        assert render_type(EnumType(values=("RED", "GREEN"))) == "'RED' | 'GREEN'"
        assert render_type(EnumType(values=())) == "never"

    def test_nested_containers(self) -> None:
        descriptor = MappingType(
            key=TextType(),
            value=ContainerType(element=ContainerType(element=ReferenceType(name="User"))),
        )
        assert render_type(descriptor) == "Record<string, Array<Array<User>>>"

    def test_sets(self) -> None:
        descriptor = ContainerType(element=TextType(), ordered=False, unique=True)
        assert render_type(descriptor) == "Set<string>"
        assert render_type(descriptor, EmitOptions(sets_as_arrays=True)) == "Array<string>"

    def test_unions(self) -> None:
        members = (ReferenceType(name="AnimalDog"), ReferenceType(name="AnimalCat"))
        assert render_type(UnionType(name="com.example.Animal", members=members)) == "AnimalDog | AnimalCat"
        assert render_type(ContainerType(element=UnionType(members=members))) == "Array<AnimalDog | AnimalCat>"
        assert render_type(UnionType()) == "never"

    def test_unresolved_is_refused(self) -> None:
        with pytest.raises(EmitError, match="'T'"):
            render_type(ContainerType(element=UnresolvedType(name="T")))


class TestEmit:
    def test_declaration_block(self) -> None:
        assert emit(_graph(_order()), _NO_COMMENTS) == [
            "export type Order = {\n"
            "  id: number\n"
            "  /** @default n/a */\n"
            "  note?: string | null\n"
            "  tags: Set<string>\n"
            "}"
        ]

    def test_reference_comment(self) -> None:
        block = emit(_graph(_order()))[0]
        assert block.startswith(
            "/**\n"
            " * Source: com.example.Order\n"
            " * Referenced by:\n"
            " * - com.example.OrderApi.create\n"
            " * - com.example.OrderApi.get\n"
            " */\n"
            "export type Order = {\n"
        )

    def test_anonymous_types_have_no_source_line(self) -> None:
        anonymous = TypeDef(name="Anonymous0123456789", identity="{ok: boolean}")
        assert emit(_graph(anonymous)) == ["export type Anonymous0123456789 = {\n}"]

    def test_insertion_order(self) -> None:
        graph = _graph(TypeDef(name="B", identity="B"), TypeDef(name="A", identity="A"))
        blocks = emit(graph, _NO_COMMENTS)
        assert [b.split(" ")[2] for b in blocks] == ["B", "A"]

    def test_non_identifier_property_is_quoted(self) -> None:
        graph = _graph(TypeDef(name="A", identity="A", fields=[Field(name="x-y", type=TextType())]))
        assert "  'x-y': string" in emit(graph, _NO_COMMENTS)[0]

    def test_supertypes_are_intersected(self) -> None:
        base = TypeDef(name="Base", identity="com.example.Base", fields=[Field(name="id", type=TextType())])
        child = TypeDef(
            name="Child",
            identity="com.example.Child",
            supertypes=["Base"],
            fields=[Field(name="label", type=TextType())],
        )
        assert emit(_graph(base, child), _NO_COMMENTS)[1] == "export type Child = Base & {\n  label: string\n}"

    def test_unknown_supertype_is_refused(self) -> None:
        graph = _graph(TypeDef(name="Child", identity="com.example.Child", supertypes=["Base"]))
        with pytest.raises(EmitError, match="'Child': it extends unknown type 'Base'"):
            emit(graph)

    def test_dangling_union_member_is_refused(self) -> None:
        union = UnionType(members=(ReferenceType(name="Gone"),))
        graph = _graph(TypeDef(name="A", identity="A", fields=[Field(name="b", type=union)]))
        with pytest.raises(EmitError, match="unknown type 'Gone'"):
            emit(graph)

    def test_dangling_reference_is_refused(self) -> None:
        graph = _graph(TypeDef(name="A", identity="A", fields=[Field(name="b", type=ReferenceType(name="B"))]))
        with pytest.raises(EmitError, match="unknown type 'B'"):
            emit(graph)


class TestDocument:
    def test_endpoint_index(self) -> None:
        endpoints = [
            ResolvedEndpoint(path="/orders", verb="POST", request_type=ReferenceType(name="Order")),
            ResolvedEndpoint(
                path="/orders",
                verb="GET",
                response_type=ContainerType(element=ReferenceType(name="Order")),
                query_type=ReferenceType(name="OrderApiListQuery"),
            ),
        ]
        assert emit_endpoint_index(endpoints) == (
            "export type ApiEndpoints = {\n"
            "  'POST /orders': { request: Order, response: void }\n"
            "  'GET /orders': { request: void, response: Array<Order>, query: OrderApiListQuery }\n"
            "}"
        )

    def test_endpoint_index_path_part(self) -> None:
        endpoint = ResolvedEndpoint(
            path="/users/{id}",
            verb="GET",
            response_type=UnionType(members=(ReferenceType(name="Admin"), ReferenceType(name="Guest"))),
            path_type=ReferenceType(name="UserApiGetPath"),
            query_type=ReferenceType(name="UserApiGetQuery"),
        )
        assert emit_endpoint_index([endpoint]) == (
            "export type ApiEndpoints = {\n"
            "  'GET /users/{id}': { request: void, response: Admin | Guest,"
            " path: UserApiGetPath, query: UserApiGetQuery }\n"
            "}"
        )

    def test_render_document(self) -> None:
        extraction = Extraction(
            endpoints=[ResolvedEndpoint(path="/o", verb="GET", response_type=ReferenceType(name="Order"))],
            graph=_graph(_order()),
        )
        options = EmitOptions.from_config(
            parse_config("include-ref-comments: false\nheader-lines: ['// generated']\n")
        )
        document = render_document(extraction, options)
        assert document.startswith("// generated\n\nexport type Order = {\n")
        assert document.endswith("export type ApiEndpoints = {\n  'GET /o': { request: void, response: Order }\n}\n")

    def test_empty_extraction(self) -> None:
        assert render_document(Extraction()) == "\n"
