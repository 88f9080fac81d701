# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the extraction validation checks."""

from apishape.model import (
    ContainerType,
    EnumType,
    Extraction,
    Field,
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
from apishape.validation import ValidationError, ValidationResult, ValidationWarning, validate

# ###############
# Test Helpers
# ###############


def _extraction(*types: TypeDef, endpoints: list[ResolvedEndpoint] | None = None) -> Extraction:
    return Extraction(
        endpoints=endpoints or [],
        graph=TypeGraph(types={t.name: t for t in types}),
    )


def _type(name: str, *fields: Field) -> TypeDef:
    return TypeDef(name=name, identity=f"com.example.{name}", fields=list(fields))


_INT = PrimitiveType(primitive=PrimitiveKind.INT)


# ###############
# Tests
# ###############


def test_clean_extraction() -> None:
    extraction = _extraction(
        _type("Order", Field(name="id", type=_INT), Field(name="lines", type=ContainerType(element=TextType()))),
        endpoints=[ResolvedEndpoint(path="/orders", verb="GET", response_type=ReferenceType(name="Order"))],
    )
    result = validate(extraction)
    assert result == ValidationResult()
    assert not result.has_errors


def test_dangling_field_reference() -> None:
    result = validate(_extraction(_type("Order", Field(name="owner", type=ReferenceType(name="User")))))
    assert result.errors == [ValidationError(message="'Order.owner' references unknown type 'User'.")]


def test_dangling_endpoint_reference() -> None:
    endpoint = ResolvedEndpoint(
        path="/x",
        verb="POST",
        request_type=ContainerType(element=ReferenceType(name="Gone")),
    )
    result = validate(_extraction(endpoints=[endpoint]))
    assert result.errors == [ValidationError(message="'POST /x request' references unknown type 'Gone'.")]


def test_unresolved_placeholder() -> None:
    items = Field(name="items", type=ContainerType(element=UnresolvedType(name="T")))
    result = validate(_extraction(_type("Page", items)))
    assert result.errors == [ValidationError(message="'Page.items' contains unresolved type 'T'.")]


def test_required_field_with_default() -> None:
    result = validate(_extraction(_type("A", Field(name="x", type=TextType(), default_value="d"))))
    assert result.errors == [ValidationError(message="Required field 'A.x' declares a default value.")]


def test_optional_primitive_without_default() -> None:
    result = validate(_extraction(_type("A", Field(name="n", type=_INT, optional=True))))
    assert result.errors == [ValidationError(message="Primitive field 'A.n' is optional but has no default value.")]


def test_optional_primitive_with_default_is_valid() -> None:
    result = validate(_extraction(_type("A", Field(name="n", type=_INT, optional=True, default_value="1"))))
    assert not result.has_errors


def test_non_text_mapping_key_warns() -> None:
    result = validate(_extraction(_type("A", Field(name="m", type=MappingType(key=_INT, value=TextType())))))
    assert result.errors == []
    assert result.warnings == [
        ValidationWarning(message="'A.m' uses a 'primitive' mapping key; JSON object keys are always strings.")
    ]


def test_text_and_enum_mapping_keys_are_fine() -> None:
    extraction = _extraction(
        _type(
            "A",
            Field(name="byName", type=MappingType(key=TextType(), value=_INT)),
            Field(name="byColor", type=MappingType(key=EnumType(values=("RED",)), value=_INT)),
        )
    )
    assert validate(extraction).warnings == []


def test_endpoint_mapping_key_warns() -> None:
    endpoint = ResolvedEndpoint(path="/x", verb="GET", response_type=MappingType(key=_INT, value=TextType()))
    result = validate(_extraction(endpoints=[endpoint]))
    assert result.errors == []
    assert result.warnings == [
        ValidationWarning(
            message="'GET /x response' uses a 'primitive' mapping key; JSON object keys are always strings."
        )
    ]


def test_path_type_is_checked_for_dangling_references() -> None:
    endpoint = ResolvedEndpoint(path="/users/{id}", verb="GET", path_type=ReferenceType(name="UserApiGetPath"))
    result = validate(_extraction(endpoints=[endpoint]))
    assert result.errors == [
        ValidationError(message="'GET /users/{id} path' references unknown type 'UserApiGetPath'.")
    ]


def test_dangling_union_member() -> None:
    animal = UnionType(name="com.example.Animal", members=(ReferenceType(name="AnimalDog"), ReferenceType(name="Cat")))
    dog = TypeDef(name="AnimalDog", identity="com.example.Animal$Dog")
    result = validate(_extraction(dog, _type("Zoo", Field(name="star", type=animal))))
    assert result.errors == [ValidationError(message="'Zoo.star' references unknown type 'Cat'.")]


def test_unknown_supertype() -> None:
    child = TypeDef(name="Child", identity="com.example.Child", supertypes=["Base"])
    result = validate(_extraction(child))
    assert result.errors == [ValidationError(message="'Child' extends unknown type 'Base'.")]


def test_registered_supertype_is_valid() -> None:
    base = _type("Base", Field(name="id", type=TextType()))
    child = TypeDef(name="Child", identity="com.example.Child", supertypes=["Base"])
    assert validate(_extraction(base, child)) == ValidationResult()
