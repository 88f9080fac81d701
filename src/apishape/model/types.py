# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors for the apishape type model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Scalar kinds shared by primitive and boxed descriptors."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"


class PrimitiveType(BaseModel):
    """A non-nullable scalar. Absence is invalid, not optional."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class BoxedPrimitiveType(BaseModel):
    """The wrapper equivalent of a primitive kind; always nullable."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["boxed"] = "boxed"
    primitive: PrimitiveKind


class TextType(BaseModel):
    """A string-like scalar."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"


class EnumType(BaseModel):
    """A closed set of string values, rendered inline at the point of use."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["enum"] = "enum"
    name: str | None = None
    values: tuple[str, ...]


class MappedType(BaseModel):
    """A source type replaced verbatim by a configured target type expression."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mapped"] = "mapped"
    target: str


class AnyType(BaseModel):
    """An excluded or untyped value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["any"] = "any"


class ContainerType(BaseModel):
    """A sequence of elements.

    Attributes:
        element: Descriptor of each element.
        ordered: Whether iteration order is significant (list-like).
        unique: Whether duplicate elements are collapsed (set-like).
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["container"] = "container"
    element: TypeDescriptor
    ordered: bool = True
    unique: bool = False


class MappingType(BaseModel):
    """A key/value mapping. Keys are restricted to scalar-like descriptors."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mapping"] = "mapping"
    key: TypeDescriptor
    value: TypeDescriptor


class UnionType(BaseModel):
    """The concrete variants of a sealed or polymorphic type, rendered inline as ``A | B``.

    Attributes:
        name: Identity of the declaring base type, when known.
        members: Variant descriptors (references to composites), in declaration order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["union"] = "union"
    name: str | None = None
    members: tuple[TypeDescriptor, ...] = ()


class ReferenceType(BaseModel):
    """A by-name use of a composite type registered in the type graph."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    name: str


class UnresolvedType(BaseModel):
    """Transient placeholder for a type that could not be bound.

    Never valid in a finished graph; validation reports any occurrence.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["unresolved"] = "unresolved"
    name: str


# The `kind` discriminator keeps (de)serialization of nested descriptors unambiguous.
TypeDescriptor = Annotated[
    PrimitiveType
    | BoxedPrimitiveType
    | TextType
    | EnumType
    | MappedType
    | AnyType
    | ContainerType
    | MappingType
    | UnionType
    | ReferenceType
    | UnresolvedType,
    _Field(discriminator="kind"),
]


class Field(BaseModel):
    """A named, typed member of a composite type.

    Attributes:
        name: Property name as it appears on the wire.
        type: Descriptor of the property value.
        optional: The property may be absent from a payload.
        nullable: The property value may be ``null``.
        default_value: Default applied when an optional property is absent.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeDescriptor
    optional: bool = False
    nullable: bool = False
    default_value: str | None = None


def is_scalar(descriptor: TypeDescriptor) -> bool:
    """Return True if *descriptor* may be used as a mapping key."""
    return isinstance(descriptor, (PrimitiveType, BoxedPrimitiveType, TextType, EnumType, MappedType))


def referenced_names(descriptor: TypeDescriptor) -> list[str]:
    """Recursively collect every ReferenceType name reachable from a descriptor."""
    if isinstance(descriptor, ReferenceType):
        return [descriptor.name]
    if isinstance(descriptor, ContainerType):
        return referenced_names(descriptor.element)
    if isinstance(descriptor, MappingType):
        return referenced_names(descriptor.key) + referenced_names(descriptor.value)
    if isinstance(descriptor, UnionType):
        return [name for member in descriptor.members for name in referenced_names(member)]
    return []


def unresolved_names(descriptor: TypeDescriptor) -> list[str]:
    """Recursively collect the names of every UnresolvedType placeholder in a descriptor."""
    if isinstance(descriptor, UnresolvedType):
        return [descriptor.name]
    if isinstance(descriptor, ContainerType):
        return unresolved_names(descriptor.element)
    if isinstance(descriptor, MappingType):
        return unresolved_names(descriptor.key) + unresolved_names(descriptor.value)
    if isinstance(descriptor, UnionType):
        return [name for member in descriptor.members for name in unresolved_names(member)]
    return []


# Resolve forward references for models that use TypeDescriptor.
ContainerType.model_rebuild()
MappingType.model_rebuild()
UnionType.model_rebuild()
Field.model_rebuild()
