# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical, language-neutral type model (descriptors, graph, endpoints)."""

from apishape.model.entities import (
    EndpointSignature,
    Extraction,
    ResolvedEndpoint,
    TypeDef,
    TypeGraph,
)
from apishape.model.types import (
    AnyType,
    BoxedPrimitiveType,
    ContainerType,
    EnumType,
    Field,
    MappedType,
    MappingType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TextType,
    TypeDescriptor,
    UnionType,
    UnresolvedType,
    is_scalar,
    referenced_names,
    unresolved_names,
)

__all__ = [
    # Type descriptors
    "PrimitiveKind",
    "PrimitiveType",
    "BoxedPrimitiveType",
    "TextType",
    "EnumType",
    "MappedType",
    "AnyType",
    "ContainerType",
    "MappingType",
    "UnionType",
    "ReferenceType",
    "UnresolvedType",
    "TypeDescriptor",
    "Field",
    "is_scalar",
    "referenced_names",
    "unresolved_names",
    # Entities
    "TypeDef",
    "TypeGraph",
    "EndpointSignature",
    "ResolvedEndpoint",
    "Extraction",
]
