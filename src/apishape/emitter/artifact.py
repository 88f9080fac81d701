# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of extraction artifacts.

Artifacts are stored as compact JSON files so that other emitters can consume
an extraction without re-reading the snapshot. The format is versioned so
future schema changes can be detected. Graph entries keep their insertion
order, so the same extraction always serializes to the same bytes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from apishape.model.entities import Extraction, ResolvedEndpoint, TypeDef, TypeGraph
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
)

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


def serialize(extraction: Extraction) -> str:
    """Serialize an Extraction to a compact JSON string."""
    return json.dumps(_extraction_to_dict(extraction), separators=(",", ":"))


def deserialize(data: str) -> Extraction:
    """Deserialize an Extraction from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Extraction`.

    Raises:
        ValueError: If the data is not JSON, or the artifact format version is
            not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v") if isinstance(obj, dict) else None
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _extraction_from_dict(obj)


def write_artifact(extraction: Extraction, path: Path) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(extraction), encoding="utf-8")


def read_artifact(path: Path) -> Extraction:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _extraction_to_dict(extraction: Extraction) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "types": [_type_to_dict(t) for t in extraction.graph.types.values()],
        "endpoints": [_endpoint_to_dict(e) for e in extraction.endpoints],
    }


def _extraction_from_dict(obj: dict[str, Any]) -> Extraction:
    graph = TypeGraph()
    for item in obj.get("types", []):
        type_def = _type_from_dict(item)
        graph.types[type_def.name] = type_def
    return Extraction(
        endpoints=[_endpoint_from_dict(e) for e in obj.get("endpoints", [])],
        graph=graph,
    )


def _type_to_dict(type_def: TypeDef) -> dict[str, Any]:
    d: dict[str, Any] = {
        "name": type_def.name,
        "id": type_def.identity,
        "fields": [_field_to_dict(f) for f in type_def.fields],
    }
    if type_def.supertypes:
        d["super"] = type_def.supertypes
    if type_def.referenced_by:
        d["refs"] = type_def.referenced_by
    return d


def _type_from_dict(obj: dict[str, Any]) -> TypeDef:
    return TypeDef(
        name=obj["name"],
        identity=obj["id"],
        supertypes=obj.get("super", []),
        fields=[_field_from_dict(f) for f in obj.get("fields", [])],
        referenced_by=obj.get("refs", []),
    )


def _field_to_dict(f: Field) -> dict[str, Any]:
    d: dict[str, Any] = {"name": f.name, "type": _descriptor_to_dict(f.type)}
    if f.optional:
        d["opt"] = True
    if f.nullable:
        d["null"] = True
    if f.default_value is not None:
        d["default"] = f.default_value
    return d


def _field_from_dict(obj: dict[str, Any]) -> Field:
    return Field(
        name=obj["name"],
        type=_descriptor_from_dict(obj["type"]),
        optional=obj.get("opt", False),
        nullable=obj.get("null", False),
        default_value=obj.get("default"),
    )


def _endpoint_to_dict(endpoint: ResolvedEndpoint) -> dict[str, Any]:
    d: dict[str, Any] = {"path": endpoint.path, "verb": endpoint.verb}
    if endpoint.handler is not None:
        d["handler"] = endpoint.handler
    for key, descriptor in (
        ("req", endpoint.request_type),
        ("res", endpoint.response_type),
        ("pathvars", endpoint.path_type),
        ("query", endpoint.query_type),
    ):
        if descriptor is not None:
            d[key] = _descriptor_to_dict(descriptor)
    return d


def _endpoint_from_dict(obj: dict[str, Any]) -> ResolvedEndpoint:
    def _optional(key: str) -> TypeDescriptor | None:
        return _descriptor_from_dict(obj[key]) if key in obj else None

    return ResolvedEndpoint(
        path=obj["path"],
        verb=obj["verb"],
        handler=obj.get("handler"),
        request_type=_optional("req"),
        response_type=_optional("res"),
        path_type=_optional("pathvars"),
        query_type=_optional("query"),
    )


def _descriptor_to_dict(descriptor: TypeDescriptor) -> dict[str, Any]:
    """Encode a TypeDescriptor as a tagged dict with compact keys."""
    if isinstance(descriptor, PrimitiveType):
        return {"k": "primitive", "t": descriptor.primitive.value}
    if isinstance(descriptor, BoxedPrimitiveType):
        return {"k": "boxed", "t": descriptor.primitive.value}
    if isinstance(descriptor, TextType):
        return {"k": "text"}
    if isinstance(descriptor, EnumType):
        d: dict[str, Any] = {"k": "enum", "values": list(descriptor.values)}
        if descriptor.name is not None:
            d["n"] = descriptor.name
        return d
    if isinstance(descriptor, MappedType):
        return {"k": "mapped", "t": descriptor.target}
    if isinstance(descriptor, AnyType):
        return {"k": "any"}
    if isinstance(descriptor, ContainerType):
        return {
            "k": "container",
            "e": _descriptor_to_dict(descriptor.element),
            "ordered": descriptor.ordered,
            "unique": descriptor.unique,
        }
    if isinstance(descriptor, MappingType):
        return {
            "k": "mapping",
            "key": _descriptor_to_dict(descriptor.key),
            "val": _descriptor_to_dict(descriptor.value),
        }
    if isinstance(descriptor, UnionType):
        union: dict[str, Any] = {"k": "union", "m": [_descriptor_to_dict(m) for m in descriptor.members]}
        if descriptor.name is not None:
            union["n"] = descriptor.name
        return union
    if isinstance(descriptor, ReferenceType):
        return {"k": "ref", "n": descriptor.name}
    # UnresolvedType is the only remaining variant.
    assert isinstance(descriptor, UnresolvedType)
    return {"k": "unresolved", "n": descriptor.name}


def _descriptor_from_dict(obj: dict[str, Any]) -> TypeDescriptor:
    """Decode a TypeDescriptor from a tagged dict."""
    kind = obj["k"]
    if kind == "primitive":
        return PrimitiveType(primitive=PrimitiveKind(obj["t"]))
    if kind == "boxed":
        return BoxedPrimitiveType(primitive=PrimitiveKind(obj["t"]))
    if kind == "text":
        return TextType()
    if kind == "enum":
        return EnumType(name=obj.get("n"), values=tuple(obj["values"]))
    if kind == "mapped":
        return MappedType(target=obj["t"])
    if kind == "any":
        return AnyType()
    if kind == "container":
        return ContainerType(
            element=_descriptor_from_dict(obj["e"]),
            ordered=obj.get("ordered", True),
            unique=obj.get("unique", False),
        )
    if kind == "mapping":
        return MappingType(key=_descriptor_from_dict(obj["key"]), value=_descriptor_from_dict(obj["val"]))
    if kind == "union":
        return UnionType(name=obj.get("n"), members=tuple(_descriptor_from_dict(m) for m in obj["m"]))
    if kind == "ref":
        return ReferenceType(name=obj["n"])
    if kind == "unresolved":
        return UnresolvedType(name=obj["n"])
    raise ValueError(f"Unknown type descriptor kind: {kind!r}")
