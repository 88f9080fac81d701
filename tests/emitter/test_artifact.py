# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for extraction artifact serialization."""

import json
from pathlib import Path

import pytest

from apishape.emitter import ARTIFACT_FORMAT_VERSION, deserialize, read_artifact, serialize, write_artifact
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
)

# ###############
# Test Helpers
# ###############


def _extraction() -> Extraction:
    """An extraction exercising every descriptor kind."""
    node = TypeDef(
        name="Node",
        identity="com.example.Node",
        fields=[
            Field(name="id", type=PrimitiveType(primitive=PrimitiveKind.LONG)),
            Field(name="weight", type=BoxedPrimitiveType(primitive=PrimitiveKind.DOUBLE), optional=True, nullable=True),
            Field(name="label", type=TextType(), optional=True, default_value="none"),
            Field(name="color", type=EnumType(name="com.example.Color", values=("RED", "GREEN"))),
            Field(name="at", type=MappedType(target="string")),
            Field(name="extra", type=AnyType()),
            Field(name="children", type=ContainerType(element=ReferenceType(name="Node"), ordered=False, unique=True)),
            Field(name="index", type=MappingType(key=TextType(), value=ReferenceType(name="Node"))),
            Field(
                name="shape",
                type=UnionType(
                    name="com.example.Shape",
                    members=(ReferenceType(name="Node"), ReferenceType(name="Leaf")),
                ),
            ),
        ],
        referenced_by=["com.example.TreeApi.get"],
    )
    leaf = TypeDef(
        name="Leaf",
        identity="com.example.Leaf",
        supertypes=["Node"],
        fields=[Field(name="tip", type=TextType())],
    )
    return Extraction(
        endpoints=[
            ResolvedEndpoint(
                path="/tree",
                verb="GET",
                handler="com.example.TreeApi.get",
                response_type=ReferenceType(name="Node"),
                path_type=ReferenceType(name="TreeApiGetPath"),
            ),
            ResolvedEndpoint(path="/tree", verb="PUT", request_type=ReferenceType(name="Node")),
        ],
        graph=TypeGraph(types={"Node": node, "Leaf": leaf}),
    )


# ###############
# Tests
# ###############


def test_round_trip_preserves_extraction() -> None:
    extraction = _extraction()
    assert deserialize(serialize(extraction)) == extraction


def test_output_is_compact_and_versioned() -> None:
    data = serialize(_extraction())
    assert " " not in data.replace("com.example", "")
    assert json.loads(data)["v"] == ARTIFACT_FORMAT_VERSION


def test_serialization_is_deterministic() -> None:
    assert serialize(_extraction()) == serialize(_extraction())


def test_default_flags_are_omitted() -> None:
    obj = json.loads(serialize(_extraction()))
    id_field = obj["types"][0]["fields"][0]
    assert id_field == {"name": "id", "type": {"k": "primitive", "t": "long"}}


def test_unknown_version_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported artifact format version"):
        deserialize('{"v": "0", "types": []}')


def test_unknown_descriptor_kind_is_rejected() -> None:
    data = '{"v": "1", "types": [{"name": "A", "id": "A", "fields": [{"name": "f", "type": {"k": "tuple"}}]}]}'
    with pytest.raises(ValueError, match="Unknown type descriptor kind"):
        deserialize(data)


def test_write_and_read(tmp_path: Path) -> None:
    path = tmp_path / "out" / "api.json"
    write_artifact(_extraction(), path)
    assert read_artifact(path) == _extraction()


def test_hierarchy_and_path_keys() -> None:
    obj = json.loads(serialize(_extraction()))
    assert obj["types"][1]["super"] == ["Node"]
    assert "super" not in obj["types"][0]
    assert obj["endpoints"][0]["pathvars"] == {"k": "ref", "n": "TreeApiGetPath"}
    shape = obj["types"][0]["fields"][-1]["type"]
    assert shape == {
        "k": "union",
        "m": [{"k": "ref", "n": "Node"}, {"k": "ref", "n": "Leaf"}],
        "n": "com.example.Shape",
    }
