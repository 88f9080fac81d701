# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for metadata snapshot documents (YAML or JSON).

The routing collaborator writes a snapshot of every route and every type
declaration it knows about. The document is validated against a strict schema
and converted into immutable shapes; type expressions given in compact
notation are parsed here.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apishape.metadata.notation import NotationError, parse_type
from apishape.metadata.shapes import (
    FieldShape,
    RouteDeclaration,
    Snapshot,
    TypeDeclaration,
    TypeShape,
    WireProperty,
)

# ###############
# Public Interface
# ###############


class SnapshotError(Exception):
    """Raised when a snapshot cannot be read or does not conform to the schema."""


def load_snapshot(path: Path) -> Snapshot:
    """Load and validate a metadata snapshot from disk.

    Args:
        path: Path to a ``.yaml``/``.yml``/``.json`` snapshot file.

    Returns:
        The parsed Snapshot.

    Raises:
        SnapshotError: If the file cannot be read, is not valid YAML/JSON, or
            does not conform to the snapshot schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SnapshotError(f"Snapshot file not found: {path}") from None
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot file '{path}': {exc}") from exc
    return parse_snapshot(text, source_label=str(path))


def parse_snapshot(text: str, source_label: str = "<string>") -> Snapshot:
    """Parse snapshot text (YAML, or JSON as a YAML subset) into a Snapshot.

    Raises:
        SnapshotError: If the text is invalid or does not conform to the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SnapshotError(f"{source_label}: snapshot must be a mapping")

    try:
        model = _SnapshotModel.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {source_label}: {exc}") from exc

    return _Converter(source_label).snapshot(model)


# ################
# Implementation
# ################

_STRICT = ConfigDict(extra="forbid", populate_by_name=True)

DefaultLiteral = str | bool | int | float


class _WireModel(BaseModel):
    model_config = _STRICT

    required: bool = True
    default_value: DefaultLiteral | None = Field(default=None, alias="default-value")


class _FieldModel(BaseModel):
    model_config = _STRICT

    name: str
    type: str | _AnonymousModel
    nullable: bool = False
    annotations: list[str] = Field(default_factory=list)
    wire: _WireModel | None = None


class _AnonymousModel(BaseModel):
    model_config = _STRICT

    fields: list[_FieldModel] = Field(default_factory=list)


class _TypeModel(BaseModel):
    model_config = _STRICT

    type_parameters: list[str] = Field(default_factory=list, alias="type-parameters")
    fields: list[_FieldModel] = Field(default_factory=list)
    values: list[str] | None = None
    supertypes: list[str] = Field(default_factory=list)
    subtypes: list[str] | None = None
    discriminator: str | None = None
    type_tag: str | None = Field(default=None, alias="type-tag")


class _RouteModel(BaseModel):
    model_config = _STRICT

    path: str
    verb: str = "GET"
    handler: str | None = None
    request: str | _AnonymousModel | None = None
    response: str | _AnonymousModel | None = None
    query: list[_FieldModel] = Field(default_factory=list)
    path_params: list[_FieldModel] = Field(default_factory=list, alias="path-params")


class _SnapshotModel(BaseModel):
    model_config = _STRICT

    types: dict[str, _TypeModel] = Field(default_factory=dict)
    routes: list[_RouteModel] = Field(default_factory=list)


_FieldModel.model_rebuild()
_AnonymousModel.model_rebuild()
_TypeModel.model_rebuild()
_RouteModel.model_rebuild()
_SnapshotModel.model_rebuild()


def _default_text(value: DefaultLiteral | None) -> str | None:
    """Normalize a YAML scalar default to the string form annotations carry."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class _Converter:
    """Converts validated document models into immutable shapes."""

    def __init__(self, source_label: str) -> None:
        self._label = source_label

    def snapshot(self, model: _SnapshotModel) -> Snapshot:
        types = {
            identity: self._declaration(identity, type_model) for identity, type_model in model.types.items()
        }
        routes = tuple(self._route(index, route) for index, route in enumerate(model.routes))
        return Snapshot(types=types, routes=routes)

    def _declaration(self, identity: str, model: _TypeModel) -> TypeDeclaration:
        location = f"types['{identity}']"
        if model.values is not None and (model.fields or model.supertypes or model.subtypes is not None):
            raise SnapshotError(
                f"{self._label}: {location}: an enumeration declares 'values' only,"
                " not 'fields', 'supertypes' or 'subtypes'"
            )
        if model.discriminator is not None and model.subtypes is None:
            raise SnapshotError(f"{self._label}: {location}: 'discriminator' requires 'subtypes'")
        subtypes = None
        if model.subtypes is not None:
            subtypes = tuple(self._type(f"{location}.subtypes[{i}]", s) for i, s in enumerate(model.subtypes))
        return TypeDeclaration(
            identity=identity,
            type_parameters=tuple(model.type_parameters),
            fields=tuple(self._field(f"{location}.fields[{i}]", f) for i, f in enumerate(model.fields)),
            values=tuple(model.values) if model.values is not None else None,
            supertypes=tuple(self._type(f"{location}.supertypes[{i}]", s) for i, s in enumerate(model.supertypes)),
            subtypes=subtypes,
            discriminator=model.discriminator,
            type_tag=model.type_tag,
        )

    def _route(self, index: int, model: _RouteModel) -> RouteDeclaration:
        location = f"routes[{index}]"
        return RouteDeclaration(
            path=model.path,
            verb=model.verb.upper(),
            handler=model.handler,
            request=self._optional_type(f"{location}.request", model.request),
            response=self._optional_type(f"{location}.response", model.response),
            query=tuple(self._field(f"{location}.query[{i}]", f) for i, f in enumerate(model.query)),
            path_params=tuple(
                self._field(f"{location}.path-params[{i}]", f) for i, f in enumerate(model.path_params)
            ),
        )

    def _field(self, location: str, model: _FieldModel) -> FieldShape:
        wire = None
        if model.wire is not None:
            wire = WireProperty(required=model.wire.required, default_value=_default_text(model.wire.default_value))
        return FieldShape(
            name=model.name,
            type=self._type(f"{location}.type", model.type),
            nullable=model.nullable,
            annotations=tuple(model.annotations),
            wire=wire,
        )

    def _optional_type(self, location: str, value: str | _AnonymousModel | None) -> TypeShape | None:
        if value is None:
            return None
        return self._type(location, value)

    def _type(self, location: str, value: str | _AnonymousModel) -> TypeShape:
        if isinstance(value, _AnonymousModel):
            fields = tuple(self._field(f"{location}.fields[{i}]", f) for i, f in enumerate(value.fields))
            return TypeShape(name=None, fields=fields)
        try:
            return parse_type(value)
        except NotationError as exc:
            raise SnapshotError(f"{self._label}: {location}: {exc}") from exc
