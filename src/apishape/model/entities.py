# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph and endpoint entities for the apishape type model."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from apishape.metadata.shapes import FieldShape, TypeShape
from apishape.model.types import Field, TypeDescriptor

# ###############
# Public Interface
# ###############


class TypeDef(BaseModel):
    """A named composite type definition; one entry of the type graph.

    Attributes:
        name: Emission name, unique within the graph.
        identity: Source identity (qualified name with type arguments, or a
            structural signature for anonymous types).
        supertypes: Emission names of the composites this type extends; their
            fields are not repeated in :attr:`fields`.
        fields: Ordered fields as declared by the source type.
        referenced_by: Labels of the endpoints from which the type is reachable.
    """

    name: str
    identity: str
    supertypes: list[str] = _Field(default_factory=list)
    fields: list[Field] = _Field(default_factory=list)
    referenced_by: list[str] = _Field(default_factory=list)


class TypeGraph(BaseModel):
    """Named composite types keyed by emission name, in first-discovery order."""

    types: dict[str, TypeDef] = _Field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __len__(self) -> int:
        return len(self.types)

    def get(self, name: str) -> TypeDef | None:
        """Return the definition registered under *name*, if any."""
        return self.types.get(name)

    def names(self) -> list[str]:
        """Return the registered names in insertion order."""
        return list(self.types)


@dataclass(frozen=True)
class EndpointSignature:
    """One endpoint as exposed by the routing collaborator.

    Attributes:
        path: Route path (e.g. ``/api/orders/{id}``).
        verb: HTTP method in upper case.
        handler: Qualified name of the handling method, when known.
        request: Declared request body shape; ``None`` when there is no body.
        response: Declared response body shape; ``None`` when nothing is returned.
        query: Declared query-parameter sites.
        path_params: Declared path-variable sites (the ``{id}`` parts of the path).
    """

    path: str
    verb: str
    handler: str | None = None
    request: TypeShape | None = None
    response: TypeShape | None = None
    query: tuple[FieldShape, ...] = ()
    path_params: tuple[FieldShape, ...] = ()

    @property
    def label(self) -> str:
        """Return a human-readable ``VERB path`` label."""
        return f"{self.verb} {self.path}"


class ResolvedEndpoint(BaseModel):
    """An endpoint whose body, path-variable and query types have been resolved."""

    model_config = ConfigDict(frozen=True)

    path: str
    verb: str
    handler: str | None = None
    request_type: TypeDescriptor | None = None
    response_type: TypeDescriptor | None = None
    path_type: TypeDescriptor | None = None
    query_type: TypeDescriptor | None = None

    @property
    def label(self) -> str:
        """Return a human-readable ``VERB path`` label."""
        return f"{self.verb} {self.path}"


class Extraction(BaseModel):
    """The result of one extraction pass: resolved endpoints and their type graph."""

    endpoints: list[ResolvedEndpoint] = _Field(default_factory=list)
    graph: TypeGraph = _Field(default_factory=TypeGraph)
