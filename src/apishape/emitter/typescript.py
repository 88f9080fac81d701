# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""TypeScript rendering of a type graph.

Every graph entry becomes one ``export type Name = {...}`` block, in graph
insertion order; a type that extends others is rendered as their intersection
with its own fields (``Base & {...}``). Containers, mappings, enumerations,
variant unions and scalars are rendered inline at their point of use;
composites are referenced by name. Rendering is a pure function of the graph
and the options.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from apishape.config import GeneratorConfig
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

ENDPOINT_INDEX_NAME = "ApiEndpoints"


class EmitError(ValueError):
    """Raised when a graph cannot be rendered (e.g. it still holds a placeholder)."""


@dataclass(frozen=True)
class EmitOptions:
    """Rendering switches.

    Attributes:
        sets_as_arrays: Render unique containers as ``Array<T>`` instead of ``Set<T>``.
        include_ref_comments: Precede each block with a comment naming its source
            identity and the endpoints that reach it.
        header_lines: Lines written verbatim at the top of a document.
    """

    sets_as_arrays: bool = False
    include_ref_comments: bool = True
    header_lines: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> EmitOptions:
        """Create options from the emission settings of *config*."""
        return cls(
            sets_as_arrays=config.sets_as_arrays,
            include_ref_comments=config.include_ref_comments,
            header_lines=config.header_lines,
        )


def render_type(descriptor: TypeDescriptor, options: EmitOptions | None = None) -> str:
    """Render a descriptor as an inline TypeScript type expression.

    Raises:
        EmitError: If the descriptor contains an unresolved placeholder.
    """
    options = options or EmitOptions()
    if isinstance(descriptor, (PrimitiveType, BoxedPrimitiveType)):
        return _PRIMITIVE_TS[descriptor.primitive]
    if isinstance(descriptor, TextType):
        return "string"
    if isinstance(descriptor, EnumType):
        if not descriptor.values:
            return "never"
        return " | ".join(_quote(v) for v in descriptor.values)
    if isinstance(descriptor, MappedType):
        return descriptor.target
    if isinstance(descriptor, AnyType):
        return "any"
    if isinstance(descriptor, ContainerType):
        element = render_type(descriptor.element, options)
        if descriptor.unique and not options.sets_as_arrays:
            return f"Set<{element}>"
        return f"Array<{element}>"
    if isinstance(descriptor, MappingType):
        return f"Record<{render_type(descriptor.key, options)}, {render_type(descriptor.value, options)}>"
    if isinstance(descriptor, UnionType):
        if not descriptor.members:
            return "never"
        return " | ".join(render_type(m, options) for m in descriptor.members)
    if isinstance(descriptor, ReferenceType):
        return descriptor.name
    assert isinstance(descriptor, UnresolvedType)
    raise EmitError(f"Cannot emit unresolved type '{descriptor.name}'")


def emit(graph: TypeGraph, options: EmitOptions | None = None) -> list[str]:
    """Render one declaration block per graph entry, in insertion order.

    Args:
        graph: The type graph to render.
        options: Rendering switches; defaults apply when omitted.

    Returns:
        The rendered blocks, each without a trailing newline.

    Raises:
        EmitError: If the graph references a type it does not contain, or
            contains an unresolved placeholder.
    """
    options = options or EmitOptions()
    blocks = []
    for type_def in graph.types.values():
        lines = _ref_comment(type_def) if options.include_ref_comments else []
        _check_supertypes(type_def, graph)
        bases = "".join(f"{s} & " for s in type_def.supertypes)
        lines.append(f"export type {type_def.name} = {bases}{{")
        for f in type_def.fields:
            lines.extend(_field_lines(f, graph, options))
        lines.append("}")
        blocks.append("\n".join(lines))
    return blocks


def emit_endpoint_index(endpoints: list[ResolvedEndpoint], options: EmitOptions | None = None) -> str:
    """Render the ``ApiEndpoints`` block mapping ``"VERB path"`` to its body, path and query types."""
    options = options or EmitOptions()
    lines = [f"export type {ENDPOINT_INDEX_NAME} = {{"]
    for endpoint in endpoints:
        request = _body(endpoint.request_type, options)
        response = _body(endpoint.response_type, options)
        parts = [f"request: {request}", f"response: {response}"]
        if endpoint.path_type is not None:
            parts.append(f"path: {render_type(endpoint.path_type, options)}")
        if endpoint.query_type is not None:
            parts.append(f"query: {render_type(endpoint.query_type, options)}")
        lines.append(f"  {_quote(endpoint.label)}: {{ {', '.join(parts)} }}")
    lines.append("}")
    return "\n".join(lines)


def render_document(extraction: Extraction, options: EmitOptions | None = None) -> str:
    """Render a complete TypeScript module: header, declarations, endpoint index."""
    options = options or EmitOptions()
    sections = []
    if options.header_lines:
        sections.append("\n".join(options.header_lines))
    sections.extend(emit(extraction.graph, options))
    if extraction.endpoints:
        sections.append(emit_endpoint_index(extraction.endpoints, options))
    return "\n\n".join(sections) + "\n"


# ################
# Implementation
# ################

_PRIMITIVE_TS: dict[PrimitiveKind, str] = {
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.BYTE: "number",
    PrimitiveKind.SHORT: "number",
    PrimitiveKind.INT: "number",
    PrimitiveKind.LONG: "number",
    PrimitiveKind.FLOAT: "number",
    PrimitiveKind.DOUBLE: "number",
    PrimitiveKind.CHAR: "string",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _property_name(name: str) -> str:
    return name if _IDENTIFIER.match(name) else _quote(name)


def _body(descriptor: TypeDescriptor | None, options: EmitOptions) -> str:
    return "void" if descriptor is None else render_type(descriptor, options)


def _field_lines(f: Field, graph: TypeGraph, options: EmitOptions) -> list[str]:
    _check_references(f.type, graph)
    lines = []
    if f.default_value is not None:
        lines.append(f"  /** @default {f.default_value} */")
    marker = "?" if f.optional else ""
    rendered = render_type(f.type, options)
    if f.nullable:
        rendered += " | null"
    lines.append(f"  {_property_name(f.name)}{marker}: {rendered}")
    return lines


def _check_references(descriptor: TypeDescriptor, graph: TypeGraph) -> None:
    if isinstance(descriptor, ReferenceType) and descriptor.name not in graph:
        raise EmitError(f"Cannot emit reference to unknown type '{descriptor.name}'")
    if isinstance(descriptor, ContainerType):
        _check_references(descriptor.element, graph)
    if isinstance(descriptor, MappingType):
        _check_references(descriptor.key, graph)
        _check_references(descriptor.value, graph)
    if isinstance(descriptor, UnionType):
        for member in descriptor.members:
            _check_references(member, graph)


def _check_supertypes(type_def: TypeDef, graph: TypeGraph) -> None:
    for supertype in type_def.supertypes:
        if supertype not in graph:
            raise EmitError(f"Cannot emit '{type_def.name}': it extends unknown type '{supertype}'")


def _ref_comment(type_def: TypeDef) -> list[str]:
    lines = []
    # Anonymous identities are structural signatures, not source names.
    if not type_def.identity.startswith("{") and "#" not in type_def.identity:
        lines.append(f" * Source: {type_def.identity}")
    references = sorted(set(type_def.referenced_by))
    if references:
        lines.append(" * Referenced by:")
        lines.extend(f" * - {r}" for r in references)
    if not lines:
        return []
    return ["/**", *lines, " */"]
