# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for extracted type graphs.

These checks operate on a finished extraction (or on one read back from an
artifact) and enforce the invariants a well-formed graph must satisfy before
it is emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from apishape.model.entities import Extraction, TypeGraph
from apishape.model.types import (
    ContainerType,
    EnumType,
    MappingType,
    PrimitiveType,
    TextType,
    TypeDescriptor,
    UnionType,
    referenced_names,
    unresolved_names,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue detected during validation.

    The graph can still be emitted, but the result may not behave as the
    server does on the wire.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal invariant violation detected during validation.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Invariant violations that make the graph unfit for emission.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(extraction: Extraction) -> ValidationResult:
    """Run all validation checks on an extraction.

    Checks performed:

    1. **Dangling references** (error): every ``Reference`` used by a field or
       an endpoint (including every variant of a union) names a type
       registered in the graph.

    2. **Unresolved placeholders** (error): no ``Unresolved`` descriptor
       survives in the graph or in an endpoint.

    3. **Defaults on required fields** (error): a field that is not optional
       carries no default value.

    4. **Optional primitives** (error): a primitive field may only be optional
       when it has a default value.

    5. **Mapping keys** (warning): JSON object keys are always strings, so a
       mapping keyed by anything other than text or an enumeration may not
       round-trip as declared.

    6. **Unknown supertypes** (error): every type a composite extends is
       registered in the graph.

    Args:
        extraction: The extraction to validate.

    Returns:
        A :class:`ValidationResult` containing any warnings and errors found.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_references(extraction))
    errors.extend(_check_defaults(extraction.graph))
    errors.extend(_check_supertypes(extraction.graph))
    warnings.extend(_check_mapping_keys(extraction))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _sites(extraction: Extraction) -> list[tuple[str, TypeDescriptor]]:
    """Return every (label, descriptor) pair in the extraction, fields first."""
    sites: list[tuple[str, TypeDescriptor]] = []
    for type_def in extraction.graph.types.values():
        for f in type_def.fields:
            sites.append((f"{type_def.name}.{f.name}", f.type))
    for endpoint in extraction.endpoints:
        for part, descriptor in (
            ("request", endpoint.request_type),
            ("response", endpoint.response_type),
            ("path", endpoint.path_type),
            ("query", endpoint.query_type),
        ):
            if descriptor is not None:
                sites.append((f"{endpoint.label} {part}", descriptor))
    return sites


def _check_references(extraction: Extraction) -> list[ValidationError]:
    """Return errors for dangling references and leftover placeholders."""
    errors: list[ValidationError] = []
    for label, descriptor in _sites(extraction):
        for name in referenced_names(descriptor):
            if name not in extraction.graph:
                errors.append(ValidationError(message=f"'{label}' references unknown type '{name}'."))
        for name in unresolved_names(descriptor):
            errors.append(ValidationError(message=f"'{label}' contains unresolved type '{name}'."))
    return errors


def _check_defaults(graph: TypeGraph) -> list[ValidationError]:
    """Return errors for defaults on required fields and optional primitives without one."""
    errors: list[ValidationError] = []
    for type_def in graph.types.values():
        for f in type_def.fields:
            label = f"{type_def.name}.{f.name}"
            if not f.optional and f.default_value is not None:
                errors.append(ValidationError(message=f"Required field '{label}' declares a default value."))
            if isinstance(f.type, PrimitiveType) and f.optional and f.default_value is None:
                errors.append(
                    ValidationError(message=f"Primitive field '{label}' is optional but has no default value.")
                )
    return errors


def _mapping_keys(descriptor: TypeDescriptor) -> list[TypeDescriptor]:
    if isinstance(descriptor, MappingType):
        return [descriptor.key] + _mapping_keys(descriptor.key) + _mapping_keys(descriptor.value)
    if isinstance(descriptor, ContainerType):
        return _mapping_keys(descriptor.element)
    if isinstance(descriptor, UnionType):
        return [key for member in descriptor.members for key in _mapping_keys(member)]
    return []


def _check_supertypes(graph: TypeGraph) -> list[ValidationError]:
    """Return errors for composites that extend a type missing from the graph."""
    return [
        ValidationError(message=f"'{type_def.name}' extends unknown type '{base}'.")
        for type_def in graph.types.values()
        for base in type_def.supertypes
        if base not in graph
    ]


def _check_mapping_keys(extraction: Extraction) -> list[ValidationWarning]:
    """Return warnings for mappings keyed by something other than text or an enum."""
    warnings: list[ValidationWarning] = []
    for label, descriptor in _sites(extraction):
        for key in _mapping_keys(descriptor):
            if not isinstance(key, (TextType, EnumType)):
                warnings.append(
                    ValidationWarning(
                        message=f"'{label}' uses a '{key.kind}' mapping key; JSON object keys are always strings."
                    )
                )
    return warnings
