# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type graph construction from endpoint signatures.

The builder walks each endpoint's request, response, path-variable and query
shapes. Scalars, containers and mappings become descriptors in place; a use
of a sealed type becomes the union of its variants; composite types are
registered in the graph under their emission name the first time their
identity is discovered and are referenced by name from then on. Registration
happens *before* a composite's fields are resolved, so recursive and mutually
recursive types terminate with a single graph entry each.

Each endpoint is resolved as a unit. When it fails with a fatal error every
graph entry it introduced is removed again, the error is recorded, and the
next endpoint starts from the graph as it was before.
"""

from __future__ import annotations

import hashlib
import logging
import re
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

from apishape.config import GeneratorConfig
from apishape.extractor.annotations import AnnotationResolver, FieldSite
from apishape.extractor.errors import (
    ErrorKind,
    ExtractionError,
    ExtractionReport,
    InvalidOptionalPrimitive,
    ResolutionError,
)
from apishape.metadata.notation import NotationError, parse_type
from apishape.metadata.shapes import FieldShape, Snapshot, TypeDeclaration, TypeShape
from apishape.model.entities import EndpointSignature, Extraction, ResolvedEndpoint, TypeDef, TypeGraph
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

_LOG = logging.getLogger(__name__)

_T = TypeVar("_T")

# ###############
# Public Interface
# ###############


@dataclass
class BuildResult:
    """Outcome of a full extraction pass.

    Attributes:
        extraction: Endpoints that resolved cleanly, and their type graph.
        report: Every problem recorded during the pass.
    """

    extraction: Extraction
    report: ExtractionReport = field(default_factory=ExtractionReport)

    @property
    def has_errors(self) -> bool:
        """Return True if the pass recorded any error."""
        return self.report.has_errors


class TypeGraphBuilder:
    """Owns one TypeGraph and resolves shapes into it.

    A builder is single-writer: :meth:`resolve`, :meth:`resolve_endpoint` and
    :meth:`include` hold the builder's lock, so endpoints resolved from several
    threads are serialized and discovery order stays a total order.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        config: GeneratorConfig | None = None,
        resolver: AnnotationResolver | None = None,
    ) -> None:
        self._snapshot = snapshot
        self._config = config or GeneratorConfig()
        self._resolver = resolver or AnnotationResolver.from_config(self._config)
        self._replacements = [(re.compile(p), r) for p, r in self._config.type_name_replacements.items()]
        self._graph = TypeGraph()
        self._report = ExtractionReport()
        self._endpoints: list[ResolvedEndpoint] = []
        # identity -> emission name and back; both mirror the graph.
        self._name_of: dict[str, str] = {}
        self._identity_of: dict[str, str] = {}
        # Names registered by the unit currently being resolved (for rollback).
        self._added: list[str] = []
        self._context: str | None = None
        # Sealed types whose variants are being expanded.
        self._expanding: set[str] = set()
        self._lock = threading.Lock()

    @property
    def graph(self) -> TypeGraph:
        """The graph under construction."""
        return self._graph

    @property
    def report(self) -> ExtractionReport:
        """Problems recorded so far."""
        return self._report

    def resolve(self, shape: TypeShape, bindings: dict[str, TypeDescriptor] | None = None) -> TypeDescriptor:
        """Resolve a type shape into a descriptor, registering composites on the way.

        The call is a unit of its own: when it fails, every graph entry it
        registered is removed again before the error propagates.

        Args:
            shape: The structural description to resolve.
            bindings: Type-variable bindings in scope (for generic composites).

        Returns:
            The descriptor. Composites are returned as a ReferenceType by name.

        Raises:
            ResolutionError: On unknown type names, wrong type-argument counts,
                non-scalar mapping keys, or emission-name collisions.
        """
        with self._lock:
            self._added = []
            try:
                return self._resolve(shape, bindings or {})
            except ResolutionError:
                self._rollback()
                raise
            finally:
                self._added = []

    def _resolve(self, shape: TypeShape, bindings: dict[str, TypeDescriptor]) -> TypeDescriptor:
        if shape.fields is not None:
            return self._resolve_anonymous(shape.fields, bindings)

        name = shape.name or ""
        arguments = shape.arguments

        if not arguments and name in bindings:
            return bindings[name]

        if name in self._config.map_type:
            self._expect_arity(shape, 0)
            return MappedType(target=self._config.map_type[name])
        if self._is_excluded(name):
            return AnyType()

        if name in _KOTLIN_SCALARS:
            self._expect_arity(shape, 0)
            return PrimitiveType(primitive=_KOTLIN_SCALARS[name])
        vocabulary_name = _vocabulary_name(name)
        if vocabulary_name in _PRIMITIVES:
            self._expect_arity(shape, 0)
            return PrimitiveType(primitive=_PRIMITIVES[vocabulary_name])
        if vocabulary_name in _BOXED:
            self._expect_arity(shape, 0)
            return BoxedPrimitiveType(primitive=_BOXED[vocabulary_name])
        if vocabulary_name in _TEXT:
            self._expect_arity(shape, 0)
            return TextType()
        if vocabulary_name in _CONTAINERS:
            self._expect_arity(shape, 1)
            ordered, unique = _CONTAINERS[vocabulary_name]
            element = self._resolve(arguments[0], bindings)
            return ContainerType(element=element, ordered=ordered, unique=unique)
        if vocabulary_name in _MAPPINGS:
            self._expect_arity(shape, 2)
            key = self._resolve(arguments[0], bindings)
            if not is_scalar(key):
                raise ResolutionError(
                    ErrorKind.INVALID_TYPE_SHAPE,
                    f"Mapping '{shape}' has a non-scalar key type",
                )
            return MappingType(key=key, value=self._resolve(arguments[1], bindings))

        declaration = self._snapshot.types.get(name)
        if declaration is None:
            raise ResolutionError(ErrorKind.UNKNOWN_TYPE, f"Unknown type '{name}' in '{shape}'")
        if declaration.is_enum:
            self._expect_arity(shape, 0)
            return EnumType(name=declaration.identity, values=declaration.values or ())
        if declaration.is_sealed:
            return self._resolve_sealed(declaration, shape, bindings)
        return self._resolve_declared(declaration, shape, bindings)

    def resolve_endpoint(self, signature: EndpointSignature) -> ResolvedEndpoint | None:
        """Resolve one endpoint into the graph.

        Returns:
            The resolved endpoint, or ``None`` when it failed; the failure is
            recorded in :attr:`report` and its graph contribution is removed.
        """

        def _resolve() -> ResolvedEndpoint:
            return ResolvedEndpoint(
                path=signature.path,
                verb=signature.verb,
                handler=signature.handler,
                request_type=self._resolve_body(signature.request),
                response_type=self._resolve_body(signature.response),
                path_type=self._resolve_parameters(signature, signature.path_params, "path"),
                query_type=self._resolve_parameters(signature, signature.query, "query"),
            )

        endpoint = self._transaction(signature.label, _resolve, _endpoint_descriptors)
        if endpoint is not None:
            self._endpoints.append(endpoint)
        return endpoint

    def include(self, expression: str) -> TypeDescriptor | None:
        """Resolve a type that no endpoint needs to reference (configured ``include``)."""
        try:
            shape = parse_type(expression)
        except NotationError as exc:
            self._report.add(ExtractionError(ErrorKind.INVALID_TYPE_SHAPE, str(exc), f"include {expression}"))
            return None
        return self._transaction(f"include {expression}", lambda: self._resolve(shape, {}), lambda d: [d])

    def finish(self) -> Extraction:
        """Record which endpoints reach each type and return the extraction."""
        for type_def in self._graph.types.values():
            type_def.referenced_by = []
        for endpoint in self._endpoints:
            label = endpoint.handler or endpoint.label
            for name in self._reachable(_endpoint_descriptors(endpoint)):
                self._graph.types[name].referenced_by.append(label)
        return Extraction(endpoints=list(self._endpoints), graph=self._graph)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _transaction(self, label: str, work: Callable[[], _T], descriptors: Callable[[_T], list]) -> _T | None:
        with self._lock:
            self._added = []
            self._context = label
            try:
                result = work()
                self._check_complete(descriptors(result))
            except ResolutionError as exc:
                self._rollback()
                self._report.add(ExtractionError(exc.kind, exc.message, label))
                _LOG.debug("%s: omitted (%s)", label, exc.message)
                return None
            finally:
                self._context = None
            _LOG.debug("%s: resolved, %d new type(s)", label, len(self._added))
            self._added = []
            return result

    def _rollback(self) -> None:
        for name in self._added:
            identity = self._identity_of.pop(name)
            del self._name_of[identity]
            del self._graph.types[name]
        self._added = []

    def _check_complete(self, roots: list[TypeDescriptor | None]) -> None:
        """Raise UnresolvedReference if the current unit left a placeholder or dangling name."""
        descriptors = [d for d in roots if d is not None]
        for name in self._added:
            descriptors.extend(f.type for f in self._graph.types[name].fields)
        for descriptor in descriptors:
            placeholders = unresolved_names(descriptor)
            if placeholders:
                raise ResolutionError(
                    ErrorKind.UNRESOLVED_REFERENCE,
                    f"Type variable '{placeholders[0]}' is not bound to a type argument",
                )
            for name in referenced_names(descriptor):
                if name not in self._graph:
                    raise ResolutionError(ErrorKind.UNRESOLVED_REFERENCE, f"Reference to unregistered type '{name}'")

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def _resolve_declared(
        self,
        declaration: TypeDeclaration,
        shape: TypeShape,
        bindings: dict[str, TypeDescriptor],
    ) -> ReferenceType:
        arguments = self._type_arguments(declaration, shape, bindings)
        identity = declaration.identity
        if arguments:
            identity += "<" + ", ".join(self._identity_key(a) for a in arguments) + ">"
        name = self._config.alias.get(identity)
        if name is None:
            base = self._config.alias.get(declaration.identity) or self._simple_name(declaration.identity)
            name = base + "".join(self._name_token(a) for a in arguments)
        scope = dict(zip(declaration.type_parameters, arguments))
        return self._register(identity, name, declaration.fields, scope, declaration)

    def _resolve_sealed(
        self,
        declaration: TypeDeclaration,
        shape: TypeShape,
        bindings: dict[str, TypeDescriptor],
    ) -> UnionType:
        """Resolve a use of a sealed type to the union of its variants."""
        if declaration.identity in self._expanding:
            raise ResolutionError(
                ErrorKind.INVALID_TYPE_SHAPE,
                f"Sealed type '{declaration.identity}' lists itself among its own variants",
            )
        scope = dict(zip(declaration.type_parameters, self._type_arguments(declaration, shape, bindings)))
        members: list[TypeDescriptor] = []
        self._expanding.add(declaration.identity)
        try:
            for subtype in declaration.subtypes or ():
                variant = self._resolve(subtype, scope)
                if isinstance(variant, UnionType):
                    candidates = list(variant.members)
                elif isinstance(variant, ReferenceType):
                    candidates = [variant]
                else:
                    raise ResolutionError(
                        ErrorKind.INVALID_TYPE_SHAPE,
                        f"Subtype '{subtype}' of '{declaration.identity}' is not a composite type",
                    )
                members.extend(c for c in candidates if c not in members)
        finally:
            self._expanding.discard(declaration.identity)
        return UnionType(name=declaration.identity, members=tuple(members))

    def _type_arguments(
        self,
        declaration: TypeDeclaration,
        shape: TypeShape,
        bindings: dict[str, TypeDescriptor],
    ) -> list[TypeDescriptor]:
        parameters = declaration.type_parameters
        if shape.arguments and len(shape.arguments) != len(parameters):
            raise ResolutionError(
                ErrorKind.INVALID_TYPE_SHAPE,
                f"'{shape}' passes {len(shape.arguments)} type argument(s);"
                f" '{declaration.identity}' declares {len(parameters)}",
            )
        if shape.arguments:
            return [self._resolve(a, bindings) for a in shape.arguments]
        # A raw use of a generic type leaves its parameters unbound.
        return [UnresolvedType(name=p) for p in parameters]

    def _resolve_anonymous(self, fields: tuple[FieldShape, ...], bindings: dict[str, TypeDescriptor]) -> ReferenceType:
        identity = "{" + ", ".join(str(f) for f in fields) + "}"
        if bindings:
            identity += " with " + ", ".join(f"{k}={self._identity_key(v)}" for k, v in sorted(bindings.items()))
        digest = hashlib.sha1(identity.encode("utf-8")).hexdigest()[:10]
        return self._register(identity, f"Anonymous{digest}", fields, bindings)

    def _resolve_parameters(
        self,
        signature: EndpointSignature,
        sites: tuple[FieldShape, ...],
        role: str,
    ) -> TypeDescriptor | None:
        """Register the path-variable or query sites of an endpoint as one composite."""
        if not sites:
            return None
        if signature.handler is None:
            return self._resolve_anonymous(sites, {})
        segments = [s for s in signature.handler.split(".") if s][-2:]
        base = "".join(s[:1].upper() + s[1:] for s in segments)
        name = self._apply_replacements(base) + role.capitalize()
        return self._register(f"{signature.handler}#{role}", name, sites, {})

    def _register(
        self,
        identity: str,
        name: str,
        fields: tuple[FieldShape, ...],
        bindings: dict[str, TypeDescriptor],
        declaration: TypeDeclaration | None = None,
    ) -> ReferenceType:
        existing = self._name_of.get(identity)
        if existing is not None:
            return ReferenceType(name=existing)
        if not name:
            raise ResolutionError(ErrorKind.INVALID_TYPE_SHAPE, f"Type '{identity}' has an empty emission name")
        claimed_by = self._identity_of.get(name)
        if claimed_by is not None:
            raise ResolutionError(
                ErrorKind.AMBIGUOUS_TYPE_NAME,
                f"Type name '{name}' is claimed by both '{claimed_by}' and '{identity}';"
                " add an alias or a type-name replacement to tell them apart",
            )

        type_def = TypeDef(name=name, identity=identity)
        self._graph.types[name] = type_def
        self._name_of[identity] = name
        self._identity_of[name] = identity
        self._added.append(name)
        _LOG.debug("registered %s as %s", identity, name)

        inherited: set[str] = set()
        tag = None
        if declaration is not None:
            inherited = self._inherited_field_names(declaration, {declaration.identity})
            for supertype in declaration.supertypes:
                parent = self._resolve_supertype(supertype, bindings, identity)
                if parent is not None:
                    type_def.supertypes.append(parent)
            tag = self._type_tag(declaration)

        resolved = self._resolve_fields(name, tuple(f for f in fields if f.name not in inherited), bindings)
        if tag is not None and all(f.name != tag.name for f in resolved):
            resolved.insert(0, tag)
        type_def.fields = resolved
        return ReferenceType(name=name)

    def _resolve_supertype(self, shape: TypeShape, bindings: dict[str, TypeDescriptor], owner: str) -> str | None:
        """Register a supertype and return its emission name; ``None`` for excluded or mapped ones."""
        name = shape.name or ""
        if self._is_excluded(name) or name in self._config.map_type:
            return None
        declaration = self._snapshot.types.get(name)
        if declaration is None:
            raise ResolutionError(ErrorKind.UNKNOWN_TYPE, f"Unknown supertype '{shape}' of '{owner}'")
        if declaration.is_enum:
            raise ResolutionError(ErrorKind.INVALID_TYPE_SHAPE, f"Supertype '{shape}' of '{owner}' is not a composite")
        # A sealed supertype contributes its own fields, not the union of its variants.
        return self._resolve_declared(declaration, shape, bindings).name

    def _inherited_field_names(self, declaration: TypeDeclaration, trail: set[str]) -> set[str]:
        names: set[str] = set()
        for shape in declaration.supertypes:
            parent = self._snapshot.types.get(shape.name or "")
            if parent is None:
                continue
            if parent.identity in trail:
                raise ResolutionError(ErrorKind.INVALID_TYPE_SHAPE, f"'{parent.identity}' inherits from itself")
            names.update(f.name for f in parent.fields)
            names.update(self._inherited_field_names(parent, trail | {parent.identity}))
        return names

    def _type_tag(self, declaration: TypeDeclaration) -> Field | None:
        """Return the discriminator field a variant of a tagged sealed type carries on the wire."""
        for shape in declaration.supertypes:
            parent = self._snapshot.types.get(shape.name or "")
            if parent is not None and parent.discriminator is not None:
                tag = declaration.type_tag or _tag_name(declaration.identity)
                return Field(name=parent.discriminator, type=EnumType(values=(tag,)))
        return None

    def _resolve_fields(
        self,
        owner: str,
        fields: tuple[FieldShape, ...],
        bindings: dict[str, TypeDescriptor],
    ) -> list[Field]:
        seen: set[str] = set()
        resolved: list[Field] = []
        for shape in fields:
            if shape.name in seen:
                raise ResolutionError(ErrorKind.INVALID_TYPE_SHAPE, f"Duplicate field name '{shape.name}' in '{owner}'")
            seen.add(shape.name)

            descriptor = self._resolve(shape.type, bindings)
            if shape.nullable and isinstance(descriptor, PrimitiveType):
                # A scalar that may hold null is stored boxed (Kotlin `Int?`).
                descriptor = BoxedPrimitiveType(primitive=descriptor.primitive)
            site = FieldSite(
                owner=owner,
                name=shape.name,
                type=descriptor,
                nullable=shape.nullable,
                annotations=shape.annotations,
                wire=shape.wire,
            )
            try:
                verdict = self._resolver.resolve(site)
            except InvalidOptionalPrimitive as exc:
                # The field is dropped; its siblings still emit.
                self._report.add(ExtractionError(exc.kind, exc.message, self._context))
                continue
            resolved.append(
                Field(
                    name=shape.name,
                    type=descriptor,
                    optional=verdict.optional,
                    nullable=verdict.nullable,
                    default_value=verdict.default_value,
                )
            )
        return resolved

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def _simple_name(self, identity: str) -> str:
        return self._apply_replacements(identity.rsplit(".", 1)[-1])

    def _apply_replacements(self, name: str) -> str:
        for pattern, replacement in self._replacements:
            name = pattern.sub(replacement, name)
        return name

    def _name_token(self, descriptor: TypeDescriptor) -> str:
        """Return the fragment a type argument contributes to a generic type's name."""
        if isinstance(descriptor, (PrimitiveType, BoxedPrimitiveType)):
            return descriptor.primitive.value.capitalize()
        if isinstance(descriptor, TextType):
            return "String"
        if isinstance(descriptor, EnumType):
            return self._simple_name(descriptor.name or "Enum")
        if isinstance(descriptor, MappedType):
            return re.sub(r"\W", "", descriptor.target).capitalize()
        if isinstance(descriptor, AnyType):
            return "Any"
        if isinstance(descriptor, ContainerType):
            return self._name_token(descriptor.element) + ("Set" if descriptor.unique else "List")
        if isinstance(descriptor, MappingType):
            return self._name_token(descriptor.key) + self._name_token(descriptor.value) + "Map"
        if isinstance(descriptor, UnionType):
            return self._simple_name(descriptor.name or "Union")
        return descriptor.name

    def _identity_key(self, descriptor: TypeDescriptor) -> str:
        """Return a canonical text key for a type argument, used in composite identities."""
        if isinstance(descriptor, PrimitiveType):
            return descriptor.primitive.value
        if isinstance(descriptor, BoxedPrimitiveType):
            return f"boxed {descriptor.primitive.value}"
        if isinstance(descriptor, TextType):
            return "text"
        if isinstance(descriptor, EnumType):
            return descriptor.name or "enum " + "|".join(descriptor.values)
        if isinstance(descriptor, MappedType):
            return f"mapped {descriptor.target}"
        if isinstance(descriptor, AnyType):
            return "any"
        if isinstance(descriptor, ContainerType):
            kind = f"container(ordered={descriptor.ordered}, unique={descriptor.unique})"
            return f"{kind}<{self._identity_key(descriptor.element)}>"
        if isinstance(descriptor, MappingType):
            return f"mapping<{self._identity_key(descriptor.key)}, {self._identity_key(descriptor.value)}>"
        if isinstance(descriptor, UnionType):
            members = " | ".join(self._identity_key(m) for m in descriptor.members)
            return f"{descriptor.name or 'union'}[{members}]"
        if isinstance(descriptor, ReferenceType):
            return self._identity_of.get(descriptor.name, descriptor.name)
        return f"?{descriptor.name}"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_body(self, shape: TypeShape | None) -> TypeDescriptor | None:
        if shape is None:
            return None
        if shape.fields is None and not shape.arguments and _vocabulary_name(shape.name or "") in _VOID:
            return None
        return self._resolve(shape, {})

    def _is_excluded(self, name: str) -> bool:
        return any(name == e or name.startswith(e + ".") or name.startswith(e + "$") for e in self._config.exclude)

    def _expect_arity(self, shape: TypeShape, count: int) -> None:
        if len(shape.arguments) != count:
            raise ResolutionError(
                ErrorKind.INVALID_TYPE_SHAPE,
                f"'{shape}' takes {count} type argument(s), got {len(shape.arguments)}",
            )

    def _reachable(self, roots: Iterable[TypeDescriptor | None]) -> list[str]:
        """Return graph names reachable from *roots*, in first-visit order."""
        visited: list[str] = []
        seen: set[str] = set()
        stack = [n for root in roots if root is not None for n in referenced_names(root)]
        stack.reverse()
        while stack:
            name = stack.pop()
            if name in seen or name not in self._graph:
                continue
            seen.add(name)
            visited.append(name)
            type_def = self._graph.types[name]
            children = list(type_def.supertypes)
            children.extend(n for f in type_def.fields for n in referenced_names(f.type))
            stack.extend(reversed(children))
        return visited


def build_graph(
    signatures: Iterable[EndpointSignature],
    snapshot: Snapshot,
    config: GeneratorConfig | None = None,
) -> BuildResult:
    """Resolve every endpoint signature and any configured extra types into one graph.

    Endpoints are resolved in the given order, so graph insertion order (and
    therefore emission order) is a function of that order alone.

    Args:
        signatures: Endpoint signatures, typically from the endpoint collector.
        snapshot: The metadata snapshot declaring the referenced types.
        config: Generator settings; defaults apply when omitted.

    Returns:
        A BuildResult with the clean endpoints, their graph, and the error report.
    """
    config = config or GeneratorConfig()
    builder = TypeGraphBuilder(snapshot, config)
    for signature in signatures:
        builder.resolve_endpoint(signature)
    for expression in config.include:
        builder.include(expression)
    return BuildResult(extraction=builder.finish(), report=builder.report)


# ################
# Implementation
# ################

_PRIMITIVES: dict[str, PrimitiveKind] = {kind.value: kind for kind in PrimitiveKind}

_BOXED: dict[str, PrimitiveKind] = {
    "Boolean": PrimitiveKind.BOOLEAN,
    "Byte": PrimitiveKind.BYTE,
    "Short": PrimitiveKind.SHORT,
    "Integer": PrimitiveKind.INT,
    "Long": PrimitiveKind.LONG,
    "Float": PrimitiveKind.FLOAT,
    "Double": PrimitiveKind.DOUBLE,
    "Character": PrimitiveKind.CHAR,
}

# Kotlin scalars are primitives; a nullable use (`Int?`) is boxed at the field site.
_KOTLIN_SCALARS: dict[str, PrimitiveKind] = {
    "kotlin.Boolean": PrimitiveKind.BOOLEAN,
    "kotlin.Byte": PrimitiveKind.BYTE,
    "kotlin.Short": PrimitiveKind.SHORT,
    "kotlin.Int": PrimitiveKind.INT,
    "kotlin.Long": PrimitiveKind.LONG,
    "kotlin.Float": PrimitiveKind.FLOAT,
    "kotlin.Double": PrimitiveKind.DOUBLE,
    "kotlin.Char": PrimitiveKind.CHAR,
}

_TEXT: frozenset[str] = frozenset({"String", "CharSequence"})

# name -> (ordered, unique)
_CONTAINERS: dict[str, tuple[bool, bool]] = {
    "Array": (True, False),
    "List": (True, False),
    "ArrayList": (True, False),
    "LinkedList": (True, False),
    "MutableList": (True, False),
    "Collection": (False, False),
    "Iterable": (False, False),
    "Set": (False, True),
    "HashSet": (False, True),
    "MutableSet": (False, True),
    "SortedSet": (True, True),
    "TreeSet": (True, True),
    "LinkedHashSet": (True, True),
}

_MAPPINGS: frozenset[str] = frozenset({"Map", "HashMap", "LinkedHashMap", "SortedMap", "TreeMap", "MutableMap"})

_VOID: frozenset[str] = frozenset({"void", "Void", "Unit"})

_VOCABULARY_PACKAGES: frozenset[str] = frozenset({"java.lang", "java.util", "kotlin", "kotlin.collections"})


def _vocabulary_name(name: str) -> str:
    """Strip a standard-library package so ``java.util.List`` classifies like ``List``."""
    package, _, simple = name.rpartition(".")
    if package in _VOCABULARY_PACKAGES:
        return simple
    return name


def _tag_name(identity: str) -> str:
    """Return the default variant tag: the innermost simple name (``Animal$Dog`` -> ``Dog``)."""
    return re.split(r"[.$]", identity)[-1]


def _endpoint_descriptors(endpoint: ResolvedEndpoint) -> list[TypeDescriptor | None]:
    return [endpoint.request_type, endpoint.response_type, endpoint.path_type, endpoint.query_type]
