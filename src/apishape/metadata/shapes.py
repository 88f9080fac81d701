# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural descriptions supplied by the routing and wire-encoding collaborators.

Shapes are purely syntactic: a shape names a type and its arguments, but says
nothing about what that name means. Classification into primitives, containers,
composites and so on happens in the type graph builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class WireProperty:
    """Property-level metadata contributed by the wire-encoding framework.

    Attributes:
        required: Whether the encoding requires the property to be present.
        default_value: Declared default, or ``None`` when the annotation has none.
            Sentinel "no default" markers are filtered by the annotation resolver.
    """

    required: bool = True
    default_value: str | None = None


@dataclass(frozen=True)
class TypeShape:
    """A type expression: a name with optional type arguments, or an inline composite.

    Attributes:
        name: Type name (``int``, ``List``, ``com.example.Order``); ``None`` for
            inline anonymous composites.
        arguments: Type arguments in declaration order.
        fields: Member sites of an inline anonymous composite; ``None`` otherwise.
    """

    name: str | None
    arguments: tuple[TypeShape, ...] = ()
    fields: tuple[FieldShape, ...] | None = None

    @property
    def is_anonymous(self) -> bool:
        """Return True for inline composites with no declared name."""
        return self.fields is not None

    def __str__(self) -> str:
        if self.fields is not None:
            return "{" + ", ".join(str(f) for f in self.fields) + "}"
        if not self.arguments:
            return self.name or ""
        return f"{self.name}<{', '.join(str(a) for a in self.arguments)}>"


@dataclass(frozen=True)
class FieldShape:
    """A field or parameter site.

    Attributes:
        name: Property name.
        type: Declared type of the site.
        nullable: The declaring language marks the site as nullable (e.g. ``String?``).
        annotations: Qualified names of annotations present on the site.
        wire: Wire-encoding property metadata, when the site carries any.
    """

    name: str
    type: TypeShape
    nullable: bool = False
    annotations: tuple[str, ...] = ()
    wire: WireProperty | None = None

    def __str__(self) -> str:
        marker = "?" if self.nullable else ""
        text = f"{self.name}{marker}: {self.type}"
        if self.annotations:
            text += " @" + " @".join(sorted(self.annotations))
        if self.wire is not None:
            text += f" wire(required={self.wire.required}, default={self.wire.default_value!r})"
        return text


@dataclass(frozen=True)
class TypeDeclaration:
    """A named type declared by the server: a composite or an enumeration.

    A composite that lists ``subtypes`` is sealed (or polymorphic): a use of
    it stands for one of its variants. Its own fields are shared by the
    variants, which name it among their ``supertypes``.

    Attributes:
        identity: Qualified name of the declared type.
        type_parameters: Names of the generic parameters, in order.
        fields: Member sites of a composite, excluding inherited ones.
        values: Enumeration constants; ``None`` for composites.
        supertypes: Composites this type extends, as type expressions that may
            use the type's own parameters.
        subtypes: Variants of a sealed type; ``None`` for ordinary composites.
        discriminator: Property carrying the variant tag on the wire, for a
            sealed type whose encoding tags its variants.
        type_tag: Value of the discriminator property for this variant;
            defaults to the simple name of the identity.
    """

    identity: str
    type_parameters: tuple[str, ...] = ()
    fields: tuple[FieldShape, ...] = ()
    values: tuple[str, ...] | None = None
    supertypes: tuple[TypeShape, ...] = ()
    subtypes: tuple[TypeShape, ...] | None = None
    discriminator: str | None = None
    type_tag: str | None = None

    @property
    def is_enum(self) -> bool:
        """Return True if the declaration is an enumeration."""
        return self.values is not None

    @property
    def is_sealed(self) -> bool:
        """Return True if the declaration lists its variants."""
        return self.subtypes is not None


@dataclass(frozen=True)
class RouteDeclaration:
    """One route as listed by the routing collaborator."""

    path: str
    verb: str
    handler: str | None = None
    request: TypeShape | None = None
    response: TypeShape | None = None
    query: tuple[FieldShape, ...] = ()
    path_params: tuple[FieldShape, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """A complete, already-available metadata snapshot.

    Attributes:
        types: Type declarations keyed by identity.
        routes: Routes in the order the routing collaborator lists them.
    """

    types: dict[str, TypeDeclaration] = field(default_factory=dict)
    routes: tuple[RouteDeclaration, ...] = ()
