# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Optionality, nullability and default-value resolution for field and parameter sites.

Several independent sources can say something about whether a site may be
absent: the declared type itself, generic ``@Nullable``-style annotations,
generic "optional" markers, and the wire-encoding property annotation. Each
source is a *signal* that yields ``True``, ``False`` or no opinion. Signals are
consulted in ascending precedence and the last opinion wins. Only the type
shape ever answers ``False``, so once a higher signal asserts that a site is
optional it stays optional.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from apishape.config import GeneratorConfig
from apishape.extractor.errors import InvalidOptionalPrimitive
from apishape.metadata.shapes import WireProperty
from apishape.model.types import BoxedPrimitiveType, PrimitiveType, TypeDescriptor

_LOG = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class OptionalitySignal(Enum):
    """Sources of optionality information, named as in the configuration file."""

    TYPE_SHAPE = "type-shape"
    NULLABLE = "nullable"
    OPTIONAL = "optional"
    WIRE = "wire"


DEFAULT_PRECEDENCE: tuple[OptionalitySignal, ...] = (
    OptionalitySignal.TYPE_SHAPE,
    OptionalitySignal.NULLABLE,
    OptionalitySignal.OPTIONAL,
    OptionalitySignal.WIRE,
)


@dataclass(frozen=True)
class FieldSite:
    """A field or parameter site with everything the signals may inspect.

    Attributes:
        owner: Name of the enclosing type or endpoint, used in messages.
        name: Property name.
        type: Resolved declared type of the site.
        nullable: The declaring language marks the site as nullable.
        annotations: Qualified annotation names present on the site.
        wire: Wire-encoding property metadata, if any.
    """

    owner: str
    name: str
    type: TypeDescriptor
    nullable: bool = False
    annotations: tuple[str, ...] = ()
    wire: WireProperty | None = None


@dataclass(frozen=True)
class Verdict:
    """The resolved optionality of one site."""

    optional: bool
    nullable: bool
    default_value: str | None = None


class AnnotationResolver:
    """Reduces the signals present on a site to a single Verdict."""

    def __init__(
        self,
        *,
        nullable_annotations: Iterable[str] = (),
        optional_annotations: Iterable[str] = (),
        precedence: Iterable[OptionalitySignal] = DEFAULT_PRECEDENCE,
        no_default_markers: Iterable[str] = ("",),
    ) -> None:
        self._nullable = _AnnotationSet(nullable_annotations)
        self._optional = _AnnotationSet(optional_annotations)
        self._no_default = frozenset(no_default_markers)
        opinions: dict[OptionalitySignal, Callable[[FieldSite], bool | None]] = {
            OptionalitySignal.TYPE_SHAPE: self._type_shape_opinion,
            OptionalitySignal.NULLABLE: self._nullable_opinion,
            OptionalitySignal.OPTIONAL: self._optional_opinion,
            OptionalitySignal.WIRE: self._wire_opinion,
        }
        self._precedence = tuple(precedence)
        self._signals = [opinions[signal] for signal in self._precedence]

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> AnnotationResolver:
        """Create a resolver from the annotation and precedence settings of *config*."""
        return cls(
            nullable_annotations=config.nullable_annotations,
            optional_annotations=config.optional_annotations,
            precedence=[OptionalitySignal(name) for name in config.signal_precedence],
            no_default_markers=config.no_default_markers,
        )

    @property
    def precedence(self) -> tuple[OptionalitySignal, ...]:
        """Signals in ascending precedence."""
        return self._precedence

    def resolve(self, site: FieldSite) -> Verdict:
        """Resolve the optionality, nullability and default value of *site*.

        Raises:
            InvalidOptionalPrimitive: If any signal asserts that a primitive
                site may be absent and there is no default value to stand in
                for the absent value. This holds whatever the precedence, so a
                reordering that lets the type shape win still reports the site.
        """
        optional = False
        asserted_optional = False
        for opinion in self._signals:
            answer = opinion(site)
            if answer is not None:
                optional = answer
                asserted_optional = asserted_optional or answer

        default_value = self._default_value(site)
        if isinstance(site.type, PrimitiveType) and asserted_optional and default_value is None:
            raise InvalidOptionalPrimitive(
                f"Field '{site.name}' of '{site.owner}' has primitive type"
                f" '{site.type.primitive.value}' but is marked optional without a default;"
                " use the boxed type or declare a default value"
            )

        if default_value is not None and not optional:
            _LOG.debug("%s.%s: ignoring default %r on a required field", site.owner, site.name, default_value)
            default_value = None

        if isinstance(site.type, PrimitiveType):
            return Verdict(optional=optional, nullable=False, default_value=default_value)

        nullable = (
            isinstance(site.type, BoxedPrimitiveType) or site.nullable or self._nullable.matches(site.annotations)
        )
        return Verdict(optional=optional, nullable=nullable, default_value=default_value)

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def _type_shape_opinion(self, site: FieldSite) -> bool | None:
        if isinstance(site.type, PrimitiveType):
            return False
        if isinstance(site.type, BoxedPrimitiveType):
            return True
        return True if site.nullable else None

    def _nullable_opinion(self, site: FieldSite) -> bool | None:
        return True if self._nullable.matches(site.annotations) else None

    def _optional_opinion(self, site: FieldSite) -> bool | None:
        return True if self._optional.matches(site.annotations) else None

    def _wire_opinion(self, site: FieldSite) -> bool | None:
        if site.wire is not None and not site.wire.required:
            return True
        return None

    def _default_value(self, site: FieldSite) -> str | None:
        if site.wire is None or site.wire.default_value is None:
            return None
        if site.wire.default_value in self._no_default:
            return None
        return site.wire.default_value


# ################
# Implementation
# ################


class _AnnotationSet:
    """Configured annotation names; entries without a dot match by simple name."""

    def __init__(self, names: Iterable[str]) -> None:
        names = tuple(names)
        self._qualified = frozenset(names)
        self._simple = frozenset(n for n in names if "." not in n)

    def matches(self, annotations: Iterable[str]) -> bool:
        for annotation in annotations:
            if annotation in self._qualified or annotation.rsplit(".", 1)[-1] in self._simple:
                return True
        return False
