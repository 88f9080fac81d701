# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Problems found while extracting types, and the report that collects them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ###############
# Public Interface
# ###############


class ErrorKind(Enum):
    """Categories of extraction problems."""

    AMBIGUOUS_TYPE_NAME = "AmbiguousTypeName"
    INVALID_OPTIONAL_PRIMITIVE = "InvalidOptionalPrimitive"
    UNRESOLVED_REFERENCE = "UnresolvedReference"
    UNKNOWN_TYPE = "UnknownType"
    INVALID_TYPE_SHAPE = "InvalidTypeShape"


@dataclass(frozen=True)
class ExtractionError:
    """A problem detected while extracting one endpoint or field site.

    Attributes:
        kind: Category of the problem.
        message: Human-readable description.
        endpoint: Label of the endpoint being resolved, if any.
    """

    kind: ErrorKind
    message: str
    endpoint: str | None = None

    def __str__(self) -> str:
        prefix = f"{self.endpoint}: " if self.endpoint else ""
        return f"{prefix}[{self.kind.value}] {self.message}"


class ResolutionError(Exception):
    """Raised inside the builder to abandon the endpoint currently being resolved."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class InvalidOptionalPrimitive(ResolutionError):
    """Raised by the annotation resolver when a primitive site is asserted optional.

    Only the offending field is dropped; the builder does not abandon the endpoint.
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.INVALID_OPTIONAL_PRIMITIVE, message)


@dataclass
class ExtractionReport:
    """Errors collected over one extraction pass, in discovery order.

    A problem is recorded once per endpoint (or include) that runs into it, so
    every omitted endpoint is named by at least one entry.
    """

    errors: list[ExtractionError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any error was recorded."""
        return len(self.errors) > 0

    def add(self, error: ExtractionError) -> None:
        """Record *error* unless the same endpoint already reported the same problem."""
        if error not in self.errors:
            self.errors.append(error)

    def of_kind(self, kind: ErrorKind) -> list[ExtractionError]:
        """Return the recorded errors of one kind."""
        return [e for e in self.errors if e.kind == kind]
