# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extraction of a canonical type graph from endpoint signatures."""

from apishape.extractor.annotations import (
    DEFAULT_PRECEDENCE,
    AnnotationResolver,
    FieldSite,
    OptionalitySignal,
    Verdict,
)
from apishape.extractor.collector import EndpointCollector
from apishape.extractor.errors import (
    ErrorKind,
    ExtractionError,
    ExtractionReport,
    InvalidOptionalPrimitive,
    ResolutionError,
)
from apishape.extractor.graph import BuildResult, TypeGraphBuilder, build_graph

__all__ = [
    "DEFAULT_PRECEDENCE",
    "AnnotationResolver",
    "BuildResult",
    "EndpointCollector",
    "ErrorKind",
    "ExtractionError",
    "ExtractionReport",
    "FieldSite",
    "InvalidOptionalPrimitive",
    "OptionalitySignal",
    "ResolutionError",
    "TypeGraphBuilder",
    "Verdict",
    "build_graph",
]
