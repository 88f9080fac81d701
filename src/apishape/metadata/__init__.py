# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Metadata snapshots: the structural description of routes and types."""

from apishape.metadata.notation import NotationError, parse_type
from apishape.metadata.shapes import (
    FieldShape,
    RouteDeclaration,
    Snapshot,
    TypeDeclaration,
    TypeShape,
    WireProperty,
)
from apishape.metadata.snapshot import SnapshotError, load_snapshot, parse_snapshot

__all__ = [
    "FieldShape",
    "NotationError",
    "RouteDeclaration",
    "Snapshot",
    "SnapshotError",
    "TypeDeclaration",
    "TypeShape",
    "WireProperty",
    "load_snapshot",
    "parse_snapshot",
    "parse_type",
]
