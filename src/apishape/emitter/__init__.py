# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emitters: TypeScript declarations and portable JSON artifacts."""

from apishape.emitter.artifact import (
    ARTIFACT_FORMAT_VERSION,
    deserialize,
    read_artifact,
    serialize,
    write_artifact,
)
from apishape.emitter.typescript import (
    ENDPOINT_INDEX_NAME,
    EmitError,
    EmitOptions,
    emit,
    emit_endpoint_index,
    render_document,
    render_type,
)

__all__ = [
    "ARTIFACT_FORMAT_VERSION",
    "ENDPOINT_INDEX_NAME",
    "EmitError",
    "EmitOptions",
    "deserialize",
    "emit",
    "emit_endpoint_index",
    "read_artifact",
    "render_document",
    "render_type",
    "serialize",
    "write_artifact",
]
