# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for extracted type graphs (dangling refs, invalid defaults, etc.)."""

from apishape.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
