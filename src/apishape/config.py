# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the apishape configuration file."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".apishape.yaml"

SignalName = Literal["type-shape", "nullable", "optional", "wire"]

DEFAULT_SIGNAL_PRECEDENCE: tuple[SignalName, ...] = ("type-shape", "nullable", "optional", "wire")

# Spring's ValueConstants.DEFAULT_NONE, used by request-parameter annotations.
SPRING_DEFAULT_NONE = "\n\t\t\n\t\t\n\ue000\ue001\ue002\n\t\t\t\t\n"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


class GeneratorConfig(BaseModel):
    """Settings that steer extraction and emission.

    Every setting has a default, so an empty file (or no file at all) yields a
    working configuration.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    output: str = "api-types.ts"
    nullable_annotations: tuple[str, ...] = Field(
        default=(
            "javax.annotation.Nullable",
            "jakarta.annotation.Nullable",
            "org.jetbrains.annotations.Nullable",
            "androidx.annotation.Nullable",
        ),
        alias="nullable-annotations",
    )
    optional_annotations: tuple[str, ...] = Field(default=("TsOptional",), alias="optional-annotations")
    signal_precedence: tuple[SignalName, ...] = Field(default=DEFAULT_SIGNAL_PRECEDENCE, alias="signal-precedence")
    no_default_markers: tuple[str, ...] = Field(default=("", SPRING_DEFAULT_NONE), alias="no-default-markers")
    alias: dict[str, str] = Field(default_factory=dict)
    type_name_replacements: dict[str, str] = Field(
        default_factory=lambda: {"[.$]": ""}, alias="type-name-replacements"
    )
    map_type: dict[str, str] = Field(
        default_factory=lambda: {
            "java.time.Duration": "string",
            "java.time.Instant": "string",
            "java.time.OffsetDateTime": "string",
            "java.time.ZonedDateTime": "string",
            "java.time.LocalDateTime": "string",
            "java.time.LocalDate": "string",
            "java.time.LocalTime": "string",
            "java.lang.Object": "any",
            "kotlin.Any": "any",
        },
        alias="map-type",
    )
    exclude: tuple[str, ...] = ("java.lang.Class", "java.io.Serializable")
    include: tuple[str, ...] = ()
    sets_as_arrays: bool = Field(default=False, alias="sets-as-arrays")
    include_ref_comments: bool = Field(default=True, alias="include-ref-comments")
    header_lines: tuple[str, ...] = Field(default=(), alias="header-lines")
    api_include: tuple[str, ...] = Field(default=(), alias="api-include")
    api_ignore: tuple[str, ...] = Field(default=(), alias="api-ignore")

    @field_validator("signal_precedence")
    @classmethod
    def _each_signal_once(cls, value: tuple[SignalName, ...]) -> tuple[SignalName, ...]:
        if sorted(value) != sorted(DEFAULT_SIGNAL_PRECEDENCE):
            raise ValueError(f"must list each of {', '.join(DEFAULT_SIGNAL_PRECEDENCE)} exactly once")
        return value

    @field_validator("type_name_replacements", "api_include", "api_ignore")
    @classmethod
    def _patterns_compile(cls, value: dict[str, str] | tuple[str, ...]) -> dict[str, str] | tuple[str, ...]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern {pattern!r}: {exc}") from exc
        return value


def load_config(path: Path) -> GeneratorConfig:
    """Load and validate a configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the ``.apishape.yaml`` file.

    Returns:
        A validated GeneratorConfig.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML, or does
            not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse configuration YAML text into a GeneratorConfig.

    Raises:
        ConfigError: If the YAML is invalid or does not conform to the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {source_label}: {exc}") from exc


def default_config_text() -> str:
    """Return the commented starter configuration written by ``apishape init``."""
    return _DEFAULT_CONFIG_TEXT


# ################
# Implementation
# ################

_DEFAULT_CONFIG_TEXT = """\
# apishape configuration
# Every key is optional; the values below are the defaults.

output: api-types.ts

# Signals that can make a field optional, lowest precedence first.
signal-precedence: [type-shape, nullable, optional, wire]

nullable-annotations:
  - javax.annotation.Nullable
  - jakarta.annotation.Nullable
  - org.jetbrains.annotations.Nullable
  - androidx.annotation.Nullable
optional-annotations:
  - TsOptional

# Emission names: explicit aliases by identity, then regex rewrites of the simple name.
alias: {}
type-name-replacements:
  "[.$]": ""

sets-as-arrays: false
include-ref-comments: true
header-lines: []

# Select endpoints by handler name (exact, dotted prefix, or regex).
api-include: []
api-ignore: []
"""
