# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Enumeration of endpoint signatures from a metadata snapshot."""

from __future__ import annotations

import logging
import re

from apishape.config import GeneratorConfig
from apishape.metadata.shapes import RouteDeclaration, Snapshot
from apishape.model.entities import EndpointSignature

_LOG = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class EndpointCollector:
    """Lists the endpoints of a snapshot, filtered by the configured handler selectors.

    A selector matches a handler when it equals the handler name, is a dotted
    prefix of it (``com.example`` matches ``com.example.OrderApi.list``), or
    is a regular expression found anywhere in it. Routes without a handler
    are only dropped by an explicit ``api-include`` list.
    """

    def __init__(self, snapshot: Snapshot, config: GeneratorConfig | None = None) -> None:
        config = config or GeneratorConfig()
        self._snapshot = snapshot
        self._include = [_Selector(s) for s in config.api_include]
        self._ignore = [_Selector(s) for s in config.api_ignore]

    def collect(self) -> list[EndpointSignature]:
        """Return the selected endpoints in snapshot order."""
        signatures: list[EndpointSignature] = []
        for route in self._snapshot.routes:
            if not self._selected(route):
                _LOG.debug("skipping %s %s (%s)", route.verb, route.path, route.handler)
                continue
            signatures.append(
                EndpointSignature(
                    path=route.path,
                    verb=route.verb,
                    handler=route.handler,
                    request=route.request,
                    response=route.response,
                    query=route.query,
                    path_params=route.path_params,
                )
            )
        return signatures

    def _selected(self, route: RouteDeclaration) -> bool:
        handler = route.handler
        if self._include and (handler is None or not any(s.matches(handler) for s in self._include)):
            return False
        if handler is not None and any(s.matches(handler) for s in self._ignore):
            return False
        return True


# ################
# Implementation
# ################


class _Selector:
    """One handler selector; patterns were checked when the configuration loaded."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pattern = re.compile(text)

    def matches(self, handler: str) -> bool:
        if handler == self._text or handler.startswith(self._text + "."):
            return True
        return self._pattern.search(handler) is not None
