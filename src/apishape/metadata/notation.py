# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compact notation for type expressions in metadata snapshots.

Grammar::

    type      := NAME arguments? ("[" "]")*
    arguments := "<" type ("," type)* ">"
    NAME      := dotted identifier; ``$`` is allowed for nested classes

``T[]`` is shorthand for ``Array<T>``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from apishape.metadata.shapes import TypeShape

# ###############
# Public Interface
# ###############


class NotationError(Exception):
    """Raised when a type expression is malformed.

    Attributes:
        column: 1-based column where the problem was detected.
    """

    def __init__(self, message: str, text: str, column: int) -> None:
        super().__init__(f"Column {column} in {text!r}: {message}")
        self.column = column


def parse_type(text: str) -> TypeShape:
    """Parse a type expression into a TypeShape.

    Args:
        text: Type expression, e.g. ``Map<String, List<com.example.User>>``.

    Returns:
        The parsed shape.

    Raises:
        NotationError: If the expression is empty or malformed.
    """
    return _Parser(text, _tokenize(text)).parse()


# ################
# Implementation
# ################


class _TokenType(enum.Enum):
    NAME = "NAME"
    LANGLE = "<"
    RANGLE = ">"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    EOF = "EOF"


@dataclass(frozen=True)
class _Token:
    type: _TokenType
    value: str
    column: int


_SYMBOLS: dict[str, _TokenType] = {
    "<": _TokenType.LANGLE,
    ">": _TokenType.RANGLE,
    "[": _TokenType.LBRACKET,
    "]": _TokenType.RBRACKET,
    ",": _TokenType.COMMA,
}


def _is_name_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_name_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_$."


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch.isspace():
            pos += 1
        elif ch in _SYMBOLS:
            tokens.append(_Token(_SYMBOLS[ch], ch, pos + 1))
            pos += 1
        elif _is_name_start(ch):
            start = pos
            while pos < len(text) and _is_name_part(text[pos]):
                pos += 1
            name = text[start:pos]
            if name.endswith(".") or ".." in name:
                raise NotationError(f"Invalid type name {name!r}", text, start + 1)
            tokens.append(_Token(_TokenType.NAME, name, start + 1))
        else:
            raise NotationError(f"Unexpected character: {ch!r}", text, pos + 1)
    tokens.append(_Token(_TokenType.EOF, "", len(text) + 1))
    return tokens


class _Parser:
    """Recursive-descent parser over notation tokens."""

    def __init__(self, text: str, tokens: list[_Token]) -> None:
        self._text = text
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> TypeShape:
        shape = self._parse_type()
        self._expect(_TokenType.EOF, "end of expression")
        return shape

    def _current(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        token = self._tokens[self._pos]
        if token.type != _TokenType.EOF:
            self._pos += 1
        return token

    def _expect(self, token_type: _TokenType, description: str) -> _Token:
        token = self._current()
        if token.type != token_type:
            found = token.value or "end of expression"
            raise NotationError(f"Expected {description}, found {found!r}", self._text, token.column)
        return self._advance()

    def _parse_type(self) -> TypeShape:
        name = self._expect(_TokenType.NAME, "a type name").value
        arguments: list[TypeShape] = []
        if self._current().type == _TokenType.LANGLE:
            self._advance()
            arguments.append(self._parse_type())
            while self._current().type == _TokenType.COMMA:
                self._advance()
                arguments.append(self._parse_type())
            self._expect(_TokenType.RANGLE, "',' or '>'")
        shape = TypeShape(name=name, arguments=tuple(arguments))
        while self._current().type == _TokenType.LBRACKET:
            self._advance()
            self._expect(_TokenType.RBRACKET, "']'")
            shape = TypeShape(name="Array", arguments=(shape,))
        return shape
