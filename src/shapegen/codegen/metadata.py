# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of metadata values into literal Rust expressions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from shapegen.codegen.symbols import DOC_MAP_MACRO, TypeDescriptor
from shapegen.errors import UnsupportedValueError
from shapegen.model.nodes import (
    ArrayNode,
    BooleanNode,
    MetadataValue,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
)

# ###############
# Public Interface
# ###############

EMPTY_SEQUENCE = "Vec::new()"


@dataclass(frozen=True)
class Expression:
    """Rendered source text plus the descriptors it needs imported."""

    text: str
    references: tuple[TypeDescriptor, ...] = field(default=())

    def __str__(self) -> str:
        return self.text


class MetadataCompiler:
    """Turns a :data:`MetadataValue` into a Rust literal.

    Booleans become ``true``/``false``, numbers keep their integer or
    floating point form, strings are quoted and escaped, arrays become
    ``vec![a, b]`` (``Vec::new()`` when empty) and objects become
    ``doc_map![k => v]``. Null has no literal form and is rejected.

    The compiler has no state, so one instance may be shared freely.
    """

    def compile(self, value: MetadataValue) -> str:
        """Return the literal for *value*.

        Raises:
            UnsupportedValueError: If *value* contains a null.
        """
        return self.compile_expression(value).text

    def compile_expression(self, value: MetadataValue) -> Expression:
        """Return the literal for *value* along with the macros it uses."""
        references: list[TypeDescriptor] = []
        text = self._compile(value, references)
        return Expression(text, tuple(references))

    # ------------------------------------------------------------------

    def _compile(self, value: MetadataValue, references: list[TypeDescriptor]) -> str:
        if isinstance(value, BooleanNode):
            return "true" if value.value else "false"
        if isinstance(value, NumberNode):
            return _number_literal(value)
        if isinstance(value, StringNode):
            return rust_string(value.value)
        if isinstance(value, ArrayNode):
            if not value.elements:
                return EMPTY_SEQUENCE
            return f"vec![{', '.join(self._compile(e, references) for e in value.elements)}]"
        if isinstance(value, ObjectNode):
            if DOC_MAP_MACRO not in references:
                references.append(DOC_MAP_MACRO)
            pairs = [
                f"{self._compile(m.key, references)} => {self._compile(m.value, references)}" for m in value.members
            ]
            return f"{DOC_MAP_MACRO.name}![{', '.join(pairs)}]"
        if isinstance(value, NullNode):
            raise UnsupportedValueError("null")
        raise UnsupportedValueError(type(value).__name__)


def rust_string(text: str) -> str:
    """Return *text* as a double-quoted Rust string literal."""
    return '"' + "".join(_escape_char(c) for c in text) + '"'


# ################
# Implementation
# ################

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if ord(char) < 0x20 or ord(char) == 0x7F:
        return f"\\u{{{ord(char):x}}}"
    return char


def _number_literal(node: NumberNode) -> str:
    if not node.is_float:
        return str(node.value)
    value = float(node.value)
    if not math.isfinite(value):
        raise UnsupportedValueError("non-finite number")
    return repr(value)
