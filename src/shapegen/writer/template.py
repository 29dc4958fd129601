# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for the placeholder syntax understood by :class:`~shapegen.writer.writer.CodeWriter`.

Syntax:

- ``$$`` is a literal dollar sign.
- ``$L`` takes the next positional argument (relative), ``$2L`` the second
  one (indexed). The letter selects the formatter.
  A relative placeholder inside a loop section takes the same argument on
  every iteration.
- ``${name:L}`` takes the named context value ``name``. A trailing ``|``
  (``${name:C|}``) indents every continuation line of the formatted value
  to the indentation of the line the placeholder sits on.
- ``${#name}...${/name}`` repeats its body for each element of a list or
  mapping, binding ``key``, ``value``, ``key.first`` and ``key.last``.
  A truthy scalar renders the body once.
- ``${?name}...${/name}`` renders its body if ``name`` is truthy,
  ``${^name}...${/name}`` if it is falsy or empty.

Relative and indexed placeholders cannot be mixed in one template.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TemplateError(Exception):
    """Raised for malformed templates or placeholders that cannot be filled.

    Attributes:
        line: 1-based line number within the template.
        column: 1-based column number within the template.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


@dataclass(frozen=True)
class Text:
    """Literal template text."""

    value: str


@dataclass(frozen=True)
class Placeholder:
    """A value to format.

    Exactly one of *name* and *index* is set. Relative placeholders get the
    index of their position in the template, so a placeholder repeated by a
    loop section reuses the same argument.
    """

    formatter: str
    name: str | None
    index: int | None
    align: bool
    line: int
    column: int


@dataclass(frozen=True)
class Section:
    """A conditional or repeated block: ``#`` loop, ``?`` if truthy, ``^`` if falsy."""

    kind: str
    name: str
    body: tuple[Node, ...]
    line: int
    column: int


Node = Text | Placeholder | Section


@dataclass(frozen=True)
class Template:
    """A parsed template."""

    source: str
    nodes: tuple[Node, ...]
    relative_count: int
    indexes: frozenset[int]


@functools.lru_cache(maxsize=512)
def parse_template(source: str) -> Template:
    """Parse *source* into a :class:`Template`.

    Parsed templates are cached, so repeated writes of the same constant
    template are cheap.

    Raises:
        TemplateError: On a dangling ``$``, an unterminated ``${``, a
            section closed with the wrong name or left open, or a mix of
            relative and indexed placeholders.
    """
    return _Parser(source).parse()


# ################
# Implementation
# ################

_SECTION_KINDS = frozenset("#?^")


class _Parser:
    """Single-pass scanner building the node tree."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._relative = 0
        self._indexes: set[int] = set()

    def parse(self) -> Template:
        # Stack of (open section header, children) pairs; the root has no header.
        stack: list[tuple[tuple[str, str, int, int] | None, list[Node]]] = [(None, [])]
        text: list[str] = []

        def flush() -> None:
            if text:
                stack[-1][1].append(Text("".join(text)))
                text.clear()

        while self._pos < len(self._source):
            ch = self._current()
            if ch != "$":
                text.append(self._advance())
                continue
            line, column = self._line, self._column
            self._advance()  # $
            nxt = self._current()
            if nxt == "$":
                self._advance()
                text.append("$")
            elif nxt == "{":
                self._advance()
                flush()
                self._scan_braced(stack, line, column)
            elif nxt.isdigit():
                flush()
                stack[-1][1].append(self._scan_indexed(line, column))
            elif nxt.isalpha():
                flush()
                self._advance()
                self._relative += 1
                stack[-1][1].append(Placeholder(nxt, None, self._relative, False, line, column))
            elif nxt == "":
                raise TemplateError("Template ends with a dangling '$'", line, column)
            else:
                raise TemplateError(f"Invalid placeholder: '${nxt}'", line, column)
        flush()

        header, children = stack[-1]
        if header is not None:
            _, name, line, column = header
            raise TemplateError(f"Unclosed section '{name}'", line, column)
        if self._relative and self._indexes:
            raise TemplateError("Cannot mix relative and indexed placeholders", 1, 1)
        return Template(self._source, tuple(children), self._relative, frozenset(self._indexes))

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ------------------------------------------------------------------
    # Placeholder scanners
    # ------------------------------------------------------------------

    def _scan_indexed(self, line: int, column: int) -> Placeholder:
        digits = []
        while self._current().isdigit():
            digits.append(self._advance())
        formatter = self._current()
        if not formatter.isalpha():
            raise TemplateError("Indexed placeholder is missing a formatter", line, column)
        self._advance()
        index = int("".join(digits))
        if index < 1:
            raise TemplateError("Placeholder indexes start at 1", line, column)
        self._indexes.add(index)
        return Placeholder(formatter, None, index, False, line, column)

    def _scan_braced(
        self,
        stack: list[tuple[tuple[str, str, int, int] | None, list[Node]]],
        line: int,
        column: int,
    ) -> None:
        end = self._source.find("}", self._pos)
        if end == -1:
            raise TemplateError("Unterminated '${'", line, column)
        content = self._source[self._pos : end]
        while self._pos <= end:
            self._advance()

        if content[:1] in _SECTION_KINDS:
            name = content[1:]
            _check_name(name, line, column)
            stack.append(((content[0], name, line, column), []))
            return
        if content[:1] == "/":
            name = content[1:]
            header, children = stack[-1]
            if header is None:
                raise TemplateError(f"Closing unopened section '{name}'", line, column)
            kind, open_name, open_line, open_column = header
            if name != open_name:
                raise TemplateError(f"Expected '${{/{open_name}}}' but found '${{/{name}}}'", line, column)
            stack.pop()
            stack[-1][1].append(Section(kind, open_name, tuple(children), open_line, open_column))
            return

        name, sep, formatter = content.partition(":")
        if not sep:
            raise TemplateError(f"Named placeholder '{content}' is missing a formatter", line, column)
        _check_name(name, line, column)
        align = formatter.endswith("|")
        if align:
            formatter = formatter[:-1]
        if len(formatter) != 1 or not formatter.isalpha():
            raise TemplateError(f"Invalid formatter '{formatter}'", line, column)
        stack[-1][1].append(Placeholder(formatter, name, None, align, line, column))


def _check_name(name: str, line: int, column: int) -> None:
    if not name or not all(c.isalnum() or c in "_." for c in name):
        raise TemplateError(f"Invalid name '{name}'", line, column)
