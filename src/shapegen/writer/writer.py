# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""The template writer used by every generator.

A :class:`CodeWriter` renders templates (see :mod:`shapegen.writer.template`)
into a stack of states. Each state owns a text buffer, an indentation level
and a copy of the named context values. Popping a state tagged with a
:class:`~shapegen.codegen.sections.CodeSection` runs the matching
interceptors over its text before the text joins the enclosing state.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from shapegen.codegen.metadata import rust_string
from shapegen.codegen.sections import CodeSection
from shapegen.codegen.symbols import TypeDescriptor
from shapegen.writer.imports import INDENT, ImportContainer
from shapegen.writer.interceptors import CodeInterceptor, InterceptorRegistry
from shapegen.writer.template import Node, Placeholder, Section, Template, TemplateError, Text, parse_template

# ###############
# Public Interface
# ###############

Formatter = Callable[[Any, "CodeWriter"], str]


class WriterStateError(Exception):
    """Raised when pushes and pops of writer states are not balanced."""


class CodeWriter:
    """Stateful emitter of one generated file.

    Args:
        interceptors: Interceptors applied when tagged states are popped.
    """

    def __init__(self, interceptors: InterceptorRegistry | None = None) -> None:
        self._interceptors = interceptors if interceptors is not None else InterceptorRegistry()
        self._imports = ImportContainer()
        self._formatters: dict[str, Formatter] = {
            "L": _format_literal,
            "S": _format_string,
            "C": _format_callable,
            "T": _format_type,
            "I": _format_schema,
        }
        self._stack: list[_State] = [_State(None, {})]

    @property
    def imports(self) -> ImportContainer:
        return self._imports

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, template: str = "", *args: Any) -> CodeWriter:
        """Render *template* and write it followed by a newline."""
        self._current.append(self.format(template, *args) + "\n")
        return self

    def write_inline(self, template: str, *args: Any) -> CodeWriter:
        """Render *template* and write it without a trailing newline."""
        self._current.append(self.format(template, *args))
        return self

    def write_with_no_formatting(self, text: object) -> CodeWriter:
        """Write *text* verbatim followed by a newline."""
        self._current.append(f"{text}\n")
        return self

    def write_inline_with_no_formatting(self, text: object) -> CodeWriter:
        """Write *text* verbatim."""
        self._current.append(str(text))
        return self

    def format(self, template: str, *args: Any) -> str:
        """Render *template* against *args* and the current context without writing it.

        Raises:
            TemplateError: If the template is malformed, refers to an unknown
                formatter or named value, or the arguments do not match its
                positional placeholders.
        """
        parsed = parse_template(template)
        _check_arguments(parsed, args)
        out: list[str] = []
        self._render(parsed.nodes, args, [], out)
        return "".join(out)

    def open_block(
        self,
        before: str,
        after: str,
        block: Callable[[], None] | None = None,
        *args: Any,
    ) -> CodeWriter:
        """Write *before*, run *block* one level deeper, then write *after*."""
        self.write(before, *args)
        self.indent()
        if block is not None:
            block()
        self.dedent()
        self.write(after)
        return self

    def indent(self, levels: int = 1) -> CodeWriter:
        self._current.indent_level += levels
        return self

    def dedent(self, levels: int = 1) -> CodeWriter:
        """Decrease the indentation of the current state.

        Raises:
            WriterStateError: If the indentation would become negative.
        """
        if self._current.indent_level - levels < 0:
            raise WriterStateError("Cannot dedent below zero")
        self._current.indent_level -= levels
        return self

    def add_import(self, descriptor: TypeDescriptor) -> None:
        """Record *descriptor* and its type arguments as used by this file."""
        self._imports.record_all(descriptor)

    def put_formatter(self, char: str, formatter: Formatter) -> None:
        """Register *formatter* for placeholders using the letter *char*."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Formatter identifiers must be a single letter, got {char!r}")
        self._formatters[char] = formatter

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def put_context(self, name: str, value: Any) -> CodeWriter:
        self._current.context[name] = value
        return self

    def get_context(self, name: str, default: Any = None) -> Any:
        return self._current.context.get(name, default)

    def remove_context(self, name: str) -> CodeWriter:
        self._current.context.pop(name, None)
        return self

    # ------------------------------------------------------------------
    # State stack
    # ------------------------------------------------------------------

    def push_state(self, section: CodeSection | None = None) -> CodeSection | None:
        """Push a new state, optionally tagged with *section*.

        The new state starts with a copy of the current context. If
        *section* has no parent yet, it is linked to the closest enclosing
        section.
        """
        if section is not None and section.parent is None:
            section.parent = self._enclosing_section()
        self._stack.append(_State(section, dict(self._current.context)))
        return section

    def pop_state(self) -> CodeWriter:
        """Pop the current state and write its (intercepted) text into the enclosing one.

        Raises:
            WriterStateError: If only the base state is left.
        """
        if len(self._stack) == 1:
            raise WriterStateError("Cannot pop the base writer state")
        state = self._stack.pop()
        text = state.text()
        if state.section is not None:
            for interceptor in self._interceptors.interceptors_for(state.section):
                text = self._run_interceptor(interceptor, text, state.section)
        self._current.append(text)
        return self

    @contextlib.contextmanager
    def state(self, section: CodeSection | None = None) -> Iterator[CodeSection | None]:
        """Push a state for the duration of a ``with`` block.

        The state is popped on normal exit and discarded if the block raises.
        """
        depth = len(self._stack)
        self.push_state(section)
        try:
            yield section
        except BaseException:
            del self._stack[depth:]
            raise
        if len(self._stack) != depth + 1:
            del self._stack[depth:]
            raise WriterStateError("A state pushed inside a 'with writer.state()' block was not popped")
        self.pop_state()

    def inject_section(self, section: CodeSection) -> None:
        """Emit an empty section so interceptors registered for it can write content."""
        self.push_state(section)
        self.pop_state()

    def capture(self, block: Callable[[], None]) -> str:
        """Run *block* in a fresh state and return what it wrote, minus one trailing newline."""
        depth = len(self._stack)
        self.push_state()
        try:
            block()
        except BaseException:
            del self._stack[depth:]
            raise
        if len(self._stack) != depth + 1:
            del self._stack[depth:]
            raise WriterStateError("A state pushed inside a captured block was not popped")
        text = self._stack.pop().text()
        return text[:-1] if text.endswith("\n") else text

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        """Return the import block, a blank line and the normalized body.

        Raises:
            WriterStateError: If states are still pushed.
        """
        if len(self._stack) != 1:
            raise WriterStateError(f"{len(self._stack) - 1} writer state(s) were never popped")
        body = normalize_whitespace(self._stack[0].text())
        imports = self._imports.render()
        if not imports:
            return body
        return f"{imports}\n{body}"

    def __str__(self) -> str:
        return self.to_string()

    # ------------------------------------------------------------------

    @property
    def _current(self) -> _State:
        return self._stack[-1]

    def _enclosing_section(self) -> CodeSection | None:
        for state in reversed(self._stack):
            if state.section is not None:
                return state.section
        return None

    def _run_interceptor(self, interceptor: CodeInterceptor, text: str, section: CodeSection) -> str:
        depth = len(self._stack)
        self.push_state()
        try:
            interceptor.write(self, text, section)
        except BaseException:
            del self._stack[depth:]
            raise
        return self._stack.pop().text()

    def _render(
        self,
        nodes: tuple[Node, ...],
        args: tuple[Any, ...],
        scopes: list[dict[str, Any]],
        out: list[str],
    ) -> None:
        for node in nodes:
            if isinstance(node, Text):
                out.append(node.value)
            elif isinstance(node, Placeholder):
                if node.index is not None:
                    value = args[node.index - 1]
                else:
                    value = self._lookup(node, scopes)
                text = self._apply_formatter(node, value)
                if node.align:
                    text = _align(text, _line_indentation("".join(out)))
                out.append(text)
            else:
                self._render_section(node, args, scopes, out)

    def _render_section(
        self,
        section: Section,
        args: tuple[Any, ...],
        scopes: list[dict[str, Any]],
        out: list[str],
    ) -> None:
        value = self._lookup_optional(section.name, scopes)
        if section.kind == "?":
            if _is_truthy(value):
                self._render(section.body, args, scopes, out)
        elif section.kind == "^":
            if not _is_truthy(value):
                self._render(section.body, args, scopes, out)
        elif isinstance(value, (Mapping, list, tuple)):
            items = list(value.items()) if isinstance(value, Mapping) else list(enumerate(value))
            for position, (key, item) in enumerate(items):
                scope = {
                    "key": key,
                    "value": item,
                    "key.first": position == 0,
                    "key.last": position == len(items) - 1,
                }
                self._render(section.body, args, [*scopes, scope], out)
        elif _is_truthy(value):
            self._render(section.body, args, scopes, out)

    def _lookup_optional(self, name: str, scopes: list[dict[str, Any]]) -> Any:
        for scope in reversed(scopes):
            if name in scope:
                return scope[name]
        return self._current.context.get(name)

    def _lookup(self, placeholder: Placeholder, scopes: list[dict[str, Any]]) -> Any:
        name = placeholder.name
        assert name is not None
        for scope in reversed(scopes):
            if name in scope:
                return scope[name]
        if name not in self._current.context:
            raise TemplateError(f"Unknown named value '{name}'", placeholder.line, placeholder.column)
        return self._current.context[name]

    def _apply_formatter(self, placeholder: Placeholder, value: Any) -> str:
        formatter = self._formatters.get(placeholder.formatter)
        if formatter is None:
            raise TemplateError(f"Unknown formatter '{placeholder.formatter}'", placeholder.line, placeholder.column)
        try:
            return formatter(value, self)
        except _BadValue as exc:
            raise TemplateError(str(exc), placeholder.line, placeholder.column) from exc


def normalize_whitespace(text: str) -> str:
    """Strip trailing spaces, keep at most one blank line in a row and end with one newline."""
    lines: list[str] = []
    for line in text.split("\n"):
        line = line.rstrip()
        if not line and (not lines or not lines[-1]):
            continue
        lines.append(line)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n" if lines else ""


# ################
# Implementation
# ################


class _BadValue(ValueError):
    """A formatter received a value it cannot format."""


class _State:
    """One level of the writer stack."""

    def __init__(self, section: CodeSection | None, context: dict[str, Any]) -> None:
        self.section = section
        self.context = context
        self.indent_level = 0
        self._parts: list[str] = []
        self._at_line_start = True

    def append(self, text: str) -> None:
        for piece in text.splitlines(keepends=True):
            if self._at_line_start and self.indent_level and piece not in ("\n", "\r\n"):
                self._parts.append(INDENT * self.indent_level)
            self._parts.append(piece)
            self._at_line_start = piece.endswith("\n")

    def text(self) -> str:
        return "".join(self._parts)


def _check_arguments(template: Template, args: tuple[Any, ...]) -> None:
    if template.relative_count:
        if template.relative_count != len(args):
            raise TemplateError(
                f"Template uses {template.relative_count} positional argument(s) but {len(args)} were given", 1, 1
            )
    elif template.indexes:
        if template.indexes != set(range(1, len(args) + 1)):
            raise TemplateError(
                f"Indexed placeholders {sorted(template.indexes)} do not match {len(args)} argument(s)", 1, 1
            )
    elif args:
        raise TemplateError(f"Template has no positional placeholders but {len(args)} argument(s) were given", 1, 1)


def _is_truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (str, Mapping, list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def _line_indentation(rendered: str) -> str:
    line = rendered[rendered.rfind("\n") + 1 :]
    return line[: len(line) - len(line.lstrip())]


def _align(text: str, indentation: str) -> str:
    lines = text.split("\n")
    return "\n".join([lines[0], *(indentation + line if line else line for line in lines[1:])])


def _format_literal(value: Any, writer: CodeWriter) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_string(value: Any, writer: CodeWriter) -> str:
    return rust_string(str(value))


def _format_callable(value: Any, writer: CodeWriter) -> str:
    if not callable(value):
        raise _BadValue(f"$C expects a callable, got {type(value).__name__}")
    return writer.capture(value)


def _format_type(value: Any, writer: CodeWriter) -> str:
    if isinstance(value, str):
        return value
    if not isinstance(value, TypeDescriptor):
        raise _BadValue(f"$T expects a type descriptor, got {type(value).__name__}")
    writer.add_import(value)
    return value.render()


def _format_schema(value: Any, writer: CodeWriter) -> str:
    if not isinstance(value, TypeDescriptor):
        raise _BadValue(f"$I expects a type descriptor, got {type(value).__name__}")
    if value.schema is None:
        raise _BadValue(f"Type '{value.full_name}' has no schema")
    writer.add_import(value.schema)
    return value.schema.name
