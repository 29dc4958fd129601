# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Section interceptors: hooks that add to or replace the text of a tagged section."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from shapegen.codegen.sections import CodeSection

if TYPE_CHECKING:
    from shapegen.writer.writer import CodeWriter

S = TypeVar("S", bound=CodeSection)

# ###############
# Public Interface
# ###############


class CodeInterceptor(Generic[S]):
    """Replaces the text of every section of type :attr:`section_type`.

    Subclasses set :attr:`section_type` and implement :meth:`write`. An
    interceptor registered for a base section type also applies to its
    subclasses.
    """

    section_type: type[CodeSection] = CodeSection

    def is_intercepted(self, section: S) -> bool:
        """Return False to leave *section* untouched."""
        return True

    def write(self, writer: CodeWriter, previous_text: str, section: S) -> None:
        """Write the replacement text. *previous_text* is what the section held so far."""
        raise NotImplementedError


class Prepender(CodeInterceptor[S]):
    """Writes content before the text of a section."""

    def prepend(self, writer: CodeWriter, section: S) -> None:
        raise NotImplementedError

    def write(self, writer: CodeWriter, previous_text: str, section: S) -> None:
        self.prepend(writer, section)
        writer.write_inline_with_no_formatting(previous_text)


class Appender(CodeInterceptor[S]):
    """Writes content after the text of a section."""

    def append(self, writer: CodeWriter, section: S) -> None:
        raise NotImplementedError

    def write(self, writer: CodeWriter, previous_text: str, section: S) -> None:
        writer.write_inline_with_no_formatting(previous_text)
        self.append(writer, section)


class InterceptorRegistry:
    """Interceptors in registration order.

    Lookup is by section type: every interceptor whose :attr:`section_type`
    the section is an instance of, and whose :meth:`is_intercepted`
    accepts it, applies.
    """

    def __init__(self, interceptors: list[CodeInterceptor] | None = None) -> None:
        self._interceptors: list[CodeInterceptor] = list(interceptors or [])

    def register(self, interceptor: CodeInterceptor) -> None:
        self._interceptors.append(interceptor)

    def interceptors_for(self, section: CodeSection) -> list[CodeInterceptor]:
        """Return the interceptors that apply to *section*, in registration order."""
        return [
            interceptor
            for interceptor in self._interceptors
            if isinstance(section, interceptor.section_type) and interceptor.is_intercepted(section)
        ]

    def __len__(self) -> int:
        return len(self._interceptors)
