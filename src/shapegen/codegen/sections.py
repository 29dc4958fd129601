# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Section tags: typed markers for the extension points of generated output."""

from __future__ import annotations

from dataclasses import dataclass, field

from shapegen.model.shapes import Shape

# ###############
# Public Interface
# ###############


@dataclass(eq=False)
class CodeSection:
    """Base class of all section tags.

    Attributes:
        parent: The enclosing section. The writer links it on push when unset.
    """

    parent: CodeSection | None = field(default=None, kw_only=True)

    def ancestors(self) -> list[CodeSection]:
        """Return the enclosing sections, innermost first."""
        chain = []
        current = self.parent
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain


@dataclass(eq=False)
class DocumentedSection(CodeSection):
    """A section that documentation may be attached to.

    Attributes:
        target: The shape being emitted, or None for sections not tied to a shape.
    """

    target: Shape | None = None


@dataclass(eq=False)
class SchemaSection(DocumentedSection):
    """The schema definition of a shape inside a ``smithy!`` block."""


@dataclass(eq=False)
class ShapeSection(DocumentedSection):
    """The type declaration of a shape (``pub struct``, ``pub enum``)."""


@dataclass(eq=False)
class MemberSection(DocumentedSection):
    """A field or variant of a generated type."""


@dataclass(eq=False)
class DocstringSection(CodeSection):
    """The doc comment of a documented section.

    Attributes:
        target: The documented shape, or None.
    """

    target: Shape | None = None
