# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Aggregation of referenced types into grouped ``use`` statements."""

from __future__ import annotations

from shapegen.codegen.symbols import LOCAL_NAMESPACE, TypeDescriptor

# ###############
# Public Interface
# ###############

INDENT = "    "


class ImportContainer:
    """Prefix tree of the types a generated file refers to.

    Recording ``a::b::X``, ``a::b::Y`` and ``a::c::Z`` renders as::

        use a::{
            b::{
                X,
                Y,
            },
            c::Z,
        };

    Types without a namespace, in a ``std`` namespace or declared in the
    generated file itself need no import and are ignored.
    """

    def __init__(self) -> None:
        self._root = _ImportNode("")

    def record(self, descriptor: TypeDescriptor) -> None:
        """Add *descriptor* (not its type arguments) to the tree. Recording twice has no effect."""
        if not _needs_import(descriptor):
            return
        node = self._root
        for segment in descriptor.namespace_segments:
            node = node.child(segment)
        node.child(descriptor.name).is_leaf = True

    def record_all(self, descriptor: TypeDescriptor) -> None:
        """Record *descriptor* and, recursively, its type arguments."""
        self.record(descriptor)
        for reference in descriptor.references:
            self.record_all(reference)

    def is_empty(self) -> bool:
        return not self._root.children

    def render(self) -> str:
        """Return one ``use`` statement per top-level namespace, sorted."""
        lines = []
        for name in sorted(self._root.children):
            lines.append(f"use {self._root.children[name].render(1)};\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()


# ################
# Implementation
# ################


def _needs_import(descriptor: TypeDescriptor) -> bool:
    namespace = descriptor.namespace
    return bool(namespace) and not namespace.startswith("std") and namespace != LOCAL_NAMESPACE


class _ImportNode:
    """One namespace segment or imported name."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.children: dict[str, _ImportNode] = {}
        self.is_leaf = False

    def child(self, name: str) -> _ImportNode:
        if name not in self.children:
            self.children[name] = _ImportNode(name)
        return self.children[name]

    def render(self, depth: int) -> str:
        if not self.children:
            return self.name
        if len(self.children) == 1 and not self.is_leaf:
            # A single child continues the path inline.
            (only,) = self.children.values()
            return f"{self.name}::{only.render(depth)}"
        names = list(self.children)
        if self.is_leaf:
            # The name is imported itself as well as used as a namespace.
            names.append("self")
        lines = []
        for name in sorted(names):
            item = "self" if name == "self" and name not in self.children else self.children[name].render(depth + 1)
            lines.append(f"{INDENT * depth}{item},\n")
        return f"{self.name}::{{\n{''.join(lines)}{INDENT * (depth - 1)}}}"
