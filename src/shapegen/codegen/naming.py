# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Case transforms for generated identifiers."""

from __future__ import annotations

import re

# ###############
# Public Interface
# ###############


def split_words(name: str) -> list[str]:
    """Split an identifier into lowercase words.

    Word boundaries are underscores, dots, hyphens, lower-to-upper case
    changes and the end of an acronym (``HTTPRequest`` -> ``http``, ``request``).
    """
    spaced = _ACRONYM_BOUNDARY.sub(r"\1 \2", name)
    spaced = _CASE_BOUNDARY.sub(r"\1 \2", spaced)
    return [word.lower() for word in _SEPARATORS.split(spaced) if word]


def snake_case(name: str) -> str:
    """``myMemberName`` -> ``my_member_name``."""
    return "_".join(split_words(name))


def upper_snake_case(name: str) -> str:
    """``MyStruct`` -> ``MY_STRUCT``."""
    return snake_case(name).upper()


def pascal_case(name: str) -> str:
    """``string_variant`` -> ``StringVariant``; ``com.test`` -> ``ComTest``."""
    return "".join(word[:1].upper() + word[1:] for word in split_words(name))


def escape_identifier(name: str) -> str:
    """Return *name* usable as a field or variant identifier.

    Reserved words become raw identifiers (``type`` -> ``r#type``). The
    few keywords that cannot be raw identifiers get a trailing underscore.
    """
    if name in _NON_RAW_KEYWORDS:
        return f"{name}_"
    if name in RESERVED_WORDS:
        return f"r#{name}"
    return name


RESERVED_WORDS = frozenset(
    {
        "as",
        "async",
        "await",
        "break",
        "const",
        "continue",
        "crate",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "self",
        "Self",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
        "abstract",
        "become",
        "box",
        "do",
        "final",
        "macro",
        "override",
        "priv",
        "typeof",
        "unsized",
        "virtual",
        "yield",
        "try",
    }
)

# ################
# Implementation
# ################

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s_.\-]+")
_NON_RAW_KEYWORDS = frozenset({"crate", "self", "Self", "super"})
