# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the template parser."""

import pytest

from shapegen.writer.template import Placeholder, Section, TemplateError, Text, parse_template

# ###############
# Parsing
# ###############


class TestPlaceholders:
    def test_plain_text(self) -> None:
        template = parse_template("pub struct S {}")
        assert template.nodes == (Text("pub struct S {}"),)
        assert template.relative_count == 0

    def test_escaped_dollar(self) -> None:
        assert parse_template("a $$ b").nodes == (Text("a $ b"),)

    def test_relative_placeholders_are_numbered_in_order(self) -> None:
        template = parse_template("$L = $S")
        assert template.relative_count == 2
        assert template.indexes == frozenset()
        first, _, second = template.nodes
        assert isinstance(first, Placeholder)
        assert isinstance(second, Placeholder)
        assert (first.formatter, first.index) == ("L", 1)
        assert (second.formatter, second.index) == ("S", 2)

    def test_indexed_placeholders(self) -> None:
        template = parse_template("$1L $2T $1L")
        assert template.indexes == frozenset({1, 2})
        assert template.relative_count == 0

    def test_named_placeholder_with_alignment(self) -> None:
        (placeholder,) = parse_template("${value:C|}").nodes
        assert isinstance(placeholder, Placeholder)
        assert placeholder.name == "value"
        assert placeholder.formatter == "C"
        assert placeholder.align

    def test_dotted_names(self) -> None:
        (placeholder,) = parse_template("${key.last:L}").nodes
        assert isinstance(placeholder, Placeholder)
        assert placeholder.name == "key.last"

    def test_positions_are_tracked(self) -> None:
        template = parse_template("a\n  $L")
        placeholder = template.nodes[1]
        assert isinstance(placeholder, Placeholder)
        assert (placeholder.line, placeholder.column) == (2, 3)

    def test_templates_are_cached(self) -> None:
        assert parse_template("$L;") is parse_template("$L;")


class TestSections:
    def test_loop_section(self) -> None:
        (section,) = parse_template("${#items}- ${value:L}\n${/items}").nodes
        assert isinstance(section, Section)
        assert section.kind == "#"
        assert section.name == "items"
        assert len(section.body) == 3

    def test_nested_sections(self) -> None:
        (outer,) = parse_template("${?args}(${#args}${value:L}${^key.last}, ${/key.last}${/args})${/args}").nodes
        assert isinstance(outer, Section)
        assert outer.kind == "?"
        inner = outer.body[1]
        assert isinstance(inner, Section)
        assert inner.kind == "#"
        assert isinstance(inner.body[1], Section)
        assert inner.body[1].kind == "^"


# ###############
# Errors
# ###############


class TestTemplateErrors:
    @pytest.mark.parametrize(
        ("source", "message"),
        [
            ("cost: $", "dangling"),
            ("$!", "Invalid placeholder"),
            ("${name:L", "Unterminated"),
            ("${name}", "missing a formatter"),
            ("${name:LL}", "Invalid formatter"),
            ("${#a}x${/b}", "Expected"),
            ("${/a}", "Closing unopened section"),
            ("${#a}x", "Unclosed section 'a'"),
            ("$L $1L", "Cannot mix"),
            ("$0L", "start at 1"),
            ("${bad name:L}", "Invalid name"),
        ],
    )
    def test_malformed_templates(self, source: str, message: str) -> None:
        with pytest.raises(TemplateError, match=message):
            parse_template(source)

    def test_error_reports_position(self) -> None:
        with pytest.raises(TemplateError) as exc_info:
            parse_template("ok\nthen $")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 6
        assert str(exc_info.value).startswith("Line 2, column 6:")
