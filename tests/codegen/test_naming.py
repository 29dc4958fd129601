# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for identifier case transforms."""

import pytest

from shapegen.codegen.naming import escape_identifier, pascal_case, snake_case, split_words, upper_snake_case


class TestSplitWords:
    @pytest.mark.parametrize(
        ("name", "words"),
        [
            ("myMember", ["my", "member"]),
            ("MyStruct", ["my", "struct"]),
            ("HTTPRequest", ["http", "request"]),
            ("string_variant", ["string", "variant"]),
            ("com.test", ["com", "test"]),
            ("kebab-case name", ["kebab", "case", "name"]),
            ("value2Go", ["value2", "go"]),
        ],
    )
    def test_boundaries(self, name: str, words: list[str]) -> None:
        assert split_words(name) == words


class TestCases:
    def test_snake_case(self) -> None:
        assert snake_case("documentedMember") == "documented_member"

    def test_upper_snake_case(self) -> None:
        assert upper_snake_case("DeprecatedStruct") == "DEPRECATED_STRUCT"
        assert upper_snake_case("m") == "M"

    def test_pascal_case(self) -> None:
        assert pascal_case("variantA") == "VariantA"
        assert pascal_case("SPADE") == "Spade"
        assert pascal_case("com.test") == "ComTest"


class TestEscapeIdentifier:
    def test_plain_names_are_unchanged(self) -> None:
        assert escape_identifier("name") == "name"

    def test_keywords_become_raw_identifiers(self) -> None:
        assert escape_identifier("type") == "r#type"
        assert escape_identifier("match") == "r#match"

    @pytest.mark.parametrize("name", ["self", "Self", "super", "crate"])
    def test_keywords_without_raw_form_get_an_underscore(self, name: str) -> None:
        assert escape_identifier(name) == f"{name}_"
