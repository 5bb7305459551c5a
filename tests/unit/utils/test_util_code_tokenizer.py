# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for RegexCodeTokenizer."""

from __future__ import annotations

import pytest

from omnisuggest.protocols import ProtocolTokenizer
from omnisuggest.utils import RegexCodeTokenizer


@pytest.fixture
def tokenizer() -> RegexCodeTokenizer:
    return RegexCodeTokenizer()


@pytest.mark.unit
class TestTokenize:
    """Tests for RegexCodeTokenizer.tokenize."""

    def test_identifiers_and_punctuation(self, tokenizer: RegexCodeTokenizer) -> None:
        assert tokenizer.tokenize("bubble_sort(items)") == ["bubble_sort", "(", "items", ")"]

    @pytest.mark.parametrize(
        "text",
        ["x = 1  # set x", "x = 1 // set x"],
    )
    def test_comments_are_dropped(self, tokenizer: RegexCodeTokenizer, text: str) -> None:
        assert tokenizer.tokenize(text) == ["x", "=", "1"]

    def test_comment_marker_inside_string_is_kept(
        self, tokenizer: RegexCodeTokenizer
    ) -> None:
        assert tokenizer.tokenize('url = "http://host/#top"') == [
            "url",
            "=",
            '"http://host/#top"',
        ]

    def test_multi_character_operators(self, tokenizer: RegexCodeTokenizer) -> None:
        assert tokenizer.tokenize("a == b && c -> d") == ["a", "==", "b", "&&", "c", "->", "d"]

    def test_empty_text(self, tokenizer: RegexCodeTokenizer) -> None:
        assert tokenizer.tokenize("") == []
        assert tokenizer.tokenize("   \n\t") == []

    def test_satisfies_protocol(self, tokenizer: RegexCodeTokenizer) -> None:
        assert isinstance(tokenizer, ProtocolTokenizer)


@pytest.mark.unit
class TestTokenizeWithKinds:
    """Tests for RegexCodeTokenizer.tokenize_with_kinds."""

    def test_kinds(self, tokenizer: RegexCodeTokenizer) -> None:
        assert tokenizer.tokenize_with_kinds("total = 3.5 + 'x';") == [
            ("identifier", "total"),
            ("operator", "="),
            ("number", "3.5"),
            ("operator", "+"),
            ("string", "'x'"),
            ("punct", ";"),
        ]

    def test_deterministic(self, tokenizer: RegexCodeTokenizer) -> None:
        code = "def f(x):\n    return x * 2\n"
        assert tokenizer.tokenize_with_kinds(code) == tokenizer.tokenize_with_kinds(code)
