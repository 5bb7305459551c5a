"""Regex-based lexical tokenizer for code and request text.

Language-agnostic: recognizes string literals, numbers, identifiers,
multi-character operators and punctuation. Comments (``#`` and ``//`` to end
of line) are dropped. Used by the ranking handler for keyword extraction
and by the complexity analysis for structural counts.
"""

from __future__ import annotations

import re
from typing import Final, Literal

TokenKind = Literal["string", "number", "identifier", "operator", "punct"]

_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"""
    (?P<comment>\#[^\n]*|//[^\n]*)
  | (?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')
  | (?P<number>\d+(?:\.\d+)?)
  | (?P<identifier>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<operator>==|!=|<=|>=|->|=>|&&|\|\||\+\+|--|::|[-+*/%=<>!&|^~?:@])
  | (?P<punct>[()\[\]{},;.])
    """,
    re.VERBOSE,
)


class RegexCodeTokenizer:
    """Deterministic tokenizer satisfying ``ProtocolTokenizer``.

    Example:
        >>> RegexCodeTokenizer().tokenize("bubble_sort(items)  # sort")
        ['bubble_sort', '(', 'items', ')']
    """

    def tokenize(self, text: str) -> list[str]:
        """Split text into tokens in source order, without comments."""
        return [value for _, value in self.tokenize_with_kinds(text)]

    def tokenize_with_kinds(self, text: str) -> list[tuple[TokenKind, str]]:
        """Split text into ``(kind, value)`` pairs in source order."""
        tokens: list[tuple[TokenKind, str]] = []
        for match in _TOKEN_PATTERN.finditer(text):
            kind = match.lastgroup
            if kind is None or kind == "comment":
                continue
            tokens.append((kind, match.group()))  # type: ignore[arg-type]
        return tokens


__all__ = ["RegexCodeTokenizer", "TokenKind"]
