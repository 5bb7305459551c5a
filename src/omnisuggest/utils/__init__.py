"""Utility strategies for OmniSuggest.

Usage:
    from omnisuggest.utils import HeuristicStyleEvaluator, RegexCodeTokenizer

    tokens = RegexCodeTokenizer().tokenize("def bubble_sort(items): ...")
    score = HeuristicStyleEvaluator().evaluate("x = 1\\n")
"""

from omnisuggest.utils.util_code_tokenizer import RegexCodeTokenizer, TokenKind
from omnisuggest.utils.util_style_evaluator import HeuristicStyleEvaluator

__all__ = ["HeuristicStyleEvaluator", "RegexCodeTokenizer", "TokenKind"]
