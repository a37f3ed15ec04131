"""
Approximate token counting.

Not a model tokenizer: a fragment is a run of letters and digits, or a
run of other non-whitespace characters (underscore included).
"""

import re
from typing import List

# Alphanumeric run first, otherwise a run of punctuation
TOKEN_PATTERN = re.compile(r"[^\W_]+|(?:_|[^\w\s])+")


def tokenize(text: str) -> List[str]:
    """
    Split text into approximate tokens.

    Example:
        >>> tokenize("Hello... world!!")
        ['Hello', '...', 'world', '!!']
    """
    if not text:
        return []
    return TOKEN_PATTERN.findall(text)


def count_tokens(text: str) -> int:
    """Count approximate tokens in text. Empty text counts 0."""
    return len(tokenize(text))
