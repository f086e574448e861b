"""
Tokenizer for the boolean retrieval index.

A token is a maximal run of ASCII letters. Digits, punctuation and every other
character act as separators, for documents and queries alike.
"""

from typing import Iterator

from nltk.tokenize import RegexpTokenizer

WORD_PATTERN = r"[A-Za-z]+"

_WORD_TOKENIZER = RegexpTokenizer(WORD_PATTERN)


class TokenStream:
    """
    Lazy, restartable sequence of raw tokens over one piece of text.
    Each iteration rescans the text; nothing is shared between streams.
    """

    def __init__(self, text: str | None) -> None:
        self._text = text or ""

    def __iter__(self) -> Iterator[str]:
        text = self._text
        for start, end in _WORD_TOKENIZER.span_tokenize(text):
            yield text[start:end]

    def __repr__(self) -> str:
        preview = self._text[:30]
        return f"TokenStream({preview!r}{'...' if len(self._text) > 30 else ''})"


def tokenize(text: str | None) -> TokenStream:
    """
    Tokenize text into words (case preserved).
    Empty or missing text gives an empty stream.
    """
    return TokenStream(text)
