"""
Stop list: high-frequency, low-information words excluded from indexing and search.
"""

import logging
from pathlib import Path
from typing import Iterable

from nltk import download as _nltk_download

logger = logging.getLogger(__name__)


class StopList:
    """
    Case-insensitive set of stop words.
    An empty stop list lets every word through.
    """

    def __init__(self, words: Iterable[str] | None = None) -> None:
        self._words: set[str] = set()
        if words is not None:
            for word in words:
                self.add(word)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "StopList":
        """Build from line-delimited words; surrounding whitespace and blank lines are ignored."""
        return cls(line.strip() for line in lines if line.strip())

    @classmethod
    def from_file(cls, path: Path) -> "StopList":
        """Load a stop list file (one word per line). A missing file raises FileNotFoundError."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            stop_list = cls.from_lines(f)
        logger.info("Loaded %d stop words from %s", len(stop_list), path)
        return stop_list

    @classmethod
    def from_nltk(cls, language: str = "english") -> "StopList":
        """Stop words from the nltk stopwords corpus (downloaded on first use)."""
        _nltk_download("stopwords", quiet=True)
        from nltk.corpus import stopwords

        return cls(stopwords.words(language))

    def add(self, word: str) -> None:
        word = word.strip().lower()
        if word:
            self._words.add(word)

    def remove(self, word: str) -> None:
        """Remove a stop word; removing an unknown word does nothing."""
        self._words.discard(word.strip().lower())

    def is_stop_word(self, word: str) -> bool:
        return word.lower() in self._words

    def words(self) -> frozenset[str]:
        return frozenset(self._words)

    def __contains__(self, word: str) -> bool:
        return self.is_stop_word(word)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"StopList({len(self._words)} words)"
