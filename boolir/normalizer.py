"""
Term normalization shared by indexing and query processing.

The same normalizer must be used on both sides: a query term only matches if
it is reduced exactly the way the indexed tokens were.
"""

from .stemmer import PorterStemmer
from .stoplist import StopList


class TermNormalizer:
    """
    lowercase -> stop-word check -> stem.

    The stop-word check always sees the unstemmed (lowercased) token.
    normalize() returns None for stop words.
    """

    def __init__(
        self,
        stop_list: StopList | None = None,
        *,
        use_stemming: bool = True,
        stemmer: PorterStemmer | None = None,
    ) -> None:
        self.stop_list = stop_list
        self.use_stemming = use_stemming
        self.stemmer = stemmer if stemmer is not None else PorterStemmer()

    @property
    def use_stop_list(self) -> bool:
        return self.stop_list is not None and len(self.stop_list) > 0

    def normalize(self, token: str) -> str | None:
        term = token.lower()
        if not term:
            return None
        if self.stop_list is not None and self.stop_list.is_stop_word(term):
            return None
        if self.use_stemming:
            term = self.stemmer.stem(term)
        return term

    def __repr__(self) -> str:
        return (
            f"TermNormalizer(stop_list={self.stop_list!r}, "
            f"use_stemming={self.use_stemming})"
        )
