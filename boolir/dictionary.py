"""
Term dictionary: the storage layer of the inverted index.

Maps normalized term text -> (Term statistics, PostingList). For every term:
    document_frequency == number of postings in its list
    collection_frequency == sum of posting frequencies in its list
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from .posting import PostingList


@dataclass
class Term:
    """
    Vocabulary entry.
    - document_frequency: number of documents containing the term
    - collection_frequency: total occurrences across the collection
    """

    text: str
    document_frequency: int = 0
    collection_frequency: int = 0

    def __str__(self) -> str:
        return f"{self.text} (df={self.document_frequency}, cf={self.collection_frequency})"


class Dictionary:
    """
    Inverted index dictionary: term text -> Term + PostingList.
    A term has an entry in both maps or in neither. Enumeration is sorted by term text.
    """

    def __init__(self) -> None:
        self._terms: dict[str, Term] = {}
        self._postings: dict[str, PostingList] = {}

    def add_term(self, text: str) -> Term:
        """Return the Term for text, creating it with an empty posting list if needed."""
        term = self._terms.get(text)
        if term is None:
            term = Term(text)
            self._terms[text] = term
            self._postings[text] = PostingList()
        return term

    def add_posting(self, text: str, doc_id: int, frequency: int = 1) -> Term:
        """
        Record frequency occurrences of text in doc_id.
        Document frequency grows only the first time doc_id is seen for the term.
        """
        if frequency < 1:
            raise ValueError(f"frequency must be >= 1, got {frequency}")
        term = self.add_term(text)
        if self._postings[text].add(doc_id, frequency):
            term.document_frequency += 1
        term.collection_frequency += frequency
        return term

    def restore_term(
        self,
        text: str,
        document_frequency: int,
        collection_frequency: int,
        pairs: Iterable[tuple[int, int]],
    ) -> Term:
        """Insert a term read back from storage, checking its counters against its postings."""
        if text in self._terms:
            raise ValueError(f"duplicate term: {text!r}")
        postings = PostingList.from_pairs(pairs)
        if document_frequency != len(postings):
            raise ValueError(
                f"term {text!r}: document frequency {document_frequency} "
                f"but {len(postings)} postings"
            )
        if collection_frequency != postings.total_frequency():
            raise ValueError(
                f"term {text!r}: collection frequency {collection_frequency} "
                f"but postings sum to {postings.total_frequency()}"
            )
        term = Term(text, document_frequency, collection_frequency)
        self._terms[text] = term
        self._postings[text] = postings
        return term

    def get_term(self, text: str) -> Term | None:
        return self._terms.get(text)

    def get_posting_list(self, text: str) -> PostingList:
        """Copy of the posting list for text; an empty list if the term is unknown."""
        return self._posting_list(text).copy()

    def _posting_list(self, text: str) -> PostingList:
        # Shared with the query and storage layers, which only read it.
        postings = self._postings.get(text)
        return postings if postings is not None else PostingList()

    def terms(self) -> Iterator[str]:
        """Term texts in lexicographic order."""
        return iter(sorted(self._terms))

    def items(self) -> Iterator[tuple[Term, PostingList]]:
        """(Term, posting list copy) pairs in term order."""
        for term, postings in self._entries():
            yield term, postings.copy()

    def _entries(self) -> Iterator[tuple[Term, PostingList]]:
        for text in sorted(self._terms):
            yield self._terms[text], self._postings[text]

    def document_frequencies(self) -> dict[str, int]:
        return {text: self._terms[text].document_frequency for text in sorted(self._terms)}

    def most_frequent(self, n: int = 10) -> list[Term]:
        """The n terms with the highest collection frequency (ties by text)."""
        ranked = sorted(self._terms.values(), key=lambda t: (-t.collection_frequency, t.text))
        return ranked[:n]

    def total_postings(self) -> int:
        return sum(len(pl) for pl in self._postings.values())

    def validate(self) -> None:
        """Raise ValueError if any term's counters disagree with its posting list."""
        for term, postings in self._entries():
            if term.document_frequency != len(postings):
                raise ValueError(f"term {term.text!r}: df {term.document_frequency} != {len(postings)}")
            if term.collection_frequency != postings.total_frequency():
                raise ValueError(
                    f"term {term.text!r}: cf {term.collection_frequency} != {postings.total_frequency()}"
                )

    def __contains__(self, text: str) -> bool:
        return text in self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __str__(self) -> str:
        return "\n".join(f"{term} -> {postings!r}" for term, postings in self._entries())
