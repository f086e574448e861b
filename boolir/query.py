"""
Boolean query processing over a built Dictionary.

Query terms go through the same TermNormalizer as the indexed documents.
Conjunctive queries intersect posting lists, disjunctive queries union them;
both sum the frequencies of matching postings, which is what the search
front end shows as the score.

The order in which AND terms are merged is a pluggable policy: the result is
the same for every order, only the amount of merge work changes. Merging the
rarest terms first keeps intermediate results small.
"""

import logging
from enum import Enum
from operator import attrgetter
from typing import Callable, Iterable, Sequence

from .dictionary import Dictionary, Term
from .normalizer import TermNormalizer
from .posting import PostingList
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

TermOrdering = Callable[[Sequence[Term]], list[Term]]


class BooleanOperator(str, Enum):
    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, value: "str | BooleanOperator") -> "BooleanOperator":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"unknown boolean operator: {value!r} (expected AND or OR)") from None


def identity_ordering(terms: Sequence[Term]) -> list[Term]:
    """Merge terms in query order."""
    return list(terms)


def document_frequency_ordering(terms: Sequence[Term]) -> list[Term]:
    """Merge terms by ascending document frequency (stable for ties)."""
    return sorted(terms, key=attrgetter("document_frequency"))


class QueryProcessor:
    """
    Evaluates AND / OR queries. Read-only over the dictionary; results are
    always fresh PostingLists, never the dictionary's own.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        normalizer: TermNormalizer | None = None,
        ordering: TermOrdering = identity_ordering,
    ) -> None:
        self.dictionary = dictionary
        self.normalizer = normalizer if normalizer is not None else TermNormalizer(use_stemming=False)
        self.ordering = ordering

    def _lookup(self, raw_terms: Iterable[str]) -> list[Term]:
        """Normalized terms that exist in the dictionary, in query order."""
        found: list[Term] = []
        for raw in raw_terms:
            text = self.normalizer.normalize(raw)
            if not text:
                continue
            term = self.dictionary.get_term(text)
            if term is None:
                logger.debug("Query term %r (%r) not in dictionary", raw, text)
                continue
            found.append(term)
        return found

    def process_term(self, term: str) -> PostingList:
        """Posting list of a single query term; empty for stop words and unknown terms."""
        text = self.normalizer.normalize(term)
        if not text:
            return PostingList()
        return self.dictionary.get_posting_list(text)

    def process_conjunctive_query(self, terms: Iterable[str]) -> PostingList:
        """
        AND query. Terms missing from the dictionary are ignored rather than
        emptying the result; no valid term at all gives an empty result.
        """
        valid = self.ordering(self._lookup(terms))
        if not valid:
            return PostingList()
        result = self.dictionary.get_posting_list(valid[0].text)
        for term in valid[1:]:
            if not result:
                break
            result = result.intersect(self.dictionary._posting_list(term.text))
        return result

    def process_disjunctive_query(self, terms: Iterable[str]) -> PostingList:
        """OR query over the terms present in the dictionary."""
        result = PostingList()
        for term in self._lookup(terms):
            result = result.union(self.dictionary._posting_list(term.text))
        return result

    def process_query(
        self,
        terms: Iterable[str],
        operator: "str | BooleanOperator" = BooleanOperator.AND,
    ) -> PostingList:
        op = BooleanOperator.parse(operator)
        if op is BooleanOperator.AND:
            return self.process_conjunctive_query(terms)
        return self.process_disjunctive_query(terms)


def optimized_query_processor(
    dictionary: Dictionary,
    normalizer: TermNormalizer | None = None,
) -> QueryProcessor:
    """Query processor that intersects the most selective terms first."""
    return QueryProcessor(dictionary, normalizer, ordering=document_frequency_ordering)


def split_query(raw_query: str) -> list[str]:
    """Split a raw query line into terms with the document tokenizer."""
    return list(tokenize(raw_query))
