"""
Indexer: turns documents into postings.

tokenize -> stop-word check (raw token) -> stem -> per-document term counts
-> one add_posting(term, doc_id, frequency) per distinct term.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from .dictionary import Dictionary
from .documents import Document, load_documents_from_directory
from .normalizer import TermNormalizer
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass
class IndexingReport:
    """Outcome of an indexing pass. errors maps document id -> error message."""

    indexed: int = 0
    failed: int = 0
    terms: int = 0
    errors: dict[int, str] = field(default_factory=dict)


def count_terms(content: str, normalizer: TermNormalizer) -> Counter:
    """In-document frequency of each normalized term."""
    counts: Counter = Counter()
    for token in tokenize(content):
        term = normalizer.normalize(token)
        if term:
            counts[term] += 1
    return counts


class Indexer:
    """
    Builds a Dictionary from a collection of documents.
    Documents get dense ids starting at 1 in the order they are added.
    """

    def __init__(
        self,
        dictionary: Dictionary | None = None,
        normalizer: TermNormalizer | None = None,
    ) -> None:
        self.dictionary = dictionary if dictionary is not None else Dictionary()
        self.normalizer = normalizer if normalizer is not None else TermNormalizer(use_stemming=False)
        self.documents: list[Document] = []
        self._by_id: dict[int, Document] = {}

    def _register(self, doc: Document) -> Document:
        if doc.id in self._by_id:
            raise ValueError(f"duplicate document id: {doc.id}")
        self.documents.append(doc)
        self._by_id[doc.id] = doc
        return doc

    def add_document(self, name: str, content: str) -> Document:
        """Add a document to the collection with the next free id."""
        return self._register(Document(len(self.documents) + 1, name, content))

    def load_documents_from_directory(self, data_dir: Path, *, recursive: bool = False) -> list[Document]:
        """Add every document file under data_dir. I/O errors propagate."""
        loaded = load_documents_from_directory(
            data_dir, start_id=len(self.documents) + 1, recursive=recursive
        )
        for doc in loaded:
            self._register(doc)
        return loaded

    def get_document(self, doc_id: int) -> Document | None:
        return self._by_id.get(doc_id)

    def index_document(self, doc: Document) -> int:
        """
        Index one document. Returns the number of distinct terms committed
        (0 for empty documents).
        """
        counts = count_terms(doc.content, self.normalizer)
        for term, frequency in counts.items():
            self.dictionary.add_posting(term, doc.id, frequency)
        return len(counts)

    def index_all_documents(self) -> IndexingReport:
        """
        Index every document. A failing document is logged and counted,
        the rest of the batch still gets indexed.
        """
        report = IndexingReport()
        for doc in self.documents:
            try:
                self.index_document(doc)
            except Exception as e:
                logger.exception("Could not index document %d (%s)", doc.id, doc.name)
                report.failed += 1
                report.errors[doc.id] = str(e)
                continue
            report.indexed += 1
        report.terms = len(self.dictionary)
        logger.info(
            "Indexed %d documents (%d failed), %d terms",
            report.indexed,
            report.failed,
            report.terms,
        )
        return report
