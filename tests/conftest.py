"""Shared test fixtures."""

import pytest

from boolir.dictionary import Dictionary
from boolir.indexer import Indexer
from boolir.normalizer import TermNormalizer
from boolir.stoplist import StopList

SAMPLE_DOCS = [
    ("doc1", "the cat sat on the mat"),
    ("doc2", "cats and dogs run"),
    ("doc3", "the dog ran"),
]

SAMPLE_STOP_WORDS = ["the", "on", "and"]


@pytest.fixture
def normalizer():
    return TermNormalizer(StopList(SAMPLE_STOP_WORDS), use_stemming=True)


@pytest.fixture
def sample_indexer(normalizer):
    indexer = Indexer(normalizer=normalizer)
    for name, content in SAMPLE_DOCS:
        indexer.add_document(name, content)
    indexer.index_all_documents()
    return indexer


@pytest.fixture
def sample_dictionary(sample_indexer) -> Dictionary:
    return sample_indexer.dictionary


@pytest.fixture
def corpus_dir(tmp_path):
    """A small document directory with text, HTML and JSON files."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.txt").write_text("The cat sat on the mat.", encoding="utf-8")
    (docs / "b.txt").write_text("Cats and dogs run.", encoding="utf-8")
    (docs / "c.html").write_text(
        "<html><head><title>Dogs</title><script>var cat = 1;</script></head>"
        "<body><p>The dog ran</p></body></html>",
        encoding="utf-8",
    )
    (docs / "d.json").write_text('{"content": "running dogs", "url": "x"}', encoding="utf-8")
    (docs / ".hidden").write_text("cat cat cat", encoding="utf-8")
    return docs


@pytest.fixture
def stopwords_file(tmp_path):
    path = tmp_path / "stopwords.txt"
    path.write_text("the\n\n  On \nand\n", encoding="utf-8")
    return path
