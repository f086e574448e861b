"""
Saving and loading a built index.

Index format (JSONL, one term per line, sorted by term):
    {"term": str, "df": int, "cf": int, "postings": [[doc_id, frequency], ...]}

Manifest format (JSON): the normalization settings the index was built with,
plus the documents, so queries can be normalized the same way and results
mapped back to document names:
    {"use_stemming": bool, "stop_words": [str, ...],
     "documents": [{"id": int, "name": str, "content": str}, ...]}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .dictionary import Dictionary
from .documents import Document
from .normalizer import TermNormalizer
from .stoplist import StopList

logger = logging.getLogger(__name__)


def save_dictionary(dictionary: Dictionary, index_path: Path) -> int:
    """
    Write the dictionary to index_path as JSONL.
    Returns the number of terms written.
    """
    index_path = Path(index_path)
    index_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(index_path, "w", encoding="utf-8") as f:
        for term, postings in dictionary._entries():
            line_obj = {
                "term": term.text,
                "df": term.document_frequency,
                "cf": term.collection_frequency,
                "postings": [[doc_id, freq] for doc_id, freq in postings.as_pairs()],
            }
            f.write(json.dumps(line_obj, ensure_ascii=False) + "\n")
            count += 1
    logger.info("Saved %d terms to %s", count, index_path)
    return count


def load_dictionary(index_path: Path) -> Dictionary:
    """
    Read a dictionary written by save_dictionary.
    Raises FileNotFoundError if the file is missing and ValueError if a line
    is malformed or its counters disagree with its postings.
    """
    index_path = Path(index_path)
    if not index_path.exists():
        raise FileNotFoundError(f"Index file not found: {index_path}")
    dictionary = Dictionary()
    with open(index_path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
                dictionary.restore_term(
                    obj["term"],
                    int(obj["df"]),
                    int(obj["cf"]),
                    [(int(doc_id), int(freq)) for doc_id, freq in obj["postings"]],
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"{index_path}:{lineno}: invalid index entry: {e}") from e
    logger.info("Loaded %d terms from %s", len(dictionary), index_path)
    return dictionary


@dataclass
class IndexManifest:
    """Build-time settings and documents of a saved index."""

    use_stemming: bool = True
    stop_words: list[str] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)

    def build_normalizer(self) -> TermNormalizer:
        stop_list = StopList(self.stop_words) if self.stop_words else None
        return TermNormalizer(stop_list, use_stemming=self.use_stemming)

    def get_document(self, doc_id: int) -> Document | None:
        for doc in self.documents:
            if doc.id == doc_id:
                return doc
        return None


def save_manifest(
    manifest_path: Path,
    documents: Iterable[Document],
    *,
    use_stemming: bool,
    stop_words: Iterable[str] = (),
) -> None:
    manifest_path = Path(manifest_path)
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "use_stemming": use_stemming,
        "stop_words": sorted(stop_words),
        "documents": [
            {"id": doc.id, "name": doc.name, "content": doc.content} for doc in documents
        ],
    }
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_manifest(manifest_path: Path) -> IndexManifest:
    manifest_path = Path(manifest_path)
    if not manifest_path.exists():
        raise FileNotFoundError(f"Document mapping file not found: {manifest_path}")
    with open(manifest_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    try:
        return IndexManifest(
            use_stemming=bool(data.get("use_stemming", True)),
            stop_words=list(data.get("stop_words", [])),
            documents=[
                Document(int(d["id"]), d["name"], d.get("content", ""))
                for d in data.get("documents", [])
            ],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"{manifest_path}: invalid document mapping: {e}") from e
