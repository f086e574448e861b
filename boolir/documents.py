"""
Documents and document loading.

Reads plain-text, HTML and JSON files from a directory into Document records.
Files that cannot be found or read raise; the index must not silently skip
part of its collection.
"""

import json
import logging
import warnings
from dataclasses import dataclass
from pathlib import Path

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

logger = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")


@dataclass(frozen=True)
class Document:
    """
    A document of the collection.
    - id: dense integer >= 1, in ingestion order
    - name: file name (or any label)
    - content: text to index
    """

    id: int
    name: str
    content: str

    def __repr__(self) -> str:
        return f"Document(id={self.id!r}, name={self.name!r})"


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def read_text_file(filepath: Path) -> str:
    """
    Read a text file, handling common encodings.
    latin-1 decodes any byte sequence, so it comes last.
    """
    for encoding in ("utf-8", "cp1252"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return Path(filepath).read_text(encoding="latin-1")


def read_document_content(filepath: Path) -> str:
    """
    Read the indexable text of a file.
    - .html/.htm: visible text
    - .json: the "content" field
    - anything else: the file's text
    """
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix == ".json":
        data = json.loads(filepath.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or "content" not in data:
            raise ValueError(f"JSON file has no 'content' field: {filepath}")
        return str(data["content"])
    text = read_text_file(filepath)
    if suffix in HTML_SUFFIXES:
        return extract_text_from_html(text)
    return text


def iter_document_files(data_dir: Path, *, recursive: bool = False) -> list[Path]:
    """Regular, non-hidden files under data_dir, sorted by path."""
    data_dir = Path(data_dir)
    if not data_dir.exists():
        raise FileNotFoundError(f"Documents directory not found: {data_dir}")
    if not data_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {data_dir}")
    candidates = data_dir.rglob("*") if recursive else data_dir.iterdir()
    files = [
        p
        for p in candidates
        if p.is_file() and not any(part.startswith(".") for part in p.relative_to(data_dir).parts)
    ]
    return sorted(files, key=lambda p: str(p))


def load_documents_from_directory(
    data_dir: Path,
    *,
    start_id: int = 1,
    recursive: bool = False,
) -> list[Document]:
    """
    Load every document file in data_dir, assigning ids start_id, start_id + 1, ...
    """
    data_dir = Path(data_dir)
    documents: list[Document] = []
    next_id = start_id
    for filepath in iter_document_files(data_dir, recursive=recursive):
        content = read_document_content(filepath)
        name = str(filepath.relative_to(data_dir)).replace("\\", "/")
        documents.append(Document(next_id, name, content))
        next_id += 1
    logger.info("Loaded %d documents from %s", len(documents), data_dir)
    return documents
