"""
Configuration passed from the command line into the indexer and query side.
"""

from dataclasses import dataclass
from pathlib import Path

from .normalizer import TermNormalizer
from .stoplist import StopList

DATA_DIR = Path("data")


def get_index_path(base: Path = DATA_DIR) -> Path:
    return Path(base) / "index.jsonl"


def get_doc_mapping_path(base: Path = DATA_DIR) -> Path:
    return Path(base) / "doc_mapping.json"


@dataclass
class IndexConfig:
    """
    Where documents come from and how terms are normalized.
    - documents_dir: directory of documents to index
    - stopwords_path: stop list file (one word per line); None disables stop words
    - nltk_stopwords: language of the nltk stop word corpus to use instead of a file
    - use_stop_list / use_stemming: normalization toggles
    - index_path / doc_mapping_path: where the built index is saved
    """

    documents_dir: Path | None = None
    stopwords_path: Path | None = None
    nltk_stopwords: str | None = None
    use_stop_list: bool = True
    use_stemming: bool = True
    recursive: bool = False
    index_path: Path = get_index_path()
    doc_mapping_path: Path = get_doc_mapping_path()

    def load_stop_list(self) -> StopList | None:
        """The configured stop list, or None when stop words are disabled."""
        if not self.use_stop_list:
            return None
        if self.nltk_stopwords:
            return StopList.from_nltk(self.nltk_stopwords)
        if self.stopwords_path is None:
            return None
        return StopList.from_file(self.stopwords_path)

    def build_normalizer(self) -> TermNormalizer:
        return TermNormalizer(self.load_stop_list(), use_stemming=self.use_stemming)
