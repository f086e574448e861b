"""
Index builder: load a document directory, index it and save the result.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import IndexConfig
from .indexer import Indexer, IndexingReport
from .storage import save_dictionary, save_manifest

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    indexer: Indexer
    report: IndexingReport
    index_path: Path
    doc_mapping_path: Path

    @property
    def num_documents(self) -> int:
        return len(self.indexer.documents)

    @property
    def num_terms(self) -> int:
        return len(self.indexer.dictionary)


def build_index_in_memory(config: IndexConfig) -> tuple[Indexer, IndexingReport]:
    """
    Load config.documents_dir and index it. Errors reading the directory,
    its files or the stop list propagate.
    """
    if config.documents_dir is None:
        raise ValueError("IndexConfig.documents_dir is not set")
    indexer = Indexer(normalizer=config.build_normalizer())
    indexer.load_documents_from_directory(config.documents_dir, recursive=config.recursive)
    report = indexer.index_all_documents()
    return indexer, report


def build_index(config: IndexConfig) -> BuildResult:
    """
    Build the index described by config and save it to config.index_path,
    with documents and normalization settings in config.doc_mapping_path.
    """
    indexer, report = build_index_in_memory(config)
    stop_list = indexer.normalizer.stop_list
    save_dictionary(indexer.dictionary, config.index_path)
    save_manifest(
        config.doc_mapping_path,
        indexer.documents,
        use_stemming=indexer.normalizer.use_stemming,
        stop_words=stop_list.words() if stop_list is not None else (),
    )
    return BuildResult(
        indexer=indexer,
        report=report,
        index_path=Path(config.index_path),
        doc_mapping_path=Path(config.doc_mapping_path),
    )
