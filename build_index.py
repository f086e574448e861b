"""
Build the boolean retrieval index and print index analytics.

Usage:
    python build_index.py --data-dir data/documents --stopwords data/stopwords.txt

Output:
  - data/index.jsonl        (JSONL inverted index, one term per line)
  - data/doc_mapping.json   (documents and normalization settings)
  - Analytics table printed to console
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from boolir.config import DATA_DIR, IndexConfig, get_doc_mapping_path, get_index_path
from boolir.index_builder import build_index


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the boolean retrieval index")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR / "documents",
        help="Directory of documents to index (default: data/documents)",
    )
    parser.add_argument(
        "--stopwords",
        type=Path,
        default=None,
        help="Stop list file, one word per line (default: no stop words)",
    )
    parser.add_argument(
        "--nltk-stopwords",
        metavar="LANGUAGE",
        default=None,
        help="Use the nltk stop word corpus for LANGUAGE instead of a file",
    )
    parser.add_argument(
        "--no-stemming",
        action="store_true",
        help="Index words unstemmed",
    )
    parser.add_argument(
        "--recursive",
        action="store_true",
        help="Also index documents in subdirectories",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output path for the JSONL index (default: data/index.jsonl)",
    )
    parser.add_argument(
        "--doc-mapping",
        type=Path,
        default=None,
        help="Output path for the document mapping (default: data/doc_mapping.json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = IndexConfig(
        documents_dir=args.data_dir,
        stopwords_path=args.stopwords,
        nltk_stopwords=args.nltk_stopwords,
        use_stop_list=args.stopwords is not None or args.nltk_stopwords is not None,
        use_stemming=not args.no_stemming,
        recursive=args.recursive,
        index_path=args.output or get_index_path(),
        doc_mapping_path=args.doc_mapping or get_doc_mapping_path(),
    )

    if not config.documents_dir.is_dir():
        print(f"No documents folder found at {config.documents_dir}.")
        return 1

    try:
        result = build_index(config)
    except (OSError, ValueError) as e:
        print(f"Could not build the index: {e}")
        return 1

    if result.num_documents == 0:
        print(f"No documents found in {config.documents_dir}.")
        return 1

    index_size_kb = result.index_path.stat().st_size / 1024
    dictionary = result.indexer.dictionary

    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {result.report.indexed} |")
    print(f"| Documents that failed       | {result.report.failed} |")
    print(f"| Number of unique terms      | {result.num_terms} |")
    print(f"| Number of postings          | {dictionary.total_postings()} |")
    print(f"| Total size of index (KB)    | {index_size_kb:.2f} |")
    print()
    print("=" * 50)
    print(f"\nIndex saved to: {result.index_path}")
    print(f"Doc mapping saved to: {result.doc_mapping_path}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
