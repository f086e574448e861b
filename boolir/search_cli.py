"""
Search front end for a saved boolean index.

- Normalizes queries with the settings the index was built with
  (stemming, stop words), read from the document mapping.
- Supports AND and OR queries; AND merges rarest terms first unless
  --no-optimize is given.
- Results are listed in document id order with their summed term frequency.

Usage (from repo root, after building the index):
    python -m boolir.search_cli \
        --index data/index.jsonl \
        --docmap data/doc_mapping.json

Interactive commands:
    <terms>     run a query in the current mode
    :and / :or  switch query mode
    :doc ID     show a document
    :stats      show the most frequent terms
    empty line  exit
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, TextIO

from .config import get_doc_mapping_path, get_index_path
from .dictionary import Dictionary
from .posting import PostingList
from .query import BooleanOperator, QueryProcessor, optimized_query_processor, split_query
from .storage import IndexManifest, load_dictionary, load_manifest

PREVIEW_CHARS = 500


class SearchSession:
    """A loaded index plus the query settings of one search session."""

    def __init__(
        self,
        dictionary: Dictionary,
        manifest: IndexManifest,
        *,
        optimize: bool = True,
        mode: BooleanOperator = BooleanOperator.AND,
    ) -> None:
        self.dictionary = dictionary
        self.manifest = manifest
        self.mode = mode
        normalizer = manifest.build_normalizer()
        if optimize:
            self.processor = optimized_query_processor(dictionary, normalizer)
        else:
            self.processor = QueryProcessor(dictionary, normalizer)

    @classmethod
    def load(cls, index_path: Path, doc_mapping_path: Path, **kwargs) -> SearchSession:
        return cls(load_dictionary(index_path), load_manifest(doc_mapping_path), **kwargs)

    def search(self, raw_query: str) -> PostingList:
        return self.processor.process_query(split_query(raw_query), self.mode)

    def timed_search(self, raw_query: str) -> tuple[PostingList, float]:
        """Run a query and return the result with its execution time in ms."""
        start = time.perf_counter()
        result = self.search(raw_query)
        return result, (time.perf_counter() - start) * 1000

    def print_results(
        self,
        result: PostingList,
        out: TextIO,
        top_k: int = 10,
        elapsed_ms: float | None = None,
    ) -> None:
        timing = f" in {elapsed_ms:.3f} ms" if elapsed_ms is not None else ""
        if not result:
            print(f"No documents matched the query{timing}.", file=out)
            return
        shown = min(top_k, len(result))
        print(f"{len(result)} documents matched{timing}, showing {shown}:", file=out)
        for rank, posting in enumerate(list(result)[:top_k], start=1):
            doc = self.manifest.get_document(posting.doc_id)
            name = doc.name if doc is not None else f"<doc {posting.doc_id}>"
            print(f"{rank:2d}. {name}  (id={posting.doc_id}, score={posting.frequency})", file=out)

    def print_document(self, raw_id: str, out: TextIO) -> None:
        try:
            doc_id = int(raw_id)
        except ValueError:
            print("Document id must be an integer.", file=out)
            return
        doc = self.manifest.get_document(doc_id)
        if doc is None:
            print("Document not found.", file=out)
            return
        print(f"ID: {doc.id}", file=out)
        print(f"Name: {doc.name}", file=out)
        print("-" * 10, file=out)
        content = doc.content
        if len(content) > PREVIEW_CHARS:
            content = content[:PREVIEW_CHARS] + "..."
        print(content, file=out)

    def print_stats(self, out: TextIO, n: int = 10) -> None:
        print(f"Unique terms: {len(self.dictionary)}", file=out)
        print(f"Documents: {len(self.manifest.documents)}", file=out)
        print("Most frequent terms:", file=out)
        for i, term in enumerate(self.dictionary.most_frequent(n), start=1):
            print(
                f"{i:2d}. {term.text} (cf={term.collection_frequency}, df={term.document_frequency})",
                file=out,
            )

    def handle(self, line: str, out: TextIO, top_k: int = 10) -> None:
        """Run one line of interactive input."""
        if line.startswith(":"):
            command, _, arg = line[1:].partition(" ")
            command = command.lower()
            if command in ("and", "or"):
                self.mode = BooleanOperator.parse(command)
                print(f"Query mode: {self.mode.value}", file=out)
            elif command == "doc":
                self.print_document(arg.strip(), out)
            elif command == "stats":
                self.print_stats(out)
            else:
                print(f"Unknown command: {line}", file=out)
            return
        if not split_query(line):
            print("No valid terms in query.", file=out)
            return
        result, elapsed_ms = self.timed_search(line)
        self.print_results(result, out, top_k=top_k, elapsed_ms=elapsed_ms)


def run_search_loop(session: SearchSession, top_k: int = 10) -> None:
    """
    Interactive command-line search loop.
    """
    print(f"Loaded {len(session.dictionary)} terms, {len(session.manifest.documents)} documents.")
    print(f"Enter queries ({session.mode.value} semantics). Empty line or Ctrl+C to exit.")
    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break
        session.handle(raw_query, sys.stdout, top_k=top_k)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Boolean search over a saved index.")
    parser.add_argument(
        "--index",
        type=Path,
        default=get_index_path(),
        help="Path to JSONL index file.",
    )
    parser.add_argument(
        "--docmap",
        type=Path,
        default=get_doc_mapping_path(),
        help="Path to the document mapping JSON file.",
    )
    parser.add_argument(
        "--mode",
        choices=["and", "or"],
        default="and",
        help="Combine query terms with AND or OR.",
    )
    parser.add_argument(
        "--no-optimize",
        action="store_true",
        help="Intersect AND terms in query order instead of rarest first.",
    )
    parser.add_argument(
        "--query",
        default=None,
        help="Run a single query and exit.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of results to show.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug information.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        session = SearchSession.load(
            args.index,
            args.docmap,
            optimize=not args.no_optimize,
            mode=BooleanOperator.parse(args.mode),
        )
    except (OSError, ValueError) as e:
        print(f"Could not load the index: {e}")
        return 1

    if args.query is not None:
        session.handle(args.query, sys.stdout, top_k=args.top)
        return 0
    run_search_loop(session, top_k=args.top)
    return 0


if __name__ == "__main__":
    sys.exit(main())
