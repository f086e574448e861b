import io
import re

import pytest

import build_index
from boolir import search_cli
from boolir.config import IndexConfig
from boolir.index_builder import build_index as build
from boolir.query import BooleanOperator
from boolir.search_cli import SearchSession


@pytest.fixture
def built_index(tmp_path, corpus_dir, stopwords_file, capsys):
    index_path = tmp_path / "data" / "index.jsonl"
    docmap_path = tmp_path / "data" / "doc_mapping.json"
    code = build_index.main([
        "--data-dir", str(corpus_dir),
        "--stopwords", str(stopwords_file),
        "--output", str(index_path),
        "--doc-mapping", str(docmap_path),
    ])
    assert code == 0
    capsys.readouterr()
    return index_path, docmap_path


def test_build_index_writes_outputs(tmp_path, corpus_dir, stopwords_file, capsys):
    index_path = tmp_path / "out" / "index.jsonl"
    docmap_path = tmp_path / "out" / "doc_mapping.json"
    code = build_index.main([
        "--data-dir", str(corpus_dir),
        "--stopwords", str(stopwords_file),
        "--output", str(index_path),
        "--doc-mapping", str(docmap_path),
    ])
    assert code == 0
    assert index_path.exists()
    assert docmap_path.exists()
    out = capsys.readouterr().out
    assert "INDEX ANALYTICS" in out
    assert "Number of indexed documents | 4" in out
    assert "Documents that failed       | 0" in out
    assert f"Index saved to: {index_path}" in out


def test_build_index_missing_data_dir(tmp_path, capsys):
    assert build_index.main(["--data-dir", str(tmp_path / "missing")]) == 1
    assert "No documents folder" in capsys.readouterr().out


def test_build_index_empty_data_dir(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    code = build_index.main([
        "--data-dir", str(empty),
        "--output", str(tmp_path / "i.jsonl"),
        "--doc-mapping", str(tmp_path / "m.json"),
    ])
    assert code == 1
    assert "No documents found" in capsys.readouterr().out


def test_build_index_missing_stop_list(tmp_path, corpus_dir, capsys):
    code = build_index.main([
        "--data-dir", str(corpus_dir),
        "--stopwords", str(tmp_path / "missing.txt"),
        "--output", str(tmp_path / "i.jsonl"),
        "--doc-mapping", str(tmp_path / "m.json"),
    ])
    assert code == 1
    assert "Could not build the index" in capsys.readouterr().out


def test_build_index_reports_unreadable_document(tmp_path, corpus_dir, capsys):
    (corpus_dir / "e.json").write_text('{"title": "x"}', encoding="utf-8")
    code = build_index.main([
        "--data-dir", str(corpus_dir),
        "--output", str(tmp_path / "i.jsonl"),
        "--doc-mapping", str(tmp_path / "m.json"),
    ])
    assert code == 1
    out = capsys.readouterr().out
    assert "Could not build the index" in out
    assert "content" in out


def test_one_shot_and_query(built_index, capsys):
    index_path, docmap_path = built_index
    code = search_cli.main(["--index", str(index_path), "--docmap", str(docmap_path), "--query", "dogs running"])
    assert code == 0
    out = capsys.readouterr().out
    assert "2 documents matched" in out
    assert "b.txt" in out
    assert re.search(r"2 documents matched in \d+\.\d{3} ms, showing 2:", out)
    assert "d.json" in out


def test_one_shot_or_query(built_index, capsys):
    index_path, docmap_path = built_index
    search_cli.main([
        "--index", str(index_path), "--docmap", str(docmap_path),
        "--mode", "or", "--no-optimize", "--query", "cat mat",
    ])
    out = capsys.readouterr().out
    assert "2 documents matched" in out


def test_missing_index(tmp_path, capsys):
    code = search_cli.main(["--index", str(tmp_path / "x.jsonl"), "--docmap", str(tmp_path / "m.json"), "--query", "cat"])
    assert code == 1
    assert "Could not load the index" in capsys.readouterr().out


def test_session_commands(built_index):
    session = SearchSession.load(*built_index)
    out = io.StringIO()
    session.handle(":or", out)
    assert session.mode is BooleanOperator.OR
    session.handle(":doc 1", out)
    session.handle(":doc x", out)
    session.handle(":doc 42", out)
    session.handle(":stats", out)
    session.handle(":bogus", out)
    session.handle("the on", out)
    session.handle("!!!", out)
    text = out.getvalue()
    assert "Query mode: OR" in text
    assert "Name: a.txt" in text
    assert "Document id must be an integer." in text
    assert "Document not found." in text
    assert "Most frequent terms:" in text
    assert "Unknown command: :bogus" in text
    assert "No documents matched the query in " in text
    assert "No valid terms in query." in text


def test_interactive_loop(built_index, monkeypatch, capsys):
    session = SearchSession.load(*built_index)
    lines = iter(["cat", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    search_cli.run_search_loop(session)
    out = capsys.readouterr().out
    assert "a.txt" in out


def test_build_index_function(tmp_path, corpus_dir):
    config = IndexConfig(
        documents_dir=corpus_dir,
        use_stemming=False,
        index_path=tmp_path / "i.jsonl",
        doc_mapping_path=tmp_path / "m.json",
    )
    result = build(config)
    assert result.num_documents == 4
    assert "cats" in result.indexer.dictionary
    session = SearchSession.load(config.index_path, config.doc_mapping_path)
    assert session.search("cats").doc_ids() == [2]


def test_timed_search_reports_milliseconds(built_index):
    session = SearchSession.load(*built_index)
    result, elapsed_ms = session.timed_search("dog")
    assert result.doc_ids() == [2, 3, 4]
    assert elapsed_ms >= 0
    out = io.StringIO()
    session.print_results(result, out, top_k=1)
    assert out.getvalue().startswith("3 documents matched, showing 1:")
