"""Unit tests for the command-line driver"""

import json

import pytest
from qsearch import cli


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, tmp_path):
    """No .env loading, no log files, default settings"""
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(cli, "load_environment", lambda: None)
    for name in ["QSEARCH_INDEX_FILE", "QSEARCH_TOP_K", "QSEARCH_STRATEGY",
                 "QSEARCH_INGESTION", "QSEARCH_LOG_FILE", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


class TestIndexCommand:

    def test_builds_index_file(self, corpus, tmp_path, capsys):
        index_file = tmp_path / "index.json"

        status = cli.main(["index", str(corpus), "--index-file", str(index_file)])

        assert status == 0
        data = json.loads(index_file.read_text())
        assert len(data["terms_per_document"]) == 5
        assert "Files indexed : 5" in capsys.readouterr().out

    def test_reports_skipped_files(self, corpus, tmp_path, capsys):
        (corpus / "LICENSE").write_text("MIT")

        status = cli.main(["index", str(corpus), "--index-file", str(tmp_path / "i.json")])

        assert status == 0
        out = capsys.readouterr().out
        assert "Skipped       : 1" in out
        assert "missing_extension" in out

    def test_missing_corpus(self, tmp_path):
        status = cli.main(["index", str(tmp_path / "nope"), "--index-file", str(tmp_path / "i.json")])
        assert status == 1
        assert not (tmp_path / "i.json").exists()

    def test_unwritable_index_file(self, corpus, tmp_path):
        status = cli.main(["index", str(corpus), "--index-file", str(tmp_path / "no" / "i.json")])
        assert status == 1


class TestQueryCommand:

    def test_prints_top_k(self, corpus, tmp_path, capsys):
        index_file = str(tmp_path / "index.json")
        cli.main(["index", str(corpus), "--index-file", index_file])
        capsys.readouterr()

        status = cli.main(["query", "cat", "--index-file", index_file, "--top-k", "2"])

        assert status == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert all(" => " in line for line in lines)
        assert lines[0].startswith(str(corpus))
        top_documents = {line.split(" => ")[0] for line in lines}
        assert top_documents == {str(corpus / "a.txt"), str(corpus / "notes.md")}

    def test_missing_index_file(self, tmp_path):
        assert cli.main(["query", "cat", "--index-file", str(tmp_path / "nope.json")]) == 1

    def test_corrupt_index_file(self, tmp_path):
        index_file = tmp_path / "index.json"
        index_file.write_text('{"global_index": {}}')
        assert cli.main(["query", "cat", "--index-file", str(index_file)]) == 1

    def test_non_positive_top_k(self, corpus, tmp_path):
        index_file = str(tmp_path / "index.json")
        cli.main(["index", str(corpus), "--index-file", index_file])
        assert cli.main(["query", "cat", "--index-file", index_file, "--top-k", "0"]) == 1

    def test_bad_configuration(self, monkeypatch):
        monkeypatch.setenv("QSEARCH_TOP_K", "many")
        assert cli.main(["query", "cat"]) == 1
