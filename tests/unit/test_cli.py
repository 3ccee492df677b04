"""Unit tests for the command line entry point."""

import logging

import orjson
import pytest

from shiro_search.cli import build_argument_parser, main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def corpus_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "export.json"
    path.write_bytes(
        orjson.dumps(
            {
                "books": [{"id": 1, "title": "Python Programming", "description": "Budgets", "tags": ["reading"]}],
                "notes": [
                    {
                        "id": 1,
                        "title": "Meeting Notes",
                        "content": "<p>Discuss quarterly budget</p>",
                        "tags": ["work"],
                        "lastModified": "2026-10-17T12:00:00Z",
                    },
                    {"id": 2, "title": "Grocery List", "content": "Buy milk", "tags": ["home", "work"]},
                ],
                "events": [],
            }
        )
    )
    return path


def _run(capsys, *argv):
    exit_code = main([str(arg) for arg in argv])
    captured = capsys.readouterr()
    return exit_code, orjson.loads(captured.out) if exit_code == 0 else captured.err


@pytest.mark.unit
class TestCli:
    def test_search(self, capsys, corpus_file):
        exit_code, payload = _run(capsys, corpus_file, "search", "budget")
        assert exit_code == 0
        found = {(result["kind"], result["document_id"]) for result in payload["results"]}
        assert found == {("note", "1"), ("book", "1")}
        assert payload["stats"]["total"] == 2

    def test_search_with_filters(self, capsys, corpus_file):
        exit_code, payload = _run(capsys, corpus_file, "search", "budget", "--kind", "book", "--tag", "reading")
        assert exit_code == 0
        assert [result["kind"] for result in payload["results"]] == ["book"]

    def test_quick(self, capsys, corpus_file):
        exit_code, payload = _run(capsys, corpus_file, "quick", "quarterly", "--limit", "1")
        assert exit_code == 0
        assert payload == [
            {"document_id": "1", "kind": "note", "title": "Meeting Notes", "snippet": "Discuss quarterly budget"}
        ]

    def test_tag(self, capsys, corpus_file):
        exit_code, payload = _run(capsys, corpus_file, "tag", "work")
        assert exit_code == 0
        assert [result["title"] for result in payload["results"]] == ["Meeting Notes", "Grocery List"]

    def test_tags(self, capsys, corpus_file):
        exit_code, payload = _run(capsys, corpus_file, "tags")
        assert exit_code == 0
        assert payload[0] == {"name": "work", "count": 2}

        exit_code, payload = _run(capsys, corpus_file, "tags", "--match", "HO")
        assert payload == [{"name": "home", "count": 1}]

    def test_history_file(self, capsys, corpus_file, tmp_path):
        history = tmp_path / "history.json"
        _run(capsys, corpus_file, "--history", history, "search", "budget")
        _run(capsys, corpus_file, "--history", history, "search", "milk")
        exit_code, payload = _run(capsys, corpus_file, "--history", history, "history")
        assert exit_code == 0
        assert payload == ["milk", "budget"]

    def test_missing_corpus(self, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        exit_code, err = _run(capsys, tmp_path / "missing.json", "search", "budget")
        assert exit_code == 1
        assert "Error" in err

    def test_invalid_corpus(self, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        exit_code, err = _run(capsys, path, "search", "budget")
        assert exit_code == 1
        assert "could not read corpus" in err

    def test_invalid_settings(self, capsys, corpus_file, monkeypatch):
        monkeypatch.setenv("SHIRO_SEARCH_HISTORY_LIMIT", "-1")
        exit_code, err = _run(capsys, corpus_file, "search", "budget")
        assert exit_code == 2
        assert "invalid configuration" in err

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["export.json"])
