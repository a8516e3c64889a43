from pathlib import Path

from wisp import config


def test_history_file_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("WISP_HISTORY_FILE", str(tmp_path / "h"))
    assert config.get_history_file() == tmp_path / "h"


def test_history_file_default(monkeypatch):
    monkeypatch.delenv("WISP_HISTORY_FILE", raising=False)
    assert config.get_history_file() == Path.home() / ".wisp-history"


def test_history_size(monkeypatch):
    monkeypatch.setenv("WISP_HISTORY_SIZE", "10")
    assert config.get_history_size() == 10
    monkeypatch.setenv("WISP_HISTORY_SIZE", "lots")
    assert config.get_history_size() == 4096
    monkeypatch.delenv("WISP_HISTORY_SIZE")
    assert config.get_history_size() == 4096


def test_history_file_keeps_path_separators(monkeypatch, tmp_path):
    monkeypatch.setenv("WISP_HISTORY_FILE", f"{tmp_path}/a:b")
    assert config.get_history_file() == tmp_path / "a:b"


def test_history_file_expands_home(monkeypatch):
    monkeypatch.setenv("WISP_HISTORY_FILE", "~/.wisp-alt")
    assert config.get_history_file() == Path.home() / ".wisp-alt"


def test_empty_history_file_uses_default(monkeypatch):
    monkeypatch.setenv("WISP_HISTORY_FILE", "")
    assert config.get_history_file() == Path.home() / ".wisp-history"
