from pathlib import Path

import pytest

from smarter_playlist.config import load_settings
from smarter_playlist.errors import InvalidWeights
from smarter_playlist.types import DEFAULT_STRATEGY_WEIGHTS, Strategy

VARS = ["CATALOG", "LENGTH", "NAME", "WEIGHTS", "COMMENT_MARKER", "LOG_DIR"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for v in VARS:
        monkeypatch.delenv("SMARTER_PLAYLIST_" + v, raising=False)


def test_defaults():
    s = load_settings(dotenv=False)
    assert s.catalog_path is None
    assert s.length == 100
    assert s.playlist_name == "Smarter Playlist"
    assert s.strategy_weights == DEFAULT_STRATEGY_WEIGHTS
    assert s.comment_marker is None
    assert s.log_dir == Path("logs")


def test_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SMARTER_PLAYLIST_CATALOG", str(tmp_path / "lib.json"))
    monkeypatch.setenv("SMARTER_PLAYLIST_LENGTH", "25")
    monkeypatch.setenv("SMARTER_PLAYLIST_NAME", "Commute")
    monkeypatch.setenv("SMARTER_PLAYLIST_WEIGHTS", "random=1")
    monkeypatch.setenv("SMARTER_PLAYLIST_COMMENT_MARKER", "\\Tag2\\")
    s = load_settings(dotenv=False)
    assert s.catalog_path == tmp_path / "lib.json"
    assert s.length == 25
    assert s.playlist_name == "Commute"
    assert s.strategy_weights == {Strategy.RANDOM: 1.0}
    assert s.comment_marker == "\\Tag2\\"


def test_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("SMARTER_PLAYLIST_NAME=From dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    s = load_settings()
    assert s.playlist_name == "From dotenv"
    monkeypatch.delenv("SMARTER_PLAYLIST_NAME", raising=False)


def test_bad_length(monkeypatch):
    monkeypatch.setenv("SMARTER_PLAYLIST_LENGTH", "lots")
    with pytest.raises(ValueError):
        load_settings(dotenv=False)


def test_bad_weights(monkeypatch):
    monkeypatch.setenv("SMARTER_PLAYLIST_WEIGHTS", "sideways=4")
    with pytest.raises(InvalidWeights):
        load_settings(dotenv=False)
