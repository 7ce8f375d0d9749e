import json
from datetime import datetime, timezone

import pytest

from smarter_playlist.catalog import filter_eligible, load_catalog, song_from_row
from smarter_playlist.errors import CatalogError
from smarter_playlist.types import Song


def test_load_json_list(tmp_path):
    p = tmp_path / "library.json"
    p.write_text(
        json.dumps(
            [
                {"title": "One", "album": "X", "track_number": 1, "last_played_at": "2024-05-01T10:00:00Z"},
                {"title": "Two", "album": "X", "track_number": "2/10", "last_played_at": None},
            ]
        ),
        encoding="utf-8",
    )
    songs = load_catalog(p)
    assert songs == [
        Song("One", "X", 1, datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        Song("Two", "X", 2, None),
    ]


def test_load_library_dump_keys(tmp_path):
    p = tmp_path / "dump.json"
    data = {
        "Tracks": {
            "101": {"Name": "Intro", "Album": "Live", "Track Number": 1, "Play Date UTC": "2023-01-02T03:04:05Z", "Comments": "\\Tag2\\"},
            "102": {"Name": "Outro", "Album": "Live", "Track Number": 9, "Comments": "meh"},
        }
    }
    p.write_text(json.dumps(data), encoding="utf-8")
    songs = load_catalog(p, comment_marker="\\Tag2\\")
    assert [s.title for s in songs] == ["Intro"]
    assert songs[0].last_played_at == datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_load_csv(tmp_path):
    p = tmp_path / "library.csv"
    p.write_text(
        "title,album,track_number,last_played_at,comments\n"
        "One,X,1,1700000000,keep\n"
        "Loose,X,,,keep\n"
        ",X,3,,keep\n",
        encoding="utf-8",
    )
    songs = load_catalog(p)
    assert [s.title for s in songs] == ["One", "Loose"]
    assert songs[0].last_played_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert songs[1].track_number is None
    assert songs[1].last_played_at is None


def test_naive_timestamp_is_utc():
    s = song_from_row({"title": "t", "album": "a", "last_played_at": "2024-01-01 08:00:00"})
    assert s.last_played_at == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


def test_zero_track_number_is_untracked():
    s = song_from_row({"title": "t", "album": "a", "track_number": 0})
    assert s.track_number is None


def test_bad_timestamp_raises():
    with pytest.raises(CatalogError):
        song_from_row({"title": "t", "album": "a", "last_played_at": "yesterday-ish"})


def test_filter_eligible():
    rows = [{"title": "a", "comments": "x \\Tag2\\ y"}, {"title": "b", "comments": ""}, {"title": "c"}]
    assert [r["title"] for r in filter_eligible(rows, "\\Tag2\\")] == ["a"]
    assert len(filter_eligible(rows, None)) == 3


def test_unsupported_format(tmp_path):
    p = tmp_path / "library.xml"
    p.write_text("<plist/>", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_malformed_json(tmp_path):
    p = tmp_path / "library.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_wrong_json_shape(tmp_path):
    p = tmp_path / "library.json"
    p.write_text(json.dumps({"tracks": 3}), encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "nope.json")


def test_non_utf8_csv(tmp_path):
    p = tmp_path / "library.csv"
    p.write_bytes(b"title,album\n\xff\xfeBad,X\n")
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_non_utf8_json(tmp_path):
    p = tmp_path / "library.json"
    p.write_bytes(b'[{"title": "\xff\xfe"}]')
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_numeric_title_and_album(tmp_path):
    p = tmp_path / "library.json"
    p.write_text(json.dumps([{"title": 1984, "album": 1989, "last_played_at": 1700000000}]), encoding="utf-8")
    songs = load_catalog(p)
    assert songs == [Song("1984", "1989", None, datetime.fromtimestamp(1700000000, tz=timezone.utc))]
