"""Tests for dbapiext.table.Record: column access and relationships."""

import pytest

from dbapiext.errors import BadMethodCall
from dbapiext.table import Record


def test_columns_as_attributes_and_items(music_db):
    track = music_db.table("tracks").find(1)
    assert track.name == "Blowing in the wind"
    assert track["name"] == "Blowing in the wind"
    assert track.get("artistId") == 1
    assert track.get("missing", "default") == "default"
    assert len(track) == 3
    assert list(track) == ["id", "name", "artist_id"]


def test_belongs_to(music_db):
    track = music_db.table("tracks").find(1)
    assert track.artist.name == "Bob Dylan"
    assert track["artist"].name == "Bob Dylan"
    assert track.relation("artist") == music_db.table("artists").find(1)


def test_belongs_to_null_key(music_db):
    assert music_db.table("tracks").find(3).artist is None


def test_has_many(music_db):
    artist = music_db.table("artists").find(1)
    assert [track.name for track in artist.tracks] == ["Blowing in the wind", "House of the rising sun"]


def test_contains(music_db):
    track = music_db.table("tracks").find(1)
    assert "name" in track
    assert "artist" in track
    assert "label" not in track
    assert track.has_relation("artist")
    assert not track.has_relation("label")


def test_unknown_relation(music_db):
    track = music_db.table("tracks").find(1)
    with pytest.raises(BadMethodCall):
        track.label
    with pytest.raises(BadMethodCall):
        track.relation("label")
    with pytest.raises(KeyError):
        track["label"]
    assert not hasattr(track, "label")


def test_set_columns(music_db):
    track = music_db.table("tracks").create()
    track.name = "Like a rolling stone"
    track["artist_id"] = 1
    assert track.get_array_copy() == {"name": "Like a rolling stone", "artist_id": 1}
    with pytest.raises(BadMethodCall):
        track.duration = 360


def test_delete_column(music_db):
    track = music_db.table("tracks").find(1)
    del track["name"]
    assert "name" not in track


def test_get_array_copy_is_a_copy(music_db):
    track = music_db.table("tracks").find(1)
    copy = track.get_array_copy()
    copy["name"] = "changed"
    assert track.name == "Blowing in the wind"


def test_errors_default_to_empty():
    assert Record({"id": 1}).errors == []


def test_record_without_connection():
    record = Record({"id": 1}, "users")
    assert record.id == 1
    with pytest.raises(BadMethodCall):
        record.relation("group")
    assert "group" not in record


def test_equality():
    assert Record({"id": 1}, "users") == Record({"id": 1}, "users")
    assert Record({"id": 1}, "users") != Record({"id": 1}, "groups")
    assert "users" in repr(Record({"id": 1}, "users"))


def test_has_many_of_unsaved_record_is_empty(music_db):
    artist = music_db.table("artists").create()
    assert list(artist.tracks) == []
