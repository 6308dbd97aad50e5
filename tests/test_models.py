"""Tests for track metadata and selectors."""

import pytest

from src.applescript.models import METADATA_FIELDS, SongSelector, TrackMetadata


class TestTrackMetadata:
    """Tests for TrackMetadata."""

    def test_schema_order(self):
        assert METADATA_FIELDS == (
            "name", "artist", "album", "year", "album_artist", "bpm",
            "composer", "genre", "length", "progress", "track_number",
        )

    def test_from_reply_keeps_values(self):
        """Test that values are mapped by position without conversion."""
        values = [str(i) for i in range(11)]

        track = TrackMetadata.from_reply(values)

        for index, field in enumerate(METADATA_FIELDS):
            assert getattr(track, field) == str(index)

    @pytest.mark.parametrize("count", [0, 10, 12])
    def test_from_reply_wrong_length(self, count):
        with pytest.raises(ValueError):
            TrackMetadata.from_reply([None] * count)

    def test_to_dict_uses_camel_case_keys(self):
        track = TrackMetadata.from_reply(list(range(11)))

        assert track.to_dict() == {
            "name": 0,
            "artist": 1,
            "album": 2,
            "year": 3,
            "albumArtist": 4,
            "bpm": 5,
            "composer": 6,
            "genre": 7,
            "length": 8,
            "progress": 9,
            "trackNumber": 10,
        }


class TestSongSelector:
    """Tests for SongSelector."""

    def test_present_fields_in_fixed_order(self):
        selector = SongSelector(album="C", name="A")

        assert selector.present_fields() == [("name", "A"), ("album", "C")]

    def test_empty(self):
        assert SongSelector().is_empty
        assert not SongSelector(artist="B").is_empty

    def test_empty_string_counts_as_present(self):
        assert SongSelector(name="").present_fields() == [("name", "")]

    def test_coerce_mapping_ignores_other_keys(self):
        selector = SongSelector.coerce({"name": "A", "genre": "Pop"})

        assert selector == SongSelector(name="A")

    def test_coerce_track_metadata(self):
        track = TrackMetadata.from_reply(["A", "B", "C"] + [None] * 8)

        assert SongSelector.coerce(track) == SongSelector(name="A", artist="B", album="C")

    def test_coerce_selector_is_identity(self):
        selector = SongSelector(name="A")

        assert SongSelector.coerce(selector) is selector
