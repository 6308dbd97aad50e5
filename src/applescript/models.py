"""Data shapes exchanged with the player."""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Sequence

# Reply position -> field, in the order the metadata scripts return values
METADATA_FIELDS: tuple[str, ...] = (
    "name",
    "artist",
    "album",
    "year",
    "album_artist",
    "bpm",
    "composer",
    "genre",
    "length",
    "progress",
    "track_number",
)

# Keys used by the dict form, matching the AppleScript-side property names
METADATA_KEYS: dict[str, str] = {
    "album_artist": "albumArtist",
    "track_number": "trackNumber",
}

SELECTOR_FIELDS: tuple[str, ...] = ("name", "artist", "album")


@dataclass
class TrackMetadata:
    """Metadata of a single track. Values are kept exactly as returned."""

    name: Any
    artist: Any
    album: Any
    year: Any
    album_artist: Any
    bpm: Any
    composer: Any
    genre: Any
    length: Any
    progress: Any
    track_number: Any

    @classmethod
    def from_reply(cls, values: Sequence[Any]) -> "TrackMetadata":
        """Map a positional reply onto the schema.

        Raises:
            ValueError: If the reply doesn't have one value per field
        """
        if len(values) != len(METADATA_FIELDS):
            raise ValueError(
                f"Expected {len(METADATA_FIELDS)} metadata values, got {len(values)}"
            )
        return cls(**dict(zip(METADATA_FIELDS, values)))

    def to_dict(self) -> dict[str, Any]:
        return {
            METADATA_KEYS.get(f.name, f.name): getattr(self, f.name)
            for f in fields(self)
        }


@dataclass
class SongSelector:
    """Partial track description used to pick a track to play."""

    name: str | None = None
    artist: str | None = None
    album: str | None = None

    @classmethod
    def coerce(cls, value: "SongSelector | Mapping[str, Any]") -> "SongSelector":
        """Accept a selector, a mapping, or any object with selector attributes."""
        if isinstance(value, SongSelector):
            return value
        if isinstance(value, Mapping):
            return cls(**{k: value.get(k) for k in SELECTOR_FIELDS})
        return cls(**{k: getattr(value, k, None) for k in SELECTOR_FIELDS})

    def present_fields(self) -> list[tuple[str, str]]:
        """(field, value) pairs for the fields that are set, in fixed order."""
        return [
            (name, getattr(self, name))
            for name in SELECTOR_FIELDS
            if getattr(self, name) is not None
        ]

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()
