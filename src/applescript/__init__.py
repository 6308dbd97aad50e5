"""AppleScript integration for Music app control."""

from .bridge import Bridge, OsascriptBridge
from .errors import (
    BridgeError,
    InsufficientSelectorError,
    InvalidInputError,
    NoActiveTrackError,
    PlayerError,
)
from .models import SongSelector, TrackMetadata
from .music_app import MusicApp
from .target import TargetApp, resolve_target

__all__ = [
    "Bridge",
    "BridgeError",
    "InsufficientSelectorError",
    "InvalidInputError",
    "MusicApp",
    "NoActiveTrackError",
    "OsascriptBridge",
    "PlayerError",
    "SongSelector",
    "TargetApp",
    "TrackMetadata",
    "resolve_target",
]
