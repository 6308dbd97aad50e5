"""AppleScript interface to the Music (or iTunes) app on macOS."""

from pathlib import Path
from typing import Any, Mapping, Sequence

from src.utils.config import Settings
from src.utils.logging import get_logger

from .bridge import Bridge, OsascriptBridge
from .codec import escape_string
from .errors import BridgeError, InsufficientSelectorError, InvalidInputError, NoActiveTrackError
from .models import SELECTOR_FIELDS, SongSelector, TrackMetadata
from .target import TargetApp, resolve_target

logger = get_logger(__name__)

SCRIPTS_DIR = Path(__file__).parent / "scripts"

# Fields readable from the current track with `get`
GETTABLE_FIELDS = frozenset(SELECTOR_FIELDS)


def build_song_predicate(selector: SongSelector) -> str:
    """Build the `whose` clause matching every field set on `selector`.

    Fields are emitted in name, artist, album order and joined with "and".

    Raises:
        InsufficientSelectorError: If no field is set
    """
    clauses = [
        f'{field} is "{escape_string(str(value))}"'
        for field, value in selector.present_fields()
    ]
    if not clauses:
        raise InsufficientSelectorError(
            'Not enough info in selector, requires "name", "artist", or "album".'
        )
    return " and ".join(clauses)


class MusicApp:
    """Interface to control the player app via AppleScript."""

    def __init__(
        self,
        target: TargetApp,
        bridge: Bridge,
        scripts_dir: Path | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            target: Application every command is addressed to
            bridge: Bridge that runs the generated scripts
            scripts_dir: Directory holding the composite metadata scripts
        """
        self.target = target
        self.bridge = bridge
        self.scripts_dir = scripts_dir or SCRIPTS_DIR

    @classmethod
    def from_settings(cls, settings: Settings) -> "MusicApp":
        """Resolve the target app and build an osascript-backed instance."""
        return cls(
            target=resolve_target(settings.player),
            bridge=OsascriptBridge.from_config(settings.bridge),
            scripts_dir=settings.bridge.scripts_dir_resolved,
        )

    def _tell(self, command: str) -> str:
        return f'tell application "{self.target.name}" to {command}'

    def _script_path(self, stem: str) -> Path:
        return self.scripts_dir / f"{stem}.{self.target.script_suffix}applescript"

    async def _acknowledge(self, command: str) -> None:
        """Submit a command whose outcome is not reported back to the caller."""
        try:
            await self.bridge.submit(self._tell(command))
        except BridgeError as e:
            logger.warning("command_failed", command=command, error=e.message)

    async def _execute(self, command: str) -> Any:
        """Submit a command, letting BridgeError reach the caller."""
        return await self.bridge.submit(self._tell(command))

    # Playback

    async def toggle_play_pause(self) -> None:
        """Play if paused, pause if playing."""
        await self._acknowledge("playpause")

    async def previous(self) -> None:
        """Go to the previous track."""
        await self._acknowledge("previous track")

    async def next(self) -> None:
        """Skip to the next track."""
        await self._acknowledge("next track")

    async def activate(self) -> None:
        """Bring the player to the foreground."""
        await self._execute("activate")

    async def get_player_state(self) -> bool:
        """Return True if the player is currently playing."""
        state = await self._execute("get player state as text")
        return state == "playing"

    # Metadata

    async def get(self, field: str, verbose: bool = False) -> Any:
        """Get one piece of metadata of the current track.

        Args:
            field: One of "name", "artist" or "album"
            verbose: Log whether the field name was accepted

        Returns:
            The reply exactly as returned by the player

        Raises:
            InvalidInputError: If `field` isn't a readable field
        """
        is_valid = isinstance(field, str) and field in GETTABLE_FIELDS

        if verbose:
            if is_valid:
                logger.info("valid_field_received", field=field)
            else:
                logger.info("invalid_field_received", field=field)

        if not is_valid:
            raise InvalidInputError(f"[{self.target.name}] Invalid input: {field!r}")

        return await self._execute(f"get the {field} of the current track")

    async def get_metadata(self) -> TrackMetadata:
        """Get all metadata of the current track.

        Raises:
            NoActiveTrackError: If the reply is empty or isn't an 11 value list
            BridgeError: If the metadata script fails
        """
        reply = await self.bridge.submit_file(self._script_path("metadata"))

        if not reply or isinstance(reply, str) or not isinstance(reply, Sequence):
            raise NoActiveTrackError("No song is currently playing")

        try:
            return TrackMetadata.from_reply(reply)
        except ValueError as e:
            logger.warning("unexpected_metadata_reply", error=str(e))
            raise NoActiveTrackError("No song is currently playing") from e

    async def get_playlist_metadata(self, playlist_name: str) -> Any:
        """Get metadata of every track in a playlist, unshaped.

        Args:
            playlist_name: Exact playlist name

        Returns:
            The decoded script reply, one 11 value list per track
        """
        return await self.bridge.submit_file(
            self._script_path("metadata.playlist"),
            {"playlistName": playlist_name},
        )

    # Selection

    async def play_song(self, selector: SongSelector | Mapping[str, Any]) -> None:
        """Play the first track matching the given name, artist and/or album.

        Raises:
            InsufficientSelectorError: If no field is set; nothing is submitted
        """
        predicate = build_song_predicate(SongSelector.coerce(selector))
        await self._execute(f"play (first track whose {predicate})")

    async def play_playlist(self, playlist_name: str) -> None:
        """Play a playlist by exact name."""
        await self._execute(f'play playlist "{escape_string(playlist_name)}"')

    async def add_to_playlist(
        self,
        track: TrackMetadata | SongSelector | Mapping[str, Any],
        playlist_name: str,
    ) -> None:
        """Append a track, located by name, artist and album, to a playlist.

        Args:
            track: Track metadata (e.g. from get_metadata) or a full selector
            playlist_name: Exact playlist name
        """
        selector = SongSelector.coerce(track)
        missing = [f for f in SELECTOR_FIELDS if getattr(selector, f) is None]
        if missing:
            raise InvalidInputError(f"Track is missing {', '.join(missing)}")

        predicate = build_song_predicate(selector)
        await self._execute(
            f"add (get the location of the first track whose {predicate}) "
            f'to playlist "{escape_string(playlist_name)}"'
        )
