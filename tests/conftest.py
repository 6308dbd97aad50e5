"""Shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from src.applescript import BridgeError, MusicApp, TargetApp


class FakeBridge:
    """Bridge that records submissions and returns scripted replies."""

    def __init__(self, reply: Any = None, error: BridgeError | None = None) -> None:
        self.reply = reply
        self.error = error
        self.commands: list[str] = []
        self.files: list[tuple[Path, dict[str, Any] | None]] = []

    async def submit(self, command: str) -> Any:
        self.commands.append(command)
        if self.error:
            raise self.error
        return self.reply

    async def submit_file(self, path: Path, params: dict[str, Any] | None = None) -> Any:
        self.files.append((path, params))
        if self.error:
            raise self.error
        return self.reply

    @property
    def call_count(self) -> int:
        return len(self.commands) + len(self.files)


class PlayerBridge(FakeBridge):
    """Bridge that keeps a play/pause state like the real player."""

    def __init__(self, playing: bool = False) -> None:
        super().__init__()
        self.playing = playing

    async def submit(self, command: str) -> Any:
        self.commands.append(command)
        if command.endswith("to playpause"):
            self.playing = not self.playing
            return None
        if command.endswith("to get player state as text"):
            return "playing" if self.playing else "paused"
        return None


@pytest.fixture
def player_bridge() -> PlayerBridge:
    return PlayerBridge(playing=True)


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def music(bridge: FakeBridge) -> MusicApp:
    return MusicApp(TargetApp(name="Music"), bridge)


@pytest.fixture
def legacy_music(bridge: FakeBridge) -> MusicApp:
    return MusicApp(TargetApp(name="iTunes", is_modern=False), bridge)
