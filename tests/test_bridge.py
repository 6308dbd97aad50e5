"""Tests for the osascript bridge."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.applescript.bridge import OsascriptBridge
from src.applescript.errors import BridgeError, InvalidInputError
from src.utils.config import BridgeConfig

CREATE_SUBPROCESS = "src.applescript.bridge.asyncio.create_subprocess_exec"


def make_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    """Create a mock asyncio subprocess."""
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.wait = AsyncMock(return_value=returncode)
    process.returncode = returncode
    return process


class TestSubmit:
    """Tests for inline commands."""

    @pytest.mark.asyncio
    async def test_submit_decodes_reply(self):
        process = make_process(stdout=b'"playing"\n')

        with patch(CREATE_SUBPROCESS, new=AsyncMock(return_value=process)) as create:
            result = await OsascriptBridge().submit(
                'tell application "Music" to get player state as text'
            )

        assert result == "playing"
        args = create.call_args.args
        assert args == (
            "osascript",
            "-ss",
            "-e",
            'tell application "Music" to get player state as text',
        )

    @pytest.mark.asyncio
    async def test_empty_reply(self):
        with patch(CREATE_SUBPROCESS, new=AsyncMock(return_value=make_process())):
            assert await OsascriptBridge().submit('tell application "Music" to playpause') is None

    @pytest.mark.asyncio
    async def test_failure_raises_with_stderr(self):
        process = make_process(
            stderr=b"0:5: execution error: Music got an error: Can't continue. (-1708)\n",
            returncode=1,
        )

        with patch(CREATE_SUBPROCESS, new=AsyncMock(return_value=process)):
            with pytest.raises(BridgeError) as exc_info:
                await OsascriptBridge().submit('tell application "Music" to activate')

        assert "Can't continue" in exc_info.value.message
        assert exc_info.value.returncode == 1

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        with patch(CREATE_SUBPROCESS, new=AsyncMock(side_effect=FileNotFoundError("osascript"))):
            with pytest.raises(BridgeError):
                await OsascriptBridge().submit("return 1")

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        """Test that a configured timeout kills the hung process."""
        process = make_process()
        process.communicate = AsyncMock(side_effect=asyncio.TimeoutError)

        with patch(CREATE_SUBPROCESS, new=AsyncMock(return_value=process)):
            with pytest.raises(BridgeError, match="timed out"):
                await OsascriptBridge(timeout=0.5).submit("delay 10")

        process.kill.assert_called_once()

    def test_from_config(self):
        bridge = OsascriptBridge.from_config(
            BridgeConfig(osascript_path="/usr/bin/osascript", timeout_seconds=5)
        )

        assert bridge.osascript_path == "/usr/bin/osascript"
        assert bridge.timeout == 5


class TestSubmitFile:
    """Tests for running script files."""

    @pytest.mark.asyncio
    async def test_file_without_params(self, tmp_path):
        script = tmp_path / "metadata.music.applescript"
        script.write_text('return {"a", 1}')
        process = make_process(stdout=b'{"a", 1}\n')

        with patch(CREATE_SUBPROCESS, new=AsyncMock(return_value=process)) as create:
            result = await OsascriptBridge().submit_file(script)

        assert result == ["a", 1]
        assert create.call_args.args == ("osascript", "-ss", str(script))

    @pytest.mark.asyncio
    async def test_file_with_params(self, tmp_path):
        """Test that params are defined as variables ahead of the script."""
        script = tmp_path / "metadata.playlist.music.applescript"
        script.write_text("return playlistName")
        seen: dict[str, str] = {}

        async def fake_exec(*args, **kwargs):
            path = Path(args[-1])
            seen["path"] = str(path)
            seen["source"] = path.read_text()
            return make_process(stdout=b'"Road \\"Trip\\""\n')

        with patch(CREATE_SUBPROCESS, new=fake_exec):
            result = await OsascriptBridge().submit_file(
                script, {"playlistName": 'Road "Trip"'}
            )

        assert result == 'Road "Trip"'
        assert seen["source"] == 'set playlistName to "Road \\"Trip\\""\nreturn playlistName'
        assert seen["path"] != str(script)
        assert not Path(seen["path"]).exists()

    @pytest.mark.asyncio
    async def test_missing_file_with_params(self, tmp_path):
        with pytest.raises(BridgeError):
            await OsascriptBridge().submit_file(tmp_path / "missing.applescript", {"x": 1})

    @pytest.mark.asyncio
    async def test_bad_param_name(self, tmp_path):
        script = tmp_path / "s.applescript"
        script.write_text("return 1")

        with pytest.raises(InvalidInputError):
            await OsascriptBridge().submit_file(script, {"not valid": 1})
